"""
Data management submodule: the project store and the storage it persists through.
"""

from .core import ProjectStore, LoadResult, LoadStatus, SaveResult, default_data_dir
from .io import FileKeyValueStorage, MemoryKeyValueStorage, KeyValueStorage

__all__ = [
    'ProjectStore',
    'LoadResult',
    'LoadStatus',
    'SaveResult',
    'default_data_dir',
    'FileKeyValueStorage',
    'MemoryKeyValueStorage',
    'KeyValueStorage',
]
