"""
Managerio - a small project tracker.

Projects carry a title, description, schedule, location and budget, and are kept
in a locally persisted store with dashboard aggregates and calendar queries.
"""

from .version import VERSION, APP_SCHEMA_VERSION
from .models import Project, ProjectForm, demo_projects
from .data import ProjectStore, LoadResult, LoadStatus, SaveResult

__version__ = VERSION

__all__ = [
    "VERSION",
    "APP_SCHEMA_VERSION",
    "Project",
    "ProjectForm",
    "demo_projects",
    "ProjectStore",
    "LoadResult",
    "LoadStatus",
    "SaveResult",
]
