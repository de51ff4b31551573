import tempfile, yaml, json, os
from typing import Union, Dict, List, Any, Optional, Protocol
from pathlib import Path
from managerio.recovery import FileOperationError, FatalError
from managerio.logs import get_logger

log = get_logger("io")

DATA_YAML = 0
DATA_JSON = 1

def _cleanup(temp_path):
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
            log.debug(f"Cleaned up temporary file: {temp_path}")
        except OSError as cleanup_error:
            log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")

def _create_dirs(file_path : Path):
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        error_msg = f"Cannot create directory {file_path.parent}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def atomic_write(data_type : int, file_path : Union[Path, str], data : Union[Dict[str, Any], List[Any], bytes], create_dirs : bool = False):
    """
    Serialize and save data to a file using atomic updates.

    `data` is dumped as YAML or JSON; raw bytes are written as they are.
    """
    file_path = Path(file_path)
    temp_path = None

    try:
        if create_dirs:
            _create_dirs(file_path)

        # Temporary file in the same directory as target for atomicity
        with tempfile.NamedTemporaryFile(mode='wb', dir=file_path.parent, prefix=f".{file_path.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            if isinstance(data, bytes):
                payload = data
            elif data_type == DATA_YAML:
                payload = yaml.safe_dump(data, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True).encode('utf-8')
            elif data_type == DATA_JSON:
                payload = json.dumps(data, indent=2, ensure_ascii=False).encode('utf-8')
            else:
                raise FatalError("Unsupported Data Format")
            temp_file.write(payload)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        # Atomic replace - this either completely succeeds or completely fails
        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except FatalError:
        _cleanup(temp_path)
        raise

    except (yaml.YAMLError, TypeError, ValueError) as e:
        _cleanup(temp_path)
        error_msg = (f"Data serialization failed for {file_path}. "
                    f"In-memory data may contain non-serializable types: {e}")
        log.critical(error_msg)
        raise FatalError(error_msg) from e

    except (IOError, OSError, PermissionError) as e:
        _cleanup(temp_path)
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

class KeyValueStorage(Protocol):
    """Minimal key-value interface the project store persists through."""

    def get(self, key: str) -> Optional[bytes]: ...
    def set(self, key: str, data: bytes) -> None: ...
    def delete(self, key: str) -> None: ...

class FileKeyValueStorage:
    """Stores each key as `<directory>/<key>.json`, written atomically."""

    def __init__(self, directory : Union[Path, str]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[bytes]:
        file_path = self.path_for(key)
        if not file_path.exists():
            return None
        try:
            return file_path.read_bytes()
        except (IOError, OSError, PermissionError) as e:
            raise FileOperationError(f"Failed to read file {file_path}: {e}") from e

    def set(self, key: str, data: bytes) -> None:
        atomic_write(DATA_JSON, self.path_for(key), data, create_dirs=True)

    def delete(self, key: str) -> None:
        file_path = self.path_for(key)
        try:
            file_path.unlink(missing_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to delete file {file_path}: {e}") from e

class MemoryKeyValueStorage:
    """Dictionary-backed storage; nothing outlives the process."""

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> Optional[bytes]:
        return self._data.get(key)

    def set(self, key: str, data: bytes) -> None:
        self._data[key] = bytes(data)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
