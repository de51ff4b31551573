"""
ProjectStore - the ordered, persisted collection of projects for Managerio.

This module owns loading and saving the collection through a key-value storage
backend, the aggregates shown on the dashboard, and the date and text queries
behind the dashboard and list screens.
"""
import json
import os
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union
from uuid import UUID

from pydantic import ValidationError

from managerio.logs import get_logger
from managerio.models import PROJECT_LIST, Project, demo_projects
from managerio.recovery import CorruptionError, ManagerioError
from .io import FileKeyValueStorage, KeyValueStorage
from .validate import validate_payload

log = get_logger("data")

DEFAULT_KEY = "Projects"
DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "managerio" / "data"

def default_data_dir() -> Path:
    """Data directory from MANAGERIO_DATA_DIR, else the per-user default."""
    env_dir = os.getenv('MANAGERIO_DATA_DIR')
    return Path(env_dir).expanduser() if env_dir else DEFAULT_DATA_DIR

class LoadStatus(Enum):
    LOADED = "loaded"
    EMPTY = "empty"
    FAILED = "failed"

@dataclass(frozen=True)
class LoadResult:
    """Outcome of ProjectStore.load(); distinguishes an empty store from a failed read."""
    status: LoadStatus
    count: int = 0
    error: Optional[ManagerioError] = None

    @property
    def ok(self) -> bool:
        return self.status != LoadStatus.FAILED

@dataclass(frozen=True)
class SaveResult:
    ok: bool
    error: Optional[ManagerioError] = None

ProjectId = Union[UUID, str]

def _as_uuid(project_id: ProjectId) -> Optional[UUID]:
    if isinstance(project_id, UUID):
        return project_id
    try:
        return UUID(str(project_id))
    except ValueError:
        return None

class ProjectStore:
    """In-memory project collection persisted as a JSON array under a single key."""

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY, autosave: bool = True):
        self.storage = storage
        self.key = key
        self.autosave = autosave
        self.last_save: Optional[SaveResult] = None
        self._projects: List[Project] = []
        self._unreadable: Optional[bytes] = None

    @classmethod
    def open(cls, data_dir: Union[Path, str, None] = None, **kwargs) -> Tuple['ProjectStore', LoadResult]:
        """Build a file-backed store and load it."""
        store = cls(FileKeyValueStorage(data_dir or default_data_dir()), **kwargs)
        return store, store.load()

    def load(self) -> LoadResult:
        """Replace the collection with the stored one; never raises."""
        self._projects = []
        self._unreadable = None
        blob = None
        try:
            blob = self.storage.get(self.key)
            if blob is None:
                log.info(f"No stored projects under '{self.key}'")
                return LoadResult(LoadStatus.EMPTY)

            try:
                data = json.loads(blob)
            except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
                raise CorruptionError(f"Stored projects under '{self.key}' are not valid JSON: {e}") from e

            validate_payload(data)
            try:
                projects = PROJECT_LIST.validate_python(data)
            except ValidationError as e:
                raise CorruptionError(f"Stored projects under '{self.key}' failed model validation: {e}") from e

        except ManagerioError as e:
            log.error(f"Failed to load projects: {e}")
            if isinstance(e, CorruptionError):
                self._unreadable = blob
            return LoadResult(LoadStatus.FAILED, error=e)

        self._projects = projects
        log.info(f"Loaded {len(projects)} projects from '{self.key}'")
        return LoadResult(LoadStatus.LOADED, count=len(projects))

    def save(self) -> SaveResult:
        """Write the whole collection under the store key; never raises."""
        try:
            blob = PROJECT_LIST.dump_json(self._projects, by_alias=True, indent=2)
            if self._unreadable is not None:
                self.storage.set(self.corrupt_key, self._unreadable)
                log.warning(f"Kept unreadable projects as '{self.corrupt_key}' before overwriting '{self.key}'")
                self._unreadable = None
            self.storage.set(self.key, blob)
        except ManagerioError as e:
            log.error(f"Failed to save projects: {e}")
            result = SaveResult(False, e)
        except (TypeError, ValueError) as e:
            log.critical(f"Projects could not be serialized: {e}")
            result = SaveResult(False, CorruptionError(f"Projects could not be serialized: {e}"))
        else:
            log.debug(f"Saved {len(self._projects)} projects under '{self.key}'")
            result = SaveResult(True)
        self.last_save = result
        return result

    @property
    def corrupt_key(self) -> str:
        """Key the last unreadable blob is copied to before it gets overwritten."""
        return f"{self.key}.corrupt"

    def _changed(self):
        if self.autosave:
            self.save()

    def add(self, project: Project) -> bool:
        self._projects.append(project)
        log.info(f"Added project {project.id} '{project.title}'")
        self._changed()
        return True

    def remove(self, project_id: ProjectId) -> bool:
        """Remove the project with `project_id`; False when there is none."""
        index = self._index_of(project_id)
        if index is None:
            log.debug(f"No project {project_id} to remove")
            return False
        removed = self._projects.pop(index)
        log.info(f"Removed project {removed.id} '{removed.title}'")
        self._changed()
        return True

    def remove_many(self, project_ids: Iterable[ProjectId]) -> int:
        """Remove several projects and persist once. Returns how many were removed."""
        removed = 0
        for project_id in project_ids:
            index = self._index_of(project_id)
            if index is not None:
                self._projects.pop(index)
                removed += 1
        if removed:
            log.info(f"Removed {removed} projects")
            self._changed()
        return removed

    def set_completed(self, project_id: ProjectId, completed: bool = True) -> bool:
        index = self._index_of(project_id)
        if index is None:
            return False
        self._projects[index] = self._projects[index].model_copy(update={"is_completed": completed})
        self._changed()
        return True

    def seed_demo(self, now: Optional[datetime] = None) -> bool:
        """Add the demo projects when the store is empty."""
        if self._projects:
            return False
        self._projects.extend(demo_projects(now))
        log.info("Seeded demo projects")
        self._changed()
        return True

    def _index_of(self, project_id: ProjectId) -> Optional[int]:
        wanted = _as_uuid(project_id)
        if wanted is None:
            return None
        return next((i for i, p in enumerate(self._projects) if p.id == wanted), None)

    def get(self, project_id: ProjectId) -> Optional[Project]:
        index = self._index_of(project_id)
        return None if index is None else self._projects[index]

    @property
    def projects(self) -> Tuple[Project, ...]:
        return tuple(self._projects)

    def __len__(self) -> int:
        return len(self._projects)

    def __iter__(self):
        return iter(tuple(self._projects))

    @property
    def count(self) -> int:
        return len(self._projects)

    @property
    def completed_count(self) -> int:
        return sum(1 for p in self._projects if p.is_completed)

    @property
    def in_progress_count(self) -> int:
        return self.count - self.completed_count

    @property
    def total_budget(self) -> float:
        return sum((p.budget for p in self._projects), 0.0)

    def projects_on(self, when: Union[date, datetime]) -> List[Project]:
        """Projects that start, end, or are running on `when`."""
        return [p for p in self._projects if p.occurs_on(when)]

    def search(self, text: str) -> List[Project]:
        """Projects whose title or description contains `text`; all of them for empty text."""
        if not text:
            return list(self._projects)
        return [p for p in self._projects if p.matches(text)]
