"""Shared fixtures for the Managerio test suite."""

import os
import tempfile

# Keep the file log out of the user's home before managerio is imported
os.environ.setdefault("MANAGERIO_LOG_DIR", tempfile.mkdtemp(prefix="managerio-logs-"))

import pytest
from datetime import datetime

from managerio.data import ProjectStore, MemoryKeyValueStorage
from managerio.models import Project


@pytest.fixture
def memory_store():
    """A store backed by in-memory storage, autosaving like the app does."""
    return ProjectStore(MemoryKeyValueStorage())


@pytest.fixture
def site_project():
    return Project(
        title="Site",
        description="Build the site",
        start_date=datetime(2025, 1, 1, 9, 0),
        end_date=datetime(2025, 1, 31, 17, 0),
        location="Remote",
        budget=5000,
    )
