"""Shared pytest fixtures for the scaffolder test suite.

Provides reusable fixtures for:
- Temporary operator project directories and matching configs
- Sample resource descriptors
- The golden controller output for the sample resource
- An in-memory file-system collaborator
"""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config import Config
from src.scaffolder.resource import Resource


APP_API_VERSION = "app.example.com/v1alpha1"
APP_KIND = "AppService"
APP_REPO = "github.com/example-inc/app-operator"


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary operator project root (auto-cleanup)."""
    project_dir = tmp_path / "app-operator"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def app_config(tmp_project_dir: Path) -> Config:
    """Config pointing at the temporary project."""
    return Config(repo=APP_REPO, project_name="app-operator", abs_project_path=tmp_project_dir)


# ---------------------------------------------------------------------------
# Resources
# ---------------------------------------------------------------------------

@pytest.fixture
def app_resource() -> Resource:
    """The ``AppService`` resource used throughout the suite."""
    return Resource.new(APP_API_VERSION, APP_KIND)


@pytest.fixture
def memcached_resource() -> Resource:
    return Resource.new("cache.example.com/v1beta1", "Memcached")


@pytest.fixture
def controller_golden() -> str:
    """Expected controller source for ``app_resource`` with default imports."""
    path = Path(__file__).parent / "fixtures" / "appservice_controller.go.golden"
    assert path.exists(), f"Golden fixture not found at {path}"
    return path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# File-system collaborator
# ---------------------------------------------------------------------------

class MemoryFileSystem:
    """Records writes instead of touching the disk."""

    def __init__(self, existing: dict[Path, str] | None = None) -> None:
        self.files: dict[Path, str] = dict(existing or {})
        self.writes: list[Path] = []

    def exists(self, path: Path) -> bool:
        return path in self.files

    def write(self, path: Path, content: str, *, exclusive: bool = False) -> None:
        if exclusive and path in self.files:
            raise FileExistsError(str(path))
        self.files[path] = content
        self.writes.append(path)


@pytest.fixture
def memory_fs() -> MemoryFileSystem:
    return MemoryFileSystem()
