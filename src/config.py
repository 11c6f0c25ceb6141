"""Scaffolder configuration.

Typed project configuration shared by the generator and the CLI.  Settings use
Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


DEFAULT_REPO = "github.com/example-inc/app-operator"

CONTROLLER_DIR = Path("pkg") / "controller"


class Config(BaseModel):
    """Project-level settings for a scaffolding run.

    Instances are typically created once by the CLI entry point and then
    passed to :class:`~src.scaffolder.generator.ScaffoldGenerator`.
    """

    repo: str = Field(default=DEFAULT_REPO, description="Go module path of the project")
    project_name: str = Field(default="")
    abs_project_path: Path = Field(default_factory=Path.cwd, validate_default=True)

    @field_validator("repo")
    @classmethod
    def _repo_not_empty(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("repo cannot be empty")
        return value

    @field_validator("abs_project_path")
    @classmethod
    def _absolute(cls, value: Path) -> Path:
        return value.expanduser().resolve()

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def controller_dir(self) -> Path:
        """Absolute directory holding generated controllers."""
        return self.abs_project_path / CONTROLLER_DIR

    @property
    def config_path(self) -> Path:
        """Default location of the persisted configuration."""
        return self.abs_project_path / ".scaffold" / "config.json"

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file. Defaults to :attr:`config_path`.

        Returns:
            The resolved path where the file was written.
        """
        target = path or self.config_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_REPO, SCAFFOLD_PROJECT_NAME, SCAFFOLD_PROJECT_DIR.
        """
        project_dir = os.environ.get("SCAFFOLD_PROJECT_DIR")
        return cls(
            repo=os.environ.get("SCAFFOLD_REPO", DEFAULT_REPO),
            project_name=os.environ.get("SCAFFOLD_PROJECT_NAME", ""),
            abs_project_path=Path(project_dir) if project_dir else Path.cwd(),
        )
