"""File inputs handed from a scaffold to the generator."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


class IfExistsAction(str, Enum):
    """What the generator does when the destination file already exists."""

    SKIP = "skip"
    ERROR = "error"
    OVERWRITE = "overwrite"


class FileInput(BaseModel):
    """Everything needed to render and write one generated file."""

    path: Path = Field(..., description="Destination, relative to the project root unless absolute")
    if_exists_action: IfExistsAction = Field(default=IfExistsAction.SKIP)
    template_name: str = Field(..., description="Template path relative to the template directory")
    context: dict[str, Any] = Field(default_factory=dict)
