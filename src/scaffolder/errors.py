"""Exceptions raised while scaffolding generated source files."""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every scaffolding failure."""


class ResourceError(ScaffoldError):
    """Raised when an API version or kind cannot describe a resource."""


class CustomImportError(ScaffoldError):
    """Raised when a custom import string cannot be parsed.

    The exact input string is kept on ``raw`` so callers can show it back.
    """

    def __init__(self, raw: str, message: str) -> None:
        self.raw = raw
        super().__init__(message)


class EmptyPathError(CustomImportError):
    """The custom import has no path before the ``=`` separator."""

    def __init__(self, raw: str) -> None:
        super().__init__(raw, f'custom import "{raw}" path is empty')


class EmptyIdentifierError(CustomImportError):
    """The custom import has a single ``=`` with nothing after it."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            raw,
            f'custom import "{raw}" identifier is empty, remove "=" from passed string',
        )


class AlreadyExistsError(ScaffoldError):
    """Raised instead of overwriting a file that is already on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: file already exists")
