"""Scaffold execution: resolve inputs, check the destination, render, write.

Takes one or more scaffolds (anything with a ``get_input(repo)`` method, such
as :class:`~src.scaffolder.controller_kind.ControllerKind`) and writes their
rendered files under the project root.  The if-exists policy of every input
is checked *before* rendering, so a refused file is never touched.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from pathlib import Path
from typing import Optional, Protocol

from src.config import Config
from src.utils import print_success, print_warning

from .controller_kind import ControllerKind
from .errors import AlreadyExistsError
from .inputs import FileInput, IfExistsAction
from .resource import Resource
from .templates import TemplateRenderer


class Scaffold(Protocol):
    def get_input(self, repo: str) -> FileInput: ...


# ---------------------------------------------------------------------------
# File-system collaborator
# ---------------------------------------------------------------------------


class LocalFileSystem:
    """Reads and writes generated files on the local disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def write(self, path: Path, content: str, *, exclusive: bool = False) -> None:
        """Create parent dirs and write *content*.

        With *exclusive* the file is opened in ``"x"`` mode, so an existing
        file raises ``FileExistsError`` instead of being replaced.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("x" if exclusive else "w", encoding="utf-8") as fh:
            fh.write(content)


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """Executes scaffolds against a project directory.

    Every scaffold resolves its own import table, so many scaffolds can be
    executed concurrently with :meth:`generate_controllers` without sharing
    any mutable state.
    """

    def __init__(
        self,
        config: Config,
        renderer: Optional[TemplateRenderer] = None,
        fs: Optional[LocalFileSystem] = None,
    ) -> None:
        self.config = config
        self.renderer = renderer or TemplateRenderer()
        self.fs = fs or LocalFileSystem()

    # -- Public API --------------------------------------------------------

    async def execute(self, *scaffolds: Scaffold) -> list[Path]:
        """Render and write each scaffold in order.

        Returns:
            Paths of the files actually written (skipped files excluded).

        Raises:
            AlreadyExistsError: A destination exists and its input asks for
                an error.  Files written by earlier scaffolds are kept.
            CustomImportError: A scaffold's custom import is malformed.
        """
        written: list[Path] = []
        for scaffold in scaffolds:
            path = await self._execute_one(scaffold)
            if path is not None:
                written.append(path)
        return written

    async def generate_controllers(
        self,
        resources: Iterable[Resource],
        custom_import: Optional[str] = None,
    ) -> list[Path]:
        """Generate one controller per resource concurrently.

        Two resources resolving to the same destination are rejected before
        anything is written.  Otherwise the first failure is raised once
        every request has finished.
        """
        scaffolds = [
            ControllerKind(resource=resource, custom_import=custom_import)
            for resource in resources
        ]
        inputs = [s.get_input(self.config.repo) for s in scaffolds]

        seen: set[Path] = set()
        for file_input in inputs:
            path = self._resolve_path(file_input.path)
            if path in seen:
                raise AlreadyExistsError(path)
            seen.add(path)

        results = await asyncio.gather(
            *(self._write_input(i) for i in inputs),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return [p for p in results if p is not None]

    def render(self, scaffold: Scaffold) -> tuple[Path, str]:
        """Resolve and render *scaffold* without touching the file system."""
        file_input = scaffold.get_input(self.config.repo)
        return self._resolve_path(file_input.path), self.renderer.render(
            file_input.template_name, file_input.context
        )

    # -- Internals ---------------------------------------------------------

    async def _execute_one(self, scaffold: Scaffold) -> Optional[Path]:
        return await self._write_input(scaffold.get_input(self.config.repo))

    async def _write_input(self, file_input: FileInput) -> Optional[Path]:
        path = self._resolve_path(file_input.path)
        exclusive = file_input.if_exists_action is IfExistsAction.ERROR

        exists = await asyncio.to_thread(self.fs.exists, path)
        if exists:
            if exclusive:
                raise AlreadyExistsError(path)
            if file_input.if_exists_action is IfExistsAction.SKIP:
                print_warning(f"Skipping existing file {self._display(path)}")
                return None

        content = self.renderer.render(file_input.template_name, file_input.context)
        try:
            await asyncio.to_thread(self.fs.write, path, content, exclusive=exclusive)
        except FileExistsError as exc:
            # Created by someone else between the check and the write.
            raise AlreadyExistsError(path) from exc
        print_success(f"Created {self._display(path)}")
        return path

    def _resolve_path(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.config.abs_project_path / path

    def _display(self, path: Path) -> str:
        try:
            return str(path.relative_to(self.config.abs_project_path))
        except ValueError:
            return str(path)
