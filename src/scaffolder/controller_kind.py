"""Scaffold for ``pkg/controller/<kind>/<version>/<kind>_controller.go``.

``ControllerKind`` resolves the imports the generated controller needs and
produces the :class:`~src.scaffolder.inputs.FileInput` the generator renders.
The primary resource's API package comes either from the resource itself
(``<repo>/pkg/apis/<group>/<version>``) or from a caller-supplied custom
import such as ``k8s.io/api/rbac/v1=rbacv1``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.config import CONTROLLER_DIR

from .imports import CONTROLLER_KIND_IMPORTS, ImportTable, merge_import, parse_custom_import
from .inputs import FileInput, IfExistsAction
from .resource import Resource


CONTROLLER_KIND_TEMPLATE = "controller_kind.go.j2"


def controller_kind_path(resource: Resource) -> Path:
    """Default output path for a resource's controller."""
    return CONTROLLER_DIR / resource.lower_kind / resource.version / f"{resource.lower_kind}_controller.go"


class ControllerKind(BaseModel):
    """Input for generating one controller file.

    An explicit ``path`` is used as given; a relative one resolves against the
    project root.  Pydantic coerces it to a :class:`~pathlib.Path`, which
    collapses repeated separators and single-dot segments, so
    ``"./out//ctrl.go"`` becomes ``out/ctrl.go``.  Both name the same file.
    """

    model_config = ConfigDict(frozen=True)

    resource: Resource
    custom_import: Optional[str] = Field(
        default=None,
        description="Import path (and optional identifier) of a built-in or custom API to reconcile",
    )
    path: Optional[Path] = Field(default=None, description="Explicit output path; derived when unset")

    def get_input(self, repo: str) -> FileInput:
        """Assemble the file input for this controller.

        Args:
            repo: Go module path of the project, used for the resource's
                default API package.

        Raises:
            CustomImportError: ``custom_import`` could not be parsed.
        """
        import_ident, table = self.resolve_imports(repo)
        return FileInput(
            path=self.path if self.path is not None else controller_kind_path(self.resource),
            if_exists_action=IfExistsAction.ERROR,
            template_name=CONTROLLER_KIND_TEMPLATE,
            context=self._build_context(import_ident, table),
        )

    def resolve_imports(self, repo: str) -> tuple[str, ImportTable]:
        """Return the primary resource's identifier and the request's import table."""
        table = ImportTable.from_base(CONTROLLER_KIND_IMPORTS)
        if self.custom_import:
            import_path, import_ident = parse_custom_import(self.custom_import)
        else:
            import_path = self.resource.default_import_path(repo)
            import_ident = self.resource.default_import_ident
        merge_import(table, import_path, import_ident)
        return table.identifier_for(import_path), table

    def _build_context(self, import_ident: str, table: ImportTable) -> dict[str, Any]:
        return {
            "resource": self.resource,
            "import_ident": import_ident,
            "imports": table.sorted_pairs(),
        }
