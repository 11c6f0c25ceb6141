"""Import resolution for generated Go source files.

Every generated file carries an import table mapping a package path to the
identifier the file uses to refer to it.  An empty identifier means the
package is imported under its own name.

The well-known imports live in read-only base tables.  A generation request
never touches a base table directly: it obtains a private copy through
:meth:`ImportTable.from_base`, merges the primary resource's package into it,
and hands the sorted result to the template renderer.
"""

from __future__ import annotations

import string
from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple

from .errors import EmptyIdentifierError, EmptyPathError


# ---------------------------------------------------------------------------
# Base tables
# ---------------------------------------------------------------------------

CONTROLLER_KIND_IMPORTS: Mapping[str, str] = MappingProxyType({
    "k8s.io/api/core/v1": "corev1",
    "k8s.io/apimachinery/pkg/api/errors": "",
    "k8s.io/apimachinery/pkg/apis/meta/v1": "metav1",
    "k8s.io/apimachinery/pkg/runtime": "",
    "k8s.io/apimachinery/pkg/types": "",
    "sigs.k8s.io/controller-runtime/pkg/client": "",
    "sigs.k8s.io/controller-runtime/pkg/controller": "",
    "sigs.k8s.io/controller-runtime/pkg/controller/controllerutil": "",
    "sigs.k8s.io/controller-runtime/pkg/handler": "",
    "sigs.k8s.io/controller-runtime/pkg/manager": "",
    "sigs.k8s.io/controller-runtime/pkg/reconcile": "",
    "sigs.k8s.io/controller-runtime/pkg/log": "logf",
    "sigs.k8s.io/controller-runtime/pkg/source": "",
})

COLLISION_SUFFIX = "api"

_IDENTIFIER_CHARS = frozenset(string.ascii_letters + string.digits + "_")


# ---------------------------------------------------------------------------
# Custom import parsing
# ---------------------------------------------------------------------------


class CustomImportSpec(NamedTuple):
    """A parsed ``path[=identifier]`` custom import."""

    path: str
    identifier: str


class _ImportForm(str, Enum):
    """The shapes a custom import string can take."""

    PATH_ONLY = "path-only"
    EMPTY_IDENTIFIER = "empty-identifier"
    EXPLICIT_IDENTIFIER = "explicit-identifier"


def parse_custom_import(raw: str) -> CustomImportSpec:
    """Parse a custom import of the form ``path`` or ``path=identifier``.

    Without an identifier one is derived from the last two path segments
    (``k8s.io/api/rbac/v1`` -> ``rbacv1``).  Anything after a second ``=``
    is ignored.

    Raises:
        EmptyPathError: No path before the separator.
        EmptyIdentifierError: A single ``=`` followed by nothing.
    """
    parts = raw.split("=")
    path = parts[0].strip()
    identifier = parts[1].strip() if len(parts) > 1 else ""

    if not path:
        raise EmptyPathError(raw)

    form = _classify(parts, identifier)
    if form is _ImportForm.EMPTY_IDENTIFIER:
        raise EmptyIdentifierError(raw)
    if form is _ImportForm.PATH_ONLY:
        identifier = derive_identifier(path)

    return CustomImportSpec(path, sanitize_identifier(identifier))


def _classify(parts: list[str], identifier: str) -> _ImportForm:
    if identifier:
        return _ImportForm.EXPLICIT_IDENTIFIER
    if len(parts) == 2:
        return _ImportForm.EMPTY_IDENTIFIER
    # "path" alone, or "path==..." whose first identifier segment is blank.
    return _ImportForm.PATH_ONLY


def derive_identifier(path: str) -> str:
    """Return the lower-cased default identifier for *path*.

    Uses the last two ``/`` segments joined together, or the whole path when
    it has a single segment.  The result is not sanitized.
    """
    segments = path.split("/")
    if len(segments) > 1:
        return (segments[-2] + segments[-1]).lower()
    return segments[0].lower()


def sanitize_identifier(identifier: str) -> str:
    """Drop every character that is not an ASCII letter, digit or ``_``."""
    return "".join(ch for ch in identifier if ch in _IDENTIFIER_CHARS)


# ---------------------------------------------------------------------------
# Import tables
# ---------------------------------------------------------------------------


class ImportTable:
    """A per-request, mutable copy of a base import table.

    Build one with :meth:`from_base`; the base mapping is copied and never
    referenced afterwards.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    @classmethod
    def from_base(cls, base: Mapping[str, str] = CONTROLLER_KIND_IMPORTS) -> ImportTable:
        table = cls()
        table._entries = dict(base)
        return table

    def merge(self, path: str, identifier: str) -> ImportTable:
        """Bind *path* to *identifier*, renaming on a collision.

        If *identifier* is already used by a different path, ``api`` is
        appended once.  The suffixed identifier is not checked again, so a
        table that already holds ``<identifier>api`` ends up with a
        duplicate.
        """
        for existing_path, existing_ident in self._entries.items():
            if existing_ident == identifier and existing_path != path:
                identifier = identifier + COLLISION_SUFFIX
                break
        self._entries[path] = identifier
        return self

    def identifier_for(self, path: str) -> str:
        return self._entries[path]

    def sorted_pairs(self) -> list[tuple[str, str]]:
        """Return ``(path, identifier)`` pairs ordered by path."""
        return sorted(self._entries.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImportTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ImportTable({self.sorted_pairs()!r})"


def merge_import(table: ImportTable, path: str, identifier: str) -> ImportTable:
    """Merge ``path -> identifier`` into *table*; see :meth:`ImportTable.merge`."""
    return table.merge(path, identifier)
