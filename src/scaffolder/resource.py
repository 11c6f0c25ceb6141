"""Resource descriptor for the Kubernetes API type a controller reconciles."""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field

from .errors import ResourceError


_VERSION_RE = re.compile(r"^v[1-9][0-9]*((alpha|beta)[1-9][0-9]*)?$")
_KIND_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


class Resource(BaseModel):
    """An API group/version/kind plus the names derived from it.

    Construct with :meth:`new`, which validates the inputs and fills in the
    derived fields.
    """

    model_config = ConfigDict(frozen=True)

    api_version: str = Field(..., description="e.g. 'app.example.com/v1alpha1'")
    kind: str = Field(..., description="e.g. 'AppService'")
    full_group: str = Field(..., description="e.g. 'app.example.com'")
    group: str = Field(..., description="First segment of the full group, e.g. 'app'")
    go_import_group: str = Field(
        ..., description="Group lower-cased with hyphens removed, used in Go import paths"
    )
    version: str = Field(..., description="e.g. 'v1alpha1'")
    lower_kind: str = Field(..., description="Kind lower-cased")
    resource: str = Field(..., description="Plural lower-cased kind, e.g. 'appservices'")

    @classmethod
    def new(cls, api_version: str, kind: str) -> Resource:
        """Validate *api_version* and *kind* and derive the remaining names.

        Raises:
            ResourceError: The group, version or kind is malformed.
        """
        full_group, version = _split_api_version(api_version)
        group = full_group.split(".")[0]
        if not group:
            raise ResourceError("group cannot be empty")
        if not _VERSION_RE.match(version):
            raise ResourceError(
                f"version {version!r} is not in the correct Kubernetes version format, ex. v1alpha1"
            )
        if not kind:
            raise ResourceError("kind cannot be empty")
        if not _KIND_RE.match(kind):
            raise ResourceError(
                f"kind {kind!r} must begin with an uppercase letter and contain only alphanumerics"
            )

        lower_kind = kind.lower()
        return cls(
            api_version=api_version,
            kind=kind,
            full_group=full_group,
            group=group,
            go_import_group=group.lower().replace("-", ""),
            version=version,
            lower_kind=lower_kind,
            resource=_pluralize(lower_kind),
        )

    @property
    def default_import_ident(self) -> str:
        """Identifier of this resource's own API package when nothing overrides it."""
        return (self.go_import_group + self.version).lower()

    def default_import_path(self, repo: str) -> str:
        """Go import path of this resource's API package inside *repo*."""
        return "/".join((repo.rstrip("/"), "pkg", "apis", self.go_import_group, self.version))


def _split_api_version(api_version: str) -> tuple[str, str]:
    parts = api_version.split("/")
    if len(parts) != 2 or not parts[0]:
        raise ResourceError("full group cannot be empty")
    return parts[0], parts[1]


def _pluralize(word: str) -> str:
    """Naive English plural, good enough for resource names."""
    if word.endswith("y") and not word.endswith(("ay", "ey", "oy", "uy")):
        return word[:-1] + "ies"
    if word.endswith(("s", "sh", "ch", "x", "z")):
        return word + "es"
    return word + "s"
