"""Browser API data models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Path segment that stands in for the unnamed core API group.
CORE_GROUP_TOKEN = "core"

ResourceObject = dict[str, Any]
ResourceKey = tuple[str, str, str]


class ResourceKind(BaseModel):
    """A category of cluster object identified by group, version and name."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    group: str = Field(default="", description="API group, empty for the core group")
    version: str = Field(..., min_length=1, description="API version")
    name: str = Field(..., min_length=1, description="Plural resource name")
    namespaced: bool = Field(default=False, description="Whether instances live in a namespace")
    kind: str | None = Field(default=None, description="Kind reported by the API server")

    @property
    def key(self) -> ResourceKey:
        """Identity of the kind within a catalog."""
        return (self.group, self.version, self.name)

    @property
    def path_group(self) -> str:
        """Group segment used in request paths."""
        return self.group or CORE_GROUP_TOKEN

    @property
    def api_path(self) -> str:
        """Base path for kind-scoped endpoints."""
        return f"/api/crds/{self.path_group}/{self.version}/{self.name}"

    @property
    def group_version(self) -> str:
        """``group/version`` with the core group spelled out."""
        return f"{self.path_group}/{self.version}"

    @classmethod
    def from_path(cls, group: str, version: str, name: str) -> ResourceKind:
        """Build a kind from request-path segments.

        The literal ``core`` group segment maps back to the empty group.
        """
        return cls(
            group="" if group == CORE_GROUP_TOKEN else group,
            version=version,
            name=name,
        )


def object_metadata(obj: Any) -> dict[str, Any]:
    """Return the metadata mapping of an object, or an empty dict."""
    if not isinstance(obj, dict):
        return {}
    metadata = obj.get("metadata")
    return metadata if isinstance(metadata, dict) else {}


def object_name(obj: Any) -> str | None:
    """Return ``metadata.name`` if present."""
    name = object_metadata(obj).get("name")
    return name if isinstance(name, str) else None


def object_namespace(obj: Any) -> str | None:
    """Return ``metadata.namespace`` if present."""
    namespace = object_metadata(obj).get("namespace")
    return namespace if isinstance(namespace, str) else None
