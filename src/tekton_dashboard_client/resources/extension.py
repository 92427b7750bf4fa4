"""Normalised descriptors for dashboard extensions."""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import ConfigDict, Field

from .base import ResourceModel

KUBERNETES_RESOURCE_EXTENSION = "kubernetes-resource"


class ExtensionDescriptor(ResourceModel):
    """A dashboard extension from either registry.

    Bundle-based extensions carry ``source``; custom-resource extensions carry
    ``api_group``, ``api_version`` and ``extension_type`` instead.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    display_name: Optional[str] = Field(default=None, alias="displayName")
    name: Optional[str] = None
    source: Optional[str] = None
    api_group: Optional[str] = Field(default=None, alias="apiGroup")
    api_version: Optional[str] = Field(default=None, alias="apiVersion")
    extension_type: Optional[str] = Field(default=None, alias="extensionType")

    @classmethod
    def from_bundle(cls, item: Mapping[str, Any], source: str) -> "ExtensionDescriptor":
        return cls(
            display_name=item.get("displayname"),
            name=item.get("name"),
            source=source,
        )

    @classmethod
    def from_custom_resource(cls, item: Mapping[str, Any]) -> "ExtensionDescriptor":
        spec = item.get("spec") or {}
        api_group, _, api_version = str(spec.get("apiVersion", "")).partition("/")
        return cls(
            display_name=spec.get("displayname"),
            name=spec.get("name"),
            api_group=api_group,
            api_version=api_version,
            extension_type=KUBERNETES_RESOURCE_EXTENSION,
        )

    @property
    def is_bundle(self) -> bool:
        return self.source is not None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
