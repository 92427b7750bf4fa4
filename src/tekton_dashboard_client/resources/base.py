"""Shared resource definitions for Tekton payloads."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, ConfigDict

_ENVELOPE_KEYS = ("apiVersion", "kind", "metadata", "spec")


class ResourceModel(BaseModel):
    """Base model for request payload builders."""

    model_config = ConfigDict(populate_by_name=True)


@dataclass(frozen=True)
class ResourceDefinition:
    """A Kubernetes object body sent to or received from the proxy API."""

    api_version: str
    kind: str
    metadata: Dict[str, Any]
    spec: Optional[Dict[str, Any]] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, body: Mapping[str, Any]) -> "ResourceDefinition":
        if not body.get("apiVersion") or not body.get("kind"):
            raise ValueError("Resource manifests must declare apiVersion and kind.")
        return cls(
            api_version=str(body["apiVersion"]),
            kind=str(body["kind"]),
            metadata=dict(body.get("metadata") or {}),
            spec=dict(body["spec"]) if body.get("spec") is not None else None,
            extra={key: value for key, value in body.items() if key not in _ENVELOPE_KEYS},
        )

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "apiVersion": self.api_version,
            "kind": self.kind,
            "metadata": self.metadata,
        }
        if self.spec is not None:
            body["spec"] = self.spec
        body.update(self.extra)
        return body

    @property
    def name(self) -> Optional[str]:
        return self.metadata.get("name")

    @property
    def namespace(self) -> Optional[str]:
        return self.metadata.get("namespace")
