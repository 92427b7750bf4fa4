"""Configuration models and helpers for the Tekton Dashboard client."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urldefrag

import yaml
from pydantic import BaseModel, Field, field_validator


def api_root_from_location(location: str) -> str:
    """Derive the API root from a dashboard page location.

    The fragment is dropped along with a single trailing slash, so
    ``http://host/dashboard/#/pipelines`` becomes ``http://host/dashboard``.
    """

    base_url = urldefrag(location).url
    if base_url.endswith("/"):
        base_url = base_url[:-1]
    return base_url


class DashboardContext(BaseModel):
    """Connection context to interact with a Tekton Dashboard."""

    api_root: str = "http://localhost:9097"
    namespace: Optional[str] = None
    verify_ssl: bool = True
    timeout: float = 30.0
    headers: Dict[str, str] = Field(default_factory=dict)

    @field_validator("api_root")
    @classmethod
    def _normalise_api_root(cls, value: str) -> str:
        return api_root_from_location(value)

    @classmethod
    def from_file(cls, path: str | Path) -> "DashboardContext":
        document_path = Path(path)
        data = yaml.safe_load(document_path.read_text())
        if not isinstance(data, dict):
            raise ValueError("Configuration file must contain a mapping at the top level.")
        return cls.model_validate(data)
