"""Helpers to read and render Kubernetes manifests as YAML."""
from __future__ import annotations

import io
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML

from .resources.base import ResourceDefinition

yaml = YAML()
yaml.preserve_quotes = True
yaml.explicit_start = False
yaml.width = 120
yaml.indent(mapping=2, sequence=4, offset=2)


def load_manifest(path: Path) -> ResourceDefinition:
    """Load a single resource manifest from ``path``."""

    data = yaml.load(path.read_text())
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a Kubernetes manifest.")
    return ResourceDefinition.from_dict(_plain(data))


def dump_manifest(body: Any) -> str:
    """Render a resource body, or a list of them, as YAML text."""

    stream = io.StringIO()
    yaml.dump(body, stream)
    return stream.getvalue()


def _plain(value: Any) -> Any:
    # ruamel returns CommentedMap/CommentedSeq; payloads are sent as plain JSON.
    if isinstance(value, dict):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
