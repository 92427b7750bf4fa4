"""PipelineRun payload builder."""
from __future__ import annotations

import time
from typing import Dict, Optional

from pydantic import Field

from ..addressing import TEKTON_GROUP, TEKTON_VERSION
from .base import ResourceDefinition, ResourceModel

PIPELINE_LABEL = "tekton.dev/pipeline"
APP_LABEL_VALUE = "tekton-app"


class PipelineRunConfig(ResourceModel):
    """Parameters for starting a run of an existing Pipeline.

    ``resources`` maps each pipeline resource binding name to the name of the
    PipelineResource to use; ``params`` maps parameter names to values.
    """

    pipeline_name: str = Field(alias="pipelineName")
    namespace: Optional[str] = None
    resources: Dict[str, str] = Field(default_factory=dict)
    params: Dict[str, str] = Field(default_factory=dict)
    service_account: Optional[str] = Field(default=None, alias="serviceAccount")
    timeout: Optional[str] = None
    labels: Dict[str, str] = Field(default_factory=dict)

    def run_name(self, timestamp_ms: Optional[int] = None) -> str:
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return f"{self.pipeline_name}-run-{timestamp_ms}"

    def to_resource(self, timestamp_ms: Optional[int] = None) -> ResourceDefinition:
        labels: Dict[str, str] = {
            **self.labels,
            PIPELINE_LABEL: self.pipeline_name,
            "app": APP_LABEL_VALUE,
        }
        spec: Dict[str, object] = {
            "pipelineRef": {"name": self.pipeline_name},
            "resources": [
                {"name": name, "resourceRef": {"name": ref}}
                for name, ref in self.resources.items()
            ],
            "params": [{"name": name, "value": value} for name, value in self.params.items()],
        }
        if self.service_account:
            spec["serviceAccountName"] = self.service_account
        if self.timeout:
            spec["timeout"] = self.timeout
        return ResourceDefinition(
            api_version=f"{TEKTON_GROUP}/{TEKTON_VERSION}",
            kind="PipelineRun",
            metadata={"name": self.run_name(timestamp_ms), "labels": labels},
            spec=spec,
        )
