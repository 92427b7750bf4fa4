"""Operations for Pipelines, PipelineRuns and PipelineResources."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..addressing import NamespaceLike, label_selector_query
from ..api import DashboardAPI
from ..config import DashboardContext
from ..resources.base import ResourceDefinition
from ..resources.pipeline_run import PipelineRunConfig

_LOG = logging.getLogger(__name__)

PIPELINE_RUN_CANCELLED = "PipelineRunCancelled"


def summarise_run(item: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a PipelineRun or TaskRun into the fields shown in listings."""

    metadata: Dict[str, Any] = item.get("metadata", {}) or {}
    status: Dict[str, Any] = item.get("status", {}) or {}
    condition = _succeeded_condition(status)
    return {
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
        "startTime": status.get("startTime"),
        "completionTime": status.get("completionTime"),
        "status": condition.get("status"),
        "reason": condition.get("reason"),
        "message": condition.get("message"),
    }


def _succeeded_condition(status: Dict[str, Any]) -> Dict[str, Optional[str]]:
    conditions = status.get("conditions", []) or []
    if isinstance(conditions, list):
        for condition in conditions:
            if isinstance(condition, dict) and condition.get("type") == "Succeeded":
                return condition
    return {"status": None, "reason": None, "message": None}


class PipelineOperations:
    """Helpers for Tekton Pipeline objects exposed through the dashboard proxy."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def _namespace(self, namespace: NamespaceLike) -> NamespaceLike:
        return namespace if namespace is not None else self.context.namespace

    def list_pipelines(
        self,
        namespace: NamespaceLike = None,
        filters: Sequence[str] = (),
    ) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url(
            "pipelines",
            namespace=self._namespace(namespace),
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_pipeline(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("pipelines", name=name, namespace=self._namespace(namespace))
        return self.api.get(uri)

    def list_pipeline_runs(
        self,
        namespace: NamespaceLike = None,
        filters: Sequence[str] = (),
    ) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url(
            "pipelineruns",
            namespace=self._namespace(namespace),
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_pipeline_run(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("pipelineruns", name=name, namespace=self._namespace(namespace))
        return self.api.get(uri)

    def create_pipeline_run(self, cfg: PipelineRunConfig) -> Any:
        """Start a new run of ``cfg.pipeline_name``."""

        definition = cfg.to_resource()
        namespace = self._namespace(cfg.namespace)
        _LOG.info("Creating PipelineRun %s in namespace %s", definition.name, namespace)
        uri = self.api.resolver.build_tekton_url("pipelineruns", namespace=namespace)
        return self.api.post(uri, definition.to_dict())

    def cancel_pipeline_run(self, name: str, namespace: NamespaceLike = None) -> Any:
        """Mark a PipelineRun as cancelled and write it back."""

        pipeline_run = copy.deepcopy(self.get_pipeline_run(name, namespace))
        pipeline_run.setdefault("spec", {})["status"] = PIPELINE_RUN_CANCELLED
        _LOG.info("Cancelling PipelineRun %s", name)
        uri = self.api.resolver.build_tekton_url("pipelineruns", name=name, namespace=self._namespace(namespace))
        return self.api.put(uri, pipeline_run)

    def delete_pipeline_run(self, name: str, namespace: NamespaceLike = None) -> Any:
        _LOG.info("Deleting PipelineRun %s", name)
        uri = self.api.resolver.build_tekton_url("pipelineruns", name=name, namespace=self._namespace(namespace))
        return self.api.delete(uri)

    def rerun_pipeline_run(self, namespace: str, payload: Dict[str, Any]) -> Any:
        """Ask the dashboard backend to start a copy of an existing PipelineRun."""

        _LOG.info("Requesting rerun in namespace %s", namespace)
        uri = self.api.resolver.build_dashboard_url("rerun", namespace=namespace)
        return self.api.post(uri, payload)

    def list_pipeline_resources(
        self,
        namespace: NamespaceLike = None,
        filters: Sequence[str] = (),
    ) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url(
            "pipelineresources",
            namespace=self._namespace(namespace),
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_pipeline_resource(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url(
            "pipelineresources", name=name, namespace=self._namespace(namespace)
        )
        return self.api.get(uri)

    def create_pipeline_resource(
        self,
        resource: ResourceDefinition,
        namespace: Optional[str] = None,
    ) -> Any:
        target_namespace = namespace or resource.namespace or self.context.namespace
        _LOG.info("Creating PipelineResource %s in namespace %s", resource.name, target_namespace)
        uri = self.api.resolver.build_tekton_url("pipelineresources", namespace=target_namespace)
        return self.api.post(uri, resource.to_dict())

    def delete_pipeline_resource(self, name: str, namespace: NamespaceLike = None) -> Any:
        _LOG.info("Deleting PipelineResource %s", name)
        uri = self.api.resolver.build_tekton_url(
            "pipelineresources", name=name, namespace=self._namespace(namespace)
        )
        return self.api.delete(uri)
