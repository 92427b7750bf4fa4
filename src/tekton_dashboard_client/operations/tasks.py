"""Operations for Tasks, ClusterTasks, TaskRuns and the pods backing them."""
from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Optional, Sequence

from ..addressing import NamespaceLike, label_selector_query
from ..api import DashboardAPI
from ..config import DashboardContext

_LOG = logging.getLogger(__name__)

TASK_RUN_CANCELLED = "TaskRunCancelled"


class TaskOperations:
    """Helpers for Tekton Task objects and TaskRun logs."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def _namespace(self, namespace: NamespaceLike) -> NamespaceLike:
        return namespace if namespace is not None else self.context.namespace

    def list_tasks(self, namespace: NamespaceLike = None, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url(
            "tasks",
            namespace=self._namespace(namespace),
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_task(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("tasks", name=name, namespace=self._namespace(namespace))
        return self.api.get(uri)

    def list_cluster_tasks(self, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url("clustertasks", query=label_selector_query(filters))
        return self.api.list(uri)

    def get_cluster_task(self, name: str) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("clustertasks", name=name)
        return self.api.get(uri)

    def list_task_runs(self, namespace: NamespaceLike = None, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url(
            "taskruns",
            namespace=self._namespace(namespace),
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_task_run(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("taskruns", name=name, namespace=self._namespace(namespace))
        return self.api.get(uri)

    def cancel_task_run(self, name: str, namespace: NamespaceLike = None) -> Any:
        """Mark a TaskRun as cancelled and write it back."""

        task_run = copy.deepcopy(self.get_task_run(name, namespace))
        task_run.setdefault("spec", {})["status"] = TASK_RUN_CANCELLED
        _LOG.info("Cancelling TaskRun %s", name)
        uri = self.api.resolver.build_tekton_url("taskruns", name=name, namespace=self._namespace(namespace))
        return self.api.put(uri, task_run)

    def delete_task_run(self, name: str, namespace: NamespaceLike = None) -> Any:
        _LOG.info("Deleting TaskRun %s", name)
        uri = self.api.resolver.build_tekton_url("taskruns", name=name, namespace=self._namespace(namespace))
        return self.api.delete(uri)

    def pod_log_url(self, name: str, namespace: NamespaceLike = None, container: Optional[str] = None) -> str:
        query = {"container": container} if container else None
        return self.api.resolver.build_kube_core_url(
            "pods",
            name=name,
            namespace=self._namespace(namespace),
            sub_resource="log",
            query=query,
        )

    def get_pod_log(self, name: str, namespace: NamespaceLike = None, container: Optional[str] = None) -> str:
        uri = self.pod_log_url(name, namespace=namespace, container=container)
        return self.api.get(uri, {"Accept": "text/plain"})
