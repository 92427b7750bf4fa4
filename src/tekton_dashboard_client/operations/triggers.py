"""Operations for Tekton Triggers resources."""
from __future__ import annotations

from typing import Any, Dict, List, Sequence

from ..addressing import NamespaceLike, label_selector_query
from ..api import DashboardAPI
from ..config import DashboardContext


class TriggerOperations:
    """Read-only access to TriggerTemplates, TriggerBindings and EventListeners."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def _list(self, kind: str, namespace: NamespaceLike, filters: Sequence[str]) -> List[Dict[str, Any]]:
        target_namespace = namespace if namespace is not None else self.context.namespace
        uri = self.api.resolver.build_tekton_url(
            kind,
            namespace=target_namespace,
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def _get(self, kind: str, name: str, namespace: NamespaceLike) -> Dict[str, Any]:
        target_namespace = namespace if namespace is not None else self.context.namespace
        uri = self.api.resolver.build_tekton_url(kind, name=name, namespace=target_namespace)
        return self.api.get(uri)

    def list_trigger_templates(self, namespace: NamespaceLike = None, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        return self._list("triggertemplates", namespace, filters)

    def get_trigger_template(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        return self._get("triggertemplates", name, namespace)

    def list_trigger_bindings(self, namespace: NamespaceLike = None, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        return self._list("triggerbindings", namespace, filters)

    def get_trigger_binding(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        return self._get("triggerbindings", name, namespace)

    def list_cluster_trigger_bindings(self, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_tekton_url("clustertriggerbindings", query=label_selector_query(filters))
        return self.api.list(uri)

    def get_cluster_trigger_binding(self, name: str) -> Dict[str, Any]:
        uri = self.api.resolver.build_tekton_url("clustertriggerbindings", name=name)
        return self.api.get(uri)

    def list_event_listeners(self, namespace: NamespaceLike = None, filters: Sequence[str] = ()) -> List[Dict[str, Any]]:
        return self._list("eventlisteners", namespace, filters)

    def get_event_listener(self, name: str, namespace: NamespaceLike = None) -> Dict[str, Any]:
        return self._get("eventlisteners", name, namespace)
