"""Operations for cluster-level information and generic custom resources."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..addressing import NamespaceLike, label_selector_query
from ..api import DashboardAPI
from ..config import DashboardContext
from ..errors import TransportError

_LOG = logging.getLogger(__name__)

OPENSHIFT_ROUTE_GROUP = "route.openshift.io"
OPENSHIFT_ROUTE_VERSION = "v1"


class ClusterOperations:
    """Namespaces, install properties and arbitrary custom resources."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def list_namespaces(self) -> List[Dict[str, Any]]:
        return self.api.list(self.api.resolver.build_kube_core_url("namespaces"))

    def get_install_properties(self) -> Dict[str, Any]:
        return self.api.get(self.api.resolver.build_properties_url())

    def determine_install_namespace(self) -> Optional[str]:
        """Return the namespace the dashboard is installed in."""

        properties = self.get_install_properties() or {}
        return properties.get("InstallNamespace")

    def should_display_logout(self) -> bool:
        """Return True when the cluster serves OpenShift routes.

        Only a 404 from the route API group means "not OpenShift"; any other
        failure propagates.
        """

        uri = self.api.resolver.build_kube_group_url(OPENSHIFT_ROUTE_GROUP, OPENSHIFT_ROUTE_VERSION, "routes")
        try:
            self.api.get(uri, {"Accept": "text/plain"})
        except TransportError as exc:
            if exc.status != 404:
                raise
            _LOG.debug("Route API not available; logout is not displayed")
            return False
        return True

    def list_custom_resources(
        self,
        group: str,
        version: str,
        kind: str,
        namespace: NamespaceLike = None,
        filters: Sequence[str] = (),
    ) -> List[Dict[str, Any]]:
        uri = self.api.resolver.build_kube_group_url(
            group,
            version,
            kind,
            namespace=namespace,
            query=label_selector_query(filters),
        )
        return self.api.list(uri)

    def get_custom_resource(
        self,
        group: str,
        version: str,
        kind: str,
        name: str,
        namespace: NamespaceLike = None,
    ) -> Dict[str, Any]:
        uri = self.api.resolver.build_kube_group_url(group, version, kind, name=name, namespace=namespace)
        return self.api.get(uri)
