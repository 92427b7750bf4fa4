"""URL resolution for the dashboard REST root and the proxied Kubernetes APIs.

Everything in this module is pure: given an addressing intent it returns a
URL string and never performs I/O or raises on odd input. The paths produced
here are the routing contract with the dashboard backend, including the
trailing slash that turns an empty resource name into a collection request.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Mapping, NamedTuple, Optional, Sequence, Union
from urllib.parse import quote, urlencode

ALL_NAMESPACES_SENTINEL = "*"

TEKTON_GROUP = "tekton.dev"
TEKTON_VERSION = "v1alpha1"
DASHBOARD_GROUP = "dashboard.tekton.dev"
DASHBOARD_VERSION = "v1alpha1"

# Characters encodeURIComponent leaves untouched besides the RFC 3986 unreserved set.
_URI_COMPONENT_SAFE = "!~*'()"


@dataclass(frozen=True)
class Scoped:
    """A request scoped to a single namespace."""

    name: str


@dataclass(frozen=True)
class AllNamespaces:
    """A cluster-wide request spanning every namespace."""


ALL_NAMESPACES = AllNamespaces()

NamespaceScope = Union[Scoped, AllNamespaces]
NamespaceLike = Union[str, Scoped, AllNamespaces, None]
QueryParams = Mapping[str, Union[str, Sequence[str]]]


def namespace_scope(namespace: NamespaceLike) -> Optional[NamespaceScope]:
    """Convert a caller supplied namespace into a ``NamespaceScope``.

    The ``"*"`` sentinel used by dashboard front ends maps to ``ALL_NAMESPACES``;
    ``None`` and the empty string mean no scope at all.
    """

    if namespace is None or isinstance(namespace, (Scoped, AllNamespaces)):
        return namespace
    if namespace == ALL_NAMESPACES_SENTINEL:
        return ALL_NAMESPACES
    if not namespace:
        return None
    return Scoped(namespace)


def encode_component(value: str) -> str:
    """Percent-encode a single path segment the way ``encodeURIComponent`` does."""

    return quote(value, safe=_URI_COMPONENT_SAFE)


def label_selector_query(filters: Optional[Sequence[str]]) -> Dict[str, str]:
    """Return the query mapping for a list of label filters.

    An empty filter list yields an empty mapping so no query string is emitted.
    """

    if filters:
        return {"labelSelector": ",".join(filters)}
    return {}


def encode_query(query: Optional[QueryParams]) -> str:
    if not query:
        return ""
    flattened = {
        key: value if isinstance(value, str) else ",".join(value)
        for key, value in query.items()
    }
    return f"?{urlencode(flattened)}"


class AddressScheme(NamedTuple):
    """Root path template for one backend addressing scheme."""

    root_path: str
    namespace_required: bool


SCHEMES: Dict[str, AddressScheme] = {
    "dashboard": AddressScheme("/v1/", namespace_required=True),
    "core": AddressScheme("/proxy/api/v1/", namespace_required=False),
    "group": AddressScheme("/proxy/apis/{group}/{version}/", namespace_required=False),
}


def _namespace_segment(scheme: AddressScheme, scope: Optional[NamespaceScope]) -> str:
    if isinstance(scope, Scoped):
        return f"namespaces/{encode_component(scope.name)}/"
    if not scheme.namespace_required:
        return ""
    if isinstance(scope, AllNamespaces):
        return f"namespaces/{encode_component(ALL_NAMESPACES_SENTINEL)}/"
    return "namespaces//"


def build_url(
    api_root: str,
    scheme_name: str,
    kind: str,
    *,
    name: Optional[str] = "",
    namespace: NamespaceLike = None,
    sub_resource: Optional[str] = None,
    query: Optional[QueryParams] = None,
    **root_params: str,
) -> str:
    """Assemble a URL for ``scheme_name`` from its root template and the resource parts."""

    scheme = SCHEMES[scheme_name]
    parts = [
        api_root,
        scheme.root_path.format(**root_params),
        _namespace_segment(scheme, namespace_scope(namespace)),
        kind,
        "/",
        encode_component(name or ""),
    ]
    if sub_resource:
        parts.append(f"/{sub_resource}")
    parts.append(encode_query(query))
    return "".join(parts)


@dataclass(frozen=True)
class ResourceAddress:
    """Addressing intent for a resource served by the Kubernetes core API."""

    kind: str
    name: str = ""
    namespace: Optional[NamespaceScope] = None
    sub_resource: Optional[str] = None
    query: Optional[QueryParams] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", self.name or "")
        object.__setattr__(self, "namespace", namespace_scope(self.namespace))


@dataclass(frozen=True, kw_only=True)
class ResourceGroupAddress(ResourceAddress):
    """Addressing intent for a custom resource in a Kubernetes API group."""

    group: str
    version: str


class AddressResolver:
    """Build request URLs relative to a single dashboard API root."""

    def __init__(self, api_root: str) -> None:
        self.api_root = api_root

    def build_dashboard_url(
        self,
        kind: str,
        name: Optional[str] = "",
        namespace: NamespaceLike = None,
        query: Optional[QueryParams] = None,
    ) -> str:
        """URL for a dashboard-native endpoint such as ``rerun``."""

        return build_url(self.api_root, "dashboard", kind, name=name, namespace=namespace, query=query)

    def build_kube_core_url(
        self,
        kind: str,
        name: Optional[str] = "",
        namespace: NamespaceLike = None,
        sub_resource: Optional[str] = None,
        query: Optional[QueryParams] = None,
    ) -> str:
        """URL for a core (``/api/v1``) resource reached through the proxy."""

        return build_url(
            self.api_root,
            "core",
            kind,
            name=name,
            namespace=namespace,
            sub_resource=sub_resource,
            query=query,
        )

    def build_kube_group_url(
        self,
        group: str,
        version: str,
        kind: str,
        name: Optional[str] = "",
        namespace: NamespaceLike = None,
        sub_resource: Optional[str] = None,
        query: Optional[QueryParams] = None,
    ) -> str:
        """URL for a custom resource in ``group``/``version`` reached through the proxy."""

        return build_url(
            self.api_root,
            "group",
            kind,
            name=name,
            namespace=namespace,
            sub_resource=sub_resource,
            query=query,
            group=group,
            version=version,
        )

    def build_tekton_url(
        self,
        kind: str,
        name: Optional[str] = "",
        namespace: NamespaceLike = None,
        query: Optional[QueryParams] = None,
    ) -> str:
        return self.build_kube_group_url(
            TEKTON_GROUP,
            TEKTON_VERSION,
            kind,
            name=name,
            namespace=namespace,
            query=query,
        )

    def resolve(self, address: ResourceAddress) -> str:
        """Build the URL for a ``ResourceAddress`` or ``ResourceGroupAddress``."""

        if isinstance(address, ResourceGroupAddress):
            return self.build_kube_group_url(
                address.group,
                address.version,
                address.kind,
                name=address.name,
                namespace=address.namespace,
                sub_resource=address.sub_resource,
                query=address.query,
            )
        return self.build_kube_core_url(
            address.kind,
            name=address.name,
            namespace=address.namespace,
            sub_resource=address.sub_resource,
            query=address.query,
        )

    def build_extensions_url(self) -> str:
        return f"{self.api_root}/v1/extensions"

    def build_extension_base_url(self, name: str) -> str:
        return f"{self.build_extensions_url()}/{name}"

    def build_extension_bundle_url(self, name: str, bundle_location: str) -> str:
        # bundle_location may itself be a path and is passed through unencoded.
        return f"{self.build_extension_base_url(name)}/{bundle_location}"

    def build_properties_url(self) -> str:
        return f"{self.api_root}/v1/properties"

    def build_websocket_url(self) -> str:
        return f"{re.sub(r'^http', 'ws', self.api_root)}/v1/websockets/resources"
