"""Discovery of dashboard extensions from both extension registries."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from ..addressing import DASHBOARD_GROUP, DASHBOARD_VERSION
from ..api import DashboardAPI
from ..config import DashboardContext
from ..errors import TransportError
from ..resources.extension import ExtensionDescriptor

_LOG = logging.getLogger(__name__)

T = TypeVar("T")


def fetch_or_empty(fetch: Callable[[], Optional[Iterable[T]]], source: str = "extension") -> List[T]:
    """Run ``fetch`` and return its items, treating a transport failure as no items.

    A missing (``None``) result is also treated as empty. Errors other than
    ``TransportError`` propagate.
    """

    try:
        items = fetch()
    except TransportError as exc:
        _LOG.warning("Unable to load %s list, continuing without it: %s", source, exc)
        return []
    return list(items or [])


class ExtensionOperations:
    """Merge bundle-based and custom-resource extensions into one list."""

    def __init__(self, api: DashboardAPI, context: DashboardContext) -> None:
        self.api = api
        self.context = context

    def _fetch_bundle_extensions(self) -> Optional[List[Any]]:
        response = self.api.get(self.api.resolver.build_extensions_url())
        if not isinstance(response, list):
            return None
        return response

    def _fetch_resource_extensions(self) -> Optional[List[Any]]:
        uri = self.api.resolver.build_kube_group_url(DASHBOARD_GROUP, DASHBOARD_VERSION, "extensions")
        response = self.api.get(uri)
        if not isinstance(response, dict):
            return None
        return response.get("items")

    def list_extensions(self) -> List[ExtensionDescriptor]:
        """Return bundle-based extensions followed by custom-resource extensions.

        Entries are not de-duplicated by name; each registry may be missing on
        a given cluster, in which case it contributes nothing.
        """

        bundle_items = fetch_or_empty(self._fetch_bundle_extensions, "bundle extension")
        resource_items = fetch_or_empty(self._fetch_resource_extensions, "resource extension")

        extensions = [
            ExtensionDescriptor.from_bundle(
                item,
                self.api.resolver.build_extension_bundle_url(item.get("name"), item.get("bundlelocation")),
            )
            for item in bundle_items
        ]
        extensions.extend(ExtensionDescriptor.from_custom_resource(item) for item in resource_items)
        _LOG.debug(
            "Discovered %d bundle and %d resource extensions",
            len(bundle_items),
            len(resource_items),
        )
        return extensions
