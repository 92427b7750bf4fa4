"""Low-level helpers binding the address resolver to a transport."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .addressing import AddressResolver
from .config import DashboardContext
from .errors import EnvelopeError
from .transport import HttpxTransport, Transport

_LOG = logging.getLogger(__name__)


def check_data(data: Any) -> List[Dict[str, Any]]:
    """Unwrap the ``items`` of a collection envelope."""

    if isinstance(data, dict) and data.get("items") is not None:
        return data["items"]
    raise EnvelopeError(data)


class DashboardAPI:
    """Wrapper around a ``Transport`` with dashboard addressing helpers."""

    def __init__(self, context: DashboardContext, transport: Optional[Transport] = None) -> None:
        self.context = context
        self.resolver = AddressResolver(context.api_root)
        self.transport = transport if transport is not None else HttpxTransport(context)

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        return self.transport.get(url, headers) if headers else self.transport.get(url)

    def list(self, url: str) -> List[Dict[str, Any]]:
        """GET a collection and return its items."""

        return check_data(self.get(url))

    def post(self, url: str, body: Any) -> Any:
        return self.transport.post(url, body)

    def put(self, url: str, body: Any) -> Any:
        return self.transport.put(url, body)

    def delete(self, url: str) -> Any:
        _LOG.debug("Deleting %s", url)
        return self.transport.delete(url)

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()
