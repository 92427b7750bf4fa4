"""Client access layer for the Tekton Dashboard API."""

from .addressing import ALL_NAMESPACES, AddressResolver, ResourceAddress, ResourceGroupAddress  # noqa: F401
from .api import DashboardAPI, check_data  # noqa: F401
from .config import DashboardContext  # noqa: F401
from .errors import DashboardClientError, EnvelopeError, TransportError  # noqa: F401

__all__ = [
    "ALL_NAMESPACES",
    "AddressResolver",
    "DashboardAPI",
    "DashboardClientError",
    "DashboardContext",
    "EnvelopeError",
    "ResourceAddress",
    "ResourceGroupAddress",
    "TransportError",
    "check_data",
]
