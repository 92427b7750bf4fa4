"""Exception types raised by the Tekton Dashboard client."""
from __future__ import annotations

from typing import Any, Optional


class DashboardClientError(Exception):
    """Base class for errors raised by this package."""


class EnvelopeError(DashboardClientError):
    """A collection response did not carry an ``items`` field."""

    def __init__(self, data: Any, message: str = "Unable to retrieve data") -> None:
        super().__init__(message)
        self.data = data


class TransportError(DashboardClientError):
    """The transport failed to complete a request or received a non-success status."""

    def __init__(
        self,
        message: str,
        url: str,
        status: Optional[int] = None,
        body: Any = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status = status
        self.body = body

    def __str__(self) -> str:
        if self.status is None:
            return f"{self.args[0]} ({self.url})"
        return f"{self.args[0]} ({self.status} {self.url})"
