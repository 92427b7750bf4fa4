"""HTTP transport used to reach the dashboard backend."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from .config import DashboardContext
from .errors import TransportError

_LOG = logging.getLogger(__name__)

JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"
DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class Transport(Protocol):
    """The request primitives the dashboard operations rely on.

    Implementations return the parsed response body and raise
    ``TransportError`` for network failures and non-success statuses.
    """

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        ...

    def post(self, url: str, body: Any) -> Any:
        ...

    def put(self, url: str, body: Any) -> Any:
        ...

    def delete(self, url: str) -> Any:
        ...

    def patch_add_secret(self, url: str, secret_name: str) -> Any:
        ...

    def patch_update_secrets(self, url: str, secret_names: List[Any]) -> Any:
        ...


class HttpxTransport:
    """``Transport`` implementation backed by a shared ``httpx.Client``."""

    def __init__(self, context: DashboardContext, client: Optional[httpx.Client] = None) -> None:
        self.context = context
        self.client = client or httpx.Client(
            headers={**DEFAULT_HEADERS, **context.headers},
            timeout=context.timeout,
            verify=context.verify_ssl,
        )

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def get(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._request("GET", url, headers=headers)

    def post(self, url: str, body: Any) -> Any:
        return self._request("POST", url, json=body)

    def put(self, url: str, body: Any) -> Any:
        return self._request("PUT", url, json=body)

    def delete(self, url: str) -> Any:
        return self._request("DELETE", url)

    def patch_add_secret(self, url: str, secret_name: str) -> Any:
        patch = [{"op": "add", "path": "/secrets/-", "value": {"name": secret_name}}]
        return self._request(
            "PATCH",
            url,
            json=patch,
            headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        )

    def patch_update_secrets(self, url: str, secret_names: List[Any]) -> Any:
        patch = [{"op": "replace", "path": "/secrets", "value": secret_names}]
        return self._request(
            "PATCH",
            url,
            json=patch,
            headers={"Content-Type": JSON_PATCH_CONTENT_TYPE},
        )

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        _LOG.debug("%s %s", method, url)
        try:
            response = self.client.request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} request failed: {exc}", url=url) from exc

        if response.is_error:
            raise TransportError(
                response.reason_phrase or f"{method} request failed",
                url=url,
                status=response.status_code,
                body=self._error_body(response),
            )
        return self._parse_body(response, url)

    @staticmethod
    def _parse_body(response: httpx.Response, url: str) -> Any:
        if not response.content:
            return None
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return response.text
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                "Invalid JSON response",
                url=url,
                status=response.status_code,
                body=response.text,
            ) from exc

    @staticmethod
    def _error_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None
