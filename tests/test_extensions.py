from unittest.mock import MagicMock

import httpx
import pytest

from tekton_dashboard_client.api import DashboardAPI
from tekton_dashboard_client.config import DashboardContext
from tekton_dashboard_client.errors import TransportError
from tekton_dashboard_client.operations.extensions import ExtensionOperations, fetch_or_empty
from tekton_dashboard_client.transport import DEFAULT_HEADERS, HttpxTransport

ROOT = "http://localhost:9097"
BUNDLE_URL = f"{ROOT}/v1/extensions"
RESOURCE_URL = f"{ROOT}/proxy/apis/dashboard.tekton.dev/v1alpha1/extensions/"


def _make_ops(responses) -> ExtensionOperations:
    transport = MagicMock()

    def _get(url, headers=None):
        response = responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    transport.get.side_effect = _get
    context = DashboardContext(api_root=ROOT)
    return ExtensionOperations(DashboardAPI(context, transport=transport), context)


def test_merges_bundle_then_resource_extensions():
    ops = _make_ops(
        {
            BUNDLE_URL: [{"bundlelocation": "b", "displayname": "D", "name": "n"}],
            RESOURCE_URL: {"items": [{"spec": {"displayname": "D2", "name": "n2", "apiVersion": "g/v"}}]},
        }
    )

    result = [extension.to_dict() for extension in ops.list_extensions()]

    assert result == [
        {"displayName": "D", "name": "n", "source": f"{ROOT}/v1/extensions/n/b"},
        {
            "displayName": "D2",
            "name": "n2",
            "apiGroup": "g",
            "apiVersion": "v",
            "extensionType": "kubernetes-resource",
        },
    ]


def test_bundle_failure_still_returns_resource_extensions():
    ops = _make_ops(
        {
            BUNDLE_URL: TransportError("Not Found", url=BUNDLE_URL, status=404),
            RESOURCE_URL: {"items": [{"spec": {"displayname": "D2", "name": "n2", "apiVersion": "g/v"}}]},
        }
    )

    result = ops.list_extensions()

    assert [extension.name for extension in result] == ["n2"]
    assert result[0].source is None


def test_resource_failure_still_returns_bundle_extensions():
    ops = _make_ops(
        {
            BUNDLE_URL: [{"bundlelocation": "main.js", "displayname": "Ext", "name": "ext"}],
            RESOURCE_URL: TransportError("Forbidden", url=RESOURCE_URL, status=403),
        }
    )

    result = ops.list_extensions()

    assert [extension.source for extension in result] == [f"{ROOT}/v1/extensions/ext/main.js"]


def test_missing_responses_degrade_to_empty():
    ops = _make_ops({BUNDLE_URL: None, RESOURCE_URL: {"kind": "ExtensionList"}})
    assert ops.list_extensions() == []


def test_duplicate_names_are_kept_in_source_order():
    ops = _make_ops(
        {
            BUNDLE_URL: [{"bundlelocation": "a.js", "displayname": "Same", "name": "same"}],
            RESOURCE_URL: {"items": [{"spec": {"displayname": "Same", "name": "same", "apiVersion": "g/v1"}}]},
        }
    )

    result = ops.list_extensions()

    assert [extension.name for extension in result] == ["same", "same"]
    assert result[0].is_bundle
    assert not result[1].is_bundle


def test_fetch_or_empty_swallows_only_transport_errors():
    def _failing():
        raise TransportError("boom", url="http://x", status=500)

    def _broken():
        raise KeyError("items")

    assert fetch_or_empty(_failing) == []
    assert fetch_or_empty(lambda: None) == []
    assert fetch_or_empty(lambda: ("a", "b")) == ["a", "b"]
    with pytest.raises(KeyError):
        fetch_or_empty(_broken)


def test_text_bundle_response_is_ignored():
    ops = _make_ops(
        {
            BUNDLE_URL: "<html></html>",
            RESOURCE_URL: {"items": [{"spec": {"displayname": "D2", "name": "n2", "apiVersion": "g/v"}}]},
        }
    )

    assert [extension.name for extension in ops.list_extensions()] == ["n2"]


def test_malformed_bundle_json_over_http_still_returns_resource_extensions():
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == BUNDLE_URL:
            return httpx.Response(200, content=b"{not json", headers={"content-type": "application/json"})
        return httpx.Response(
            200,
            json={"items": [{"spec": {"displayname": "D2", "name": "n2", "apiVersion": "g/v"}}]},
        )

    context = DashboardContext(api_root=ROOT)
    client = httpx.Client(transport=httpx.MockTransport(handler), headers=DEFAULT_HEADERS)
    api = DashboardAPI(context, transport=HttpxTransport(context, client=client))

    result = ExtensionOperations(api, context).list_extensions()

    assert [extension.name for extension in result] == ["n2"]
