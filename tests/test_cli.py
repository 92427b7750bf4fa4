from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from tekton_dashboard_client import cli
from tekton_dashboard_client.api import DashboardAPI
from tekton_dashboard_client.cli import app


runner = CliRunner()


@pytest.fixture
def transport(monkeypatch) -> MagicMock:
    fake = MagicMock()
    monkeypatch.setattr(cli, "_create_api", lambda context: DashboardAPI(context, transport=fake))
    return fake


def test_top_level_groups_present() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("url", "pipelinerun", "taskrun", "extension", "logs"):
        assert command in result.stdout


def test_url_tekton_resolves_without_network() -> None:
    result = runner.invoke(
        app,
        ["--api-root", "http://dash:9097/", "-n", "ns1", "url", "tekton", "pipelineruns", "run-1"],
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == "http://dash:9097/proxy/apis/tekton.dev/v1alpha1/namespaces/ns1/pipelineruns/run-1"


def test_url_tekton_all_namespaces_with_label() -> None:
    result = runner.invoke(
        app,
        ["--api-root", "http://dash:9097", "-n", "ns1", "url", "tekton", "pipelineruns", "-A", "-l", "app=foo"],
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == "http://dash:9097/proxy/apis/tekton.dev/v1alpha1/pipelineruns/?labelSelector=app%3Dfoo"


def test_url_core_sub_resource() -> None:
    result = runner.invoke(
        app,
        ["--api-root", "http://dash:9097", "-n", "ns1", "url", "core", "pods", "p1", "--sub-resource", "log"],
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == "http://dash:9097/proxy/api/v1/namespaces/ns1/pods/p1/log"


def test_extension_list_renders_both_sources(transport) -> None:
    def _get(url, headers=None):
        if url.endswith("/v1/extensions"):
            return [{"bundlelocation": "main.js", "displayname": "Bundle", "name": "bext"}]
        return {"items": [{"spec": {"displayname": "Resource", "name": "rext", "apiVersion": "g/v"}}]}

    transport.get.side_effect = _get

    result = runner.invoke(app, ["extension", "list"])

    assert result.exit_code == 0
    assert "bext" in result.stdout
    assert "rext" in result.stdout


def test_pipelinerun_cancel(transport) -> None:
    transport.get.return_value = {"metadata": {"name": "run-1"}, "spec": {}}

    result = runner.invoke(app, ["-n", "ns1", "pipelinerun", "cancel", "run-1"])

    assert result.exit_code == 0
    url, body = transport.put.call_args.args
    assert url.endswith("/namespaces/ns1/pipelineruns/run-1")
    assert body["spec"]["status"] == "PipelineRunCancelled"


def test_pipelinerun_create_rejects_malformed_param(transport) -> None:
    result = runner.invoke(app, ["-n", "ns1", "pipelinerun", "create", "build", "--param", "novalue"])
    assert result.exit_code != 0
    transport.post.assert_not_called()


def test_pipelineresource_create_from_manifest(transport, tmp_path) -> None:
    manifest = tmp_path / "resource.yaml"
    manifest.write_text(
        "apiVersion: tekton.dev/v1alpha1\n"
        "kind: PipelineResource\n"
        "metadata:\n"
        "  name: repo\n"
        "spec:\n"
        "  type: git\n"
    )

    result = runner.invoke(app, ["-n", "ns1", "pipelineresource", "create", "-f", str(manifest)])

    assert result.exit_code == 0
    url, body = transport.post.call_args.args
    assert url.endswith("/proxy/apis/tekton.dev/v1alpha1/namespaces/ns1/pipelineresources/")
    assert body == {
        "apiVersion": "tekton.dev/v1alpha1",
        "kind": "PipelineResource",
        "metadata": {"name": "repo"},
        "spec": {"type": "git"},
    }
