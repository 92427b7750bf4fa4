import pytest

from tekton_dashboard_client.api import check_data
from tekton_dashboard_client.config import DashboardContext, api_root_from_location
from tekton_dashboard_client.errors import EnvelopeError
from tekton_dashboard_client.resources.base import ResourceDefinition
from tekton_dashboard_client.resources.extension import ExtensionDescriptor
from tekton_dashboard_client.resources.pipeline_run import PipelineRunConfig


def test_pipeline_run_payload():
    cfg = PipelineRunConfig(
        pipelineName="build",
        resources={"source": "git-repo"},
        params={"revision": "main"},
        serviceAccount="builder",
        timeout="1h0m0s",
        labels={"team": "ci"},
    )

    body = cfg.to_resource(timestamp_ms=1700000000000).to_dict()

    assert body == {
        "apiVersion": "tekton.dev/v1alpha1",
        "kind": "PipelineRun",
        "metadata": {
            "name": "build-run-1700000000000",
            "labels": {"team": "ci", "tekton.dev/pipeline": "build", "app": "tekton-app"},
        },
        "spec": {
            "pipelineRef": {"name": "build"},
            "resources": [{"name": "source", "resourceRef": {"name": "git-repo"}}],
            "params": [{"name": "revision", "value": "main"}],
            "serviceAccountName": "builder",
            "timeout": "1h0m0s",
        },
    }


def test_pipeline_run_labels_cannot_override_pipeline_label():
    cfg = PipelineRunConfig(pipeline_name="build", labels={"tekton.dev/pipeline": "other"})
    spec = cfg.to_resource(timestamp_ms=1).to_dict()
    assert spec["metadata"]["labels"]["tekton.dev/pipeline"] == "build"
    assert "serviceAccountName" not in spec["spec"]


def test_resource_definition_from_dict_keeps_extra_fields():
    definition = ResourceDefinition.from_dict(
        {"apiVersion": "v1", "kind": "Secret", "metadata": {"name": "s"}, "type": "Opaque"}
    )
    assert definition.name == "s"
    assert definition.spec is None
    assert definition.to_dict()["type"] == "Opaque"


def test_resource_definition_requires_kind():
    with pytest.raises(ValueError):
        ResourceDefinition.from_dict({"apiVersion": "v1", "metadata": {}})


def test_extension_descriptor_splits_api_version_once():
    descriptor = ExtensionDescriptor.from_custom_resource(
        {"spec": {"displayname": "Widgets", "name": "widgets", "apiVersion": "example.dev/v1"}}
    )
    assert descriptor.to_dict() == {
        "displayName": "Widgets",
        "name": "widgets",
        "apiGroup": "example.dev",
        "apiVersion": "v1",
        "extensionType": "kubernetes-resource",
    }


def test_check_data():
    assert check_data({"items": []}) == []
    assert check_data({"items": [{"a": 1}]}) == [{"a": 1}]
    with pytest.raises(EnvelopeError):
        check_data({"metadata": {}})
    with pytest.raises(EnvelopeError):
        check_data(None)


@pytest.mark.parametrize(
    "location, expected",
    [
        ("http://localhost:9097/", "http://localhost:9097"),
        ("http://localhost:9097/#/pipelineruns", "http://localhost:9097"),
        ("https://host/tekton/#/", "https://host/tekton"),
        ("https://host/tekton", "https://host/tekton"),
    ],
)
def test_api_root_from_location(location, expected):
    assert api_root_from_location(location) == expected


def test_context_from_file(tmp_path):
    config_file = tmp_path / "dashboard.yaml"
    config_file.write_text("api_root: http://dash.example.com/\nnamespace: ci\ntimeout: 5\n")

    context = DashboardContext.from_file(config_file)

    assert context.api_root == "http://dash.example.com"
    assert context.namespace == "ci"
    assert context.timeout == 5.0


def test_context_from_file_rejects_non_mapping(tmp_path):
    config_file = tmp_path / "dashboard.yaml"
    config_file.write_text("- not\n- a mapping\n")

    with pytest.raises(ValueError):
        DashboardContext.from_file(config_file)
