"""Tests for the Kubernetes cluster client (API objects are mocked)."""

from unittest.mock import MagicMock

import pytest
from kubernetes import client as k8s
from kubernetes.client.rest import ApiException

from cluster_completion.domain.labels import APPLICATION_LABEL, COMPONENT_LABEL, COMPONENT_TYPE_LABEL
from cluster_completion.domain.types import InstanceStatus, SessionScope
from cluster_completion.infrastructure.kubernetes import KubernetesClusterClient

SCOPE = SessionScope("project", "app", "frontend")


def deployment(component: str, secret_refs=(), available: str | None = None) -> k8s.V1Deployment:
    env_from = [k8s.V1EnvFromSource(secret_ref=k8s.V1SecretEnvSource(name=name)) for name in secret_refs]
    conditions = [k8s.V1DeploymentCondition(type="Available", status=available)] if available else None
    return k8s.V1Deployment(
        metadata=k8s.V1ObjectMeta(
            name=f"{component}-app",
            namespace="project",
            labels={APPLICATION_LABEL: "app", COMPONENT_LABEL: component, COMPONENT_TYPE_LABEL: "nodejs"},
        ),
        spec=k8s.V1DeploymentSpec(
            selector=k8s.V1LabelSelector(match_labels={COMPONENT_LABEL: component}),
            template=k8s.V1PodTemplateSpec(
                spec=k8s.V1PodSpec(containers=[k8s.V1Container(name="dummyContainer", env_from=env_from or None)])
            ),
        ),
        status=k8s.V1DeploymentStatus(conditions=conditions),
    )


@pytest.fixture
def cluster():
    client = KubernetesClusterClient(api_client=MagicMock(), request_timeout=1.5)
    client._custom = MagicMock()
    client._apps = MagicMock()
    client._core = MagicMock()
    return client


def test_list_service_classes(cluster):


    """Test mapping cluster service classes and the request timeout."""
    cluster._custom.list_cluster_custom_object.return_value = {
        "items": [
            {
                "metadata": {"name": "1dda1477"},
                "spec": {"externalName": "mysql-persistent", "defaultProvisionParameters": {"REGION": "eu"}},
            }
        ]
    }

    classes = cluster.list_service_classes()

    assert [(c.name, c.ref, c.default_parameters) for c in classes] == [("mysql-persistent", "1dda1477", ("REGION",))]
    kwargs = cluster._custom.list_cluster_custom_object.call_args.kwargs
    assert kwargs["plural"] == "clusterserviceclasses"
    assert kwargs["_request_timeout"] == 1.5


def test_list_service_plans_reads_parameter_schema(cluster):


    """Test that plan parameters come from the instance create schema."""
    cluster._custom.list_cluster_custom_object.return_value = {
        "items": [
            {
                "metadata": {"name": "plan-id"},
                "spec": {
                    "externalName": "default",
                    "clusterServiceClassRef": {"name": "1dda1477"},
                    "instanceCreateParameterSchema": {
                        "properties": {"PLAN_DATABASE_URI": {}, "PLAN_DATABASE_USERNAME": {}},
                    },
                },
            }
        ]
    }

    plans = cluster.list_service_plans("1dda1477")

    assert plans[0].name == "default"
    assert plans[0].class_ref == "1dda1477"
    assert plans[0].parameters == ("PLAN_DATABASE_URI", "PLAN_DATABASE_USERNAME")
    kwargs = cluster._custom.list_cluster_custom_object.call_args.kwargs
    assert kwargs["field_selector"] == "spec.clusterServiceClassRef.name=1dda1477"


def test_list_service_instances_maps_status(cluster):


    """Test mapping the first condition reason to an instance status."""
    cluster._custom.list_namespaced_custom_object.return_value = {
        "items": [
            {
                "metadata": {"name": "mysql-persistent", "namespace": "project", "labels": {APPLICATION_LABEL: "app"}},
                "spec": {
                    "clusterServiceClassExternalName": "mysql-persistent",
                    "clusterServicePlanExternalName": "default",
                },
                "status": {"conditions": [{"reason": "ProvisionedSuccessfully"}]},
            },
            {"metadata": {"name": "postgresql-ephemeral"}, "status": {"conditions": [{"reason": "Provisioning"}]}},
        ]
    }

    instances = cluster.list_service_instances(SCOPE)

    assert [(i.name, i.status) for i in instances] == [
        ("mysql-persistent", InstanceStatus.PROVISIONED),
        ("postgresql-ephemeral", InstanceStatus.PENDING),
    ]
    kwargs = cluster._custom.list_namespaced_custom_object.call_args.kwargs
    assert kwargs["namespace"] == "project"
    assert kwargs["label_selector"] == f"{APPLICATION_LABEL}=app"


def test_list_workloads_reads_labels_and_secret_refs(cluster):


    """Test reading labels, readiness and secret refs from deployments."""
    cluster._apps.list_namespaced_deployment.return_value = k8s.V1DeploymentList(
        items=[
            deployment("backend", available="False"),
            deployment("frontend", secret_refs=("postgresql-ephemeral", "backend-8080")),
        ]
    )

    workloads = cluster.list_workloads(SCOPE)

    assert [w.name for w in workloads] == ["backend", "frontend"]
    assert workloads[0].ready is False
    assert workloads[1].ready is True
    assert workloads[1].secret_refs == ("postgresql-ephemeral", "backend-8080")
    assert workloads[1].component_type == "nodejs"


def test_get_workload_uses_component_label(cluster):


    """Test that a workload is looked up by its component label."""
    cluster._apps.list_namespaced_deployment.return_value = k8s.V1DeploymentList(items=[deployment("frontend")])

    workload = cluster.get_workload(SCOPE, "frontend")

    assert workload.name == "frontend"
    selector = cluster._apps.list_namespaced_deployment.call_args.kwargs["label_selector"]
    assert selector == f"{APPLICATION_LABEL}=app,{COMPONENT_LABEL}=frontend"


def test_get_workload_missing(cluster):


    """Test a missing workload."""
    cluster._apps.list_namespaced_deployment.return_value = k8s.V1DeploymentList(items=[])

    assert cluster.get_workload(SCOPE, "frontend") is None


def test_get_secret(cluster):


    """Test reading a secret and its labels."""
    cluster._core.read_namespaced_secret.return_value = k8s.V1Secret(
        metadata=k8s.V1ObjectMeta(name="backend-8080", labels={COMPONENT_LABEL: "backend"})
    )

    secret = cluster.get_secret(SCOPE, "backend-8080")

    assert secret.name == "backend-8080"
    assert secret.labels == {COMPONENT_LABEL: "backend"}


def test_get_secret_not_found_returns_none(cluster):


    """Test that a 404 is reported as no secret."""
    cluster._core.read_namespaced_secret.side_effect = ApiException(status=404, reason="Not Found")

    assert cluster.get_secret(SCOPE, "missing") is None


def test_get_secret_other_errors_propagate(cluster):


    """Test that other API errors propagate."""
    cluster._core.read_namespaced_secret.side_effect = ApiException(status=403, reason="Forbidden")

    with pytest.raises(ApiException):
        cluster.get_secret(SCOPE, "backend-8080")


def test_list_applications_and_projects(cluster):


    """Test list applications and projects."""
    cluster._apps.list_namespaced_deployment.return_value = k8s.V1DeploymentList(
        items=[deployment("backend"), deployment("frontend")]
    )
    cluster._core.list_namespace.return_value = k8s.V1NamespaceList(
        items=[k8s.V1Namespace(metadata=k8s.V1ObjectMeta(name="project"))]
    )

    assert cluster.list_applications(SCOPE) == ["app"]
    assert cluster.list_projects() == ["project"]
