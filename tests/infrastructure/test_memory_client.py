"""Unit tests for the in-memory cluster client."""

import pytest

from cluster_completion.domain.types import InstanceStatus, SessionScope
from cluster_completion.infrastructure import InMemoryClusterClient

SNAPSHOT = {
    "service_classes": [{"name": "mysql-persistent", "ref": "c1", "default_parameters": ["REGION"]}],
    "service_plans": [{"name": "default", "class_ref": "c1", "parameters": ["MYSQL_USER"]}],
    "service_instances": [
        {"name": "mysql-persistent", "application": "app", "status": "provisioned"},
        {"name": "other-db", "application": "shop"},
    ],
    "workloads": [
        {"name": "frontend", "application": "app", "secret_refs": ["mysql-persistent"]},
        {"name": "api", "application": "shop"},
    ],
    "secrets": [{"name": "mysql-persistent", "labels": {"a": "b"}}],
    "projects": ["project"],
}


class TestInMemoryClusterClient:
    """Tests for InMemoryClusterClient."""

    def test_from_snapshot(self):
        """Test loading a client from snapshot data."""
        client = InMemoryClusterClient.from_snapshot(SNAPSHOT)
        scope = SessionScope("project", "app", "frontend")

        assert client.list_service_classes()[0].default_parameters == ("REGION",)
        assert client.list_service_plans("c1")[0].parameters == ("MYSQL_USER",)
        assert client.list_service_plans("unknown") == []
        instances = client.list_service_instances(scope)
        assert [(i.name, i.status) for i in instances] == [("mysql-persistent", InstanceStatus.PROVISIONED)]
        assert client.get_workload(scope, "frontend").secret_refs == ("mysql-persistent",)
        assert client.get_workload(scope, "api") is None
        assert client.get_secret(scope, "mysql-persistent").labels == {"a": "b"}
        assert client.list_applications(scope) == ["app", "shop"]
        assert client.list_projects() == ["project"]

    def test_failing_operations_raise(self):
        """Test that failing operations raise and are recorded."""
        client = InMemoryClusterClient(failing={"list_workloads"})

        with pytest.raises(ConnectionError):
            client.list_workloads(SessionScope("project", "app"))
        assert client.calls == ["list_workloads"]
