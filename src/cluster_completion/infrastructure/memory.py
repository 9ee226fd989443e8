"""In-memory cluster client.

This module provides a cluster stand-in for tests and offline use. It
serves fixed snapshots and can be told to fail individual operations.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from cluster_completion.domain.types import (
    InstanceStatus,
    Secret,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    SessionScope,
    Workload,
)
from cluster_completion.logger import get_logger

logger = get_logger(__name__)


class InMemoryClusterClient:
    """Cluster client backed by plain lists.

    Workloads and instances are filtered by the scope's application, like
    the label selectors of the real client. ``failing`` names operations
    (method names) that raise ``ConnectionError``.

    Example:
        >>> client = InMemoryClusterClient(workloads=[Workload("backend", application="app")])
        >>> [w.name for w in client.list_workloads(SessionScope("project", "app"))]
        ['backend']
    """

    def __init__(
        self,
        *,
        service_classes: Iterable[ServiceClass] = (),
        service_plans: Iterable[ServicePlan] = (),
        service_instances: Iterable[ServiceInstance] = (),
        workloads: Iterable[Workload] = (),
        secrets: Iterable[Secret] = (),
        projects: Iterable[str] = (),
        failing: Iterable[str] = (),
    ) -> None:
        self.service_classes = list(service_classes)
        self.service_plans = list(service_plans)
        self.service_instances = list(service_instances)
        self.workloads = list(workloads)
        self.secrets = {secret.name: secret for secret in secrets}
        self.projects = list(projects)
        self.failing = set(failing)
        self.calls: list[str] = []

    @classmethod
    def from_snapshot(cls, data: Mapping[str, Any]) -> "InMemoryClusterClient":
        """
        Build a client from a JSON-style snapshot.

        Example snapshot::

            {
              "service_classes": [{"name": "mysql", "ref": "c1"}],
              "service_plans": [{"name": "default", "class_ref": "c1", "parameters": ["USER"]}],
              "service_instances": [{"name": "db", "application": "app", "status": "provisioned"}],
              "workloads": [{"name": "frontend", "application": "app", "secret_refs": ["db"]}],
              "secrets": [{"name": "db"}],
              "projects": ["project"]
            }

        Args:
            data: Mapping with optional lists keyed like the constructor arguments

        Returns:
            InMemoryClusterClient serving the snapshot
        """

        def tupled(entry: Mapping[str, Any], *fields: str) -> dict[str, Any]:
            converted = dict(entry)
            for name in fields:
                if name in converted:
                    converted[name] = tuple(converted[name])
            return converted

        instances = []
        for entry in data.get("service_instances", []):
            entry = dict(entry)
            entry["status"] = InstanceStatus(entry.get("status", InstanceStatus.PENDING.value))
            instances.append(ServiceInstance(**entry))

        return cls(
            service_classes=[ServiceClass(**tupled(entry, "default_parameters")) for entry in data.get("service_classes", [])],
            service_plans=[
                ServicePlan(**tupled(entry, "parameters", "default_parameters"))
                for entry in data.get("service_plans", [])
            ],
            service_instances=instances,
            workloads=[Workload(**tupled(entry, "secret_refs")) for entry in data.get("workloads", [])],
            secrets=[Secret(name=entry["name"], labels=dict(entry.get("labels", {}))) for entry in data.get("secrets", [])],
            projects=data.get("projects", []),
        )

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing:
            raise ConnectionError(f"{operation} is unavailable")

    def list_service_classes(self) -> list[ServiceClass]:
        self._record("list_service_classes")
        return list(self.service_classes)

    def list_service_plans(self, class_ref: str) -> list[ServicePlan]:
        self._record("list_service_plans")
        return [plan for plan in self.service_plans if plan.class_ref == class_ref]

    def list_service_instances(self, scope: SessionScope) -> list[ServiceInstance]:
        self._record("list_service_instances")
        return [
            instance
            for instance in self.service_instances
            if not instance.application or instance.application == scope.application
        ]

    def _workloads_in(self, scope: SessionScope) -> list[Workload]:
        return [
            workload
            for workload in self.workloads
            if not workload.application or workload.application == scope.application
        ]

    def list_workloads(self, scope: SessionScope) -> list[Workload]:
        self._record("list_workloads")
        return self._workloads_in(scope)

    def get_workload(self, scope: SessionScope, name: str) -> Workload | None:
        self._record("get_workload")
        for workload in self._workloads_in(scope):
            if workload.name == name:
                return workload
        return None

    def get_secret(self, scope: SessionScope, name: str) -> Secret | None:
        self._record("get_secret")
        return self.secrets.get(name)

    def list_applications(self, scope: SessionScope) -> list[str]:
        self._record("list_applications")
        return list(dict.fromkeys(workload.application for workload in self.workloads if workload.application))

    def list_projects(self) -> list[str]:
        self._record("list_projects")
        return list(self.projects)
