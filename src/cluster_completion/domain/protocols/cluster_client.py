"""Cluster client protocol."""

from typing import Protocol

from cluster_completion.domain.types import (
    Secret,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    SessionScope,
    Workload,
)

__all__ = ["ClusterClient"]


class ClusterClient(Protocol):
    """Read-only view of the cluster used by the resolvers.

    Implementations may raise any exception on transport or API errors;
    callers treat a failure as "no data". ``get_*`` methods return ``None``
    when the object does not exist.
    """

    def list_service_classes(self) -> list[ServiceClass]:
        """List the cluster-wide service classes."""
        ...

    def list_service_plans(self, class_ref: str) -> list[ServicePlan]:
        """List the plans that belong to the class with internal id ``class_ref``."""
        ...

    def list_service_instances(self, scope: SessionScope) -> list[ServiceInstance]:
        """List service instances of the scope's application."""
        ...

    def list_workloads(self, scope: SessionScope) -> list[Workload]:
        """List deployed components of the scope's application."""
        ...

    def get_workload(self, scope: SessionScope, name: str) -> Workload | None:
        """Fetch one component of the scope's application by component name."""
        ...

    def get_secret(self, scope: SessionScope, name: str) -> Secret | None:
        """Fetch a secret from the scope's namespace."""
        ...

    def list_applications(self, scope: SessionScope) -> list[str]:
        """List the application names used in the scope's namespace."""
        ...

    def list_projects(self) -> list[str]:
        """List the project (namespace) names visible to the user."""
        ...
