"""Failure-tolerant access to the cluster client.

Every call goes through :class:`SafeFetcher`, which turns adapter errors and
timeouts into "no data" so a single failing request never breaks the
shell. Independent fetches of the same call still contribute their results.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from cluster_completion.domain.protocols import ClusterClient
from cluster_completion.domain.types import (
    Secret,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    SessionScope,
    Workload,
)
from cluster_completion.logger import get_logger

logger = get_logger("fetcher")

T = TypeVar("T")


class SafeFetcher:
    """Wraps a :class:`ClusterClient`, swallowing and logging its failures."""

    def __init__(self, client: ClusterClient) -> None:
        self._client = client

    def _call(self, operation: str, call: Callable[[], T], fallback: T) -> T:
        try:
            result = call()
        except Exception as e:
            logger.warning(f"{operation} failed, treating as no data: {e}")
            return fallback
        logger.debug(f"{operation} succeeded")
        return fallback if result is None else result

    def service_classes(self) -> list[ServiceClass]:
        return self._call("list service classes", self._client.list_service_classes, [])

    def service_plans(self, class_ref: str) -> list[ServicePlan]:
        return self._call(
            f"list service plans of {class_ref!r}",
            lambda: self._client.list_service_plans(class_ref),
            [],
        )

    def service_instances(self, scope: SessionScope) -> list[ServiceInstance]:
        return self._call(
            f"list service instances in {scope.namespace}/{scope.application}",
            lambda: self._client.list_service_instances(scope),
            [],
        )

    def workloads(self, scope: SessionScope) -> list[Workload]:
        return self._call(
            f"list workloads in {scope.namespace}/{scope.application}",
            lambda: self._client.list_workloads(scope),
            [],
        )

    def workload(self, scope: SessionScope, name: str) -> Workload | None:
        return self._call(
            f"get workload {name!r}",
            lambda: self._client.get_workload(scope, name),
            None,
        )

    def secret(self, scope: SessionScope, name: str) -> Secret | None:
        return self._call(
            f"get secret {name!r}",
            lambda: self._client.get_secret(scope, name),
            None,
        )

    def applications(self, scope: SessionScope) -> list[str]:
        return self._call(
            f"list applications in {scope.namespace}",
            lambda: self._client.list_applications(scope),
            [],
        )

    def projects(self) -> list[str]:
        return self._call("list projects", self._client.list_projects, [])

    def service_class(self, name: str | None) -> ServiceClass | None:
        """Find a service class by exact external name."""
        if not name:
            return None
        for service_class in self.service_classes():
            if service_class.name == name:
                return service_class
        logger.debug(f"No service class named {name!r}")
        return None

    def plans_of(self, service_class: ServiceClass) -> list[ServicePlan]:
        """Plans owned by ``service_class``."""
        return [
            plan for plan in self.service_plans(service_class.ref) if plan.class_ref == service_class.ref
        ]
