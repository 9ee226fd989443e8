"""Read-only snapshots of cluster resources used for completion."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

__all__ = [
    "InstanceStatus",
    "ServiceClass",
    "ServicePlan",
    "ServiceInstance",
    "Workload",
    "Secret",
    "LinkEdge",
]


class InstanceStatus(Enum):
    """Provisioning status of a service instance."""

    PENDING = "pending"
    PROVISIONED = "provisioned"
    FAILED = "failed"
    OTHER = "other"

    @classmethod
    def from_reason(cls, reason: str | None) -> "InstanceStatus":
        """Map a service-catalog condition reason to a status.

        A missing reason means the broker has not reported back yet.
        """
        if not reason:
            return cls.PENDING
        if reason == "ProvisionedSuccessfully":
            return cls.PROVISIONED
        if reason in ("Provisioning", "ProvisionRequestInFlight"):
            return cls.PENDING
        if "Fail" in reason or "Error" in reason:
            return cls.FAILED
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class ServiceClass:
    """Catalog entry; ``name`` is the external (user-facing) name."""

    name: str
    ref: str
    default_parameters: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ServicePlan:
    name: str
    class_ref: str
    parameters: tuple[str, ...] = ()
    default_parameters: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ServiceInstance:
    name: str
    application: str = ""
    namespace: str = ""
    class_name: str = ""
    plan_name: str = ""
    status: InstanceStatus = InstanceStatus.PENDING

    @property
    def is_provisioned(self) -> bool:
        return self.status is InstanceStatus.PROVISIONED


@dataclass(frozen=True, slots=True)
class Workload:
    """A deployed component.

    ``name`` is the component name (label), not the object name.
    ``secret_refs`` are the secrets injected into its environment.
    """

    name: str
    application: str = ""
    component_type: str = ""
    secret_refs: tuple[str, ...] = ()
    ready: bool = True


@dataclass(frozen=True, slots=True)
class Secret:
    name: str
    labels: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True, slots=True)
class LinkEdge:
    """``source`` already consumes ``target`` (an instance or sibling component)."""

    source: str
    target: str
