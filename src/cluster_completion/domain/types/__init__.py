"""Shared domain types."""

from cluster_completion.domain.types.arguments import (
    ArgumentState,
    ArgumentStateBuilder,
    DEFAULT_VALUE_FLAGS,
    PARAMETERS_FLAG,
    PLAN_FLAG,
)
from cluster_completion.domain.types.completion import Completion
from cluster_completion.domain.types.resources import (
    InstanceStatus,
    LinkEdge,
    Secret,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    Workload,
)
from cluster_completion.domain.types.scope import SessionScope

__all__ = [
    "ArgumentState",
    "ArgumentStateBuilder",
    "DEFAULT_VALUE_FLAGS",
    "PARAMETERS_FLAG",
    "PLAN_FLAG",
    "Completion",
    "InstanceStatus",
    "LinkEdge",
    "Secret",
    "ServiceClass",
    "ServiceInstance",
    "ServicePlan",
    "Workload",
    "SessionScope",
]
