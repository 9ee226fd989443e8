"""
Completion resolvers.

Each resolver implements :class:`~cluster_completion.domain.protocols.CompletionResolver`
for one completion context (plans, parameters, link and unlink targets,
bare resource names).
"""

from .service_plan import ServicePlanResolver
from .service_parameter import ServiceParameterResolver
from .link import LinkTargetResolver
from .unlink import UnlinkTargetResolver
from .names import (
    ResourceNameResolver,
    application_names,
    component_names,
    project_names,
    service_class_names,
    service_names,
)

__all__ = [
    "ServicePlanResolver",
    "ServiceParameterResolver",
    "LinkTargetResolver",
    "UnlinkTargetResolver",
    "ResourceNameResolver",
    "application_names",
    "component_names",
    "project_names",
    "service_class_names",
    "service_names",
]
