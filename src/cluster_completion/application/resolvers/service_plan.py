"""
Plan completion for ``service create <class> --plan``.
"""

from __future__ import annotations

from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import Completion
from cluster_completion.logger import get_logger

logger = get_logger("resolvers.service_plan")

# Position of the service class name among the completed tokens
CLASS_NAME_POSITION = 1


class ServicePlanResolver:
    """Suggests the plans of the service class named on the command line."""

    def resolve(self, context: CompletionContext) -> Completion:
        class_name = context.state.token_at(CLASS_NAME_POSITION)
        if not class_name:
            return Completion.empty()

        service_class = context.fetcher.service_class(class_name)
        if service_class is None:
            return Completion.empty()

        plans = context.fetcher.plans_of(service_class)
        logger.debug(f"Service class {class_name!r} has {len(plans)} plan(s)")
        return Completion.of(plan.name for plan in plans)
