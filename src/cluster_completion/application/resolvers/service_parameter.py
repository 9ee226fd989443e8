"""
Parameter completion for ``service create <class> --parameters``.
"""

from __future__ import annotations

from cluster_completion.application.parsers import ParameterListParser
from cluster_completion.application.resolvers.service_plan import CLASS_NAME_POSITION
from cluster_completion.application.suggestions import unique, without
from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import Completion, ServicePlan
from cluster_completion.logger import get_logger

logger = get_logger("resolvers.service_parameter")


class ServiceParameterResolver:
    """Suggests the parameter keys of the selected plan not yet supplied.

    Without ``--plan`` the class must have exactly one plan, otherwise the
    parameters cannot be attributed and nothing is suggested.
    """

    def __init__(self, parser: ParameterListParser | None = None) -> None:
        self._parser = parser or ParameterListParser()

    def resolve(self, context: CompletionContext) -> Completion:
        state = context.state
        class_name = state.token_at(CLASS_NAME_POSITION)
        if not class_name:
            return Completion.empty()

        service_class = context.fetcher.service_class(class_name)
        if service_class is None:
            return Completion.empty()

        plan = self._select_plan(context.fetcher.plans_of(service_class), state.plan)
        if plan is None:
            return Completion.empty()

        keys = unique([*plan.parameters, *plan.default_parameters, *service_class.default_parameters])
        supplied = self._parser.parse(state.parameters)
        return Completion.of(without(keys, supplied))

    @staticmethod
    def _select_plan(plans: list[ServicePlan], requested: str | None) -> ServicePlan | None:
        if requested is None:
            if len(plans) != 1:
                logger.debug(f"No --plan given and {len(plans)} plans exist, parameters are ambiguous")
                return None
            return plans[0]

        for plan in plans:
            if plan.name == requested:
                return plan
        logger.debug(f"Plan {requested!r} not found")
        return None
