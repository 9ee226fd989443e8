"""
Target completion for ``link``.
"""

from __future__ import annotations

from cluster_completion.application.suggestions import without
from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import Completion
from cluster_completion.logger import get_logger

logger = get_logger("resolvers.link")


class LinkTargetResolver:
    """Suggests what the current component can link to.

    Candidates are the other ready components of the application and the
    provisioned service instances. Existing links are not filtered out.
    """

    def resolve(self, context: CompletionContext) -> Completion:
        scope = context.scope
        workloads = context.fetcher.workloads(scope)
        instances = context.fetcher.service_instances(scope)

        candidates = [workload.name for workload in workloads if workload.ready]
        candidates += [instance.name for instance in instances if instance.is_provisioned]

        names = without(candidates, {scope.component, *context.state.typed_names})
        logger.debug(f"Link candidates for {scope.component!r}: {names}")
        return Completion.of(names)
