"""
Target completion for ``unlink``.
"""

from __future__ import annotations

from cluster_completion.application.linkage import SecretLinkageResolver
from cluster_completion.application.suggestions import without
from cluster_completion.domain.protocols import CompletionContext, LinkageResolver
from cluster_completion.domain.types import Completion
from cluster_completion.logger import get_logger

logger = get_logger("resolvers.unlink")


class UnlinkTargetResolver:
    """Suggests the instances and components the current component is linked to."""

    def __init__(self, linkage: LinkageResolver | None = None) -> None:
        self._linkage = linkage or SecretLinkageResolver()

    def resolve(self, context: CompletionContext) -> Completion:
        scope = context.scope
        fetcher = context.fetcher
        if not scope.component:
            return Completion.empty()

        workloads = fetcher.workloads(scope)
        instances = fetcher.service_instances(scope)
        current = fetcher.workload(scope, scope.component)
        if current is None:
            logger.debug(f"Current component {scope.component!r} not found")
            return Completion.empty()

        edges = self._linkage.linked_targets(fetcher, scope, current, workloads, instances)
        targets = sorted(edge.target for edge in edges if edge.source == current.name)
        return Completion.of(without(targets, {scope.component, *context.state.typed_names}))
