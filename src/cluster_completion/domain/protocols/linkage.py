"""Linkage resolution protocol."""

from collections.abc import Sequence
from typing import Protocol, TYPE_CHECKING

from cluster_completion.domain.types import LinkEdge, ServiceInstance, SessionScope, Workload

if TYPE_CHECKING:
    from cluster_completion.application.fetcher import SafeFetcher

__all__ = ["LinkageResolver"]


class LinkageResolver(Protocol):
    """Decides which instances and sibling components a workload already consumes.

    The correlation relies on conventions of the platform (how link secrets
    are named and labelled), so it is kept behind this interface.
    """

    def linked_targets(
        self,
        fetcher: "SafeFetcher",
        scope: SessionScope,
        source: Workload,
        workloads: Sequence[Workload],
        instances: Sequence[ServiceInstance],
    ) -> set[LinkEdge]:
        """Return the edges from ``source`` to the targets it is linked with."""
        ...
