"""Completion resolver protocol."""

from dataclasses import dataclass
from typing import Protocol, TYPE_CHECKING

from cluster_completion.domain.types import ArgumentState, Completion, SessionScope

if TYPE_CHECKING:
    from cluster_completion.application.fetcher import SafeFetcher

__all__ = ["CompletionContext", "CompletionResolver"]


@dataclass(frozen=True, slots=True)
class CompletionContext:
    """Everything a resolver may look at for one completion call."""

    state: ArgumentState
    scope: SessionScope
    fetcher: "SafeFetcher"


class CompletionResolver(Protocol):
    """Contract implemented by every resolver.

    Resolvers keep no state between calls: the same context and the same
    cluster snapshot always produce the same completion.
    """

    def resolve(self, context: CompletionContext) -> Completion:
        """Compute the suggestions for ``context``."""

        ...
