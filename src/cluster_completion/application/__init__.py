"""Application layer: resolvers, suggestion assembly and dispatch."""

from cluster_completion.application.dispatch import CompletionDispatcher, build_default_dispatcher
from cluster_completion.application.fetcher import SafeFetcher
from cluster_completion.application.linkage import SecretLinkageResolver

__all__ = [
    "CompletionDispatcher",
    "build_default_dispatcher",
    "SafeFetcher",
    "SecretLinkageResolver",
]
