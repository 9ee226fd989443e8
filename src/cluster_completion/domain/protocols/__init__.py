"""Domain protocols - interfaces for all implementations.

The resolvers only depend on these structural types, so tests can swap in
in-memory clients and alternative linkage heuristics.
"""

from cluster_completion.domain.protocols.cluster_client import ClusterClient
from cluster_completion.domain.protocols.linkage import LinkageResolver
from cluster_completion.domain.protocols.resolver import CompletionContext, CompletionResolver

__all__ = [
    "ClusterClient",
    "LinkageResolver",
    "CompletionContext",
    "CompletionResolver",
]
