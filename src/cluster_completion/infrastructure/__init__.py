"""Infrastructure layer - implementations of the domain protocols.

The Kubernetes client lives in ``infrastructure.kubernetes`` and is imported
lazily by the CLI so the in-memory client works without a kubeconfig.
"""

from cluster_completion.infrastructure.memory import InMemoryClusterClient

__all__ = ["InMemoryClusterClient"]
