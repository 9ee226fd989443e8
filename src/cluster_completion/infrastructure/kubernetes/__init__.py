"""Kubernetes cluster access."""

from cluster_completion.infrastructure.kubernetes.client import KubernetesClusterClient

__all__ = ["KubernetesClusterClient"]
