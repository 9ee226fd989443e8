"""Secret based link detection.

A component consumes a service instance or a sibling component through a
secret injected into its environment:

* a service instance's secret carries the instance name;
* a sibling component's secret is named ``<component>-<port>`` and is
  labelled with the component it exposes.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from cluster_completion.application.fetcher import SafeFetcher
from cluster_completion.domain.labels import COMPONENT_LABEL
from cluster_completion.domain.types import LinkEdge, ServiceInstance, SessionScope, Workload
from cluster_completion.logger import get_logger

logger = get_logger("linkage")


class SecretLinkageResolver:
    """Default :class:`LinkageResolver` based on secret names and labels."""

    def __init__(self, component_label: str = COMPONENT_LABEL) -> None:
        self._component_label = component_label

    def linked_targets(
        self,
        fetcher: SafeFetcher,
        scope: SessionScope,
        source: Workload,
        workloads: Sequence[Workload],
        instances: Sequence[ServiceInstance],
    ) -> set[LinkEdge]:
        provisioned = {instance.name for instance in instances if instance.is_provisioned}
        siblings = [workload.name for workload in workloads if workload.name != source.name]
        edges: set[LinkEdge] = set()

        for secret_name in dict.fromkeys(source.secret_refs):
            if secret_name == source.name:
                # the component's own secret
                continue

            if secret_name in provisioned:
                edges.add(LinkEdge(source.name, secret_name))
                continue

            for sibling in siblings:
                if self._follows_convention(secret_name, sibling) and self._confirm(
                    fetcher, scope, secret_name, sibling
                ):
                    edges.add(LinkEdge(source.name, sibling))
                    break

        logger.debug(f"{source.name!r} is linked to {sorted(edge.target for edge in edges)}")
        return edges

    @staticmethod
    def _follows_convention(secret_name: str, component: str) -> bool:
        return re.fullmatch(re.escape(component) + r"-\d+", secret_name) is not None

    def _confirm(self, fetcher: SafeFetcher, scope: SessionScope, secret_name: str, component: str) -> bool:
        secret = fetcher.secret(scope, secret_name)
        if secret is None:
            logger.debug(f"Secret {secret_name!r} not found, not a link to {component!r}")
            return False
        labelled = secret.labels.get(self._component_label)
        return labelled is None or labelled == component
