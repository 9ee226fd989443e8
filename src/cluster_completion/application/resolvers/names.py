"""
Bare resource name completion (``service delete <name>`` and friends).
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import Completion
from cluster_completion.logger import get_logger

logger = get_logger("resolvers.names")

NameLister = Callable[[CompletionContext], Iterable[str]]


class ResourceNameResolver:
    """Suggests every name of a collection until one has been typed in full.

    Once the user has typed a complete, existing name the result is absent,
    which tells the shell there is nothing more to offer for this argument.
    """

    def __init__(self, kind: str, lister: NameLister) -> None:
        self.kind = kind
        self._lister = lister

    def resolve(self, context: CompletionContext) -> Completion:
        state = context.state
        names = list(self._lister(context))
        for name in names:
            if state.is_typed(name) or state.current_token() == name:
                logger.debug(f"{self.kind} name {name!r} already typed")
                return Completion.absent()
        return Completion.of(names)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.kind!r})"


def service_names() -> ResourceNameResolver:
    return ResourceNameResolver(
        "service",
        lambda context: (instance.name for instance in context.fetcher.service_instances(context.scope)),
    )


def service_class_names() -> ResourceNameResolver:
    return ResourceNameResolver(
        "service class",
        lambda context: (service_class.name for service_class in context.fetcher.service_classes()),
    )


def component_names() -> ResourceNameResolver:
    return ResourceNameResolver(
        "component",
        lambda context: (workload.name for workload in context.fetcher.workloads(context.scope)),
    )


def application_names() -> ResourceNameResolver:
    return ResourceNameResolver("application", lambda context: context.fetcher.applications(context.scope))


def project_names() -> ResourceNameResolver:
    return ResourceNameResolver("project", lambda context: context.fetcher.projects())
