"""
Dispatcher that routes a completion context to its resolver.
"""

from __future__ import annotations

from cluster_completion.application.fetcher import SafeFetcher
from cluster_completion.application.resolvers import (
    LinkTargetResolver,
    ServiceParameterResolver,
    ServicePlanResolver,
    UnlinkTargetResolver,
    application_names,
    component_names,
    project_names,
    service_class_names,
    service_names,
)
from cluster_completion.domain.protocols import (
    ClusterClient,
    CompletionContext,
    CompletionResolver,
    LinkageResolver,
)
from cluster_completion.domain.types import (
    ArgumentState,
    Completion,
    PARAMETERS_FLAG,
    PLAN_FLAG,
    SessionScope,
)
from cluster_completion.logger import get_logger

logger = get_logger("dispatch")

HandlerKey = tuple[str, str | None]


def _normalize_command(command: str) -> str:
    return " ".join(command.split())


class CompletionDispatcher:
    """Maps ``(command path, flag)`` to a resolver and runs it.

    ``flag`` is ``None`` for positional arguments. Unknown contexts produce
    an absent completion; a failing resolver produces an empty one.
    """

    def __init__(self, client: ClusterClient) -> None:
        self._fetcher = SafeFetcher(client)
        self._handlers: dict[HandlerKey, CompletionResolver] = {}

    def register(self, command: str, resolver: CompletionResolver, flag: str | None = None) -> None:
        key = (_normalize_command(command), flag.lstrip("-") if flag else None)
        if key in self._handlers:
            logger.warning(f"Replacing completion handler for {key}")
        self._handlers[key] = resolver

    def resolver_for(self, command: str, flag: str | None = None) -> CompletionResolver | None:
        return self._handlers.get((_normalize_command(command), flag.lstrip("-") if flag else None))

    @property
    def commands(self) -> list[str]:
        return sorted({command for command, _ in self._handlers})

    def dispatch(
        self,
        command: str,
        state: ArgumentState,
        scope: SessionScope,
        flag: str | None = None,
    ) -> Completion:
        resolver = self.resolver_for(command, flag)
        if resolver is None:
            logger.debug(f"No completion handler for command={command!r} flag={flag!r}")
            return Completion.absent()

        context = CompletionContext(state=state, scope=scope, fetcher=self._fetcher)
        try:
            completion = resolver.resolve(context)
        except Exception:
            logger.exception(f"Completion handler {resolver!r} failed for command={command!r} flag={flag!r}")
            return Completion.empty()

        logger.debug(
            f"{resolver.__class__.__name__} returned "
            f"{'absent' if completion.is_absent else f'{len(completion)} suggestion(s)'}"
        )
        return completion


def build_default_dispatcher(
    client: ClusterClient,
    linkage: LinkageResolver | None = None,
) -> CompletionDispatcher:
    """Create a dispatcher with the standard command table."""
    dispatcher = CompletionDispatcher(client)

    dispatcher.register("service create", service_class_names())
    dispatcher.register("service create", ServicePlanResolver(), flag=PLAN_FLAG)
    dispatcher.register("service create", ServiceParameterResolver(), flag=PARAMETERS_FLAG)
    dispatcher.register("service delete", service_names())
    dispatcher.register("service describe", service_names())

    dispatcher.register("link", LinkTargetResolver())
    dispatcher.register("unlink", UnlinkTargetResolver(linkage))

    for command in ("component delete", "component describe", "push"):
        dispatcher.register(command, component_names())
    for command in ("app delete", "app describe"):
        dispatcher.register(command, application_names())
    for command in ("project set", "project delete"):
        dispatcher.register(command, project_names())

    return dispatcher
