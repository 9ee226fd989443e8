"""Tests for the completion dispatcher."""

from cluster_completion.application.dispatch import CompletionDispatcher, build_default_dispatcher
from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import ArgumentStateBuilder, Completion, SessionScope
from cluster_completion.infrastructure import InMemoryClusterClient
from tests.conftest import fake_service_class, fake_service_plan, fake_service_instance, fake_workload


class StubResolver:
    def __init__(self, result: Completion):
        self._result = result
        self.contexts: list[CompletionContext] = []

    def resolve(self, context: CompletionContext) -> Completion:
        self.contexts.append(context)
        return self._result


class ExplodingResolver:
    def resolve(self, context: CompletionContext) -> Completion:
        raise RuntimeError("boom")


SCOPE = SessionScope("project", "app", "frontend")


def test_dispatch_selects_resolver_by_command_and_flag() -> None:


    """Test dispatch selects resolver by command and flag."""
    dispatcher = CompletionDispatcher(InMemoryClusterClient())
    positional = StubResolver(Completion.of(["a"]))
    plan = StubResolver(Completion.of(["default"]))
    dispatcher.register("service create", positional)
    dispatcher.register("service  create", plan, flag="--plan")

    state = ArgumentStateBuilder("create").build()

    assert dispatcher.dispatch("service create", state, SCOPE).values == ("a",)
    assert dispatcher.dispatch("service create", state, SCOPE, flag="plan").values == ("default",)
    assert plan.contexts[0].scope == SCOPE
    assert plan.contexts[0].state is state


def test_unknown_context_is_absent() -> None:


    """Test unknown context is absent."""
    dispatcher = CompletionDispatcher(InMemoryClusterClient())
    dispatcher.register("link", StubResolver(Completion.of(["x"])))

    state = ArgumentStateBuilder("link").build()

    assert dispatcher.dispatch("unknown", state, SCOPE).is_absent
    assert dispatcher.dispatch("link", state, SCOPE, flag="plan").is_absent


def test_failing_resolver_yields_empty() -> None:


    """Test failing resolver yields empty."""
    dispatcher = CompletionDispatcher(InMemoryClusterClient())
    dispatcher.register("link", ExplodingResolver())

    completion = dispatcher.dispatch("link", ArgumentStateBuilder("link").build(), SCOPE)

    assert not completion.is_absent
    assert completion.values == ()


def test_default_dispatcher_wires_standard_commands() -> None:


    """Test default dispatcher wires standard commands."""
    client = InMemoryClusterClient(
        service_classes=[fake_service_class("class name")],
        service_plans=[fake_service_plan("default")],
        service_instances=[fake_service_instance("mysql-persistent")],
        workloads=[fake_workload("backend"), fake_workload("frontend")],
    )
    dispatcher = build_default_dispatcher(client)
    create = ArgumentStateBuilder("create").token("class name").build()

    assert dispatcher.dispatch("service create", create, SCOPE, flag="plan").values == ("default",)
    assert len(dispatcher.dispatch("service create", create, SCOPE, flag="parameters")) == 4
    assert dispatcher.dispatch("service create", create, SCOPE).is_absent is False
    assert sorted(dispatcher.dispatch("link", ArgumentStateBuilder("link").build(), SCOPE).values) == [
        "backend",
        "mysql-persistent",
    ]
    assert dispatcher.dispatch("service delete", ArgumentStateBuilder("delete").build(), SCOPE).values == (
        "mysql-persistent",
    )
    assert "unlink" in dispatcher.commands
    assert "project set" in dispatcher.commands
