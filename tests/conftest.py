"""Shared fixtures and builders for completion tests."""

from typing import Optional

import pytest

from cluster_completion.application.fetcher import SafeFetcher
from cluster_completion.domain.protocols import CompletionContext
from cluster_completion.domain.types import (
    ArgumentState,
    InstanceStatus,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    SessionScope,
    Workload,
)
from cluster_completion.infrastructure import InMemoryClusterClient

CLASS_REF = "1dda1477cace09730bd8ed7a6505607e"

PLAN_PARAMETERS = ("PLAN_DATABASE_URI", "PLAN_DATABASE_USERNAME", "PLAN_DATABASE_PASSWORD", "SOME_OTHER")


def fake_service_class(name: str, ref: str = CLASS_REF, defaults: tuple[str, ...] = ()) -> ServiceClass:
    return ServiceClass(name=name, ref=ref, default_parameters=defaults)


def fake_service_plan(
    name: str,
    class_ref: str = CLASS_REF,
    parameters: tuple[str, ...] = PLAN_PARAMETERS,
    defaults: tuple[str, ...] = (),
) -> ServicePlan:
    return ServicePlan(name=name, class_ref=class_ref, parameters=parameters, default_parameters=defaults)


def fake_service_instance(
    name: str,
    status: InstanceStatus = InstanceStatus.PROVISIONED,
    class_name: str = "mariadb-apb",
    plan_name: str = "default",
    application: str = "app",
) -> ServiceInstance:
    return ServiceInstance(
        name=name,
        application=application,
        namespace="project",
        class_name=class_name,
        plan_name=plan_name,
        status=status,
    )


def fake_workload(name: str, component_type: str = "nodejs", secret_refs: tuple[str, ...] = (), ready: bool = True) -> Workload:
    return Workload(
        name=name,
        application="app",
        component_type=component_type,
        secret_refs=secret_refs,
        ready=ready,
    )


def make_context(
    client: InMemoryClusterClient,
    state: ArgumentState,
    component: str = "component",
    scope: Optional[SessionScope] = None,
) -> CompletionContext:
    return CompletionContext(
        state=state,
        scope=scope or SessionScope("project", "app", component),
        fetcher=SafeFetcher(client),
    )


@pytest.fixture
def scope() -> SessionScope:
    return SessionScope("project", "app", "frontend")


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Keep config lookups and log files inside the test's tmp dir."""
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("CLUSTER_COMPLETION_CONFIG", raising=False)
    for name in ("NAMESPACE", "APPLICATION", "COMPONENT", "KUBE_CONTEXT", "KUBECONFIG", "REQUEST_TIMEOUT", "LOG_LEVEL", "LOG_FILE"):
        monkeypatch.delenv(f"CLUSTER_COMPLETION_{name}", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
