"""Kubernetes implementation of the cluster client.

Service catalog objects are read through the custom objects API; components
are ``apps/v1`` Deployments labelled by the CLI; secrets and namespaces come
from the core API. Every request carries ``_request_timeout`` so a slow API
server cannot hang the shell.
"""

from __future__ import annotations

from typing import Any, Optional

from kubernetes import client as k8s_client
from kubernetes import config as k8s_config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException

from cluster_completion.domain.labels import APPLICATION_LABEL, COMPONENT_LABEL, COMPONENT_TYPE_LABEL
from cluster_completion.domain.types import (
    InstanceStatus,
    Secret,
    ServiceClass,
    ServiceInstance,
    ServicePlan,
    SessionScope,
    Workload,
)
from cluster_completion.logger import get_logger

logger = get_logger("kubernetes")

SERVICE_CATALOG_GROUP = "servicecatalog.k8s.io"
SERVICE_CATALOG_VERSION = "v1beta1"


def _selector(**labels: str) -> str:
    return ",".join(f"{key}={value}" for key, value in labels.items())


def _keys(value: Any) -> tuple[str, ...]:
    if isinstance(value, dict):
        return tuple(value.keys())
    return ()


def service_class_from_object(item: dict[str, Any]) -> ServiceClass:
    metadata = item.get("metadata") or {}
    spec = item.get("spec") or {}
    return ServiceClass(
        name=spec.get("externalName") or metadata.get("name", ""),
        ref=metadata.get("name", ""),
        default_parameters=_keys(spec.get("defaultProvisionParameters")),
    )


def service_plan_from_object(item: dict[str, Any]) -> ServicePlan:
    metadata = item.get("metadata") or {}
    spec = item.get("spec") or {}
    schema = spec.get("instanceCreateParameterSchema") or {}
    return ServicePlan(
        name=spec.get("externalName") or metadata.get("name", ""),
        class_ref=(spec.get("clusterServiceClassRef") or {}).get("name", ""),
        parameters=_keys(schema.get("properties")),
        default_parameters=_keys(spec.get("defaultProvisionParameters")),
    )


def service_instance_from_object(item: dict[str, Any]) -> ServiceInstance:
    metadata = item.get("metadata") or {}
    labels = metadata.get("labels") or {}
    spec = item.get("spec") or {}
    conditions = (item.get("status") or {}).get("conditions") or []
    reason = conditions[0].get("reason") if conditions else None
    return ServiceInstance(
        name=metadata.get("name", ""),
        application=labels.get(APPLICATION_LABEL, ""),
        namespace=metadata.get("namespace", ""),
        class_name=spec.get("clusterServiceClassExternalName", ""),
        plan_name=spec.get("clusterServicePlanExternalName", ""),
        status=InstanceStatus.from_reason(reason),
    )


def workload_from_deployment(deployment: Any) -> Workload:
    metadata = deployment.metadata
    labels = metadata.labels or {}

    secret_refs: list[str] = []
    pod_spec = deployment.spec.template.spec if deployment.spec and deployment.spec.template else None
    for container in (pod_spec.containers if pod_spec else None) or []:
        for source in container.env_from or []:
            if source.secret_ref is not None and source.secret_ref.name:
                secret_refs.append(source.secret_ref.name)

    conditions = (deployment.status.conditions if deployment.status else None) or []
    ready = not any(
        condition.type == "Available" and condition.status == "False" for condition in conditions
    )

    return Workload(
        name=labels.get(COMPONENT_LABEL) or metadata.name,
        application=labels.get(APPLICATION_LABEL, ""),
        component_type=labels.get(COMPONENT_TYPE_LABEL, ""),
        secret_refs=tuple(secret_refs),
        ready=ready,
    )


class KubernetesClusterClient:
    """:class:`ClusterClient` backed by the official ``kubernetes`` client."""

    def __init__(
        self,
        api_client: Optional[k8s_client.ApiClient] = None,
        *,
        kubeconfig: Optional[str] = None,
        context: Optional[str] = None,
        request_timeout: float = 2.0,
    ) -> None:
        """
        Args:
            api_client: Preconfigured API client; loaded from kubeconfig when None
            kubeconfig: kubeconfig path (default location when None)
            context: kubeconfig context (current context when None)
            request_timeout: Timeout in seconds applied to every request
        """
        self._api_client = api_client or self._load_api_client(kubeconfig, context)
        self._custom = k8s_client.CustomObjectsApi(self._api_client)
        self._apps = k8s_client.AppsV1Api(self._api_client)
        self._core = k8s_client.CoreV1Api(self._api_client)
        self._timeout = request_timeout

    @staticmethod
    def _load_api_client(kubeconfig: Optional[str], context: Optional[str]) -> k8s_client.ApiClient:
        try:
            return k8s_config.new_client_from_config(config_file=kubeconfig, context=context)
        except ConfigException:
            logger.debug("No usable kubeconfig, trying in-cluster configuration")
            configuration = k8s_client.Configuration()
            k8s_config.load_incluster_config(client_configuration=configuration)
            return k8s_client.ApiClient(configuration)

    def list_service_classes(self) -> list[ServiceClass]:
        raw = self._custom.list_cluster_custom_object(
            group=SERVICE_CATALOG_GROUP,
            version=SERVICE_CATALOG_VERSION,
            plural="clusterserviceclasses",
            _request_timeout=self._timeout,
        )
        return [service_class_from_object(item) for item in raw.get("items", [])]

    def list_service_plans(self, class_ref: str) -> list[ServicePlan]:
        raw = self._custom.list_cluster_custom_object(
            group=SERVICE_CATALOG_GROUP,
            version=SERVICE_CATALOG_VERSION,
            plural="clusterserviceplans",
            field_selector=f"spec.clusterServiceClassRef.name={class_ref}",
            _request_timeout=self._timeout,
        )
        return [service_plan_from_object(item) for item in raw.get("items", [])]

    def list_service_instances(self, scope: SessionScope) -> list[ServiceInstance]:
        raw = self._custom.list_namespaced_custom_object(
            group=SERVICE_CATALOG_GROUP,
            version=SERVICE_CATALOG_VERSION,
            namespace=scope.namespace,
            plural="serviceinstances",
            label_selector=_selector(**{APPLICATION_LABEL: scope.application}),
            _request_timeout=self._timeout,
        )
        return [service_instance_from_object(item) for item in raw.get("items", [])]

    def list_workloads(self, scope: SessionScope) -> list[Workload]:
        deployments = self._apps.list_namespaced_deployment(
            scope.namespace,
            label_selector=_selector(**{APPLICATION_LABEL: scope.application}),
            _request_timeout=self._timeout,
        )
        return [workload_from_deployment(deployment) for deployment in deployments.items]

    def get_workload(self, scope: SessionScope, name: str) -> Workload | None:
        # Object names carry a suffix, so look the component up by label
        deployments = self._apps.list_namespaced_deployment(
            scope.namespace,
            label_selector=_selector(**{APPLICATION_LABEL: scope.application, COMPONENT_LABEL: name}),
            _request_timeout=self._timeout,
        )
        if not deployments.items:
            return None
        return workload_from_deployment(deployments.items[0])

    def get_secret(self, scope: SessionScope, name: str) -> Secret | None:
        try:
            secret = self._core.read_namespaced_secret(name, scope.namespace, _request_timeout=self._timeout)
        except ApiException as e:
            if e.status == 404:
                return None
            raise
        return Secret(name=secret.metadata.name, labels=dict(secret.metadata.labels or {}))

    def list_applications(self, scope: SessionScope) -> list[str]:
        deployments = self._apps.list_namespaced_deployment(
            scope.namespace,
            label_selector=APPLICATION_LABEL,
            _request_timeout=self._timeout,
        )
        names = ((deployment.metadata.labels or {}).get(APPLICATION_LABEL) for deployment in deployments.items)
        return list(dict.fromkeys(name for name in names if name))

    def list_projects(self) -> list[str]:
        namespaces = self._core.list_namespace(_request_timeout=self._timeout)
        return [namespace.metadata.name for namespace in namespaces.items]
