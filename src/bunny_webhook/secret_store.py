"""Kubernetes Secret lookups for provider credentials."""

from __future__ import annotations

import base64
import logging
from typing import Protocol

from kubernetes import client as kube_client
from kubernetes import config as kube_config
from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException

from bunny_webhook.exceptions import SecretResolutionError

logger = logging.getLogger(__name__)


class SecretStore(Protocol):
    """Read access to named secrets, keyed by namespace."""

    def get_secret_data(self, namespace: str, name: str) -> dict[str, bytes]:
        """Return the secret's data mapping with values decoded to bytes."""
        ...


def load_kube_configuration(kubeconfig: str | None = None) -> kube_client.Configuration:
    """Build a client configuration for the cluster this webhook runs in.

    The in-cluster service account is tried first. Outside a cluster (local
    development) the kubeconfig file is used instead.
    """
    configuration = kube_client.Configuration()
    try:
        kube_config.load_incluster_config(client_configuration=configuration)
        logger.info("Using in-cluster Kubernetes configuration")
    except ConfigException:
        kube_config.load_kube_config(config_file=kubeconfig, client_configuration=configuration)
        logger.info("Using kubeconfig Kubernetes configuration")
    return configuration


class KubernetesSecretStore:
    """SecretStore backed by the Kubernetes core/v1 Secrets API."""

    def __init__(
        self,
        configuration: kube_client.Configuration | None = None,
        _core_api: kube_client.CoreV1Api | None = None,
    ) -> None:
        self._core_api = _core_api or kube_client.CoreV1Api(kube_client.ApiClient(configuration))

    def get_secret_data(self, namespace: str, name: str) -> dict[str, bytes]:
        if not name:
            raise SecretResolutionError(f"unable to get secret '{namespace}/': solver config does not set secretRef")
        try:
            secret = self._core_api.read_namespaced_secret(name=name, namespace=namespace)
        except ApiException as exc:
            raise SecretResolutionError(
                f"unable to get secret '{namespace}/{name}': {exc.status} {exc.reason}"
            ) from exc

        data = {key: base64.b64decode(value) for key, value in (secret.data or {}).items()}
        # stringData is write-only on a real API server but shows up in fakes and dry runs
        for key, value in (secret.string_data or {}).items():
            data.setdefault(key, value.encode())
        return data
