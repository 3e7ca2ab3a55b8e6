"""Tests for bunny_webhook.secret_store."""

import base64
from unittest.mock import MagicMock, patch

import pytest
from kubernetes.client.exceptions import ApiException
from kubernetes.config import ConfigException

from bunny_webhook.exceptions import SecretResolutionError
from bunny_webhook.secret_store import KubernetesSecretStore, load_kube_configuration


def _make_secret(data=None, string_data=None):
    secret = MagicMock()
    secret.data = {k: base64.b64encode(v).decode() for k, v in (data or {}).items()} or None
    secret.string_data = string_data
    return secret


class TestKubernetesSecretStore:
    def test_decodes_secret_data(self):
        core_api = MagicMock()
        core_api.read_namespaced_secret.return_value = _make_secret({"api-key": b"key-123", "zone-id": b"42"})
        store = KubernetesSecretStore(_core_api=core_api)

        data = store.get_secret_data("cert-manager", "bunny-credentials")

        assert data == {"api-key": b"key-123", "zone-id": b"42"}
        core_api.read_namespaced_secret.assert_called_once_with(name="bunny-credentials", namespace="cert-manager")

    def test_merges_string_data(self):
        core_api = MagicMock()
        core_api.read_namespaced_secret.return_value = _make_secret({"api-key": b"key-123"}, {"zone-id": "42"})
        store = KubernetesSecretStore(_core_api=core_api)

        data = store.get_secret_data("ns", "name")

        assert data == {"api-key": b"key-123", "zone-id": b"42"}

    def test_empty_secret(self):
        core_api = MagicMock()
        core_api.read_namespaced_secret.return_value = _make_secret()
        store = KubernetesSecretStore(_core_api=core_api)

        assert store.get_secret_data("ns", "name") == {}

    def test_empty_name_is_rejected_without_api_call(self):
        core_api = MagicMock()
        store = KubernetesSecretStore(_core_api=core_api)

        with pytest.raises(SecretResolutionError, match="does not set secretRef"):
            store.get_secret_data("ns", "")
        core_api.read_namespaced_secret.assert_not_called()

    def test_api_error_names_secret(self):
        core_api = MagicMock()
        core_api.read_namespaced_secret.side_effect = ApiException(status=404, reason="Not Found")
        store = KubernetesSecretStore(_core_api=core_api)

        with pytest.raises(SecretResolutionError, match="unable to get secret 'ns/bunny': 404 Not Found"):
            store.get_secret_data("ns", "bunny")

    def test_forbidden_is_resolution_error(self):
        core_api = MagicMock()
        core_api.read_namespaced_secret.side_effect = ApiException(status=403, reason="Forbidden")
        store = KubernetesSecretStore(_core_api=core_api)

        with pytest.raises(SecretResolutionError, match="403 Forbidden"):
            store.get_secret_data("ns", "bunny")

    @patch("bunny_webhook.secret_store.kube_client")
    def test_builds_core_api_from_configuration(self, mock_kube_client):
        configuration = MagicMock()

        KubernetesSecretStore(configuration)

        mock_kube_client.ApiClient.assert_called_once_with(configuration)
        mock_kube_client.CoreV1Api.assert_called_once_with(mock_kube_client.ApiClient.return_value)


class TestLoadKubeConfiguration:
    @patch("bunny_webhook.secret_store.kube_config")
    def test_prefers_in_cluster_config(self, mock_kube_config):
        configuration = load_kube_configuration()

        mock_kube_config.load_incluster_config.assert_called_once_with(client_configuration=configuration)
        mock_kube_config.load_kube_config.assert_not_called()

    @patch("bunny_webhook.secret_store.kube_config")
    def test_falls_back_to_kubeconfig(self, mock_kube_config):
        mock_kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")

        configuration = load_kube_configuration("/home/me/.kube/config")

        mock_kube_config.load_kube_config.assert_called_once_with(
            config_file="/home/me/.kube/config", client_configuration=configuration
        )

    @patch("bunny_webhook.secret_store.kube_config")
    def test_no_config_available_propagates(self, mock_kube_config):
        mock_kube_config.load_incluster_config.side_effect = ConfigException("not in cluster")
        mock_kube_config.load_kube_config.side_effect = ConfigException("no kubeconfig")

        with pytest.raises(ConfigException, match="no kubeconfig"):
            load_kube_configuration()
