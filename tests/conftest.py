"""Shared test fixtures for rhtap-integrations tests."""

import base64
from unittest.mock import MagicMock, patch

import pytest

from rhtap_integrations.config import Config
from rhtap_integrations.exceptions import ClusterError
from rhtap_integrations.models import SecretName


class FakeCluster:
    """In-memory stand-in for Cluster recording every write."""

    def __init__(self, namespaces=()):
        self.namespaces = set(namespaces)
        self.secrets = {}
        self.writes = []

    def ensure_openshift_project(self, namespace):
        if namespace not in self.namespaces:
            self.namespaces.add(namespace)
            self.writes.append(("create-namespace", namespace))

    def secret_exists(self, secret_name):
        return secret_name in self.secrets

    def delete_secret(self, secret_name):
        del self.secrets[secret_name]
        self.writes.append(("delete-secret", secret_name))

    def create_secret(self, secret):
        secret_name = SecretName(secret.metadata.namespace, secret.metadata.name)
        if secret_name.namespace not in self.namespaces:
            raise ClusterError(f"namespace {secret_name.namespace} not found", status=404)
        if secret_name in self.secrets:
            raise ClusterError(f"secret {secret_name} already exists", status=409)
        self.secrets[secret_name] = secret
        self.writes.append(("create-secret", secret_name))
        return secret

    def payload(self, secret_name):
        """Return the decoded data of a stored secret."""
        data = self.secrets[secret_name].data
        return {key: base64.b64decode(value).decode() for key, value in data.items()}


@pytest.fixture
def fake_cluster():
    """Empty in-memory cluster."""
    return FakeCluster()


@pytest.fixture
def config():
    """Installer configuration with the Developer Hub feature."""
    return Config.from_dict(
        {
            "rhtapCLI": {
                "namespace": "rhtap",
                "features": {"redHatDeveloperHub": {"enabled": True, "namespace": "rhtap-dh"}},
            }
        }
    )


@pytest.fixture
def config_file(tmp_path):
    """Installer configuration written to disk."""
    path = tmp_path / "config.yaml"
    path.write_text(
        """rhtapCLI:
  namespace: rhtap
  features:
    redHatDeveloperHub:
      enabled: true
"""
    )
    return path


@pytest.fixture
def mock_kube_contexts():
    """Mock kubernetes config contexts."""
    with patch("kubernetes.config.list_kube_config_contexts") as mock:
        mock.return_value = ([{"name": "test-context"}], {"name": "test-context"})
        yield mock


@pytest.fixture
def mock_kube_config():
    """Mock kubernetes config loading."""
    with patch("kubernetes.config.load_kube_config") as mock:
        yield mock


@pytest.fixture
def mock_core_v1_api():
    """Mock CoreV1Api."""
    with patch("kubernetes.client.CoreV1Api") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        yield api_instance


@pytest.fixture
def mock_custom_objects_api():
    """Mock CustomObjectsApi used for OpenShift project requests."""
    with patch("kubernetes.client.CustomObjectsApi") as mock:
        api_instance = MagicMock()
        mock.return_value = api_instance
        yield api_instance


@pytest.fixture
def cluster_mocks(mock_kube_contexts, mock_kube_config, mock_core_v1_api, mock_custom_objects_api):
    """Combined fixture for creating a Cluster instance without cluster access."""
    return {
        "contexts": mock_kube_contexts,
        "config": mock_kube_config,
        "core_api": mock_core_v1_api,
        "custom_api": mock_custom_objects_api,
    }
