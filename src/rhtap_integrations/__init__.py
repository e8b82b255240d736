"""rhtap-integrations: provision RHTAP integration secrets on Kubernetes.

Example usage:
    from rhtap_integrations import BitBucketIntegration, Cluster, Config

    integration = BitBucketIntegration.from_config(
        Config.load(), app_password="token", username="alice"
    )
    integration.validate()
    integration.run(Cluster(select_context=False, request_timeout=30))
"""

__version__ = "0.1.0"

from rhtap_integrations.cluster import Cluster
from rhtap_integrations.config import Config
from rhtap_integrations.exceptions import (
    ClusterConnectionError,
    ClusterError,
    ConfigError,
    ConflictError,
    FeatureNotFoundError,
    IntegrationError,
    SecretAlreadyExistsError,
    ValidationError,
)
from rhtap_integrations.integrations import BitBucketIntegration
from rhtap_integrations.models import Feature, SecretName

__all__ = [
    # Version
    "__version__",
    # Classes
    "BitBucketIntegration",
    "Cluster",
    "Config",
    "Feature",
    "SecretName",
    # Exceptions
    "IntegrationError",
    "ValidationError",
    "ConflictError",
    "SecretAlreadyExistsError",
    "ClusterError",
    "ClusterConnectionError",
    "ConfigError",
    "FeatureNotFoundError",
]
