"""Custom exceptions for rhtap-integrations.

This module defines the exception hierarchy used throughout the application
to provide meaningful error messages and proper error handling.
"""


class IntegrationError(Exception):
    """Base exception for all rhtap-integrations errors.

    All custom exceptions in this package inherit from this class,
    allowing the CLI to report any of them with a single except clause.
    """

    pass


class ValidationError(IntegrationError):
    """Raised when a required integration input is missing.

    Re-running the command with the missing flag set fixes it.
    """

    pass


class ConflictError(IntegrationError):
    """Raised when a cluster resource already exists and may not be replaced."""

    pass


class SecretAlreadyExistsError(ConflictError):
    """Raised when the integration secret exists and --force was not given."""

    def __init__(self, secret_name: object) -> None:
        """Initialize with the fully-qualified secret name.

        Args:
            secret_name: The namespace/name of the existing secret.

        """
        super().__init__(f"secret already exists: {secret_name}")
        self.secret_name = secret_name


class ClusterError(IntegrationError):
    """Raised when a Kubernetes API call fails.

    This can occur when:
    - The caller lacks permissions for the resource
    - The namespace is missing
    - The request times out or the connection drops
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        """Initialize with a message and the optional HTTP status.

        Args:
            message: Human readable description of the failure.
            status: HTTP status returned by the API server, if any.

        """
        super().__init__(message)
        self.status = status


class ClusterConnectionError(ClusterError):
    """Raised when connection to the Kubernetes cluster fails.

    This can occur when:
    - The kubeconfig is invalid or missing
    - The cluster is unreachable
    - Authentication fails
    """

    pass


class ConfigError(IntegrationError):
    """Raised when the installer configuration cannot be loaded.

    This can occur when:
    - The file does not exist
    - The file is not valid YAML
    - The top-level rhtapCLI section is missing
    """

    pass


class FeatureNotFoundError(ConfigError):
    """Raised when a feature is not declared in the installer configuration."""

    pass
