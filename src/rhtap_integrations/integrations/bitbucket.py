"""BitBucket integration.

Stores the BitBucket credentials RHTAP needs in an opaque secret inside the
Red Hat Developer Hub namespace.
"""

import base64
from collections.abc import Callable
from typing import Any, TypeVar

import click
from icecream import ic
from kubernetes import client

from rhtap_integrations import console
from rhtap_integrations.cluster import Cluster
from rhtap_integrations.config import RED_HAT_DEVELOPER_HUB, Config
from rhtap_integrations.exceptions import SecretAlreadyExistsError, ValidationError
from rhtap_integrations.models import SecretName

F = TypeVar("F", bound=Callable[..., Any])

# Default host for public BitBucket
DEFAULT_PUBLIC_BITBUCKET_HOST = "bitbucket.org"

SECRET_NAME = "rhtap-bitbucket-integration"

APP_PASSWORD_ENV_VAR = "BITBUCKET_APP_PASSWORD"


class BitBucketIntegration:
    """Provisions the BitBucket integration secret.

    The cluster is passed to each step touching it, so the input can be
    validated before a kubeconfig is loaded.

    Attributes:
        secret_name: Namespace/name of the integration secret.
        force: Whether an existing secret may be replaced.
        app_password: BitBucket application password.
        host: BitBucket host.
        username: BitBucket username.

    """

    def __init__(
        self,
        namespace: str,
        *,
        force: bool = False,
        app_password: str = "",
        host: str = "",
        username: str = "",
    ) -> None:
        """Initialize the integration.

        Args:
            namespace: Namespace of the integration secret.
            force: Replace the secret if it already exists.
            app_password: BitBucket application password.
            host: BitBucket host, defaults to bitbucket.org on validation.
            username: BitBucket username.

        """
        self.secret_name = SecretName(namespace=namespace, name=SECRET_NAME)
        self.force = force
        self.app_password = app_password
        self.host = host
        self.username = username

    @classmethod
    def from_config(cls, cfg: Config, **flags: Any) -> "BitBucketIntegration":
        """Create the integration in the Developer Hub feature namespace.

        Args:
            cfg: Loaded installer configuration.
            **flags: Values bound by persistent_flags.

        Raises:
            FeatureNotFoundError: If the Developer Hub feature is not configured.

        """
        feature = cfg.get_feature(RED_HAT_DEVELOPER_HUB)
        return cls(feature.namespace, **flags)

    @staticmethod
    def persistent_flags(command: F) -> F:
        """Register the integration flags on a click command.

        The values are passed to the command as the force, app_password,
        host and username keyword arguments.
        """
        options = [
            click.option("--force", is_flag=True, default=False, help="Overwrite the existing secret"),
            click.option(
                "--app-password",
                default="",
                envvar=APP_PASSWORD_ENV_VAR,
                help="BitBucket application password",
            ),
            click.option("--host", default="", help=f"BitBucket host, defaults to '{DEFAULT_PUBLIC_BITBUCKET_HOST}'"),
            click.option("--username", default="", help="BitBucket username"),
        ]
        for option in reversed(options):
            command = option(command)
        return command

    def _log_fields(self) -> dict[str, object]:
        # never log the password itself
        return {
            "force": self.force,
            "host": self.host,
            "app-password": len(self.app_password),
            "username": self.username,
        }

    def validate(self) -> None:
        """Check the required configuration is set.

        Raises:
            ValidationError: If the app password or username is empty.

        """
        if not self.app_password:
            raise ValidationError("app-password is required")
        if not self.host:
            self.host = DEFAULT_PUBLIC_BITBUCKET_HOST
        if not self.username:
            raise ValidationError("username is required")

    def ensure_namespace(self, cluster: Cluster) -> None:
        """Ensure the namespace of the integration secret exists on the cluster."""
        ic("Ensuring namespace", self.secret_name.namespace, self._log_fields())
        cluster.ensure_openshift_project(self.secret_name.namespace)

    def _prepare_secret(self, cluster: Cluster) -> None:
        """Make room for the secret, deleting an existing one when forced.

        Raises:
            SecretAlreadyExistsError: If the secret exists and force is not set.

        """
        ic("Checking if integration secret exists", self._log_fields())
        if not cluster.secret_exists(self.secret_name):
            ic("Integration secret does not exist")
            return
        if not self.force:
            ic("Integration secret already exists")
            raise SecretAlreadyExistsError(self.secret_name)
        console.warning(f"Integration secret {console.highlight(str(self.secret_name))} already exists, recreating it")
        cluster.delete_secret(self.secret_name)

    def _build_secret(self) -> client.V1Secret:
        data = {
            "appPassword": self.app_password,
            "host": self.host,
            "username": self.username,
        }
        return client.V1Secret(
            metadata=client.V1ObjectMeta(
                namespace=self.secret_name.namespace,
                name=self.secret_name.name,
            ),
            type="Opaque",
            data={key: base64.b64encode(value.encode()).decode() for key, value in data.items()},
        )

    def _store(self, cluster: Cluster) -> None:
        """Create the secret with the integration data."""
        secret = self._build_secret()
        log_fields = {
            **self._log_fields(),
            "secret-namespace": self.secret_name.namespace,
            "secret-name": self.secret_name.name,
        }

        ic("Creating integration secret", log_fields)
        cluster.create_secret(secret)
        console.success(f"Integration secret created successfully! {console.fields(log_fields)}")

    def create(self, cluster: Cluster) -> None:
        """Create the BitBucket integration secret."""
        console.action(
            f"Inspecting the cluster for an existing BitBucket integration secret {console.fields(self._log_fields())}"
        )
        self._prepare_secret(cluster)
        self._store(cluster)

    def run(self, cluster: Cluster) -> None:
        """Validate the input, ensure the namespace and create the secret."""
        self.validate()
        self.ensure_namespace(cluster)
        self.create(cluster)

    def __repr__(self) -> str:
        return f"BitBucketIntegration(secret_name={self.secret_name!r}, force={self.force!r}, host={self.host!r})"
