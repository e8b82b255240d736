"""Data models for rhtap-integrations.

This module provides type-safe data structures shared by the configuration,
cluster and integration modules.
"""

from dataclasses import dataclass
from typing import NamedTuple


class SecretName(NamedTuple):
    """Namespace scoped identity of a Kubernetes secret.

    Attributes:
        namespace: The namespace holding the secret.
        name: The secret name.

    """

    namespace: str
    name: str

    def __str__(self) -> str:
        """Return the fully-qualified ``namespace/name`` form."""
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True)
class Feature:
    """A feature declared in the installer configuration.

    Attributes:
        name: The feature key, e.g. ``redHatDeveloperHub``.
        enabled: Whether the feature is enabled.
        namespace: The namespace the feature is deployed to.

    """

    name: str
    enabled: bool
    namespace: str
