"""Installer configuration.

The configuration is a YAML document with a top-level ``rhtapCLI`` section
declaring the installer namespace and the features it deploys. Integrations
look up the feature they belong to in order to find the namespace their
secret lives in.
"""

import os
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from icecream import ic

from rhtap_integrations.exceptions import ConfigError, FeatureNotFoundError
from rhtap_integrations.models import Feature

# Environment variable overriding the default configuration file
CONFIG_ENV_VAR = "RHTAP_CONFIG"

# Feature keys
RED_HAT_DEVELOPER_HUB = "redHatDeveloperHub"

_ROOT_KEY = "rhtapCLI"


class Config:
    """Parsed installer configuration.

    Attributes:
        namespace: The installer namespace, used by features without their own.
        features: Raw feature mappings keyed by feature name.

    """

    def __init__(self, namespace: str, features: dict[str, dict[str, Any]]) -> None:
        self.namespace = namespace
        self.features = features

    @classmethod
    def from_dict(cls, data: Any) -> "Config":
        """Build a configuration from an already parsed YAML document.

        Args:
            data: The parsed document.

        Returns:
            The configuration.

        Raises:
            ConfigError: If the document lacks the rhtapCLI section or it is malformed.

        """
        if not isinstance(data, dict) or not isinstance(data.get(_ROOT_KEY), dict):
            raise ConfigError(f"Configuration is missing the '{_ROOT_KEY}' section")

        root = data[_ROOT_KEY]
        namespace = root.get("namespace") or ""
        features = root.get("features") or {}
        if not isinstance(features, dict):
            raise ConfigError(f"'{_ROOT_KEY}.features' must be a mapping")

        return cls(namespace=str(namespace), features=features)

    @classmethod
    def load(cls, path: str | Path | None = None) -> "Config":
        """Load the configuration from a YAML file.

        The path defaults to the RHTAP_CONFIG environment variable and then to
        the configuration shipped with the package.

        Args:
            path: Optional path to the configuration file.

        Returns:
            The configuration.

        Raises:
            ConfigError: If the file is missing or not valid YAML.

        """
        if path is None:
            path = os.environ.get(CONFIG_ENV_VAR)
        ic(path)

        try:
            if path is None:
                text = resources.files("rhtap_integrations").joinpath("data/config.yaml").read_text()
            else:
                text = Path(path).read_text()
        except FileNotFoundError as err:
            raise ConfigError(f"Configuration file '{path}' does not exist") from err

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as err:
            raise ConfigError(f"Configuration file '{path}' contains malformed YAML: {err}") from err

        return cls.from_dict(data)

    def get_feature(self, name: str) -> Feature:
        """Look up a feature by name.

        Args:
            name: The feature key.

        Returns:
            The feature, with the installer namespace filled in when the
            feature does not declare its own.

        Raises:
            FeatureNotFoundError: If the feature is not declared.
            ConfigError: If the feature entry is malformed or has no namespace.

        """
        spec = self.features.get(name)
        if spec is None:
            raise FeatureNotFoundError(f"feature '{name}' not found in configuration")
        if not isinstance(spec, dict):
            raise ConfigError(f"feature '{name}' must be a mapping")

        namespace = str(spec.get("namespace") or self.namespace)
        if not namespace:
            raise ConfigError(f"feature '{name}' has no namespace")

        return Feature(
            name=name,
            enabled=bool(spec.get("enabled", False)),
            namespace=namespace,
        )

    def __repr__(self) -> str:
        return f"Config(namespace={self.namespace!r}, features={sorted(self.features)!r})"
