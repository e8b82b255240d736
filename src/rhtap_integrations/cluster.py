"""Kubernetes cluster interaction utilities.

This module provides the Cluster class, the only place talking to the
Kubernetes API. Every call carries the configured request timeout and every
failure is translated into a ClusterError.
"""

from collections.abc import Callable
from typing import Any

import click
import questionary
from icecream import ic
from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError, MaxRetryError

from rhtap_integrations import console
from rhtap_integrations.exceptions import ClusterConnectionError, ClusterError
from rhtap_integrations.models import SecretName
from rhtap_integrations.styles import POINTER, PROMPT_STYLE, QMARK

_HTTP_NOT_FOUND = 404
_HTTP_CONFLICT = 409

# OpenShift project request API
_PROJECT_GROUP = "project.openshift.io"
_PROJECT_VERSION = "v1"
_PROJECT_REQUESTS = "projectrequests"


class Cluster:
    """Manages Kubernetes cluster interactions for integration secrets.

    Attributes:
        context: The active Kubernetes context name.
        request_timeout: Timeout in seconds applied to every API request,
            or None to wait indefinitely.

    """

    def __init__(self, *, select_context: bool, request_timeout: float | None = None) -> None:
        """Initialize Cluster with context selection.

        Args:
            select_context: If True, prompt user to select a context.
                           If False, use the current context.
            request_timeout: Timeout in seconds for each API request.

        Raises:
            ClusterConnectionError: If the kubeconfig cannot be loaded.

        """
        self.context: str = self._set_context(select_context=select_context)
        try:
            config.load_kube_config(context=self.context)
        except ConfigException as e:
            raise ClusterConnectionError(f"Failed to load kubeconfig: {e}") from e
        self.request_timeout: float | None = request_timeout
        self.core_v1_api = client.CoreV1Api()
        self.custom_objects_api = client.CustomObjectsApi()

    @staticmethod
    def _set_context(*, select_context: bool) -> str:
        """Set the Kubernetes context to use.

        Args:
            select_context: If True, prompt user to select a context.

        Returns:
            The selected or current context name.

        Raises:
            ClusterConnectionError: If kubeconfig is invalid or missing.
            click.Abort: If user cancels context selection.

        """
        try:
            contexts, current_context = config.list_kube_config_contexts()
        except ConfigException as e:
            raise ClusterConnectionError(f"Invalid or missing kubeconfig: {e}") from e
        if select_context:
            context_names: list[str] = [context["name"] for context in contexts]
            context: str | None = questionary.select(
                "Select context to work with",
                choices=context_names,
                style=PROMPT_STYLE,
                pointer=POINTER,
                qmark=QMARK,
            ).ask()
            if context is None:
                console.warning("Context selection cancelled.")
                raise click.Abort()
        else:
            context = str(current_context["name"])
        console.action(f"Working with {console.highlight(context)} cluster")
        return context

    def _call(self, description: str, func: Callable[..., Any], **kwargs: Any) -> Any:
        """Invoke a kubernetes client method, translating its failures.

        Args:
            description: What the call does, used in error messages.
            func: The bound client method.
            **kwargs: Arguments for the client method.

        Returns:
            Whatever the client method returns.

        Raises:
            ClusterConnectionError: If the cluster cannot be reached.
            ClusterError: If the API rejects the request or it times out.

        """
        ic(description, kwargs.get("name"), kwargs.get("namespace"))
        try:
            return func(_request_timeout=self.request_timeout, **kwargs)
        except ApiException as e:
            raise ClusterError(f"Failed to {description}: {e.status} {e.reason}", status=e.status) from e
        except MaxRetryError as e:
            raise ClusterConnectionError(f"Failed to connect to the Kubernetes cluster: {e.reason}") from e
        except HTTPError as e:
            raise ClusterError(f"Failed to {description}: {e}") from e

    def namespace_exists(self, namespace: str) -> bool:
        """Check whether a namespace exists.

        Args:
            namespace: The namespace name.

        Returns:
            True if the namespace exists.

        """
        try:
            self._call(f"read namespace {namespace}", self.core_v1_api.read_namespace, name=namespace)
        except ClusterError as e:
            if e.status == _HTTP_NOT_FOUND:
                return False
            raise
        return True

    def ensure_openshift_project(self, namespace: str) -> None:
        """Make sure a namespace exists, creating it as an OpenShift project.

        A ProjectRequest is submitted so the project gets OpenShift's default
        role bindings. Clusters without the project API get a plain namespace.
        A namespace created concurrently by someone else counts as success.

        Args:
            namespace: The namespace name.

        Raises:
            ClusterError: If the namespace cannot be read or created.

        """
        if self.namespace_exists(namespace):
            console.step(f"Namespace {console.highlight(namespace)} already exists")
            return

        with console.spinner(f"Creating project {namespace}..."):
            try:
                self._create_project_request(namespace)
            except ClusterError as e:
                if e.status == _HTTP_CONFLICT:
                    return
                if e.status != _HTTP_NOT_FOUND:
                    raise
                ic("project API unavailable, creating namespace")
                self._create_namespace(namespace)

        console.success(f"Created namespace {console.highlight(namespace)}")

    def _create_project_request(self, namespace: str) -> None:
        body = {
            "apiVersion": f"{_PROJECT_GROUP}/{_PROJECT_VERSION}",
            "kind": "ProjectRequest",
            "metadata": {"name": namespace},
        }
        self._call(
            f"create project {namespace}",
            self.custom_objects_api.create_cluster_custom_object,
            group=_PROJECT_GROUP,
            version=_PROJECT_VERSION,
            plural=_PROJECT_REQUESTS,
            body=body,
        )

    def _create_namespace(self, namespace: str) -> None:
        body = client.V1Namespace(metadata=client.V1ObjectMeta(name=namespace))
        try:
            self._call(f"create namespace {namespace}", self.core_v1_api.create_namespace, body=body)
        except ClusterError as e:
            if e.status != _HTTP_CONFLICT:
                raise

    def secret_exists(self, secret_name: SecretName) -> bool:
        """Check whether a secret exists.

        Args:
            secret_name: The namespace/name of the secret.

        Returns:
            True if the secret exists.

        """
        try:
            self._call(
                f"read secret {secret_name}",
                self.core_v1_api.read_namespaced_secret,
                name=secret_name.name,
                namespace=secret_name.namespace,
            )
        except ClusterError as e:
            if e.status == _HTTP_NOT_FOUND:
                return False
            raise
        return True

    def delete_secret(self, secret_name: SecretName) -> None:
        """Delete a secret.

        Args:
            secret_name: The namespace/name of the secret.

        """
        self._call(
            f"delete secret {secret_name}",
            self.core_v1_api.delete_namespaced_secret,
            name=secret_name.name,
            namespace=secret_name.namespace,
        )

    def create_secret(self, secret: client.V1Secret) -> client.V1Secret:
        """Create a secret in the namespace named by its metadata.

        Args:
            secret: The secret to create.

        Returns:
            The secret as stored by the API server.

        """
        return self._call(
            f"create secret {secret.metadata.namespace}/{secret.metadata.name}",
            self.core_v1_api.create_namespaced_secret,
            namespace=secret.metadata.namespace,
            body=secret,
        )

    def __repr__(self) -> str:
        return f"Cluster(context={self.context!r}, request_timeout={self.request_timeout!r})"
