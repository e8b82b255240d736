#!/usr/bin/env python
"""Command-line interface for rhtap-integrations.

The top-level group holds the cluster and configuration options shared by
all integrations; each integration is a subcommand registering its own flags.
"""

import sys
from dataclasses import dataclass

import click
from icecream import ic

from rhtap_integrations import __version__, console
from rhtap_integrations.cluster import Cluster
from rhtap_integrations.config import CONFIG_ENV_VAR, Config
from rhtap_integrations.exceptions import IntegrationError
from rhtap_integrations.integrations import BitBucketIntegration

DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True, slots=True)
class CliContext:
    """Options of the top-level command passed down to integrations.

    Attributes:
        select: Prompt for the Kubernetes context.
        config_path: Installer configuration file, None for the default.
        timeout: Timeout in seconds for each Kubernetes API request.

    """

    select: bool
    config_path: str | None
    timeout: float


@click.group(help="Provision RHTAP integration secrets on Kubernetes", invoke_without_command=True)
@click.option("--version", "-v", required=False, is_flag=True, help="print version")
@click.option("--debug", required=False, is_flag=True, help="print debug information")
@click.option("--select", required=False, is_flag=True, default=False, help="prompt for context select")
@click.option(
    "--config",
    "config_path",
    required=False,
    envvar=CONFIG_ENV_VAR,
    help="installer configuration file",
)
@click.option(
    "--timeout",
    required=False,
    type=click.FloatRange(min=0, min_open=True),
    default=DEFAULT_REQUEST_TIMEOUT,
    show_default=True,
    help="timeout in seconds for each Kubernetes API request",
)
@click.pass_context
def cli(
    ctx: click.Context,
    version: bool,
    debug: bool,
    select: bool,
    config_path: str | None,
    timeout: float,
) -> None:
    """Process the shared options.

    Args:
        ctx: The click context.
        version: Print version and exit.
        debug: Enable debug output.
        select: Prompt for Kubernetes context selection.
        config_path: Path to the installer configuration.
        timeout: Timeout for each Kubernetes API request.

    """
    if not debug:
        ic.disable()
    else:
        ic.enable()

    if version:
        click.echo(__version__)
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    ctx.obj = CliContext(select=select, config_path=config_path, timeout=timeout)
    ic(ctx.obj)


@cli.command(help="Create the BitBucket integration secret")
@BitBucketIntegration.persistent_flags
@click.pass_obj
def bitbucket(obj: CliContext, force: bool, app_password: str, host: str, username: str) -> None:
    """Create the BitBucket integration secret.

    Args:
        obj: Shared options of the top-level command.
        force: Overwrite the existing secret.
        app_password: BitBucket application password.
        host: BitBucket host.
        username: BitBucket username.

    """
    try:
        cfg = Config.load(obj.config_path)
        ic(cfg)
        integration = BitBucketIntegration.from_config(
            cfg,
            force=force,
            app_password=app_password,
            host=host,
            username=username,
        )
        integration.validate()

        cluster = Cluster(select_context=obj.select, request_timeout=obj.timeout)
        integration.ensure_namespace(cluster)
        integration.create(cluster)
    except IntegrationError as e:
        console.error(str(e))
        sys.exit(1)

    console.summary_panel(
        "BitBucket integration",
        {
            "Secret": str(integration.secret_name),
            "Host": integration.host,
            "Username": integration.username,
        },
    )


if __name__ == "__main__":
    cli()
