"""
ktool command line interface.

Installed as ``kubectl-ktool`` so kubectl picks it up as the ``ktool``
plugin:

    kubectl ktool collect-logs -n panw
    kubectl ktool upgrade
    kubectl ktool version
"""

import logging
from typing import Optional

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from ktool import RELEASE
from ktool.config import EnvConfigProvider
from ktool.errors import KtoolError
from ktool.logging_config import configure_logging
from ktool.modules.bundle import SupportBundleCollector, Target
from ktool.modules.update import UpdateChecker

logger = logging.getLogger("ktool.cli")


class CommandFailed(click.ClickException):
    """Report a KtoolError on stderr with its exit code."""

    def __init__(self, error: KtoolError):
        super().__init__(str(error))
        self.exit_code = error.exit_code


def _require_value(ctx: click.Context, param: click.Parameter, value: Optional[str]) -> Optional[str]:
    # click would happily take the next flag as this option's value
    if value is not None and value.startswith("-"):
        raise click.UsageError(f"Option '--{param.name}' requires an argument.", ctx=ctx)
    return value


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """A tool for managing and collecting support data for the Konnector agent."""
    try:
        provider = EnvConfigProvider()
        level = "DEBUG" if verbose else provider.get_logging_config().level
        configure_logging(level)
        ctx.obj = provider
        UpdateChecker(provider.get_update_config()).check_for_updates(ctx.invoked_subcommand or "")
    except KtoolError as e:
        raise CommandFailed(e) from e


@cli.command("collect-logs")
@click.option(
    "-n", "--namespace",
    default="panw",
    show_default=True,
    callback=_require_value,
    help="The namespace where the agent is installed.",
)
@click.option("--kubeconfig", callback=_require_value, help="Path to a specific kubeconfig file to use.")
@click.option("--context", callback=_require_value, help="The name of the kubeconfig context to use.")
@click.pass_obj
def collect_logs(provider: EnvConfigProvider, namespace: str, kubeconfig: Optional[str], context: Optional[str]):
    """Collects a comprehensive diagnostic support bundle."""
    try:
        target = Target(namespace=namespace, kubeconfig=kubeconfig, context=context)
    except ValidationError as e:
        messages = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
        raise click.BadParameter(messages) from e

    try:
        collector = SupportBundleCollector(target, provider.get_collector_config())
        result = collector.collect()
    except KtoolError as e:
        raise CommandFailed(e) from e

    click.echo(str(result.archive_path))


@cli.command()
@click.pass_obj
def upgrade(provider: EnvConfigProvider):
    """Upgrades this tool to the latest version from GitHub."""
    try:
        UpdateChecker(provider.get_update_config()).upgrade()
    except KtoolError as e:
        raise CommandFailed(e) from e


@cli.command()
def version():
    """Prints the current version of this tool."""
    click.echo(RELEASE)


def main():
    """Main entry point."""
    load_dotenv()
    cli(prog_name="kubectl ktool")


if __name__ == "__main__":
    main()
