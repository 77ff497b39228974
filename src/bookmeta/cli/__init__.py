# ABOUTME: CLI package for bookmeta, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from bookmeta.cli.commands import lookup_cmd, providers_cmd, search_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(package_name="bookmeta")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """bookmeta - look up book metadata across several catalog providers."""
    _configure_logging(verbose)


cli.add_command(lookup_cmd.lookup)
cli.add_command(search_cmd.search)
cli.add_command(providers_cmd.providers)
