# ABOUTME: The `bookmeta providers` command for checking metadata provider connectivity.
# ABOUTME: Probes every registered provider, including disabled ones, and prints a status table.

import click
from rich.console import Console

from bookmeta.cli.options import aggregator_from_options, provider_options
from bookmeta.cli.render import status_table

console = Console()


@click.command("providers")
@provider_options
def providers(
    timeout: float | None, google_api_key: str | None, disabled: tuple[str, ...]
) -> None:
    """Show every registered provider and whether it is reachable."""
    aggregator = aggregator_from_options(timeout, google_api_key, disabled)
    try:
        statuses = aggregator.test_all_providers()
    finally:
        aggregator.close()

    if not statuses:
        console.print("[yellow]No providers registered.[/yellow]")
        return

    console.print(status_table(statuses))
    connected = sum(1 for s in statuses if s.connected)
    console.print(f"\n[dim]{connected}/{len(statuses)} connected[/dim]")
