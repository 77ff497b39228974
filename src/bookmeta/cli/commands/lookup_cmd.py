# ABOUTME: The `bookmeta lookup` command for ISBN lookups across every enabled provider.
# ABOUTME: Shows all candidates, the single best candidate, or one merged record.

import click
from rich.console import Console

from bookmeta.cli.options import aggregator_from_options, provider_options
from bookmeta.cli.render import candidates_table, metadata_detail

console = Console()


@click.command("lookup")
@click.argument("isbn")
@click.option(
    "--best", "mode", flag_value="best", help="Show only the highest-confidence candidate."
)
@click.option("--merge", "mode", flag_value="merge", help="Merge all candidates into one record.")
@provider_options
def lookup(
    isbn: str,
    mode: str | None,
    timeout: float | None,
    google_api_key: str | None,
    disabled: tuple[str, ...],
) -> None:
    """Look up a book by ISBN on every enabled metadata provider."""
    aggregator = aggregator_from_options(timeout, google_api_key, disabled)
    try:
        if mode == "best":
            record = aggregator.get_best_metadata_by_isbn(isbn)
        elif mode == "merge":
            record = aggregator.get_merged_metadata_by_isbn(isbn)
        else:
            candidates = aggregator.find_by_isbn_from_all_providers(isbn)
            if not candidates:
                console.print("[yellow]No metadata found.[/yellow]")
                return
            console.print(candidates_table(candidates, title=f"ISBN {isbn}"))
            console.print(f"\n[dim]{len(candidates)} candidate(s)[/dim]")
            return
    finally:
        aggregator.close()

    if record is None:
        console.print("[yellow]No metadata found.[/yellow]")
        return
    console.print(metadata_detail(record))
