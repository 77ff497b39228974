# ABOUTME: The `bookmeta search` command for title/author searches across enabled providers.
# ABOUTME: Lists candidates grouped by provider priority, or re-ranked by relevance with --rank.

import click
from rich.console import Console

from bookmeta.cli.options import aggregator_from_options, provider_options
from bookmeta.cli.render import candidates_table
from bookmeta.metadata.scoring import rank_by_relevance

console = Console()


@click.command("search")
@click.argument("title")
@click.option("-a", "--author", default=None, help="Narrow the search to this author.")
@click.option(
    "--rank",
    is_flag=True,
    default=False,
    help="Sort by relevance to the query instead of provider priority.",
)
@click.option("-n", "--limit", type=click.IntRange(min=1), default=None, help="Show at most N.")
@provider_options
def search(
    title: str,
    author: str | None,
    rank: bool,
    limit: int | None,
    timeout: float | None,
    google_api_key: str | None,
    disabled: tuple[str, ...],
) -> None:
    """Search every enabled metadata provider by title and optional author."""
    aggregator = aggregator_from_options(timeout, google_api_key, disabled)

    try:
        results = aggregator.search_by_title_from_all_providers(title, author)
    finally:
        aggregator.close()
    if not results:
        console.print("[yellow]No results found.[/yellow]")
        return

    if rank:
        results = rank_by_relevance(results, title, author)
    total = len(results)
    if limit is not None:
        results = results[:limit]

    console.print(candidates_table(results, title=f"Search: {title}"))
    console.print(f"\n[dim]{total} result(s)[/dim]")
