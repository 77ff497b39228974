# ABOUTME: Rich renderables for metadata candidates, single records, and provider statuses.
# ABOUTME: Shared by the lookup, search, and providers commands.

from rich.table import Table

from bookmeta.metadata.types import BookMetadata, ProviderStatus


def _dash(value: object) -> str:
    return "—" if value is None or value == "" else str(value)


def candidates_table(candidates: list[BookMetadata], title: str = "Candidates") -> Table:
    """Tabulate candidates in the order given (provider priority by default)."""
    table = Table(title=title)
    table.add_column("#", style="bold", width=3)
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("ISBN")
    table.add_column("Year", width=5)
    table.add_column("Publisher")
    table.add_column("Confidence", justify="right")
    table.add_column("Source", style="dim")

    for i, meta in enumerate(candidates, start=1):
        table.add_row(
            str(i),
            _dash(meta.title),
            meta.author or "[dim]unknown[/dim]",
            _dash(meta.isbn),
            _dash(meta.publication_year),
            _dash(meta.publisher),
            f"{meta.confidence or 0.0:.0%}",
            _dash(meta.provider_name),
        )
    return table


def metadata_detail(meta: BookMetadata) -> Table:
    """Two-column field/value view of one record, skipping absent fields."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Title", _dash(meta.title))
    if meta.subtitle:
        table.add_row("Subtitle", meta.subtitle)
    table.add_row("Author", meta.author or "unknown")
    if meta.isbn_13:
        table.add_row("ISBN-13", meta.isbn_13)
    if meta.isbn_10:
        table.add_row("ISBN-10", meta.isbn_10)
    if meta.publisher:
        table.add_row("Publisher", meta.publisher)
    if meta.publication_date:
        table.add_row("Published", meta.publication_date.isoformat())
    elif meta.publication_year:
        table.add_row("Published", str(meta.publication_year))
    if meta.page_count:
        table.add_row("Pages", str(meta.page_count))
    if meta.language:
        table.add_row("Language", meta.language)
    if meta.series_name:
        idx = meta.series_index
        series_str = f"{meta.series_name} #{idx:g}" if idx is not None else meta.series_name
        table.add_row("Series", series_str)
    if meta.subjects:
        table.add_row("Subjects", ", ".join(sorted(meta.subjects)))
    if meta.average_rating is not None:
        count = f" ({meta.ratings_count} ratings)" if meta.ratings_count else ""
        table.add_row("Rating", f"{meta.average_rating:.1f}{count}")
    if meta.best_cover:
        table.add_row("Cover", meta.best_cover)
    if meta.description:
        table.add_row("Description", meta.description)
    table.add_row("Source", _dash(meta.provider_name))
    table.add_row("Confidence", f"{meta.confidence or 0.0:.0%}")
    return table


def status_table(statuses: list[ProviderStatus]) -> Table:
    """Tabulate connectivity probe results."""
    table = Table(title="Metadata providers")
    table.add_column("ID", style="bold")
    table.add_column("Name")
    table.add_column("Enabled")
    table.add_column("Connected")
    table.add_column("Error", style="red")

    for status in statuses:
        table.add_row(
            status.provider_id,
            status.provider_name,
            "yes" if status.enabled else "[dim]no[/dim]",
            "[green]yes[/green]" if status.connected else "[red]no[/red]",
            status.error or "",
        )
    return table
