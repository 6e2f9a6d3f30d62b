"""Display functions for CLI commands - pure functions for Rich output."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..content.models import BatchResult, GenerationOptions, GenerationResult


def _on_off(flag: bool) -> str:
    return "[green]Enabled[/green]" if flag else "[dim]Disabled[/dim]"


def show_generation_config(console: Console, options: GenerationOptions, topic: str | None = None) -> None:
    """Display generation configuration panel."""
    header = (
        f"Generating blog post about [cyan]{escape(topic)}[/cyan]\n"
        if topic
        else f"Generating [cyan]{options.count}[/cyan] blog post(s)\n"
    )
    console.print(Panel(
        header
        + f"Deep think: {_on_off(options.use_deep_think)}\n"
        + f"Discovery: {_on_off(options.use_discovery)}\n"
        + f"Video scraping: {_on_off(not options.skip_media_scraping)}",
        title="Blog Post Generation",
    ))


def show_generation_result(console: Console, result: GenerationResult) -> None:
    """Display a generated post summary."""
    post = result.post
    if post is None:
        return

    table = Table(show_header=False, box=None)
    table.add_column("Field", style="dim")
    table.add_column("Value")
    table.add_row("Title", escape(post.title))
    table.add_row("Slug", escape(result.slug or ""))
    table.add_row("Excerpt", escape(post.excerpt))
    table.add_row("Tags", escape(", ".join(post.tags)))
    table.add_row("Image", escape(f"{post.image_url} ({post.image_source.value})"))
    table.add_row("Model", escape(post.model or ""))
    if post.discovery_source_url:
        table.add_row("Source", escape(post.discovery_source_url))
    table.add_row("Length", f"{len(post.content)} chars")

    console.print(Panel(table, title="[green]Post generated[/green]"))


def show_generation_error(console: Console, error: str) -> None:
    console.print(Panel(f"[red]{escape(error)}[/red]", title="[red]Generation failed[/red]"))


def show_batch_result(console: Console, result: BatchResult) -> None:
    """Display per-topic outcomes and totals."""
    table = Table(title="Batch Results")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title")
    table.add_column("Slug", style="cyan")
    table.add_column("Status")

    for index, outcome in enumerate(result.posts, start=1):
        status = "[green]OK[/green]" if outcome.success else f"[red]{escape(outcome.error or '')}[/red]"
        table.add_row(str(index), escape(outcome.title), escape(outcome.slug), status)

    console.print(table)
    console.print(
        f"[green]{result.success} succeeded[/green], "
        f"[{'red' if result.failed else 'dim'}]{result.failed} failed[/]"
    )


def show_provider_status(console: Console, providers: dict[str, bool]) -> None:
    """Display which third-party services have credentials."""
    table = Table(title="Providers")
    table.add_column("Provider", style="cyan")
    table.add_column("Status")

    for name, configured in providers.items():
        table.add_row(escape(name), "[green]configured[/green]" if configured else "[yellow]missing[/yellow]")

    console.print(table)
