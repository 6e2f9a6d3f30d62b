"""CLI commands - thin wrappers orchestrating options, display, and service."""

from __future__ import annotations

import asyncio

import typer

from ..content.models import GenerationOptions
from ..exceptions import ConfigError
from ..providers.config import load_provider_config
from .app import setup_logging
from .console import console, print_error
from .display import (
    show_batch_result,
    show_generation_config,
    show_generation_error,
    show_generation_result,
    show_provider_status,
)
from .service import BlogGeneratorService


def generate(
    topic: str = typer.Argument(..., help="Topic for the post"),
    deep_think: bool = typer.Option(False, "--deep-think", help="Use the deep model"),
    no_discovery: bool = typer.Option(False, "--no-discovery", help="Skip discovery context and video"),
    skip_media: bool = typer.Option(False, "--skip-media", help="Skip video scraping"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show pipeline logs"),
) -> None:
    """Generate a single blog post."""
    if verbose:
        setup_logging(verbose=True)

    config = load_provider_config()
    if not config.gemini.get_api_key():
        print_error(f"{config.gemini.api_key_env} is not set in environment variables")
        raise typer.Exit(1)

    options = GenerationOptions(
        use_deep_think=deep_think,
        use_discovery=not no_discovery,
        skip_media_scraping=skip_media,
    )
    if not as_json:
        show_generation_config(console, options, topic)

    service = BlogGeneratorService(config)
    result = asyncio.run(service.generate(topic, options))

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    elif result.success:
        show_generation_result(console, result)
    else:
        show_generation_error(console, result.error or "Unknown error")

    if not result.success:
        raise typer.Exit(1)


def batch(
    count: int = typer.Option(1, "--count", "-n", min=0, envvar="DAILY_POST_COUNT", help="Number of posts"),
    deep_think: bool = typer.Option(False, "--deep-think", help="Use the deep model"),
    no_discovery: bool = typer.Option(False, "--no-discovery", help="Use default topics only"),
    skip_media: bool = typer.Option(False, "--skip-media", help="Skip video scraping"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
) -> None:
    """Generate several posts from discovered or default topics.

    Per-post failures are reported but do not change the exit code.
    """
    options = GenerationOptions(
        use_deep_think=deep_think,
        use_discovery=not no_discovery,
        skip_media_scraping=skip_media,
        count=count,
    )
    if not as_json:
        show_generation_config(console, options)

    service = BlogGeneratorService()
    try:
        result = asyncio.run(service.generate_batch(options))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
    else:
        show_batch_result(console, result)


def show_config() -> None:
    """Show which providers are configured."""
    config = load_provider_config()
    show_provider_status(console, config.configured_providers())
