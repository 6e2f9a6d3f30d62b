"""Typer app configuration and logging setup."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.logging import RichHandler

from .console import console

load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

app = typer.Typer(
    name="autoblog",
    help="AI blog post generator with stock photos and video embeds",
    add_completion=False,
)


def register_commands() -> None:
    """Register all commands."""
    from .commands import batch, generate, show_config

    app.command(name="generate")(generate)
    app.command(name="batch")(batch)
    app.command(name="config")(show_config)


def _file_handler(path: Path) -> logging.FileHandler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI.

    - Suppresses console output from libraries
    - Writes model calls to logs/ai_calls.log
    - Writes pipeline steps to logs/pipeline.log
    - With ``verbose``, mirrors pipeline steps to the console
    """
    log_dir = Path(__file__).parent.parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(logging.CRITICAL)

    for logger_name in ["httpx", "httpcore", "urllib3", "asyncio"]:
        logger = logging.getLogger(logger_name)
        logger.setLevel(logging.WARNING)
        logger.propagate = False

    ai_calls_logger = logging.getLogger("ai_calls")
    ai_calls_logger.setLevel(logging.DEBUG)
    ai_calls_logger.propagate = False
    ai_calls_logger.handlers = [_file_handler(log_dir / "ai_calls.log")]

    pipeline_logger = logging.getLogger("content.pipeline")
    pipeline_logger.setLevel(logging.DEBUG)
    pipeline_logger.propagate = False
    pipeline_logger.handlers = [_file_handler(log_dir / "pipeline.log")]

    if verbose:
        rich_handler = RichHandler(console=console, show_path=False, markup=False)
        rich_handler.setLevel(logging.INFO)
        pipeline_logger.addHandler(rich_handler)


setup_logging()

register_commands()


def main() -> None:
    """CLI entry point."""
    app()
