"""Command-line interface for the blog generator.

- app.py: typer app, logging setup, command registration
- commands.py: thin typer commands
- service.py: async wiring of the generator for one CLI invocation
- display.py: rich output
- console.py: shared console and print helpers

Usage:
    autoblog --help
    autoblog generate "AI in healthcare"
    autoblog batch --count 3
"""

from .app import app, main

__all__ = ["app", "main"]
