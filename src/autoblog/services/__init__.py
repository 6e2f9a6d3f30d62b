"""Services module for cross-cutting concerns.

- BackgroundTasks: Runs fire-and-forget side effects off the request path
"""

from .background import BackgroundTasks

__all__ = [
    "BackgroundTasks",
]
