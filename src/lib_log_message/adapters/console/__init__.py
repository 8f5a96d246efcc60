"""Console adapters."""

from .rich_console import RichConsoleAdapter

__all__ = ["RichConsoleAdapter"]
