"""Command-line interface for parsing and validating XML-subset documents."""

from .main import main

__all__ = ["main"]
