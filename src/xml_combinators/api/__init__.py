"""Document-level parsing API.

Key Components:
    parse_string / parse_file: One-shot parsing functions
    XMLSubsetParser: Reusable, configured parser with usage statistics
    ParseResult: Element tree, failure position, diagnostics and metrics
    ParseError: Exception form of a failed ParseResult
"""

from .parser import XMLSubsetParser, parse_file, parse_string
from .result import ParseError, ParseResult

__all__ = [
    "ParseError",
    "ParseResult",
    "XMLSubsetParser",
    "parse_file",
    "parse_string",
]
