"""XML Combinators.

A small parser-combinator engine and a grammar, built with it, for a strict
XML subset: nested and self-closing elements with double-quoted attribute
values, and nothing else.

Progressive API Disclosure:
- Level 1: Simple functions - parse_string(), parse_file()
- Level 2: Configured parser - XMLSubsetParser class
- Level 3: Grammar productions - xml_combinators.grammar
- Level 4: Combinator engine - xml_combinators.combinators
"""

__version__ = "0.1.0"
__author__ = "XML Combinators Team"

from .api import ParseError, ParseResult, XMLSubsetParser, parse_file, parse_string
from .grammar import Element
from .shared.config import ParserConfig, TrailingInputPolicy

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse_string",
    "parse_file",

    # Level 2: Configured parser
    "XMLSubsetParser",

    # Result objects and data structures
    "Element",
    "ParseError",
    "ParseResult",

    # Configuration
    "ParserConfig",
    "TrailingInputPolicy",
]
