#!/usr/bin/env python3
"""
Quick start for xml-combinators.

Parses the bundled ``simple.xml`` with the document API, then builds a small
grammar of its own from the combinator engine.
"""

from pathlib import Path

from xml_combinators import ParserConfig, XMLSubsetParser, parse_file
from xml_combinators.combinators import match_literal, one_or_more, pair, right
from xml_combinators.grammar import parse_identifier, quoted_string


def document_example() -> None:
    """Parse a file and walk the resulting tree."""
    result = parse_file(Path(__file__).parent / "simple.xml")
    root = result.raise_for_failure()

    print(f"Parsed <{root.name}> with {root.element_count} elements")
    for node in root.iter():
        print(f"  {node.name}: {node.attribute_values('label')}")


def failure_example() -> None:
    """Show where a mismatched closing tag is detected."""
    parser = XMLSubsetParser(ParserConfig.strict())
    result = parser.parse("<top><bottom/></middle>")
    print(f"success={result.success} offset={result.offset} remaining={result.remaining!r}")


def combinator_example() -> None:
    """Compose a grammar for ``key="value";`` settings lines."""
    setting = pair(parse_identifier, right(match_literal("="), quoted_string()))
    settings = one_or_more(pair(setting, match_literal(";")).map(lambda pair_: pair_[0]))

    outcome = settings.parse('mode="fast";level="3";')
    print(f"settings={dict(outcome.value)} remaining={outcome.remaining!r}")


if __name__ == "__main__":
    document_example()
    failure_example()
    combinator_example()
