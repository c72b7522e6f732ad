"""XML-subset grammar built from the combinator engine.

Key Components:
    Element: Immutable element tree node
    element: Entry-point parser for one (whitespace-wrapped) element
"""

from .element import Attribute, Element
from .rules import (
    any_char,
    attribute_pair,
    attributes,
    close_element,
    element,
    element_start,
    is_whitespace,
    open_element,
    parent_element,
    parse_identifier,
    quoted_string,
    single_element,
    whitespace_char,
    whitespace_wrap,
)

__all__ = [
    "Attribute",
    "Element",
    "any_char",
    "attribute_pair",
    "attributes",
    "close_element",
    "element",
    "element_start",
    "is_whitespace",
    "open_element",
    "parent_element",
    "parse_identifier",
    "quoted_string",
    "single_element",
    "whitespace_char",
    "whitespace_wrap",
]
