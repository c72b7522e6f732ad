"""Combinator engine for building parsers out of smaller parsers.

Key Components:
    Parser: Capability wrapper around a parse function
    Success / Failure: The two parse outcomes
    match_literal: Primitive literal matcher
    pair, left, right, map_value, pred, either, and_then: Composition operators
    one_or_more, zero_or_more: Greedy repetition
    lazy: Deferred construction for recursive rules
"""

from .core import (
    Failure,
    ParseFunction,
    ParseOutcome,
    Parser,
    ParserLike,
    Success,
    and_then,
    as_parser,
    either,
    lazy,
    left,
    map_value,
    match_literal,
    one_or_more,
    pair,
    pred,
    right,
    zero_or_more,
)

__all__ = [
    "Failure",
    "ParseFunction",
    "ParseOutcome",
    "Parser",
    "ParserLike",
    "Success",
    "and_then",
    "as_parser",
    "either",
    "lazy",
    "left",
    "map_value",
    "match_literal",
    "one_or_more",
    "pair",
    "pred",
    "right",
    "zero_or_more",
]
