"""Grammar for a small XML subset, written with the combinator engine.

Supported: nested elements, self-closing tags and double-quoted attribute
values. Not supported: text content, comments, namespaces, entities, CDATA,
processing instructions and DOCTYPE declarations.

Primitive productions are plain parse functions; composed productions are
zero-argument factories returning ``Parser`` values. ``element`` is the entry
point.
"""

from dataclasses import replace
from typing import List, Tuple

from xml_combinators.combinators import (
    Failure,
    ParseFunction,
    ParseOutcome,
    Parser,
    ParserLike,
    Success,
    as_parser,
    left,
    match_literal,
    one_or_more,
    pair,
    pred,
    right,
    zero_or_more,
)
from xml_combinators.grammar.element import Attribute, Element


def any_char(text: str) -> ParseOutcome[str]:
    """Consume exactly one character."""
    if not text:
        return Failure(text)
    return Success(text[1:], text[0])


def parse_identifier(text: str) -> ParseOutcome[str]:
    """An alphabetic character followed by alphanumerics or hyphens."""
    if not text or not text[0].isalpha():
        return Failure(text)

    end = 1
    while end < len(text) and (text[end].isalnum() or text[end] == "-"):
        end += 1

    return Success(text[end:], text[:end])


_INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(char: str) -> bool:
    """Unicode ``White_Space``; ``str.isspace`` also admits U+001C..U+001F."""
    return char.isspace() and char not in _INFORMATION_SEPARATORS


def whitespace_char() -> Parser[str]:
    return pred(any_char, is_whitespace)


def whitespace_wrap(parser: ParserLike) -> Parser:
    """Allow and discard whitespace runs around ``parser``."""
    return right(
        zero_or_more(whitespace_char()),
        left(parser, zero_or_more(whitespace_char())),
    )


def quoted_string() -> Parser[str]:
    """A double-quoted string; produces the text between the quotes."""
    return right(
        match_literal('"'),
        left(
            zero_or_more(pred(any_char, lambda char: char != '"')),
            match_literal('"'),
        ),
    ).map("".join)


def attribute_pair() -> Parser[Attribute]:
    return pair(parse_identifier, right(match_literal("="), quoted_string()))


def attributes() -> Parser[List[Attribute]]:
    # Each attribute must be preceded by at least one whitespace character.
    return zero_or_more(right(one_or_more(whitespace_char()), attribute_pair()))


def element_start() -> Parser[Tuple[str, List[Attribute]]]:
    return right(match_literal("<"), pair(parse_identifier, attributes()))


def _shell(start: Tuple[str, List[Attribute]]) -> Element:
    name, attribute_list = start
    return Element(name, tuple(attribute_list))


def single_element() -> Parser[Element]:
    """A self-closing tag such as ``<div class="float"/>``."""
    return left(element_start(), whitespace_wrap(match_literal("/>"))).map(_shell)


def open_element() -> Parser[Element]:
    """An opening tag; the element's children are filled in later."""
    return left(element_start(), match_literal(">")).map(_shell)


def close_element(expected_name: str) -> Parser[str]:
    """A closing tag whose name must equal ``expected_name``."""
    return left(
        right(
            match_literal("</"),
            as_parser(parse_identifier).pred(lambda name: name == expected_name),
        ),
        match_literal(">"),
    )


def _element_grammar() -> Tuple[ParseFunction, ParseFunction]:
    # The two recursive rules share one set of sub-parsers and call each other
    # directly, so every nesting level costs two stack frames.
    opening = open_element()
    self_closing = single_element()
    spaces = zero_or_more(whitespace_char())

    def parse_parent(text: str) -> ParseOutcome[Element]:
        opened = opening.parse(text)
        if isinstance(opened, Failure):
            return opened

        nested: List[Element] = []
        remaining = opened.remaining
        while True:
            child = parse_element(remaining)
            if isinstance(child, Failure):
                break
            nested.append(child.value)
            remaining = child.remaining

        closed = close_element(opened.value.name).parse(remaining)
        if isinstance(closed, Failure):
            return closed
        return Success(closed.remaining, replace(opened.value, children=tuple(nested)))

    def parse_element(text: str) -> ParseOutcome[Element]:
        start = spaces.parse(text).remaining
        outcome = self_closing.parse(start)
        if isinstance(outcome, Failure):
            outcome = parse_parent(start)
            if isinstance(outcome, Failure):
                return outcome
        return Success(spaces.parse(outcome.remaining).remaining, outcome.value)

    return parse_element, parse_parent


def parent_element() -> Parser[Element]:
    """An opening tag, nested elements and the matching closing tag."""
    _, parse_parent = _element_grammar()
    return Parser(parse_parent, "parent_element")


def element() -> Parser[Element]:
    """Entry point: one element, optionally surrounded by whitespace.

    Equivalent to ``whitespace_wrap(either(single_element(), parent_element()))``
    with the recursion written out by hand.
    """
    parse_element, _ = _element_grammar()
    return Parser(parse_element, "element")
