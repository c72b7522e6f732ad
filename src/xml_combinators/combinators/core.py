"""Parser-combinator engine.

A parser is a pure function from the remaining input to a parse outcome:
either a ``Success`` pairing the unconsumed suffix with a produced value, or a
``Failure`` carrying the input exactly as it stood when parsing could not
proceed. Combinators build new parsers out of existing ones; they never
mutate their arguments and hold no state between invocations.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
A = TypeVar("A")
B = TypeVar("B")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful parse: the unconsumed input suffix and the produced value."""

    remaining: str
    value: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Failed parse: the input slice at the point of failure."""

    remaining: str

    @property
    def success(self) -> bool:
        return False


ParseOutcome = Union[Success[T], Failure]
ParseFunction = Callable[[str], ParseOutcome]


class Parser(Generic[T]):
    """Anything that maps an input slice to a ``ParseOutcome``.

    Wraps a parse function so that composition can be written fluently,
    e.g. ``as_parser(parse_identifier).pred(lambda name: name == "top")``.
    """

    __slots__ = ("parse", "name")

    def __init__(self, parse_fn: ParseFunction, name: Optional[str] = None) -> None:
        # Bound directly so nested parsers cost one frame per level.
        self.parse: ParseFunction = parse_fn
        self.name = name or getattr(parse_fn, "__name__", "parser")

    def __call__(self, text: str) -> "ParseOutcome[T]":
        return self.parse(text)

    def map(self, map_fn: Callable[[T], U]) -> "Parser[U]":
        return map_value(self, map_fn)

    def pred(self, predicate: Callable[[T], bool]) -> "Parser[T]":
        return pred(self, predicate)

    def and_then(self, next_fn: Callable[[T], "ParserLike"]) -> "Parser[U]":
        return and_then(self, next_fn)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"


ParserLike = Union[Parser, ParseFunction]


def as_parser(parser: ParserLike) -> Parser:
    """Lift a plain parse function into a ``Parser``; parsers pass through."""
    if isinstance(parser, Parser):
        return parser
    if not callable(parser):
        raise TypeError(f"Expected a parser or parse function, got {type(parser).__name__}")
    return Parser(parser)


def match_literal(expected: str) -> Parser[None]:
    """Match ``expected`` exactly at the start of the input."""

    def literal(text: str) -> ParseOutcome[None]:
        if text.startswith(expected):
            return Success(text[len(expected):], None)
        return Failure(text)

    return Parser(literal, f"literal {expected!r}")


def pair(first: ParserLike, second: ParserLike) -> Parser[Tuple[A, B]]:
    """Run ``first`` then ``second`` on its remainder; produce both values."""
    first_parser = as_parser(first)
    second_parser = as_parser(second)

    def paired(text: str) -> ParseOutcome[Tuple[A, B]]:
        first_outcome = first_parser.parse(text)
        if isinstance(first_outcome, Failure):
            return first_outcome
        second_outcome = second_parser.parse(first_outcome.remaining)
        if isinstance(second_outcome, Failure):
            return second_outcome
        return Success(second_outcome.remaining, (first_outcome.value, second_outcome.value))

    return Parser(paired, f"pair({first_parser.name}, {second_parser.name})")


def map_value(parser: ParserLike, map_fn: Callable[[A], B]) -> Parser[B]:
    """Transform the produced value of ``parser`` on success."""
    inner = as_parser(parser)

    def mapped(text: str) -> ParseOutcome[B]:
        outcome = inner.parse(text)
        if isinstance(outcome, Failure):
            return outcome
        return Success(outcome.remaining, map_fn(outcome.value))

    return Parser(mapped, inner.name)


def left(first: ParserLike, second: ParserLike) -> Parser[A]:
    """Sequence two parsers and keep only the first value."""
    return map_value(pair(first, second), lambda values: values[0])


def right(first: ParserLike, second: ParserLike) -> Parser[B]:
    """Sequence two parsers and keep only the second value."""
    return map_value(pair(first, second), lambda values: values[1])


def pred(parser: ParserLike, predicate: Callable[[T], bool]) -> Parser[T]:
    """Require ``predicate`` to hold for the produced value.

    A rejected value fails with the input given to this parser, not the
    position the underlying parser advanced to.
    """
    inner = as_parser(parser)

    def filtered(text: str) -> ParseOutcome[T]:
        outcome = inner.parse(text)
        if isinstance(outcome, Failure):
            return outcome
        if predicate(outcome.value):
            return outcome
        return Failure(text)

    return Parser(filtered, f"pred({inner.name})")


def either(first: ParserLike, second: ParserLike) -> Parser[T]:
    """Try ``first``; on failure try ``second`` from the same input."""
    first_parser = as_parser(first)
    second_parser = as_parser(second)

    def alternative(text: str) -> ParseOutcome[T]:
        outcome = first_parser.parse(text)
        if isinstance(outcome, Success):
            return outcome
        return second_parser.parse(text)

    return Parser(alternative, f"either({first_parser.name}, {second_parser.name})")


def and_then(parser: ParserLike, next_fn: Callable[[A], ParserLike]) -> Parser[B]:
    """Feed the produced value into ``next_fn`` and run the parser it returns."""
    inner = as_parser(parser)

    def chained(text: str) -> ParseOutcome[B]:
        outcome = inner.parse(text)
        if isinstance(outcome, Failure):
            return outcome
        return as_parser(next_fn(outcome.value)).parse(outcome.remaining)

    return Parser(chained, f"and_then({inner.name})")


def _repeat(parser: Parser, text: str, values: List[Any]) -> str:
    # An iteration that consumes nothing would repeat forever; keep its value and stop.
    while True:
        outcome = parser.parse(text)
        if isinstance(outcome, Failure):
            return text
        values.append(outcome.value)
        if len(outcome.remaining) >= len(text):
            return outcome.remaining
        text = outcome.remaining


def one_or_more(parser: ParserLike) -> Parser[List[T]]:
    """Match ``parser`` greedily, at least once."""
    inner = as_parser(parser)

    def repeated(text: str) -> ParseOutcome[List[T]]:
        first = inner.parse(text)
        if isinstance(first, Failure):
            return first
        values: List[T] = [first.value]
        if len(first.remaining) >= len(text):
            return Success(first.remaining, values)
        remaining = _repeat(inner, first.remaining, values)
        return Success(remaining, values)

    return Parser(repeated, f"one_or_more({inner.name})")


def zero_or_more(parser: ParserLike) -> Parser[List[T]]:
    """Match ``parser`` greedily, any number of times including none."""
    inner = as_parser(parser)

    def repeated(text: str) -> ParseOutcome[List[T]]:
        values: List[T] = []
        remaining = _repeat(inner, text, values)
        return Success(remaining, values)

    return Parser(repeated, f"zero_or_more({inner.name})")


def lazy(factory: Callable[[], ParserLike]) -> Parser[T]:
    """Defer building a parser until it is first run, then reuse it.

    Needed for self-referential rules, where constructing the parser eagerly
    would recurse without end.
    """
    built: List[Parser] = []

    def deferred(text: str) -> ParseOutcome[T]:
        if not built:
            built.append(as_parser(factory()))
        return built[0].parse(text)

    return Parser(deferred, f"lazy({getattr(factory, '__name__', 'parser')})")
