"""Document-level parsing API for the XML subset.

The grammar itself only reports ``Success``/``Failure`` outcomes. This module
wraps it for callers that want a complete answer for a whole document:
trailing-input policy, input limits, file handling, diagnostics, timing and
logging. None of these functions raise for malformed input.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

from xml_combinators.combinators import Failure, Parser
from xml_combinators.grammar import element
from xml_combinators.shared import (
    DiagnosticSeverity,
    ParserConfig,
    TrailingInputPolicy,
    get_logger,
)

from .result import ParseResult

MS_PER_SECOND = 1000


def _preview(text: str, length: int) -> str:
    return text[:length] + "..." if len(text) > length else text


def _run_grammar(
    grammar: Parser,
    text: str,
    config: ParserConfig,
    correlation_id: Optional[str],
) -> ParseResult:
    """Apply ``grammar`` to ``text`` and translate the outcome into a ParseResult."""
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse_text")
    result = ParseResult(source_length=len(text), correlation_id=correlation_id)
    result.performance.characters_processed = len(text)

    if logger.is_enabled_for(logging.INFO):
        logger.info(
            "Starting parse operation",
            extra={
                "content_length": len(text),
                "preview": _preview(text, config.preview_length),
            }
        )

    if config.max_input_length is not None and len(text) > config.max_input_length:
        result.success = False
        result.remaining = text
        result.add_diagnostic(
            DiagnosticSeverity.CRITICAL,
            f"Input length {len(text)} exceeds limit of {config.max_input_length}",
            "api_parser",
            offset=0,
        )
        logger.warning("Input rejected by length limit", extra={"content_length": len(text)})
        return _finish(result, start_time)

    try:
        outcome = grammar.parse(text)
    except RecursionError:
        result.success = False
        result.remaining = text
        result.add_diagnostic(
            DiagnosticSeverity.CRITICAL,
            "Element nesting is too deep to parse",
            "api_parser",
            offset=0,
        )
        logger.error("Parse aborted by recursion limit", exc_info=False)
        return _finish(result, start_time)

    result.remaining = outcome.remaining
    if isinstance(outcome, Failure):
        result.success = False
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            "Parse failed",
            "grammar",
            offset=result.offset,
            details={"remaining": _preview(outcome.remaining, config.preview_length)},
        )
        logger.warning("Parse failed", extra={"offset": result.offset})
        return _finish(result, start_time)

    result.element = outcome.value
    result.performance.elements_built = result.element_count

    # element() consumes trailing whitespace, so anything left is content.
    if outcome.remaining and config.trailing_input is TrailingInputPolicy.REJECT:
        result.success = False
        result.add_diagnostic(
            DiagnosticSeverity.ERROR,
            "Unconsumed input after root element",
            "api_parser",
            offset=result.offset,
            details={"remaining": _preview(outcome.remaining, config.preview_length)},
        )
        logger.warning("Trailing input rejected", extra={"offset": result.offset})

    return _finish(result, start_time)


def _finish(result: ParseResult, start_time: float) -> ParseResult:
    processing_time = (time.time() - start_time) * MS_PER_SECOND
    result.performance.processing_time_ms = processing_time
    result.performance.characters_consumed = result.offset

    logger = get_logger(__name__, result.correlation_id, "parse_text")
    logger.info(
        "Parse operation completed",
        extra={
            "success": result.success,
            "element_count": result.element_count,
            "processing_time_ms": processing_time,
        }
    )
    return result


def _create_error_result(
    error_message: str,
    correlation_id: Optional[str],
    details: Optional[Dict[str, Any]] = None,
) -> ParseResult:
    """Create a failed result for problems that prevent parsing altogether."""
    result = ParseResult(success=False, correlation_id=correlation_id)
    result.add_diagnostic(
        DiagnosticSeverity.CRITICAL,
        error_message,
        "api_parser",
        details=details,
    )
    return result


def _read_file(
    path_obj: Path,
    config: ParserConfig,
    correlation_id: Optional[str],
) -> Union[str, ParseResult]:
    """Read a document, or return an error result explaining why it cannot be read."""
    logger = get_logger(__name__, correlation_id, "parse_file")

    if not path_obj.exists():
        return _create_error_result(f"File not found: {path_obj}", correlation_id)
    if not path_obj.is_file():
        return _create_error_result(f"Path is not a file: {path_obj}", correlation_id)

    try:
        return path_obj.read_text(encoding=config.file_encoding)
    except UnicodeDecodeError as e:
        logger.error(
            "File could not be decoded",
            extra={"file_path": str(path_obj), "encoding": config.file_encoding},
            exc_info=False,
        )
        return _create_error_result(
            f"Cannot decode {path_obj} as {config.file_encoding}: {e.reason}",
            correlation_id,
            details={"file_path": str(path_obj), "encoding": config.file_encoding},
        )
    except OSError as e:
        logger.error("File could not be read", extra={"file_path": str(path_obj)})
        return _create_error_result(
            f"Cannot read {path_obj}: {e.strerror or e}",
            correlation_id,
            details={"file_path": str(path_obj)},
        )


def _parse_document_file(
    grammar: Parser,
    file_path: Union[str, Path],
    config: ParserConfig,
    correlation_id: Optional[str],
) -> ParseResult:
    path_obj = Path(file_path)
    content = _read_file(path_obj, config, correlation_id)
    if isinstance(content, ParseResult):
        return content

    result = _run_grammar(grammar, content, config, correlation_id)
    result.add_diagnostic(
        DiagnosticSeverity.INFO,
        f"File read with encoding: {config.file_encoding}",
        "file_parser",
        details={"file_path": str(path_obj)},
    )
    return result


def parse_string(
    xml_string: str,
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Parse a document held in a string.

    Args:
        xml_string: Document text
        config: Parser configuration (defaults to ``ParserConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        ParseResult with the element tree or the failure position

    Examples:
        >>> result = parse_string('<div class="float"/>')
        >>> result.element.attributes
        (('class', 'float'),)

        >>> result = parse_string('<top><bottom/></middle>')
        >>> result.success, result.remaining
        (False, 'middle>')
    """
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    return _run_grammar(element(), xml_string, config, correlation_id)


def parse_file(
    file_path: Union[str, Path],
    config: Optional[ParserConfig] = None,
    correlation_id: Optional[str] = None,
) -> ParseResult:
    """Read a file and parse its contents.

    Missing, unreadable and undecodable files produce a failed result with a
    CRITICAL diagnostic instead of raising.
    """
    config = config or ParserConfig()
    correlation_id = correlation_id or config.correlation_id
    return _parse_document_file(element(), file_path, config, correlation_id)


class XMLSubsetParser:
    """Reusable parser that keeps its grammar, configuration and statistics.

    Examples:
        >>> parser = XMLSubsetParser(ParserConfig.lenient())
        >>> result = parser.parse('<a/> tail')
        >>> result.success, result.remaining
        (True, 'tail')
        >>> parser.statistics["total_parses"]
        1
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        self.config = config or ParserConfig()
        self.correlation_id = correlation_id or self.config.correlation_id
        self.logger = get_logger(__name__, self.correlation_id, "xml_subset_parser")

        self._grammar = element()

        self._parse_count = 0
        self._successful_parses = 0
        self._total_processing_time = 0.0

        self.logger.debug(
            "XMLSubsetParser initialized",
            extra={"config_name": self.config.name}
        )

    def parse(self, xml_string: str) -> ParseResult:
        """Parse a document string with this parser's configuration."""
        result = _run_grammar(self._grammar, xml_string, self.config, self.correlation_id)
        self._record(result)
        return result

    def parse_file(self, file_path: Union[str, Path]) -> ParseResult:
        """Read and parse a file with this parser's configuration."""
        result = _parse_document_file(
            self._grammar, file_path, self.config, self.correlation_id
        )
        self._record(result)
        return result

    def _record(self, result: ParseResult) -> None:
        self._parse_count += 1
        self._total_processing_time += result.performance.processing_time_ms
        if result.success:
            self._successful_parses += 1

    def reconfigure(self, config: ParserConfig) -> None:
        """Replace the configuration used for subsequent parses."""
        self.config = config
        self.logger.info("Parser reconfigured", extra={"config_name": config.name})

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get parser usage statistics."""
        return {
            "total_parses": self._parse_count,
            "successful_parses": self._successful_parses,
            "success_rate": (
                self._successful_parses / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "total_processing_time_ms": self._total_processing_time,
            "average_processing_time_ms": (
                self._total_processing_time / self._parse_count
                if self._parse_count > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        self._parse_count = 0
        self._total_processing_time = 0.0
        self._successful_parses = 0
