"""Tests for the document-level parsing API.

Tests the module-level functions and the XMLSubsetParser class, including
trailing-input policy, input limits, file handling and statistics.
"""

import logging
import sys
import tempfile
from pathlib import Path

import pytest

from xml_combinators.api import (
    ParseError,
    ParseResult,
    XMLSubsetParser,
    parse_file,
    parse_string,
)
from xml_combinators.grammar import Element
from xml_combinators.shared import DiagnosticSeverity, ParserConfig, TrailingInputPolicy

NESTED_DOCUMENT = """
<top label="Top">
    <semi-bottom label="Bottom"/>
    <middle>
        <bottom label="Another bottom"/>
    </middle>
</top>
"""


class TestParseString:
    """Test the one-shot string parsing function."""

    def test_self_closing_element(self):
        """Test a single self-closing element."""
        result = parse_string('<div class="float"/>')

        assert isinstance(result, ParseResult)
        assert result.success is True
        assert result.element == Element("div", (("class", "float"),))
        assert result.remaining == ""
        assert result.offset == len('<div class="float"/>')
        assert result.diagnostics == []

    def test_nested_document(self):
        """Test the nested document and its metrics."""
        result = parse_string(NESTED_DOCUMENT)

        assert result.success is True
        assert result.element.name == "top"
        assert [child.name for child in result.element.children] == ["semi-bottom", "middle"]
        assert result.element.find("bottom").attribute_values("label") == ["Another bottom"]
        assert result.element_count == 4
        assert result.performance.characters_processed == len(NESTED_DOCUMENT)
        assert result.performance.characters_consumed == len(NESTED_DOCUMENT)
        assert result.performance.elements_built == 4
        assert result.processing_time_ms >= 0.0

    def test_mismatched_tags(self):
        """Test a mismatched closing tag reports its position."""
        text = "<top><bottom/></middle>"
        result = parse_string(text)

        assert result.success is False
        assert result.element is None
        assert result.remaining == "middle>"
        assert result.offset == text.index("middle")
        errors = result.get_diagnostics_by_severity(DiagnosticSeverity.ERROR)
        assert len(errors) == 1
        assert errors[0].offset == result.offset
        assert errors[0].component == "grammar"

    def test_empty_input(self):
        """Test empty input fails at offset zero."""
        result = parse_string("")
        assert result.success is False
        assert result.offset == 0
        assert result.has_errors

    def test_trailing_input_rejected_by_default(self):
        """Test leftover text fails under the default policy."""
        result = parse_string("<a/> <b/>")

        assert result.success is False
        assert result.element == Element("a")
        assert result.remaining == "<b/>"
        assert result.diagnostics[0].message == "Unconsumed input after root element"

    def test_trailing_input_ignored_when_lenient(self):
        """Test leftover text is returned under the lenient preset."""
        result = parse_string("<a/> <b/>", config=ParserConfig.lenient())

        assert result.success is True
        assert result.element == Element("a")
        assert result.remaining == "<b/>"

    def test_trailing_whitespace_is_accepted(self):
        """Test whitespace after the root element is not trailing input."""
        assert parse_string("<a/>\n\n").success is True

    def test_max_input_length(self):
        """Test the input length limit."""
        result = parse_string("<abc/>", config=ParserConfig(max_input_length=3))

        assert result.success is False
        assert result.get_diagnostics_by_severity(DiagnosticSeverity.CRITICAL)
        assert "exceeds limit" in result.diagnostics[0].message

    def test_deeply_nested_document(self):
        """Test a 200-deep document is accepted."""
        depth = 200
        result = parse_string("<a>" * depth + "</a>" * depth)

        assert result.success is True
        assert result.diagnostics == []
        assert result.element_count == depth
        assert result.element.depth == depth

    def test_information_separator_is_trailing_input(self):
        """Test U+001C after the root element counts as content."""
        result = parse_string("<a/>\x1c")
        assert result.success is False
        assert result.remaining == "\x1c"

    def test_excessive_nesting(self):
        """Test recursion exhaustion is reported, not raised."""
        depth = sys.getrecursionlimit()
        text = "<a>" * depth + "</a>" * depth
        result = parse_string(text)

        assert result.success is False
        assert "too deep" in result.diagnostics[0].message

    def test_correlation_id_propagates(self):
        """Test the correlation ID reaches results and diagnostics."""
        result = parse_string("<a>", correlation_id="req-7")
        assert result.correlation_id == "req-7"
        assert result.diagnostics[0].correlation_id == "req-7"

    def test_logs_failure(self, caplog):
        """Test failures are logged as warnings."""
        with caplog.at_level(logging.INFO, logger="xml_combinators.api.parser"):
            parse_string("<top></bottom>")

        messages = [record.getMessage() for record in caplog.records]
        assert "Starting parse operation" in messages
        assert "Parse failed" in messages
        start = next(r for r in caplog.records if r.getMessage() == "Starting parse operation")
        assert start.preview == "<top></bottom>"

    def test_start_record_skipped_below_info(self, caplog):
        """Test no start record is built when INFO is disabled."""
        with caplog.at_level(logging.WARNING, logger="xml_combinators.api.parser"):
            parse_string("<a/>")

        assert "Starting parse operation" not in [r.getMessage() for r in caplog.records]


class TestParseResult:
    """Test ParseResult helpers."""

    def test_raise_for_failure_returns_element(self):
        """Test a successful result yields its element."""
        assert parse_string("<a/>").raise_for_failure() == Element("a")

    def test_raise_for_failure_raises(self):
        """Test a failed result raises ParseError with position."""
        with pytest.raises(ParseError, match="Parse failed") as exc_info:
            parse_string("<top></bottom>").raise_for_failure()

        assert exc_info.value.remaining == "bottom>"
        assert exc_info.value.offset == 7

    def test_to_dict(self):
        """Test JSON-ready output."""
        data = parse_string("<a><b/></a>").to_dict()

        assert data["success"] is True
        assert data["root"] == "a"
        assert data["element_count"] == 2
        assert data["element"]["children"][0]["name"] == "b"
        assert data["diagnostics"] == []


class TestParseFile:
    """Test file parsing."""

    def test_parse_file_basic(self):
        """Test parsing a document from disk."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".xml", delete=False, encoding="utf-8") as f:
            f.write(NESTED_DOCUMENT)
            temp_path = f.name

        try:
            result = parse_file(temp_path)
            assert result.success is True
            assert result.element.name == "top"
            info = result.get_diagnostics_by_severity(DiagnosticSeverity.INFO)
            assert "utf-8" in info[0].message
        finally:
            Path(temp_path).unlink()

    def test_parse_file_nonexistent(self):
        """Test a missing file."""
        result = parse_file("/nonexistent/file.xml")

        assert result.success is False
        assert "not found" in result.diagnostics[0].message.lower()
        assert result.diagnostics[0].severity is DiagnosticSeverity.CRITICAL

    def test_parse_file_directory(self):
        """Test a directory is rejected."""
        with tempfile.TemporaryDirectory() as temp_dir:
            result = parse_file(Path(temp_dir))
        assert result.success is False
        assert "not a file" in result.diagnostics[0].message

    def test_parse_file_bad_encoding(self):
        """Test undecodable bytes produce a diagnostic."""
        with tempfile.NamedTemporaryFile(mode="wb", suffix=".xml", delete=False) as f:
            f.write(b'<a x="\xff"/>')
            temp_path = Path(f.name)

        try:
            result = parse_file(temp_path)
            assert result.success is False
            assert "Cannot decode" in result.diagnostics[0].message

            latin = parse_file(temp_path, config=ParserConfig(file_encoding="latin-1"))
            assert latin.success is True
            assert latin.element.attribute_values("x") == ["\xff"]
        finally:
            temp_path.unlink()


class TestXMLSubsetParser:
    """Test the reusable parser class."""

    def test_default_configuration(self):
        """Test defaults."""
        parser = XMLSubsetParser()
        assert parser.config.trailing_input is TrailingInputPolicy.REJECT
        assert parser.correlation_id is None

    def test_correlation_id_from_config(self):
        """Test the configured correlation ID is used."""
        parser = XMLSubsetParser(ParserConfig(correlation_id="cfg"))
        assert parser.correlation_id == "cfg"
        assert parser.parse("<a/>").correlation_id == "cfg"

    def test_statistics(self):
        """Test usage statistics across parses."""
        parser = XMLSubsetParser()
        parser.parse("<a/>")
        parser.parse("<a>")
        parser.parse_file("/nonexistent/file.xml")

        stats = parser.statistics
        assert stats["total_parses"] == 3
        assert stats["successful_parses"] == 1
        assert stats["success_rate"] == pytest.approx(1 / 3)

        parser.reset_statistics()
        assert parser.statistics["total_parses"] == 0
        assert parser.statistics["success_rate"] == 0.0

    def test_reconfigure(self):
        """Test a new configuration applies to later parses."""
        parser = XMLSubsetParser()
        assert parser.parse("<a/> rest").success is False

        parser.reconfigure(ParserConfig.lenient())
        result = parser.parse("<a/> rest")
        assert result.success is True
        assert result.remaining == "rest"

    def test_parse_file_matches_module_function(self):
        """Test both file entry points report the same diagnostics."""
        with tempfile.NamedTemporaryFile(mode="w", suffix=".xml", delete=False, encoding="utf-8") as f:
            f.write(NESTED_DOCUMENT)
            temp_path = Path(f.name)

        try:
            from_class = XMLSubsetParser().parse_file(temp_path)
            from_function = parse_file(temp_path)

            assert from_class.success is True
            assert [d.message for d in from_class.diagnostics] == [
                d.message for d in from_function.diagnostics
            ]
            info = from_class.get_diagnostics_by_severity(DiagnosticSeverity.INFO)
            assert info[0].message == "File read with encoding: utf-8"
            assert info[0].details == {"file_path": str(temp_path)}
        finally:
            temp_path.unlink()

    def test_parser_reuse(self):
        """Test independent documents parse with one instance."""
        parser = XMLSubsetParser()
        results = [parser.parse(doc) for doc in ["<a/>", "<b></b>", NESTED_DOCUMENT]]
        assert [r.element.name for r in results] == ["a", "b", "top"]
