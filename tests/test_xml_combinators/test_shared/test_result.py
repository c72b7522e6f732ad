"""Tests for diagnostic entries, metrics and correlation logging."""

import logging

import pytest

from xml_combinators.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
    get_logger,
)


class TestDiagnosticEntry:
    """Test diagnostic entry validation and conversion."""

    def test_valid_entry(self):
        """Test creating a diagnostic entry."""
        entry = DiagnosticEntry(DiagnosticSeverity.ERROR, "Parse failed", "grammar", offset=3)
        assert entry.offset == 3
        assert entry.timestamp > 0
        assert entry.to_dict() == {
            "severity": "ERROR",
            "message": "Parse failed",
            "component": "grammar",
            "offset": 3,
            "details": {},
        }

    def test_invalid_entries(self):
        """Test validation failures."""
        with pytest.raises(ValueError, match="message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "", "grammar")
        with pytest.raises(ValueError, match="component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "")
        with pytest.raises(ValueError, match="offset must be >= 0"):
            DiagnosticEntry(DiagnosticSeverity.INFO, "msg", "grammar", offset=-1)


class TestPerformanceMetrics:
    """Test derived metric properties."""

    def test_rates(self):
        """Test throughput and consumption ratio."""
        metrics = PerformanceMetrics(
            processing_time_ms=2.0, characters_processed=100, characters_consumed=25
        )
        assert metrics.characters_per_second == 50000.0
        assert metrics.consumption_ratio == 0.25

    def test_zero_division_guards(self):
        """Test empty metrics produce zero rates."""
        metrics = PerformanceMetrics()
        assert metrics.characters_per_second == 0.0
        assert metrics.consumption_ratio == 0.0


class TestCorrelationLogger:
    """Test correlation-aware logging."""

    def test_records_carry_component_and_correlation_id(self, caplog):
        """Test extra fields are attached to log records."""
        logger = get_logger("xml_combinators.test", "req-1", "unit")
        with caplog.at_level(logging.INFO, logger="xml_combinators.test"):
            logger.info("hello", extra={"size": 3})

        record = caplog.records[-1]
        assert record.getMessage() == "hello"
        assert record.component == "unit"
        assert record.correlation_id == "req-1"
        assert record.size == 3

    def test_default_component_from_name(self):
        """Test component defaults to the last name segment."""
        logger = get_logger("xml_combinators.api.parser")
        assert logger.component == "parser"
        assert logger.correlation_id is None

    def test_is_enabled_for(self):
        """Test level checks delegate to the wrapped logger."""
        logger = get_logger("xml_combinators.level-check")
        logger.logger.setLevel(logging.ERROR)
        assert not logger.is_enabled_for(logging.DEBUG)
        assert logger.is_enabled_for(logging.ERROR)
