"""Shared utilities for the XML-subset parser.

This module provides configuration objects, diagnostic and metric types, and
logging helpers used by the parsing facade and the command-line driver.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    ParserConfig,
    TrailingInputPolicy,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "PerformanceMetrics",
    "ConfigError",
    "ConfigValidationError",
    "ParserConfig",
    "TrailingInputPolicy",
    "CorrelationLogger",
    "get_logger",
]
