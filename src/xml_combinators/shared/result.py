"""Diagnostic and metric types attached to parse results."""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()      # The input was rejected
    CRITICAL = auto()   # Parsing could not be attempted or was aborted


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information.

    ``offset`` is the character offset into the source text where the
    condition was detected, when one applies.
    """

    severity: DiagnosticSeverity
    message: str
    component: str
    offset: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")
        if self.offset is not None and self.offset < 0:
            raise ValueError("Diagnostic offset must be >= 0")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
            "offset": self.offset,
            "details": self.details or {},
        }


@dataclass
class PerformanceMetrics:
    """Performance metrics for a single parse."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    characters_consumed: int = 0
    elements_built: int = 0

    @property
    def characters_per_second(self) -> float:
        """Calculate characters processed per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.characters_processed * 1000.0) / self.processing_time_ms

    @property
    def consumption_ratio(self) -> float:
        """Fraction of the input consumed by the grammar."""
        if self.characters_processed == 0:
            return 0.0
        return self.characters_consumed / self.characters_processed
