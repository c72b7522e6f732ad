"""Result objects returned by the parsing facade."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from xml_combinators.grammar import Element
from xml_combinators.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    PerformanceMetrics,
)


class ParseError(Exception):
    """Raised by ``ParseResult.raise_for_failure`` for a failed parse.

    Carries the unconsumed input at the failure point and its offset in the
    source text.
    """

    def __init__(self, message: str, remaining: str = "", offset: Optional[int] = None):
        super().__init__(message)
        self.remaining = remaining
        self.offset = offset


@dataclass
class ParseResult:
    """Outcome of parsing one document through the facade.

    On success ``remaining`` holds any text after the root element. On
    failure it holds the input at the point parsing stopped, and ``element``
    is set only when the root element parsed but trailing input was rejected.
    """

    element: Optional[Element] = None
    success: bool = True
    remaining: str = ""
    source_length: int = 0

    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    performance: PerformanceMetrics = field(default_factory=PerformanceMetrics)
    correlation_id: Optional[str] = None

    @property
    def offset(self) -> int:
        """Character offset of ``remaining`` within the source text."""
        return max(0, self.source_length - len(self.remaining))

    @property
    def element_count(self) -> int:
        return self.element.element_count if self.element else 0

    @property
    def processing_time_ms(self) -> float:
        return self.performance.processing_time_ms

    @property
    def has_errors(self) -> bool:
        """Check for ERROR or CRITICAL diagnostics."""
        return any(
            diagnostic.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
            for diagnostic in self.diagnostics
        )

    def add_diagnostic(
        self,
        severity: DiagnosticSeverity,
        message: str,
        component: str,
        offset: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        """Add diagnostic entry to result."""
        self.diagnostics.append(
            DiagnosticEntry(
                severity=severity,
                message=message,
                component=component,
                offset=offset,
                details=details,
                correlation_id=self.correlation_id,
            )
        )

    def get_diagnostics_by_severity(
        self, severity: DiagnosticSeverity
    ) -> List[DiagnosticEntry]:
        return [d for d in self.diagnostics if d.severity == severity]

    def raise_for_failure(self) -> Element:
        """Return the parsed element, or raise ``ParseError`` if parsing failed."""
        if self.success and self.element is not None:
            return self.element

        errors = [
            d for d in self.diagnostics
            if d.severity in (DiagnosticSeverity.ERROR, DiagnosticSeverity.CRITICAL)
        ]
        message = errors[0].message if errors else "Parse failed"
        raise ParseError(message, self.remaining, self.offset)

    def summary(self) -> Dict[str, Any]:
        """Compact, JSON-ready description of the result."""
        return {
            "success": self.success,
            "root": self.element.name if self.element else None,
            "element_count": self.element_count,
            "offset": self.offset,
            "remaining_length": len(self.remaining),
            "processing_time_ms": self.performance.processing_time_ms,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }

    def to_dict(self) -> Dict[str, Any]:
        result = self.summary()
        result["element"] = self.element.to_dict() if self.element else None
        return result
