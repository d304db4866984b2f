"""Result objects and diagnostic types for loose-xml parsing.

This module defines the diagnostic records used to report recovered parse
errors and the metrics collected for every parse run.
"""

import time
from dataclasses import asdict, dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """How serious a reported problem is."""

    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()      # Syntax errors that were recovered
    CRITICAL = auto()   # Syntax errors that stopped a strict parse


@dataclass
class DiagnosticEntry:
    """A reportable problem, decoupled from the exception that caused it."""

    severity: DiagnosticSeverity
    message: str
    component: str
    position: Optional[Dict[str, int]] = None
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject entries that would print as blank lines."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        """Convert the entry to a JSON-friendly dictionary."""
        result: Dict[str, Any] = {
            "severity": self.severity.name,
            "message": self.message,
            "component": self.component,
        }
        if self.position is not None:
            result["position"] = dict(self.position)
        if self.details:
            result["details"] = dict(self.details)
        return result


@dataclass
class ParseMetrics:
    """Performance metrics for a single parse run."""

    processing_time_ms: float = 0.0
    characters_processed: int = 0
    tokens_generated: int = 0
    elements_built: int = 0
    max_depth: int = 0
    error_count: int = 0

    @property
    def characters_per_second(self) -> float:
        """Parsing throughput in source characters."""
        return self._rate(self.characters_processed)

    @property
    def tokens_per_second(self) -> float:
        """Parsing throughput in tokens, EOF excluded."""
        return self._rate(self.tokens_generated)

    def _rate(self, count: int) -> float:
        # Sub-resolution timings report no rate at all
        if self.processing_time_ms <= 0:
            return 0.0
        return count * 1000.0 / self.processing_time_ms

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict of the counters, suitable as log ``extra``."""
        return asdict(self)
