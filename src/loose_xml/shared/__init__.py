"""Shared utilities for loose-xml.

This module provides the configuration objects, result types and logging
helpers used across the tokenization, tree and API layers.
"""

from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    ParseMetrics,
)
from .config import (
    ConfigError,
    ConfigValidationError,
    FormatConfig,
    LoggingConfig,
    LooseXMLConfig,
    MapStrategy,
    ParserConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)

__all__ = [
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "ParseMetrics",
    "ConfigError",
    "ConfigValidationError",
    "FormatConfig",
    "LoggingConfig",
    "LooseXMLConfig",
    "MapStrategy",
    "ParserConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
]
