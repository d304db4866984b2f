"""Tests for diagnostic entries and parse metrics."""

import pytest

from loose_xml.shared import DiagnosticEntry, DiagnosticSeverity, ParseMetrics


class TestDiagnosticEntry:
    """Test DiagnosticEntry validation and serialization."""

    def test_creation(self) -> None:
        entry = DiagnosticEntry(
            severity=DiagnosticSeverity.WARNING,
            message="something odd",
            component="tree_builder",
        )

        assert entry.position is None
        assert entry.details is None
        assert entry.timestamp > 0

    def test_empty_message_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Diagnostic message cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "", "tree_builder")

    def test_empty_component_raises_error(self) -> None:
        with pytest.raises(ValueError, match="Diagnostic component cannot be empty"):
            DiagnosticEntry(DiagnosticSeverity.ERROR, "message", "")

    def test_to_dict_minimal(self) -> None:
        entry = DiagnosticEntry(DiagnosticSeverity.INFO, "note", "cli")

        assert entry.to_dict() == {
            "severity": "INFO",
            "message": "note",
            "component": "cli",
        }

    def test_to_dict_with_position_and_details(self) -> None:
        entry = DiagnosticEntry(
            DiagnosticSeverity.ERROR,
            "bad",
            "tree_builder",
            position={"line": 1, "column": 2, "offset": 1},
            details={"kind": "MissingElementName"},
        )

        data = entry.to_dict()
        assert data["position"] == {"line": 1, "column": 2, "offset": 1}
        assert data["details"] == {"kind": "MissingElementName"}


class TestParseMetrics:
    """Test ParseMetrics derived values."""

    def test_defaults(self) -> None:
        metrics = ParseMetrics()

        assert metrics.characters_per_second == 0.0
        assert metrics.tokens_per_second == 0.0
        assert metrics.error_count == 0

    def test_rates(self) -> None:
        metrics = ParseMetrics(
            processing_time_ms=500.0, characters_processed=1000, tokens_generated=200
        )

        assert metrics.characters_per_second == 2000.0
        assert metrics.tokens_per_second == 400.0

    def test_to_dict(self) -> None:
        metrics = ParseMetrics(elements_built=3, max_depth=2)

        assert metrics.to_dict() == {
            "processing_time_ms": 0.0,
            "characters_processed": 0,
            "tokens_generated": 0,
            "elements_built": 3,
            "max_depth": 2,
            "error_count": 0,
        }
