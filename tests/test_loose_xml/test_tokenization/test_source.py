"""Tests for zero-copy source views."""

import pytest

from loose_xml.tokenization import SourceView


class TestSourceView:
    """Test SourceView behaves like the text it covers."""

    def test_str_returns_covered_text(self) -> None:
        view = SourceView("<Entity/>", 1, 7)

        assert str(view) == "Entity"
        assert len(view) == 6
        assert bool(view)

    def test_empty_view_is_falsy(self) -> None:
        view = SourceView("abc", 1, 1)

        assert not view
        assert str(view) == ""

    def test_invalid_range_raises_error(self) -> None:
        """Test views must stay inside the source."""
        with pytest.raises(ValueError, match="View range 2:9 outside source of length 3"):
            SourceView("abc", 2, 9)

    def test_reversed_range_raises_error(self) -> None:
        with pytest.raises(ValueError):
            SourceView("abc", 2, 1)

    def test_equals_plain_string(self) -> None:
        view = SourceView("name=value", 5, 10)

        assert view == "value"
        assert "value" == view
        assert view != "valu"
        assert view != "values"

    def test_equals_view_into_other_source(self) -> None:
        assert SourceView("xA", 1, 2) == SourceView("Ay", 0, 1)
        assert SourceView("AB", 0, 1) != SourceView("AB", 1, 2)

    def test_does_not_equal_other_types(self) -> None:
        assert SourceView("1", 0, 1) != 1

    def test_hash_matches_string_hash(self) -> None:
        """Test views can key dictionaries queried with plain strings."""
        view = SourceView('k="v"', 0, 1)
        mapping = {view: "v"}

        assert hash(view) == hash("k")
        assert mapping["k"] == "v"
        assert "k" in mapping

    def test_concatenation_produces_string(self) -> None:
        view = SourceView("hello world", 0, 5)

        assert view + "!" == "hello!"
        assert "say " + view == "say hello"
        assert view + SourceView("hello world", 5, 11) == "hello world"

    def test_repr_shows_text_and_range(self) -> None:
        assert repr(SourceView("abc", 1, 3)) == "SourceView('bc', 1:3)"
