"""Tests for core.formatting utilities."""

from __future__ import annotations

import pytest

from captally.core.formatting import format_duration, format_score, pluralize


class TestPluralize:
    """Tests for pluralize function."""

    def test_singular(self) -> None:
        assert pluralize(1, "extension") == "1 extension"

    def test_plural(self) -> None:
        assert pluralize(3, "extension") == "3 extensions"

    def test_zero_is_plural(self) -> None:
        assert pluralize(0, "extension") == "0 extensions"

    def test_custom_plural(self) -> None:
        assert pluralize(2, "match", "matches") == "2 matches"


class TestFormatDuration:
    """Tests for format_duration function."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [
            (0.345, "0.3s"),
            (59.94, "59.9s"),
            (90.0, "1m 30s"),
            (3661.0, "1h 1m"),
        ],
    )
    def test_formats(self, seconds: float, expected: str) -> None:
        assert format_duration(seconds) == expected

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_duration(-1.0)


class TestFormatScore:
    """Tests for format_score function."""

    def test_integer_score_has_no_decimals(self) -> None:
        assert format_score(3) == "3"

    def test_float_score_has_two_decimals(self) -> None:
        assert format_score(9.3333) == "9.33"

    def test_whole_float_keeps_decimals(self) -> None:
        """Float scores stay visibly fractional-capable."""
        assert format_score(3.0) == "3.00"
