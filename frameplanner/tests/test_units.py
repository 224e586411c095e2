"""Tests for unit conversion and formatting."""

import pytest

from frameplanner.engine.units import (
    clamp,
    cm_to_inches,
    convert_dimension,
    format_dimension,
    inches_to_cm,
    parse_dimension_input,
)


class TestConversion:
    """Tests for cm/inch conversion."""

    def test_cm_to_inches(self) -> None:
        assert cm_to_inches(2.54) == 1
        assert cm_to_inches(0) == 0

    def test_inches_to_cm(self) -> None:
        assert inches_to_cm(1) == 2.54
        assert inches_to_cm(0) == 0

    def test_convert_dimension(self) -> None:
        assert convert_dimension(100, "cm", "in") == pytest.approx(39.37, abs=0.01)
        assert convert_dimension(39.37, "in", "cm") == pytest.approx(100, abs=0.01)
        assert convert_dimension(42, "cm", "cm") == 42


class TestFormatting:
    """Tests for format_dimension."""

    @pytest.mark.parametrize(
        "value, unit, expected",
        [
            (60, "cm", "60 cm"),
            (0, "cm", "0 cm"),
            (60.5, "cm", "60.5 cm"),
            (60, "in", "23.62 in"),
            (50.8, "in", "20.00 in"),
        ],
    )
    def test_format_dimension(self, value: float, unit: str, expected: str) -> None:
        assert format_dimension(value, unit) == expected


class TestParsing:
    """Tests for parse_dimension_input."""

    def test_empty_input(self) -> None:
        assert parse_dimension_input("", "cm") == 0

    def test_non_numeric_input(self) -> None:
        assert parse_dimension_input("abc", "cm") == 0

    def test_cm_input(self) -> None:
        assert parse_dimension_input("12.5", "cm") == 12.5

    def test_trailing_text_ignored(self) -> None:
        assert parse_dimension_input("12.5cm", "cm") == 12.5

    def test_inch_input_converted(self) -> None:
        assert parse_dimension_input("1", "in") == 2.54


def test_clamp() -> None:
    assert clamp(5, 0, 4) == 4
    assert clamp(-1, 0, 4) == 0
    assert clamp(2, 0, 4) == 2
