"""
Tests for utility functions.
"""
import math

import pytest
from brandguard.utils import (
    MAX_COLOR_DISTANCE,
    RGB,
    aspect_ratio,
    coerce_color,
    color_distance,
    hex_to_rgb,
    normalize_font_name,
    rgb_to_hex
)


class TestHexParsing:
    """Tests for hex color parsing."""

    def test_parse_with_and_without_hash(self):
        """Test both '#RRGGBB' and 'RRGGBB' forms parse."""
        assert hex_to_rgb("#0066CC") == RGB(0, 102, 204)
        assert hex_to_rgb("0066cc") == RGB(0, 102, 204)

    def test_parse_is_case_insensitive(self):
        """Test lowercase and uppercase hex give the same color."""
        assert hex_to_rgb("#ff6600") == hex_to_rgb("#FF6600")

    @pytest.mark.parametrize("value", ["#FFF", "#GGGGGG", "", "red", "#0066CC00", None, 42])
    def test_malformed_returns_none(self, value):
        """Test malformed input signals an unknown color instead of raising."""
        assert hex_to_rgb(value) is None

    def test_rgb_to_hex(self):
        """Test RGB to uppercase hex conversion."""
        assert rgb_to_hex(RGB(255, 102, 0)) == "#FF6600"
        assert rgb_to_hex(RGB(0, 0, 0)) == "#000000"

    def test_rgb_to_hex_rounds_and_clamps(self):
        """Test fractional and out-of-range components are normalized."""
        assert rgb_to_hex((254.6, -3, 300)) == "#FF00FF"


class TestColorCoercion:
    """Tests for normalizing host color values."""

    def test_hex_string_uppercased(self):
        assert coerce_color("#0066cc") == "#0066CC"

    def test_missing_hash_added(self):
        assert coerce_color("0066cc") == "#0066CC"

    def test_rgb_mapping(self):
        assert coerce_color({"r": 255, "g": 102, "b": 0}) == "#FF6600"
        assert coerce_color({"red": 0, "green": 61, "blue": 122}) == "#003D7A"

    def test_empty_is_none(self):
        assert coerce_color(None) is None
        assert coerce_color("") is None

    def test_malformed_string_kept(self):
        """Test malformed strings survive so they can be reported."""
        assert coerce_color("not-a-color") == "NOT-A-COLOR"

    @pytest.mark.parametrize("value", [
        {"r": "ff", "g": 0, "b": 0},
        ["a", "b", "c"],
        [float("nan"), 0, 0],
        42,
        123456,
        [1, 2],
    ])
    def test_unparseable_values_become_unknown_colors(self, value):
        """Test non-numeric components and bare numbers degrade instead of raising."""
        coerced = coerce_color(value)
        assert isinstance(coerced, str)
        assert hex_to_rgb(coerced) is None

    def test_bare_number_is_not_hex(self):
        assert coerce_color(123456) == "int(123456)"

    def test_non_ascii_digits_rejected(self):
        assert hex_to_rgb("#٠٠٠٠٠٠") is None


class TestColorDistance:
    """Tests for Euclidean RGB distance."""

    def test_identity_is_zero(self):
        color = RGB(12, 34, 56)
        assert color_distance(color, color) == 0

    def test_symmetry(self):
        a, b = RGB(255, 0, 0), RGB(0, 102, 204)
        assert color_distance(a, b) == color_distance(b, a)

    def test_black_white_is_maximum(self):
        assert color_distance(RGB(0, 0, 0), RGB(255, 255, 255)) == pytest.approx(MAX_COLOR_DISTANCE)
        assert MAX_COLOR_DISTANCE == pytest.approx(441.67, abs=0.01)

    def test_single_channel(self):
        assert color_distance(RGB(0, 0, 0), RGB(0, 0, 10)) == 10


class TestFontNormalization:
    """Tests for font name normalization."""

    def test_lowercase_trim_collapse(self):
        assert normalize_font_name("  Open   Sans\tBold ") == "open sans bold"

    def test_empty(self):
        assert normalize_font_name(None) == ""
        assert normalize_font_name("   ") == ""


class TestAspectRatio:
    """Tests for aspect ratio computation."""

    def test_ratio(self):
        assert aspect_ratio(100, 50) == 2
        assert math.isclose(aspect_ratio(50, 30), 5 / 3)

    def test_zero_height_is_zero(self):
        assert aspect_ratio(100, 0) == 0
