"""Tests for scale ratio resolution and coordinate projection."""

from __future__ import annotations

import pytest

from symbol_annotator.scale import (
    resolve_ratio,
    scaled_size,
    to_classifier_space,
    to_page_space,
)


class TestResolveRatio:
    def test_downscale(self) -> None:
        assert resolve_ratio(20, 10) == 0.5

    def test_upscale(self) -> None:
        assert resolve_ratio(8, 10) == 1.25

    def test_identity(self) -> None:
        assert resolve_ratio(10, 10) == 1.0

    @pytest.mark.parametrize("interline", [0, -3])
    def test_non_positive_page_interline_raises(self, interline: int) -> None:
        with pytest.raises(ValueError, match="Page interline must be positive"):
            resolve_ratio(interline, 10)

    def test_non_positive_expected_interline_raises(self) -> None:
        with pytest.raises(ValueError, match="Expected interline"):
            resolve_ratio(20, 0)


class TestScaledSize:
    def test_exact_half(self) -> None:
        assert scaled_size(800, 600, 0.5) == (400, 300)

    def test_rounds_up(self) -> None:
        assert scaled_size(801, 599, 0.5) == (401, 300)

    def test_odd_ratio(self) -> None:
        assert scaled_size(100, 100, 10 / 13) == (77, 77)


class TestProjection:
    @pytest.mark.parametrize("ratio", [0.25, 0.5, 10 / 13, 1.0, 1.25, 3.0])
    @pytest.mark.parametrize("value", [0.0, 1.0, 17.0, 399.0, 1234.5])
    def test_roundtrip_within_one_pixel(self, ratio: float, value: float) -> None:
        restored = to_page_space(to_classifier_space(value, ratio), ratio)
        assert abs(restored - value) <= 1.0
        assert restored == pytest.approx(value)

    @pytest.mark.parametrize("ratio", [0.5, 10 / 13, 1.25])
    def test_ceil_sized_dimensions_within_one_classifier_pixel(
        self, ratio: float
    ) -> None:
        width, height = scaled_size(800, 600, ratio)
        # ceil adds less than one classifier pixel per dimension
        assert 0 <= to_page_space(width, ratio) - 800 < 1 / ratio
        assert 0 <= to_page_space(height, ratio) - 600 < 1 / ratio

    def test_page_space_divides(self) -> None:
        assert to_page_space(100, 0.5) == 200
