"""
Tests for the before/after comparison.
"""

import numpy as np

from photool.editor import ComparisonView, render_comparison
from photool.processing import PixelBuffer


def flat(width, height, value):
    return PixelBuffer.blank(width, height, (value, value, value, 255))


class TestRenderComparison:
    """Test split rendering."""

    def test_position_zero_shows_original(self):
        original, current = flat(10, 4, 0), flat(10, 4, 255)
        assert render_comparison(original, current, 0).equals(original)

    def test_position_hundred_shows_current(self):
        original, current = flat(10, 4, 0), flat(10, 4, 255)
        assert render_comparison(original, current, 100).equals(current)

    def test_split_column(self):
        frame = render_comparison(flat(10, 4, 0), flat(10, 4, 255), 30).pixels
        assert np.all(frame[:, :3, 0] == 255)
        assert np.all(frame[:, 3:, 0] == 0)

    def test_position_is_clamped(self):
        original, current = flat(10, 4, 0), flat(10, 4, 255)
        assert render_comparison(original, current, 150).equals(current)
        assert render_comparison(original, current, -20).equals(original)

    def test_current_is_scaled_to_original(self):
        frame = render_comparison(flat(10, 4, 0), flat(5, 2, 200), 50)
        assert frame.size == (10, 4)
        assert frame.pixels[0, 0, 0] == 200
        assert frame.pixels[0, 9, 0] == 0

    def test_divider(self):
        frame = render_comparison(flat(10, 4, 0), flat(10, 4, 100), 50, divider_width=2).pixels
        assert np.all(frame[:, 5:7, 0] == 255)
        assert frame[0, 4, 0] == 100
        assert frame[0, 7, 0] == 0


class TestComparisonView:
    """Test the slider-backed view."""

    def test_move_clamps(self):
        view = ComparisonView(flat(4, 4, 0), flat(4, 4, 255))
        assert view.position == 50.0
        assert view.move_to(130) == 100.0
        assert view.render().equals(view.current)
