"""Tests for canonical resolution selection."""
import pytest
from heatmap_downsampling.utils.resolution import (
    downsampling_target, downsampling_source_2d, pyramid_depth
)


class TestDownsamplingTarget:
    """Test power-of-2 resolution quantization."""

    def test_bounds(self):
        """n_pixels <= m < 2*n_pixels, or m == n_datapoints < n_pixels."""
        for n_datapoints in range(1, 70):
            for n_pixels in range(1, 140):
                m = downsampling_target(n_datapoints, n_pixels)
                if n_datapoints >= n_pixels:
                    assert n_pixels <= m < 2 * n_pixels
                else:
                    assert m == n_datapoints

    def test_power_of_two(self):
        """Far below the data size the result is a power of 2."""
        assert downsampling_target(200000, 1000) == 1024
        assert downsampling_target(200000, 1024) == 1024
        assert downsampling_target(200000, 1025) == 2048

    def test_capped_at_datapoints(self):
        assert downsampling_target(20, 16) == 16
        assert downsampling_target(20, 17) == 20
        assert downsampling_target(20, 500) == 20

    def test_fractional_pixels(self):
        assert downsampling_target(100, 3.5) == 4
        assert downsampling_target(100, 0.3) == 1

    def test_invalid_raise(self):
        with pytest.raises(ValueError):
            downsampling_target(0, 5)
        with pytest.raises(ValueError):
            downsampling_target(10, 0)


class TestDownsamplingSource2D:
    """Test the choice of the axis to double."""

    def test_original_has_no_source(self):
        assert downsampling_source_2d((8, 20), (8, 20)) is None

    def test_above_original_raises(self):
        with pytest.raises(ValueError):
            downsampling_source_2d((9, 20), (8, 20))
        with pytest.raises(ValueError):
            downsampling_source_2d((8, 21), (8, 20))

    def test_x_at_original_doubles_y(self):
        assert downsampling_source_2d((8, 5), (8, 20)) == (8, 10)

    def test_y_at_original_doubles_x(self):
        assert downsampling_source_2d((4, 20), (8, 20)) == (8, 20)

    def test_wide_wanted_doubles_y(self):
        assert downsampling_source_2d((16, 2), (64, 20)) == (16, 4)

    def test_tall_wanted_doubles_x(self):
        assert downsampling_source_2d((4, 5), (8, 20)) == (8, 5)

    def test_capped_at_original(self):
        assert downsampling_source_2d((8, 15), (8, 20)) == (8, 20)
        assert downsampling_source_2d((5, 20), (8, 20)) == (8, 20)

    def test_pyramid_depth(self):
        assert pyramid_depth((8, 8), (8, 8)) == 0
        assert pyramid_depth((8, 8), (2, 2)) == 4
        assert pyramid_depth((200000, 20), (1024, 16)) > 0
