"""Tests for the premultiplied-alpha Image container."""
import numpy as np
import pytest
from heatmap_downsampling.data import color as colors
from heatmap_downsampling.data.image import Image

RED = 0xFFFF0000


class TestImage:
    """Test construction, pixel access and conversion."""

    def test_create_transparent(self):
        image = Image.create(3, 2)
        assert image.values.shape == (24,)
        assert image.values.dtype == np.uint8
        assert not image.values.any()

    def test_set_get_color(self):
        image = Image.create(3, 2)
        image.set_color(2, 1, 0xFF123456)
        assert image.get_color(2, 1) == 0xFF123456
        np.testing.assert_array_equal(image.as_array()[1, 2], [255, 0x12, 0x34, 0x56])
        assert image.get_color(0, 0) == 0

    def test_clear(self):
        image = Image.create(2, 2)
        image.set_color(0, 0, RED)
        image.clear()
        assert not image.values.any()

    def test_validate_length(self):
        with pytest.raises(ValueError):
            Image(2, 2, np.zeros(15)).validate_length()

    def test_from_rgba_premultiplies(self):
        image = Image.from_rgba(np.array([[[200, 100, 0, 128]]]))
        np.testing.assert_array_equal(image.values, [128, 100, 50, 0])

    def test_from_rgb_is_opaque(self):
        image = Image.from_rgba(np.array([[[1, 2, 3], [4, 5, 6]]]))
        np.testing.assert_array_equal(image.as_array()[0, :, 0], [255, 255])

    def test_from_array_wrong_shape_raises(self):
        with pytest.raises(ValueError):
            Image.from_array(np.zeros((2, 2, 3)))

    def test_to_rgba(self):
        image = Image.from_rgba(np.array([[[200, 100, 0, 128], [0, 0, 0, 0], [9, 8, 7, 255]]]))
        rgba = image.to_rgba()
        assert rgba.shape == (1, 3, 4)
        np.testing.assert_allclose(rgba[0, 0], [200, 100, 0, 128], atol=2)
        np.testing.assert_array_equal(rgba[0, 1], [0, 0, 0, 0])
        np.testing.assert_array_equal(rgba[0, 2], [9, 8, 7, 255])

    def test_to_rgba_reuses_buffer(self):
        image = Image.create(4, 3)
        buffer = np.full((3, 4, 4), 99, dtype=np.uint8)
        out = image.to_rgba(out=buffer)
        assert out is buffer
        assert not buffer.any()
        with pytest.raises(ValueError):
            image.to_rgba(out=np.zeros((4, 3, 4), dtype=np.uint8))


class TestAddRect:
    """Test area-weighted rectangle compositing."""

    def test_whole_pixels(self):
        image = Image.create(4, 2)
        image.add_rect(1, 0, 3, 2, RED)
        pixels = image.as_array()
        np.testing.assert_array_equal(pixels[:, 1:3], np.broadcast_to([255, 255, 0, 0], (2, 2, 4)))
        assert not pixels[:, 0].any()
        assert not pixels[:, 3].any()

    def test_partial_pixel(self):
        """Half-covered pixel gets half the opacity."""
        image = Image.create(2, 1)
        image.add_rect(0.5, 0, 1, 1, RED)
        np.testing.assert_array_equal(image.values, [127, 127, 0, 0, 0, 0, 0, 0])

    def test_adjacent_halves_add_up(self):
        image = Image.create(1, 1)
        image.add_rect(0, 0, 0.5, 1, RED)
        image.add_rect(0.5, 0, 1, 1, RED)
        assert image.values[0] == 254
        assert image.get_color(0, 0) >> 16 & 255 == 255

    def test_clamped_to_image(self):
        image = Image.create(3, 3)
        image.add_rect(-5, -5, 100, 100, colors.from_rgb(0, 0, 255))
        np.testing.assert_array_equal(image.as_array()[:, :, 0], 255)
        np.testing.assert_array_equal(image.as_array()[:, :, 3], 255)

    def test_empty_rect_noop(self):
        image = Image.create(3, 3)
        image.add_rect(2, 2, 2, 3, RED)
        image.add_rect(5, 5, 6, 6, RED)
        assert not image.values.any()
