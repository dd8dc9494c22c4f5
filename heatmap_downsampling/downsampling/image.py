"""Downsampling of premultiplied-alpha images."""
import numpy as np
from skimage.transform import downscale_local_mean

from heatmap_downsampling.data.image import Image, N_CHANNELS
from heatmap_downsampling.downsampling.base import BaseDownsampler
from heatmap_downsampling.utils.resampling import apply_resampling


def _validated_pixels(image):
    if image.values.size != N_CHANNELS * image.n_columns * image.n_rows:
        raise ValueError(
            f"Length of values must be 4 * n_columns * n_rows "
            f"(4 * {image.n_columns} * {image.n_rows}), got {image.values.size}"
        )
    return image.values.reshape(image.n_rows, image.n_columns, N_CHANNELS).astype(np.float64)


def _to_image(pixels):
    # Each step shrinks by a factor between 1 and 2, so rounding to 8 bits
    # here does not add up to a big error
    n_rows, n_columns = pixels.shape[:2]
    return Image(n_columns, n_rows, np.clip(np.rint(pixels), 0, 255).astype(np.uint8).ravel())


def downsample_image(image, new_columns, new_rows):
    """Downsample an image to a new size.

    The four ARaGaBa channels are averaged independently with the same
    weights as `downsample_numbers` uses, then rounded and clamped to 0-255.

    Args:
        image: Image.
        new_columns: Output column count (<= image.n_columns).
        new_rows: Output row count (<= image.n_rows).

    Returns:
        result: Image.

    Raises:
        ValueError: If the length of `image.values` does not match its size.
    """
    if image.n_columns == 2 * new_columns and image.n_rows == new_rows:
        return downsample_image_halve_x(image)
    elif image.n_columns == new_columns and image.n_rows == 2 * new_rows:
        return downsample_image_halve_y(image)
    else:
        return downsample_image_general(image, new_columns, new_rows)


def downsample_image_general(image, new_columns, new_rows):
    """Downsample an image to any smaller size."""
    pixels = _validated_pixels(image)
    return _to_image(apply_resampling(pixels, new_rows, new_columns))


def downsample_image_halve_x(image):
    """Halve the number of columns by averaging adjacent pixel pairs."""
    if image.n_columns % 2 != 0:
        raise ValueError(f"Cannot halve an odd number of columns ({image.n_columns})")
    pixels = _validated_pixels(image)
    return _to_image(downscale_local_mean(pixels, (1, 2, 1)))


def downsample_image_halve_y(image):
    """Halve the number of rows by averaging adjacent pixel pairs."""
    if image.n_rows % 2 != 0:
        raise ValueError(f"Cannot halve an odd number of rows ({image.n_rows})")
    pixels = _validated_pixels(image)
    return _to_image(downscale_local_mean(pixels, (2, 1, 1)))


class ImageDownsampler(BaseDownsampler):
    """Downsampling pyramid for a premultiplied-alpha image."""

    def validate(self, data):
        if not isinstance(data, Image):
            raise TypeError(f"ImageDownsampler needs an Image, got {type(data).__name__}")
        if data.n_columns < 1 or data.n_rows < 1:
            raise ValueError(f"Cannot downsample empty image ({data.n_columns}x{data.n_rows})")
        data.validate_length()

    def _downsample(self, data, resolution):
        return downsample_image(data, resolution[0], resolution[1])
