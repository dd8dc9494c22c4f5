"""Downsampling of 2D number arrays (Array2D)."""
import numpy as np
from skimage.transform import downscale_local_mean

from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.downsampling.base import BaseDownsampler
from heatmap_downsampling.utils.resampling import apply_resampling

# Storage type of downsampled grids; accumulation is always done in float64
GRID_DTYPE = np.float32


def _validated_matrix(data):
    if data.values.size != data.n_columns * data.n_rows:
        raise ValueError(
            f"Length of values must be n_columns * n_rows "
            f"({data.n_columns} * {data.n_rows}), got {data.values.size}"
        )
    matrix = data.values.reshape(data.n_rows, data.n_columns).astype(np.float64)
    if np.isnan(matrix).any():
        raise ValueError("Cannot downsample data with undefined (NaN) values")
    return matrix


def downsample_numbers(data, new_columns, new_rows):
    """Downsample a 2D array of numbers to a new size.

    Halving one dimension (the usual pyramid step) is done by direct pairwise
    averaging; any other size goes through the general area-weighted path.

    Args:
        data: Array2D without missing values.
        new_columns: Output column count (<= data.n_columns).
        new_rows: Output row count (<= data.n_rows).

    Returns:
        result: Array2D of float32 values.

    Raises:
        ValueError: If the length of `data.values` does not match its size or
            the data contain NaN.
    """
    if data.n_columns == 2 * new_columns and data.n_rows == new_rows:
        return downsample_numbers_halve_x(data)
    elif data.n_columns == new_columns and data.n_rows == 2 * new_rows:
        return downsample_numbers_halve_y(data)
    else:
        return downsample_numbers_general(data, new_columns, new_rows)


def downsample_numbers_general(data, new_columns, new_rows):
    """Downsample a 2D array of numbers to any smaller size."""
    matrix = _validated_matrix(data)
    out = apply_resampling(matrix[:, :, np.newaxis], new_rows, new_columns)[:, :, 0]
    return Array2D(new_columns, new_rows, out.astype(GRID_DTYPE).ravel())


def downsample_numbers_halve_x(data):
    """Halve the number of columns by averaging adjacent column pairs."""
    if data.n_columns % 2 != 0:
        raise ValueError(f"Cannot halve an odd number of columns ({data.n_columns})")
    matrix = _validated_matrix(data)
    out = downscale_local_mean(matrix, (1, 2))
    return Array2D(data.n_columns // 2, data.n_rows, out.astype(GRID_DTYPE).ravel())


def downsample_numbers_halve_y(data):
    """Halve the number of rows by averaging adjacent row pairs."""
    if data.n_rows % 2 != 0:
        raise ValueError(f"Cannot halve an odd number of rows ({data.n_rows})")
    matrix = _validated_matrix(data)
    out = downscale_local_mean(matrix, (2, 1))
    return Array2D(data.n_columns, data.n_rows // 2, out.astype(GRID_DTYPE).ravel())


class GridDownsampler(BaseDownsampler):
    """Downsampling pyramid for a 2D array of numbers."""

    def validate(self, data):
        if not isinstance(data, Array2D):
            raise TypeError(f"GridDownsampler needs an Array2D, got {type(data).__name__}")
        if data.n_columns < 1 or data.n_rows < 1:
            raise ValueError(f"Cannot downsample empty data ({data.n_columns}x{data.n_rows})")
        if not data.is_numeric:
            raise ValueError(f"Cannot downsample non-numeric data (dtype {data.values.dtype})")
        data.validate_length()
        if data.has_missing():
            raise ValueError(
                "Cannot downsample data with undefined (NaN) values; "
                "fill missing cells before building the pyramid"
            )

    def _downsample(self, data, resolution):
        return downsample_numbers(data, resolution[0], resolution[1])
