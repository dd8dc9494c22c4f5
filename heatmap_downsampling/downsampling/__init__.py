"""Downsampling pyramids and the resampling routines behind them."""
from heatmap_downsampling.downsampling.base import BaseDownsampler
from heatmap_downsampling.downsampling.grid import GridDownsampler, downsample_numbers
from heatmap_downsampling.downsampling.image import ImageDownsampler, downsample_image
from heatmap_downsampling.downsampling.config import (
    create_from_grid, create_from_image, load_downsampler
)

__all__ = [
    'BaseDownsampler',
    'GridDownsampler',
    'ImageDownsampler',
    'downsample_numbers',
    'downsample_image',
    'create_from_grid',
    'create_from_image',
    'load_downsampler',
]
