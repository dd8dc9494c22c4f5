"""
Heatmap Downsampling Package

Multi-resolution downsampling pyramids for drawing large heatmaps: area-weighted
resampling of 2D number arrays and premultiplied-alpha images, cached at
power-of-2 resolutions so that any zoom level is drawn in roughly constant time.
"""

from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image
from heatmap_downsampling.downsampling.config import (
    create_from_grid, create_from_image, load_downsampler
)
from heatmap_downsampling.interface import DownsampledHeatmap, get_downsampled
from heatmap_downsampling.utils.resampling import resampling_coefficients
from heatmap_downsampling.utils.resolution import downsampling_target

__all__ = [
    'Array2D',
    'Image',
    'create_from_grid',
    'create_from_image',
    'load_downsampler',
    'DownsampledHeatmap',
    'get_downsampled',
    'resampling_coefficients',
    'downsampling_target',
]
