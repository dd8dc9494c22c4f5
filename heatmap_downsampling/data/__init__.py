"""Grid and image containers consumed by the downsampling pyramid."""
from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image

__all__ = [
    'Array2D',
    'Image',
]
