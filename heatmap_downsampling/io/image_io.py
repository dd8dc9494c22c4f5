"""Read and write heatmap grids (.a2d) and images (PNG).

The .a2d file format stores an Array2D as:
    - 4 bytes: magic number 202405.5 (float32)
    - 4 bytes: n_columns (int32)
    - 4 bytes: n_rows (int32)
    - n_columns * n_rows * 4 bytes: values (float32, row-major; NaN = missing)

Images are stored as ordinary RGBA PNG files; the premultiplied ARaGaBa
form is converted on the way in and out.
"""
import numpy as np

from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image

TAG_FLOAT = 202405.5


def read_array2d(filename):
    """Read a .a2d grid file.

    Args:
        filename: Path to .a2d file.

    Returns:
        grid: Array2D of float32 values.

    Raises:
        ValueError: If the magic number or the data length doesn't match.
        FileNotFoundError: If file does not exist.
    """
    with open(filename, 'rb') as f:
        tag = np.fromfile(f, np.float32, count=1)
        if tag.size != 1 or tag[0] != TAG_FLOAT:
            raise ValueError(
                f'Invalid .a2d file tag: {tag[0] if tag.size else None} (expected {TAG_FLOAT})'
            )
        n_columns = int(np.fromfile(f, np.int32, count=1)[0])
        n_rows = int(np.fromfile(f, np.int32, count=1)[0])
        data = np.fromfile(f, np.float32)

    return Array2D.create(n_columns, n_rows, data)


def write_array2d(grid, filename):
    """Write an Array2D to a .a2d file.

    Args:
        grid: Array2D (values are stored as float32).
        filename: Output path.
    """
    grid.validate_length()
    values = np.asarray(grid.values, dtype=np.float32)
    with open(filename, 'wb') as f:
        np.array([TAG_FLOAT], dtype=np.float32).tofile(f)
        np.array([grid.n_columns, grid.n_rows], dtype=np.int32).tofile(f)
        values.tofile(f)


def read_image_png(filename):
    """Read a PNG (or any Pillow-readable image) into an Image.

    Returns:
        image: Image in ARaGaBa form.
    """
    from PIL import Image as PILImage

    with PILImage.open(filename) as im:
        rgba = np.array(im.convert('RGBA'))
    return Image.from_rgba(rgba)


def write_image_png(image, filename):
    """Write an Image to a PNG file with straight RGBA pixels."""
    from PIL import Image as PILImage

    PILImage.fromarray(image.to_rgba()).save(filename, format='PNG')
