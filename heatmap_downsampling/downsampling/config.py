"""
Downsampler factory.

Creates the pyramid matching the kind of data given (numbers or image).
"""
from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image
from heatmap_downsampling.downsampling.grid import GridDownsampler
from heatmap_downsampling.downsampling.image import ImageDownsampler


def create_from_grid(grid, params=None):
    """Create a downsampler rooted at a 2D array of numbers.

    Args:
        grid: Array2D without missing values.
        params: Optional dict of parameter overrides (e.g. {'display': True}).

    Returns:
        downsampler: GridDownsampler.
    """
    downsampler = GridDownsampler(grid)
    if params is not None:
        downsampler.parse_input_parameter(params)
    return downsampler


def create_from_image(image, params=None):
    """Create a downsampler rooted at an image.

    Args:
        image: Image in ARaGaBa form.
        params: Optional dict of parameter overrides.

    Returns:
        downsampler: ImageDownsampler.
    """
    downsampler = ImageDownsampler(image)
    if params is not None:
        downsampler.parse_input_parameter(params)
    return downsampler


def load_downsampler(data, params=None):
    """Create the downsampler matching the type of `data`.

    Raises:
        TypeError: If `data` is neither an Array2D nor an Image.
    """
    if isinstance(data, Image):
        return create_from_image(data, params)
    elif isinstance(data, Array2D):
        return create_from_grid(data, params)
    else:
        raise TypeError(f"Cannot downsample data of type '{type(data).__name__}'")
