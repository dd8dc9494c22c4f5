"""
High-level interface for drawing downsampled heatmaps.

Turns a viewport (canvas size in pixels, whole and visible data extent) into
a request to a downsampling pyramid of the colored heatmap image.
"""
import numpy as np

from heatmap_downsampling.data import color as colors
from heatmap_downsampling.data.image import Image
from heatmap_downsampling.downsampling.config import create_from_image, load_downsampler


def get_downsampled(data, min_resolution):
    """Downsample an Array2D or Image approximately to `min_resolution`.

    One-shot convenience; keep a downsampler from `load_downsampler` instead
    when the same data are requested repeatedly.

    Args:
        data: Array2D or Image.
        min_resolution: (x, y) minimal number of columns and rows.

    Returns:
        data: Same type as the input, at the canonical resolution.
    """
    return load_downsampler(data).get_downsampled(min_resolution)


def _width(extent):
    return extent[1] - extent[0]


class DownsampledHeatmap:
    """Colored heatmap image with a lazily built downsampling pyramid.

    The full-resolution image has one pixel per grid cell, colored by
    `color_provider(value, x, y)`, which returns an int-encoded color or a
    color string. Missing (NaN) cells stay transparent. The pyramid is
    discarded whenever the data or the color provider change and rebuilt on
    the next request.
    """

    def __init__(self, data, color_provider, params=None):
        self.data = data
        self.color_provider = color_provider
        # Approximate width of a rectangle in pixels when showing downsampled
        # data (higher value means faster but lower-resolution drawing)
        self.pixels_per_rect = 1
        self.display = False

        self._downsampler = None

        if params is not None:
            self.parse_input_parameter(params)

    def parse_input_parameter(self, params):
        """Set parameters from a dictionary or list of key-value pairs.

        Args:
            params: dict or list of [key, value, key, value, ...].
        """
        if isinstance(params, dict):
            items = params.items()
        else:
            items = zip(params[0::2], params[1::2])
        for key, val in items:
            if key in ('pixels_per_rect', 'display'):
                setattr(self, key, val)
        if not self.pixels_per_rect > 0:
            raise ValueError(f"pixels_per_rect must be positive, got {self.pixels_per_rect}")

    @property
    def downsampler(self):
        """The image pyramid, built from `compute_full_image` on first use."""
        if self._downsampler is None:
            self._downsampler = create_from_image(
                self.compute_full_image(), {'display': self.display}
            )
        return self._downsampler

    def invalidate(self):
        """Discard the pyramid."""
        self._downsampler = None

    def set_data(self, data):
        self.data = data
        self.invalidate()

    def set_color_provider(self, color_provider):
        if color_provider is not self.color_provider:
            self.color_provider = color_provider
            self.invalidate()

    def compute_full_image(self):
        """Image with one pixel per grid cell, colored by the color provider."""
        data = self.data
        data.validate_length()
        image = Image.create(data.n_columns, data.n_rows)
        pixels = image.as_array()
        matrix = data.as_matrix()
        missing = np.isnan(matrix) if data.is_numeric else np.zeros(matrix.shape, dtype=bool)
        for iy in range(data.n_rows):
            for ix in range(data.n_columns):
                if missing[iy, ix]:
                    continue  # keep transparent black
                c = self.color_provider(matrix[iy, ix], ix, iy)
                if isinstance(c, str):
                    c = colors.from_string(c)
                pixels[iy, ix] = np.clip(np.rint(colors.to_aragaba(c)), 0, 255)
        if self.display:
            print(f"Computed full image {data.n_columns}x{data.n_rows}")
        return image

    def min_resolution(self, canvas_size, whole_extent, visible_extent):
        """Full-data resolution needed to fill the canvas at the current zoom.

        Args:
            canvas_size: (width, height) of the canvas in pixels.
            whole_extent: ((xmin, xmax), (ymin, ymax)) of the whole data.
            visible_extent: ((xmin, xmax), (ymin, ymax)) currently visible.

        Returns:
            (x, y) minimal resolution, floats.
        """
        (whole_x, whole_y), (vis_x, vis_y) = whole_extent, visible_extent
        if _width(vis_x) <= 0 or _width(vis_y) <= 0:
            raise ValueError(f"Visible extent must be non-empty, got {visible_extent}")
        x_resolution = canvas_size[0] / self.pixels_per_rect
        y_resolution = canvas_size[1] / self.pixels_per_rect
        return (
            max(x_resolution * _width(whole_x) / _width(vis_x), 1),
            max(y_resolution * _width(whole_y) / _width(vis_y), 1),
        )

    def get_image(self, canvas_size, whole_extent, visible_extent):
        """Downsampled image for drawing the current viewport.

        Returns:
            image: Image from the pyramid.
            x_scale: Grid columns per image column.
            y_scale: Grid rows per image row.
        """
        min_resolution = self.min_resolution(canvas_size, whole_extent, visible_extent)
        image = self.downsampler.get_downsampled(min_resolution)
        x_scale = self.data.n_columns / image.n_columns
        y_scale = self.data.n_rows / image.n_rows
        return image, x_scale, y_scale

    def render(self, canvas_size, whole_extent, visible_extent, out=None):
        """Draw the visible part of the heatmap into a canvas-sized image.

        Each downsampled pixel becomes a rectangle on the canvas; rectangles
        are composited with area-weighted edges.

        Args:
            out: Optional Image of canvas size to draw into (cleared first).

        Returns:
            canvas: Image of size canvas_size.
        """
        width, height = int(canvas_size[0]), int(canvas_size[1])
        if out is None or out.n_columns != width or out.n_rows != height:
            out = Image.create(width, height)
        else:
            out.clear()
        image, x_scale, y_scale = self.get_image(canvas_size, whole_extent, visible_extent)

        (vis_x, vis_y) = visible_extent
        whole_x, whole_y = whole_extent
        # Canvas pixels per grid cell
        x_px = width / _width(vis_x) * _width(whole_x) / self.data.n_columns
        y_px = height / _width(vis_y) * _width(whole_y) / self.data.n_rows
        # Visible extent expressed in grid cells
        cell_x0 = (vis_x[0] - whole_x[0]) / _width(whole_x) * self.data.n_columns
        cell_x1 = (vis_x[1] - whole_x[0]) / _width(whole_x) * self.data.n_columns
        cell_y0 = (vis_y[0] - whole_y[0]) / _width(whole_y) * self.data.n_rows
        cell_y1 = (vis_y[1] - whole_y[0]) / _width(whole_y) * self.data.n_rows

        col_from = int(np.clip(np.floor(cell_x0 / x_scale), 0, image.n_columns))
        col_to = int(np.clip(np.ceil(cell_x1 / x_scale), 0, image.n_columns))
        row_from = int(np.clip(np.floor(cell_y0 / y_scale), 0, image.n_rows))
        row_to = int(np.clip(np.ceil(cell_y1 / y_scale), 0, image.n_rows))

        rect_width = x_px * x_scale
        rect_height = y_px * y_scale
        for iy in range(row_from, row_to):
            y = (iy * y_scale - cell_y0) * y_px
            for ix in range(col_from, col_to):
                x = (ix * x_scale - cell_x0) * x_px
                out.add_rect(x, y, x + rect_width, y + rect_height, image.get_color(ix, iy))
        return out
