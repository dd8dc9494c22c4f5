"""2D RGB image with alpha channel, stored premultiplied for easy downsampling."""
import numpy as np

from heatmap_downsampling.data import color as colors

N_CHANNELS = 4


class Image:
    """Image of `n_columns` x `n_rows` pixels in "ARaGaBa" form.

    `values` is a flat uint8 array of quadruplets (`alpha*255`, `red*alpha`,
    `green*alpha`, `blue*alpha`); the pixel at column `x`, row `y` starts at
    index `(y * n_columns + x) * 4`. In this form a weighted average of pixels
    is a weighted average of each channel.
    """

    def __init__(self, n_columns, n_rows, values):
        self.n_columns = int(n_columns)
        self.n_rows = int(n_rows)
        self.values = np.asarray(values, dtype=np.uint8).ravel()

    def __repr__(self):
        return f"Image({self.n_columns}x{self.n_rows})"

    @classmethod
    def create(cls, width, height):
        """New image filled with transparent black."""
        return cls(width, height, np.zeros(width * height * N_CHANNELS, dtype=np.uint8))

    @classmethod
    def from_array(cls, pixels):
        """Image from a (n_rows, n_columns, 4) array already in ARaGaBa form."""
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != N_CHANNELS:
            raise ValueError(f"Pixels must be (H, W, 4) array, got shape {pixels.shape}")
        n_rows, n_columns = pixels.shape[:2]
        return cls(n_columns, n_rows, np.clip(np.rint(pixels), 0, 255))

    @classmethod
    def from_rgba(cls, rgba):
        """Image from straight (not premultiplied) RGBA or RGB pixels, 0-255.

        Args:
            rgba: (H, W, 4) or (H, W, 3) array. RGB input is fully opaque.
        """
        rgba = np.asarray(rgba, dtype=np.float64)
        if rgba.ndim != 3 or rgba.shape[2] not in (3, 4):
            raise ValueError(f"RGBA must be (H, W, 4) or (H, W, 3) array, got shape {rgba.shape}")
        n_rows, n_columns = rgba.shape[:2]
        if rgba.shape[2] == 3:
            a255 = np.full((n_rows, n_columns), float(colors.ALPHA_SCALE))
        else:
            a255 = rgba[:, :, 3]
        pixels = np.empty((n_rows, n_columns, N_CHANNELS))
        pixels[:, :, 0] = a255
        pixels[:, :, 1:] = rgba[:, :, :3] * (a255 * colors.INV_ALPHA_SCALE)[:, :, np.newaxis]
        return cls.from_array(pixels)

    @property
    def shape(self):
        """(n_rows, n_columns), numpy order."""
        return (self.n_rows, self.n_columns)

    def as_array(self):
        """View of the values as a (n_rows, n_columns, 4) array."""
        self.validate_length()
        return self.values.reshape(self.n_rows, self.n_columns, N_CHANNELS)

    def clear(self):
        """Clear the whole image to transparent black."""
        self.values.fill(0)

    def get_color(self, x, y):
        """Int-encoded color of the pixel at column `x`, row `y`."""
        offset = N_CHANNELS * (y * self.n_columns + x)
        return colors.from_aragaba(*self.values[offset:offset + N_CHANNELS])

    def set_color(self, x, y, color):
        """Set the pixel at column `x`, row `y` to `color`."""
        offset = N_CHANNELS * (y * self.n_columns + x)
        quad = np.rint(colors.to_aragaba(color))
        self.values[offset:offset + N_CHANNELS] = np.clip(quad, 0, 255)

    def add_rect(self, xmin, ymin, xmax, ymax, fill):
        """Draw a filled rectangle. Only use for non-overlapping rectangles!

        Edges may be fractional: a partially covered pixel gets `fill` with
        opacity scaled by the covered fraction of its area, added to what is
        already there. Coordinates are clamped to the image.
        """
        xmin = min(max(xmin, 0), self.n_columns)
        xmax = min(max(xmax, 0), self.n_columns)
        ymin = min(max(ymin, 0), self.n_rows)
        ymax = min(max(ymax, 0), self.n_rows)
        x_from = int(np.floor(xmin))
        y_from = int(np.floor(ymin))
        x_to = int(np.ceil(xmax))  # exclusive
        y_to = int(np.ceil(ymax))  # exclusive
        if x_from >= x_to or y_from >= y_to:
            return

        xs = np.arange(x_from, x_to)
        ys = np.arange(y_from, y_to)
        x_weight = np.minimum(xs + 1, xmax) - np.maximum(xs, xmin)
        y_weight = np.minimum(ys + 1, ymax) - np.maximum(ys, ymin)

        a255 = fill >> 24 & 255
        alpha = np.floor(np.outer(y_weight, x_weight) * a255)
        a = alpha * colors.INV_ALPHA_SCALE
        contribution = np.stack(
            [alpha, (fill >> 16 & 255) * a, (fill >> 8 & 255) * a, (fill & 255) * a],
            axis=-1,
        )
        region = self.as_array()[y_from:y_to, x_from:x_to]
        region[...] = np.clip(np.rint(region + contribution), 0, 255).astype(np.uint8)

    def to_rgba(self, out=None):
        """Convert to straight RGBA pixels.

        Args:
            out: Optional (n_rows, n_columns, 4) uint8 buffer to write into,
                so that a caller can reuse one buffer across frames.

        Returns:
            out: (n_rows, n_columns, 4) uint8 RGBA array.
        """
        pixels = self.as_array().astype(np.float64)
        a255 = pixels[:, :, 0]
        inv_a = np.divide(colors.ALPHA_SCALE, a255, out=np.zeros_like(a255), where=a255 > 0)
        if out is None:
            out = np.empty((self.n_rows, self.n_columns, N_CHANNELS), dtype=np.uint8)
        elif out.shape != (self.n_rows, self.n_columns, N_CHANNELS):
            raise ValueError(
                f"Output buffer must have shape {(self.n_rows, self.n_columns, N_CHANNELS)}, "
                f"got {out.shape}"
            )
        out[:, :, :3] = np.clip(np.rint(pixels[:, :, 1:] * inv_a[:, :, np.newaxis]), 0, 255)
        out[:, :, 3] = pixels[:, :, 0]
        return out

    def validate_length(self):
        """Raise ValueError if the length of `values` does not match the size."""
        if self.values.size != N_CHANNELS * self.n_columns * self.n_rows:
            raise ValueError(
                f"Length of values must be 4 * n_columns * n_rows "
                f"(4 * {self.n_columns} * {self.n_rows}), got {self.values.size}"
            )
