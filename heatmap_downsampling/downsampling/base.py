"""
Abstract base class for downsampling pyramids (cached multi-resolution data).
"""
import threading
from abc import ABC, abstractmethod

from heatmap_downsampling.utils.resolution import downsampling_target, downsampling_source_2d


class BaseDownsampler(ABC):
    """Lazily computed, memoized pyramid of downsampled versions of one dataset.

    The entry at the original resolution is the root. Any other resolution is
    computed on first request by one downsampling step from its source
    resolution (one axis doubled), which is itself obtained the same way, and
    is then kept for the lifetime of the downsampler. When the underlying data
    change, discard the whole downsampler and create a new one.
    """

    def __init__(self, data):
        self.validate(data)
        self.n_columns = data.n_columns
        self.n_rows = data.n_rows
        self.display = False

        # Downsampled data by exact (columns, rows) resolution
        self._downsampled = {(self.n_columns, self.n_rows): data}
        self._lock = threading.RLock()

    def __repr__(self):
        return (f"{type(self).__name__}({self.n_columns}x{self.n_rows}, "
                f"{len(self._downsampled)} cached)")

    def __contains__(self, resolution):
        return tuple(resolution) in self._downsampled

    def __len__(self):
        return len(self._downsampled)

    @property
    def original(self):
        """The data at the original resolution."""
        return self._downsampled[(self.n_columns, self.n_rows)]

    @property
    def resolutions(self):
        """Sorted list of (columns, rows) resolutions computed so far."""
        with self._lock:
            return sorted(self._downsampled)

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
            if not key.startswith('_') and hasattr(self, key) and not callable(getattr(self, key)):
                setattr(self, key, val)

    def target_resolution(self, min_resolution):
        """Canonical (columns, rows) cache key for `min_resolution`."""
        x, y = min_resolution
        return (downsampling_target(self.n_columns, x), downsampling_target(self.n_rows, y))

    def get_downsampled(self, min_resolution):
        """Get data downsampled approximately to `min_resolution`.

        The returned resolution is at least `min_resolution` but less than
        double that, in each dimension. The returned data are the original
        data if `min_resolution` is big enough.

        Args:
            min_resolution: (x, y) minimal number of columns and rows; floats
                are accepted.

        Returns:
            data: Array2D or Image (depending on the subclass).
        """
        return self.get_exact(self.target_resolution(min_resolution))

    def get_exact(self, resolution):
        """Get data downsampled to exactly `resolution` = (columns, rows).

        Raises:
            ValueError: If `resolution` exceeds the original in either dimension.
        """
        resolution = (int(resolution[0]), int(resolution[1]))
        if resolution[0] < 1 or resolution[1] < 1:
            raise ValueError(f"Resolution must be positive, got {resolution}")
        with self._lock:
            return self._get_or_compute(resolution)

    def _get_or_compute(self, resolution):
        cached = self._downsampled.get(resolution)
        if cached is not None:
            return cached

        src_resolution = downsampling_source_2d(resolution, (self.n_columns, self.n_rows))
        if src_resolution is None:
            raise AssertionError(f"Original resolution {resolution} missing from cache")
        src_data = self._get_or_compute(src_resolution)

        if self.display:
            print(f"Downsampling {src_resolution[0]}x{src_resolution[1]} "
                  f"-> {resolution[0]}x{resolution[1]}")

        result = self._downsample(src_data, resolution)
        self._downsampled[resolution] = result
        return result

    @abstractmethod
    def validate(self, data):
        """Raise if `data` cannot be the root of this pyramid."""
        pass

    @abstractmethod
    def _downsample(self, data, resolution):
        """Downsample `data` to exactly `resolution` = (columns, rows)."""
        pass
