"""Dense 2D array of scalar values (the grid a heatmap is built from)."""
import numpy as np


class Array2D:
    """Row-major 2D array of `n_columns` x `n_rows` values.

    The value for column `x`, row `y` is stored at `values[y * n_columns + x]`.
    Missing cells are NaN. The constructor does not validate the length of
    `values`; use `Array2D.create` or `validate_length` for that.
    """

    def __init__(self, n_columns, n_rows, values):
        self.n_columns = int(n_columns)
        self.n_rows = int(n_rows)
        self.values = np.asarray(values).ravel()

    def __repr__(self):
        return f"Array2D({self.n_columns}x{self.n_rows}, dtype={self.values.dtype})"

    @classmethod
    def create(cls, n_columns, n_rows, values):
        """Create an Array2D, checking that `values` has n_columns*n_rows items."""
        result = cls(n_columns, n_rows, values)
        result.validate_length()
        return result

    @classmethod
    def empty(cls):
        """Array2D with dimensions 0x0 and no data."""
        return cls(0, 0, np.zeros(0))

    @classmethod
    def from_matrix(cls, matrix):
        """Array2D from a (n_rows, n_columns) array."""
        matrix = np.asarray(matrix)
        if matrix.ndim != 2:
            raise ValueError(f"Matrix must be 2D, got shape {matrix.shape}")
        n_rows, n_columns = matrix.shape
        return cls(n_columns, n_rows, matrix.ravel())

    @classmethod
    def create_random(cls, n_columns, n_rows, seed=None):
        """Random values between 0 and 1.

        The first column and last row are 0, the last column and first row
        are 1, so the orientation of a rendered heatmap is easy to check.
        """
        rng = np.random.default_rng(seed)
        values = rng.random((n_rows, n_columns))
        values[:, -1] = 1
        values[0, :] = 1
        values[:, 0] = 0
        values[-1, :] = 0
        return cls(n_columns, n_rows, values.ravel())

    @property
    def shape(self):
        """(n_rows, n_columns), numpy order."""
        return (self.n_rows, self.n_columns)

    @property
    def is_numeric(self):
        return np.issubdtype(self.values.dtype, np.number)

    def get(self, x, y):
        """Value at column `x`, row `y`, or None outside the array."""
        if x < 0 or x >= self.n_columns or y < 0 or y >= self.n_rows:
            return None
        return self.values[self.n_columns * y + x]

    def get_range(self):
        """Minimum and maximum value, ignoring missing cells."""
        if self.values.size == 0:
            return (np.inf, -np.inf)
        return (float(np.nanmin(self.values)), float(np.nanmax(self.values)))

    def has_missing(self):
        return self.is_numeric and bool(np.isnan(self.values).any())

    def as_matrix(self):
        """View of the values as a (n_rows, n_columns) array."""
        self.validate_length()
        return self.values.reshape(self.n_rows, self.n_columns)

    def validate_length(self):
        """Raise ValueError if the number of values does not match the size."""
        if self.values.size != self.n_columns * self.n_rows:
            raise ValueError(
                f"Length of values must be n_columns * n_rows "
                f"({self.n_columns} * {self.n_rows}), got {self.values.size}"
            )
