"""1D area-weighted resampling plans and their 2D application."""
from collections import namedtuple

import numpy as np
from scipy import sparse


ResamplingPlan = namedtuple('ResamplingPlan', ['from_index', 'to_index', 'weight'])
ResamplingPlan.__doc__ = """Weighted mapping from an old 1D axis to a new one.

Old cell `from_index[k]` contributes to new cell `to_index[k]` with weight
`weight[k]`. Weights contributed to each new cell sum to 1.
"""


def _check_size(n, name):
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise ValueError(f"{name} must be a positive integer, got {n!r}")
    if n < 1:
        raise ValueError(f"{name} must be a positive integer, got {n}")
    return int(n)


def resampling_coefficients(n_old, n_new):
    """Calculate how much each old cell contributes to each new cell (1D).

    Both axes are laid over the same interval; the old axis has `n_old` cells
    and the new axis `n_new` cells. Sweeping over the boundaries of both
    partitions yields one (from, to, weight) entry per sub-interval, where the
    weight is the length of the sub-interval measured in new-cell units.
    Typically one old cell contributes to several new cells and vice versa.

    Boundaries are computed in integer units of 1/(n_old*n_new) of the whole
    interval, so no sub-interval is lost or duplicated by rounding.

    To resample 2D data, compute row-wise and column-wise plans and multiply
    their weights.

    Args:
        n_old: Number of cells in the old axis (positive int).
        n_new: Number of cells in the new axis (positive int). Intended to be
            <= n_old (downsampling).

    Returns:
        plan: ResamplingPlan of three equal-length arrays, O(n_old + n_new) long.

    Raises:
        ValueError: If either size is not a positive integer.
    """
    n_old = _check_size(n_old, 'n_old')
    n_new = _check_size(n_new, 'n_new')

    # Old cell i spans [i*n_new, (i+1)*n_new), new cell j spans [j*n_old, (j+1)*n_old)
    old_notches = np.arange(n_old + 1, dtype=np.int64) * n_new
    new_notches = np.arange(n_new + 1, dtype=np.int64) * n_old
    notches = np.union1d(old_notches, new_notches)

    starts = notches[:-1]
    from_index = starts // n_new
    to_index = starts // n_old
    weight = np.diff(notches) / n_old

    return ResamplingPlan(from_index, to_index, weight)


def resampling_matrix(n_old, n_new):
    """Resampling plan as a sparse (n_new, n_old) matrix.

    Multiplying the matrix with a vector of old cell values gives the new
    cell values.
    """
    plan = resampling_coefficients(n_old, n_new)
    return sparse.csr_matrix(
        (plan.weight, (plan.to_index, plan.from_index)),
        shape=(n_new, n_old),
    )


def apply_resampling(values, new_rows, new_columns):
    """Resample a (rows, columns, channels) array along both axes.

    Every output cell accumulates input[from_row, from_col] * w_row * w_col
    over the outer product of the row plan and the column plan. Channels are
    resampled independently with the same weights.

    Args:
        values: Input array (H, W, C).
        new_rows: Output row count.
        new_columns: Output column count.

    Returns:
        out: float64 array (new_rows, new_columns, C).
    """
    values = np.asarray(values, dtype=np.float64)
    h0, w0, n_channels = values.shape

    # Rows: (new_rows, h0) @ (h0, w0*C)
    m_y = resampling_matrix(h0, new_rows)
    out = m_y @ values.reshape(h0, w0 * n_channels)

    # Columns: bring the column axis to the front, then (new_columns, w0) @ (w0, new_rows*C)
    out = out.reshape(new_rows, w0, n_channels).transpose(1, 0, 2).reshape(w0, new_rows * n_channels)
    m_x = resampling_matrix(w0, new_columns)
    out = m_x @ out

    out = np.asarray(out).reshape(new_columns, new_rows, n_channels).transpose(1, 0, 2)
    return np.ascontiguousarray(out)
