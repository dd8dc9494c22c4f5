"""Choice of cached resolutions for a downsampling pyramid."""


def downsampling_target(n_datapoints, n_pixels):
    """Canonical resolution for showing `n_datapoints` cells on `n_pixels` pixels.

    Returns `m`, a power of 2 or equal to `n_datapoints`, such that
    `n_pixels <= m < 2*n_pixels`, or `m == n_datapoints < n_pixels`.

    Quantizing to powers of 2 keeps the number of distinct cached levels
    logarithmic while the viewport is zoomed continuously.

    Args:
        n_datapoints: Number of cells of the original data along one axis.
        n_pixels: Number of pixels (or equivalent datapoints) requested; may
            be a float.

    Returns:
        m: int.
    """
    if n_datapoints < 1:
        raise ValueError(f"n_datapoints must be positive, got {n_datapoints}")
    if not n_pixels > 0:
        raise ValueError(f"n_pixels must be positive, got {n_pixels}")
    result = 1
    while result < n_pixels and result < n_datapoints:
        result = min(2 * result, n_datapoints)
    return int(result)


def downsampling_source_2d(wanted, original):
    """Resolution from which `wanted` should be obtained by one downsampling step.

    The source has either its Y length or its X length doubled (capped at the
    `original` length) and the other length kept the same. Y is doubled when
    X is already at the original length, or when both axes still need
    reduction and `wanted` is wider than tall; otherwise X is doubled.

    Args:
        wanted: (x, y) target resolution.
        original: (x, y) resolution of the original data.

    Returns:
        source: (x, y) tuple, or None if `wanted` equals `original`.

    Raises:
        ValueError: If `wanted` exceeds `original` in either dimension.
    """
    wx, wy = wanted
    ox, oy = original
    if wx > ox or wy > oy:
        raise ValueError(
            f"Cannot downsample to higher resolution than original "
            f"(wanted {wx}x{wy}, original {ox}x{oy})"
        )
    if wx == ox and wy == oy:
        return None
    if wx == ox or (wy != oy and wx > wy):
        # From up
        return (wx, min(2 * wy, oy))
    else:
        # From left
        return (min(2 * wx, ox), wy)


def pyramid_depth(original, wanted):
    """Number of halving steps between `original` and `wanted` resolutions."""
    steps = 0
    current = tuple(wanted)
    while True:
        current = downsampling_source_2d(current, original)
        if current is None:
            return steps
        steps += 1
