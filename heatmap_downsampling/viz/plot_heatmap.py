"""Heatmap and pyramid visualization utilities."""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image


def plot_grid(grid, ax=None, cmap='viridis', title=None):
    """Plot an Array2D as a heatmap (missing cells left blank).

    Args:
        grid: Array2D.
        ax: matplotlib axes. If None, creates new figure.
        cmap: Colormap name.
        title: Optional axes title.

    Returns:
        ax: The matplotlib axes used.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 6))

    matrix = np.ma.masked_invalid(grid.as_matrix().astype(float))
    ax.imshow(matrix, cmap=cmap, aspect='auto', interpolation='nearest')
    ax.set_title(title or f'{grid.n_columns}x{grid.n_rows}')
    ax.axis('off')
    return ax


def plot_image(image, ax=None, title=None):
    """Plot an Image (converted to straight RGBA).

    Returns:
        ax: The matplotlib axes used.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 6))

    ax.imshow(image.to_rgba(), aspect='auto', interpolation='nearest')
    ax.set_title(title or f'{image.n_columns}x{image.n_rows}')
    ax.axis('off')
    return ax


def plot_pyramid(downsampler, cmap='viridis'):
    """Plot every resolution cached in a downsampler, largest first.

    Args:
        downsampler: GridDownsampler or ImageDownsampler.
        cmap: Colormap name for grids.

    Returns:
        fig: The matplotlib figure.
    """
    resolutions = sorted(downsampler.resolutions, key=lambda r: r[0] * r[1], reverse=True)
    n = len(resolutions)
    fig, axes = plt.subplots(n, 1, figsize=(8, 2 * n), squeeze=False)
    for ax, resolution in zip(axes[:, 0], resolutions):
        data = downsampler.get_exact(resolution)
        if isinstance(data, Image):
            plot_image(data, ax=ax)
        elif isinstance(data, Array2D):
            plot_grid(data, ax=ax, cmap=cmap)
        else:
            raise ValueError(f"Unknown data type: {type(data).__name__}")
    fig.tight_layout()
    return fig
