"""Shared fixtures for downsampling tests."""
import numpy as np
import pytest

from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image


@pytest.fixture
def random_grid():
    """64 x 32 grid of random values."""
    rng = np.random.default_rng(42)
    return Array2D.create(64, 32, rng.random(64 * 32))


@pytest.fixture
def wide_grid():
    """Very wide, short grid (the typical sequence-heatmap shape)."""
    rng = np.random.default_rng(0)
    return Array2D.create(2000, 20, rng.random(2000 * 20) * 100)


@pytest.fixture
def ramp_row():
    """1 row x 4 columns: [0, 2, 4, 6]."""
    return Array2D.create(4, 1, np.array([0.0, 2.0, 4.0, 6.0]))


@pytest.fixture
def red_green_image():
    """2 x 1 image: opaque red, opaque green (ARaGaBa)."""
    return Image(2, 1, [255, 255, 0, 0, 255, 0, 255, 0])


@pytest.fixture
def random_image():
    """48 x 20 image with random straight RGBA pixels."""
    rng = np.random.default_rng(7)
    rgba = rng.integers(0, 256, size=(20, 48, 4))
    return Image.from_rgba(rgba)
