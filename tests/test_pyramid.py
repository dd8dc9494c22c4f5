"""Tests for the cached downsampling pyramid."""
import threading

import numpy as np
import pytest
from heatmap_downsampling.data.array2d import Array2D
from heatmap_downsampling.data.image import Image
from heatmap_downsampling.downsampling import (
    GridDownsampler, ImageDownsampler, create_from_grid, create_from_image,
    load_downsampler, downsample_numbers,
)
from heatmap_downsampling.utils.resolution import pyramid_depth


def _count_steps(downsampler):
    """Wrap `_downsample` to record every computed resolution."""
    calls = []
    original = downsampler._downsample

    def counting(data, resolution):
        calls.append(resolution)
        return original(data, resolution)

    downsampler._downsample = counting
    return calls


class TestCreation:
    """Test construction of downsamplers."""

    def test_root_present(self, wide_grid):
        ds = create_from_grid(wide_grid)
        assert isinstance(ds, GridDownsampler)
        assert (ds.n_columns, ds.n_rows) == (2000, 20)
        assert ds.resolutions == [(2000, 20)]
        assert (2000, 20) in ds
        assert ds.original is wide_grid

    def test_from_image(self, random_image):
        ds = create_from_image(random_image)
        assert isinstance(ds, ImageDownsampler)
        assert len(ds) == 1

    def test_load_dispatch(self, random_grid, random_image):
        assert isinstance(load_downsampler(random_grid), GridDownsampler)
        assert isinstance(load_downsampler(random_image), ImageDownsampler)

    def test_load_unknown_type_raises(self):
        with pytest.raises(TypeError):
            load_downsampler(np.zeros((4, 4)))

    def test_wrong_type_raises(self, random_grid):
        with pytest.raises(TypeError):
            ImageDownsampler(random_grid)

    def test_missing_values_raise(self):
        grid = Array2D.create(2, 2, [1.0, np.nan, 0.0, 0.0])
        with pytest.raises(ValueError, match='NaN'):
            create_from_grid(grid)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            create_from_grid(Array2D(5, 5, np.zeros(10)))

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            create_from_grid(Array2D.empty())

    def test_params(self, random_grid):
        ds = create_from_grid(random_grid, {'display': True, 'unknown': 1})
        assert ds.display is True
        assert not hasattr(ds, 'unknown')
        ds.parse_input_parameter(['display', False])
        assert ds.display is False


class TestGetDownsampled:
    """Test approximate resolution requests."""

    def test_resolution_bounds(self, wide_grid):
        ds = create_from_grid(wide_grid)
        for x, y in [(100, 5), (3, 3), (1000, 10), (700.5, 1.5)]:
            out = ds.get_downsampled((x, y))
            assert x <= out.n_columns < 2 * x
            assert y <= out.n_rows < 2 * y

    def test_original_when_request_large(self, wide_grid):
        ds = create_from_grid(wide_grid)
        assert ds.get_downsampled((5000, 50)) is wide_grid
        out = ds.get_downsampled((1500, 50))
        assert (out.n_columns, out.n_rows) == (2000, 20)

    def test_one_axis_at_original(self, wide_grid):
        ds = create_from_grid(wide_grid)
        out = ds.get_downsampled((100, 40))
        assert (out.n_columns, out.n_rows) == (128, 20)

    def test_repeated_request_cached(self, wide_grid):
        ds = create_from_grid(wide_grid)
        first = ds.get_downsampled((100, 5))
        n_cached = len(ds)
        second = ds.get_downsampled((100, 5))
        assert second is first
        assert len(ds) == n_cached

    def test_only_dependency_chain_cached(self, wide_grid):
        ds = create_from_grid(wide_grid)
        out = ds.get_downsampled((100, 5))
        target = (out.n_columns, out.n_rows)
        assert len(ds) == pyramid_depth((2000, 20), target) + 1

    def test_shared_ancestor_computed_once(self, wide_grid):
        ds = create_from_grid(wide_grid)
        calls = _count_steps(ds)
        ds.get_downsampled((8, 4))
        n_first = len(calls)
        ds.get_downsampled((4, 4))
        # (4, 4) is one step from the cached (8, 4)
        assert len(calls) == n_first + 1
        assert len(set(calls)) == len(calls)
        assert len(ds) == len(calls) + 1

    def test_exact_above_original_raises(self, wide_grid):
        ds = create_from_grid(wide_grid)
        with pytest.raises(ValueError):
            ds.get_exact((2001, 20))
        with pytest.raises(ValueError):
            ds.get_exact((0, 20))

    def test_mass_conserved_through_pyramid(self):
        ones = Array2D.create(200, 20, np.ones(4000))
        ds = create_from_grid(ones)
        for resolution in [(1, 1), (16, 2), (64, 16), (200, 1)]:
            out = ds.get_exact(resolution)
            np.testing.assert_allclose(out.values, 1.0, atol=1e-5)

    def test_pyramid_matches_direct(self, random_grid):
        """For power-of-2 sizes repeated halving equals direct block means."""
        ds = create_from_grid(random_grid)
        pyramid = ds.get_exact((8, 4))
        direct = downsample_numbers(random_grid, 8, 4)
        np.testing.assert_allclose(pyramid.values, direct.values, atol=1e-5)

    def test_image_pyramid(self, random_image):
        ds = create_from_image(random_image)
        out = ds.get_downsampled((10, 4))
        assert isinstance(out, Image)
        assert (out.n_columns, out.n_rows) == (16, 4)

    def test_display_prints_steps(self, random_grid, capsys):
        ds = create_from_grid(random_grid, {'display': True})
        ds.get_exact((32, 32))
        assert 'Downsampling 64x32 -> 32x32' in capsys.readouterr().out

    def test_concurrent_requests(self, wide_grid):
        ds = create_from_grid(wide_grid)
        calls = _count_steps(ds)
        results = []

        def worker():
            results.append(ds.get_downsampled((50, 5)))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert all(r is results[0] for r in results)
        assert len(set(calls)) == len(calls)
