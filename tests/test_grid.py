"""Tests for edt2d grid utilities."""

import numpy as np
import numpy.testing as npt
import pytest

from edt2d import INFINITY, distance_from_mask, save_npy, seeds_from_mask


class TestSeedsFromMask:
    def test_values(self):
        mask = np.array([[True, False], [False, True]])
        f = seeds_from_mask(mask)
        npt.assert_array_equal(f, [[0.0, INFINITY], [INFINITY, 0.0]])

    def test_default_dtype(self):
        assert seeds_from_mask(np.ones((2, 2))).dtype == np.float32

    def test_custom_dtype(self):
        assert seeds_from_mask(np.ones((2, 2)), dtype=np.float64).dtype == np.float64

    def test_truthy_values(self):
        f = seeds_from_mask(np.array([0, 3, -1]))
        npt.assert_array_equal(f, [INFINITY, 0.0, 0.0])

    @pytest.mark.parametrize("dtype", [np.int32, np.float16])
    def test_unusable_dtype_rejected(self, dtype):
        with pytest.raises(TypeError, match="float32 or wider"):
            seeds_from_mask(np.ones(3), dtype=dtype)


class TestDistanceFromMask:
    def test_point(self):
        mask = np.zeros((64, 64), dtype=bool)
        mask[32, 32] = True
        dist = distance_from_mask(mask)
        assert dist.shape == (64, 64)
        assert dist[32, 40] == 8.0
        assert dist[32, 32] == 0.0

    def test_pythagorean(self):
        mask = np.zeros((5, 6), dtype=bool)
        mask[0, 0] = True
        assert distance_from_mask(mask)[3, 4] == 5.0

    def test_matches_hypot(self):
        mask = np.zeros((9, 9), dtype=bool)
        mask[2, 7] = True
        ys, xs = np.indices((9, 9))
        npt.assert_allclose(distance_from_mask(mask), np.hypot(xs - 7, ys - 2))

    def test_empty_mask(self):
        assert np.isinf(distance_from_mask(np.zeros((3, 3), dtype=bool))).all()

    def test_return_closest(self):
        mask = np.zeros((4, 4), dtype=bool)
        mask[0, 0] = mask[3, 3] = True
        dist, closest = distance_from_mask(mask, return_closest=True)
        assert closest.shape == (4, 4, 2)
        npt.assert_array_equal(closest[0, 1], [0, 0])
        npt.assert_array_equal(closest[3, 2], [3, 3])
        npt.assert_allclose(dist[0, 1], 1.0)

    def test_mask_not_modified(self):
        mask = np.zeros((3, 3), dtype=bool)
        mask[1, 1] = True
        distance_from_mask(mask)
        assert mask.sum() == 1


class TestSaveNpy:
    def test_unreached_cells_survive_reload(self, tmp_path):
        mask = np.zeros((3, 5), dtype=bool)
        dist = distance_from_mask(mask)
        path = tmp_path / "empty.npy"
        save_npy(str(path), dist)
        assert np.isinf(np.load(path)).all()

    def test_distance_field_reload(self, tmp_path):
        mask = np.zeros((6, 6), dtype=bool)
        mask[1, 4] = True
        dist = distance_from_mask(mask)
        path = tmp_path / "fields" / "point.npy"
        save_npy(str(path), dist)
        loaded = np.load(path)
        assert loaded.dtype == np.float64
        npt.assert_array_equal(loaded, dist)

    def test_bare_filename(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        save_npy("ring.npy", np.zeros((2, 2)))
        assert (tmp_path / "ring.npy").is_file()
