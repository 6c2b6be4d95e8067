"""Tests for edt2d/reference.py — brute-force squared distance transform."""

import numpy as np
import numpy.testing as npt
import pytest

from edt2d import INFINITY, brute_force_squared_distance


class TestBruteForce:
    def test_single_seed(self):
        f = np.full((3, 4), INFINITY)
        f[1, 2] = 0.0
        dist, closest = brute_force_squared_distance(f)
        ys, xs = np.indices((3, 4))
        npt.assert_array_equal(dist, (xs - 2) ** 2 + (ys - 1) ** 2)
        assert (closest[..., 0] == 2).all()
        assert (closest[..., 1] == 1).all()

    def test_nearest_of_two(self):
        f = np.full((1, 7), INFINITY)
        f[0, 0] = 0.0
        f[0, 6] = 0.0
        dist, closest = brute_force_squared_distance(f)
        npt.assert_array_equal(dist[0], [0, 1, 4, 9, 4, 1, 0])
        npt.assert_array_equal(closest[0, :, 0], [0, 0, 0, 0, 6, 6, 6])

    def test_tie_picks_first_seed_in_row_major_order(self):
        f = np.full((1, 3), INFINITY)
        f[0, 0] = f[0, 2] = 0.0
        _, closest = brute_force_squared_distance(f)
        assert tuple(closest[0, 1]) == (0, 0)

    def test_offset_mode(self):
        f = np.full((3, 1), INFINITY)
        f[0, 0] = 1.5
        dist, _ = brute_force_squared_distance(f)
        npt.assert_allclose(dist[:, 0], [2.25, 6.25, 12.25])

    def test_additive_mode(self):
        f = np.full((3, 1), INFINITY)
        f[0, 0] = 1.5
        dist, _ = brute_force_squared_distance(f, mode="additive")
        npt.assert_allclose(dist[:, 0], [1.5, 2.5, 5.5])

    def test_empty_field(self):
        dist, closest = brute_force_squared_distance(np.full((2, 3), INFINITY))
        assert np.isinf(dist).all()
        npt.assert_array_equal(closest[1, 2], [2, 1])

    def test_bad_mode(self):
        with pytest.raises(ValueError, match="mode"):
            brute_force_squared_distance(np.zeros((2, 2)), mode="chebyshev")

    def test_needs_2d(self):
        with pytest.raises(ValueError, match="2-D"):
            brute_force_squared_distance(np.zeros(4))
