"""
edt2d — Exact Squared Euclidean Distance Transform for 2-D grids
================================================================

Fills the unknown cells of a partially known scalar grid with the squared
Euclidean distance to the nearest seed cell, optionally recording which seed
that was.  Separable two-phase algorithm: linear column sweeps followed by a
Felzenszwalb–Huttenlocher lower envelope of parabolas along every row.

Implemented features
--------------------
- In-place transform of flat row-major buffers: :func:`squared_distance_transform`
- Array convenience wrapper: :func:`squared_edt`
- Mask helpers: :func:`seeds_from_mask`, :func:`distance_from_mask`
- Brute-force cross-check: :func:`brute_force_squared_distance`

Quick start
-----------

Binary mask to distance field::

    import numpy as np
    from edt2d import distance_from_mask

    mask = np.zeros((64, 64), dtype=bool)
    mask[32, 32] = True
    dist = distance_from_mask(mask)      # dist[32, 40] == 8.0

Flat buffer, in place, with closest points::

    from edt2d import INFINITY, squared_distance_transform

    grid = np.full(5 * 5, INFINITY, dtype=np.float32)
    grid[0] = grid[24] = 0.0
    closest = np.empty((25, 2), dtype=np.int32)
    squared_distance_transform(grid, 5, 5, closest)

A signed field is built by the caller as
``np.sqrt(squared_edt(outside)) - np.sqrt(squared_edt(inside))``.
"""

from .transform import INFINITY, MODES, squared_distance_transform, squared_edt
from .reference import brute_force_squared_distance
from .grid import seeds_from_mask, distance_from_mask, save_npy

__version__ = "0.1.0"

__all__ = [
    # Core transform
    "INFINITY",
    "MODES",
    "squared_distance_transform",
    "squared_edt",

    # Reference
    "brute_force_squared_distance",

    # Grid utilities
    "seeds_from_mask",
    "distance_from_mask",
    "save_npy",
]
