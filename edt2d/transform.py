"""Exact squared Euclidean distance transform of a 2-D grid.

The grid is a flat, row-major array of ``width * height`` floating-point
cells (``index = x + y * width``).  Seed cells hold a finite value ``>= 0``;
every other cell holds :data:`INFINITY`.  After the transform each cell holds
the smallest seed-anchored squared distance, and the optional closest-point
map records the ``(x, y)`` of the seed that produced it.

Algorithm
---------
Column relaxation
    Two linear sweeps per column (top to bottom, then bottom to top).  A cell
    takes ``neighbour + 1`` when that is strictly smaller, so every cell ends
    up with ``seed value + rows traversed`` for the best seed in its column.
    Columns are independent; each sweep step updates a whole row of columns.

Row envelope
    Felzenszwalb–Huttenlocher lower envelope of parabolas, one row at a time.
    A left-to-right pass builds a stack of parabola apexes and the
    intersections between consecutive ones; a right-to-left pass evaluates
    the envelope into row scratch buffers, which are then copied back.  The
    column offset is squared here, so the result at ``x`` is
    ``min over x0 of (x - x0)**2 + value(x0)**2``.

Seed values
-----------
``mode="offset"`` (default) treats a seed value ``v`` as a linear distance
offset: ``(x - sx)**2 + (v + |y - sy|)**2``.  ``mode="additive"`` replaces the
column sweeps by an exact 1-D envelope along columns and yields
``v + (x - sx)**2 + (y - sy)**2``.  Both agree when every seed is ``0``.

Complexity is O(width × height) per call.  The caller's arrays are written
once, after both phases have completed on call-scoped work copies.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np
import numpy.typing as npt

log = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]
_IntArray = npt.NDArray[np.integer]

#: Marker for cells with no known value yet.
INFINITY: float = float("inf")

#: Accepted values for the ``mode`` keyword.
MODES: Tuple[str, ...] = ("offset", "additive")

_MAX_OFFSET_SEED: float = float(np.sqrt(np.finfo(np.float64).max)) / 2.0

__all__ = ["INFINITY", "MODES", "squared_distance_transform", "squared_edt"]


# ---------------------------------------------------------------------------
# Boundary checks
# ---------------------------------------------------------------------------

def _check_mode(mode: str) -> None:
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")


def _check_dimensions(width: int, height: int) -> Tuple[int, int]:
    if int(width) != width or int(height) != height:
        raise ValueError(f"width and height must be integers, got {width!r} x {height!r}")
    width, height = int(width), int(height)
    if width < 1 or height < 1:
        raise ValueError(f"width and height must be >= 1, got {width} x {height}")
    return width, height


def _check_grid(grid: _Array, width: int, height: int) -> None:
    if not isinstance(grid, np.ndarray):
        raise TypeError(f"grid must be a numpy array, got {type(grid).__name__}")
    if not np.issubdtype(grid.dtype, np.floating):
        raise TypeError(f"grid must have a floating dtype, got {grid.dtype}")
    if np.finfo(grid.dtype).bits < 32:
        raise TypeError(f"grid dtype {grid.dtype} is too narrow; use float32 or wider")
    if grid.size != width * height:
        raise ValueError(
            f"grid has {grid.size} elements, expected width * height = {width * height}"
        )
    if not grid.flags.writeable:
        raise ValueError("grid is read-only")
    if np.isnan(grid).any():
        raise ValueError("grid contains NaN")
    if (grid < 0).any():
        raise ValueError("grid contains negative values; seeds must be >= 0")


def _check_seed_range(grid: _Array) -> None:
    # Offset mode squares seed values in the row phase.
    seeds = grid[np.isfinite(grid)]
    if seeds.size and seeds.max() > _MAX_OFFSET_SEED:
        raise ValueError(
            f"seed value {seeds.max()!r} is too large to square; "
            f"offset mode needs seeds <= {_MAX_OFFSET_SEED:.3g}"
        )


def _check_closest(closest_points: _IntArray, width: int, height: int) -> None:
    if not isinstance(closest_points, np.ndarray):
        raise TypeError(
            f"closest_points must be a numpy array, got {type(closest_points).__name__}"
        )
    if not np.issubdtype(closest_points.dtype, np.integer):
        raise TypeError(f"closest_points must have an integer dtype, got {closest_points.dtype}")
    if np.iinfo(closest_points.dtype).max < max(width, height) - 1:
        raise ValueError(
            f"closest_points dtype {closest_points.dtype} cannot hold coordinates "
            f"up to {max(width, height) - 1}"
        )
    if closest_points.ndim == 0 or closest_points.shape[-1] != 2:
        raise ValueError(
            f"closest_points must have a trailing axis of length 2, got shape {closest_points.shape}"
        )
    if closest_points.size != 2 * width * height:
        raise ValueError(
            f"closest_points has {closest_points.size // 2} points, "
            f"expected width * height = {width * height}"
        )
    if not closest_points.flags.writeable:
        raise ValueError("closest_points is read-only")


# ---------------------------------------------------------------------------
# 1-D lower envelope of parabolas
# ---------------------------------------------------------------------------

class _EnvelopeScratch:
    """Buffers for :func:`_lower_envelope`, sized once and reused per line."""

    __slots__ = ("apex", "bounds", "values", "sources")

    def __init__(self, n: int) -> None:
        # At most n parabolas, so at most n - 1 finite boundaries between them.
        self.apex: List[int] = [0] * (n + 1)
        self.bounds: List[float] = [0.0] * n
        self.values: List[float] = [0.0] * n
        self.sources: List[int] = [0] * n


def _parabola(x0: float, f0: float, x: float) -> float:
    dx = x - x0
    return dx * dx + f0


def _lower_envelope(costs: List[float], scratch: _EnvelopeScratch) -> bool:
    """Fill ``scratch.values[:n]`` with ``min over x0 of (x - x0)**2 + costs[x0]``.

    ``scratch.sources[:n]`` receives the minimising ``x0`` for every ``x``.
    Returns ``False`` (scratch untouched) when no cost is finite.
    """
    n = len(costs)
    apex = scratch.apex
    bounds = scratch.bounds

    for first in range(n):
        if costs[first] < INFINITY:
            break
    else:
        return False

    apex[0] = first
    k = 0
    for x1 in range(first + 1, n):
        f1 = costs[x1]
        if f1 == INFINITY:
            continue
        while True:
            x0 = apex[k]
            f0 = costs[x0]
            # Only a strictly higher incumbent is discarded; ties keep the left parabola.
            if k > 0 and _parabola(x0, f0, bounds[k - 1]) > _parabola(x1, f1, bounds[k - 1]):
                k -= 1
                continue
            bounds[k] = ((x1 * x1 + f1) - (x0 * x0 + f0)) / (2.0 * (x1 - x0))
            k += 1
            apex[k] = x1
            break

    values = scratch.values
    sources = scratch.sources
    for x in range(n - 1, -1, -1):
        while k > 0 and x < bounds[k - 1]:
            k -= 1
        x0 = apex[k]
        values[x] = _parabola(x0, costs[x0], x)
        sources[x] = x0
    return True


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------

def _relax_step(dist: _Array, closest: Optional[_IntArray], y: int, src: int) -> None:
    candidate = dist[src] + 1.0
    better = dist[y] > candidate
    if not better.any():
        return
    dist[y, better] = candidate[better]
    if closest is not None:
        closest[y, better] = closest[src, better]


def _relax_columns(dist: _Array, closest: Optional[_IntArray]) -> None:
    """Propagate ``value + rows traversed`` along every column, down then up."""
    height = dist.shape[0]
    for y in range(1, height):
        _relax_step(dist, closest, y, y - 1)
    for y in range(height - 2, -1, -1):
        _relax_step(dist, closest, y, y + 1)


def _column_envelope(
    dist: _Array, closest: Optional[_IntArray], scratch: _EnvelopeScratch
) -> None:
    """Exact 1-D squared distance transform along every column (additive mode)."""
    height, width = dist.shape
    for x in range(width):
        if not _lower_envelope(dist[:, x].tolist(), scratch):
            continue
        rows = scratch.sources[:height]
        dist[:, x] = scratch.values[:height]
        if closest is not None:
            closest[:, x] = closest[rows, x]


def _row_envelope(
    dist: _Array,
    closest: Optional[_IntArray],
    scratch: _EnvelopeScratch,
    square: bool,
) -> None:
    """Lower envelope of parabolas along every row.

    With ``square`` the row holds linear column offsets which are squared
    before use; otherwise the row already holds additive costs.
    """
    height, width = dist.shape
    for y in range(height):
        row = dist[y].tolist()
        if square:
            row = [d * d for d in row]
        if not _lower_envelope(row, scratch):
            continue
        cols = scratch.sources[:width]
        dist[y] = scratch.values[:width]
        if closest is not None:
            closest[y] = closest[y, cols]


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def squared_distance_transform(
    grid: _Array,
    width: int,
    height: int,
    closest_points: Optional[_IntArray] = None,
    *,
    mode: str = "offset",
) -> None:
    """Replace every cell of *grid* by its squared distance to the nearest seed.

    Parameters
    ----------
    grid:
        Writable floating-point array with ``width * height`` elements in
        row-major order.  Seeds are finite and ``>= 0``; unknown cells are
        :data:`INFINITY`.  Modified in place.  Cells that no seed reaches
        stay :data:`INFINITY`.
    width, height:
        Grid dimensions, both ``>= 1``.
    closest_points:
        Optional writable integer array with ``width * height`` points and a
        trailing axis of length 2, e.g. shape ``(height, width, 2)``.
        Overwritten with the ``(x, y)`` of the seed that realised each
        cell's value; cells that stay infinite keep their own coordinates.
    mode:
        ``"offset"`` or ``"additive"``; see the module docstring.  Only
        matters when some seed is non-zero.

    Raises
    ------
    TypeError
        *grid* is not a numpy array of float32 or wider, or *closest_points*
        is not an integer numpy array.
    ValueError
        Bad dimensions, element counts, seed values, or *mode*; a
        *closest_points* dtype too small for the coordinates; squared
        distances that overflow the dtype of *grid*.

    Nothing is written to *grid* or *closest_points* unless the whole
    transform succeeds.
    """
    _check_mode(mode)
    width, height = _check_dimensions(width, height)
    _check_grid(grid, width, height)
    if mode == "offset":
        _check_seed_range(grid)
    if closest_points is not None:
        _check_closest(closest_points, width, height)

    dist = np.array(grid, dtype=np.float64).reshape(height, width)
    closest = None
    if closest_points is not None:
        closest = np.empty((height, width, 2), dtype=np.intp)
        closest[..., 0] = np.arange(width)[None, :]
        closest[..., 1] = np.arange(height)[:, None]
    scratch = _EnvelopeScratch(max(width, height))

    log.debug(
        "squared_distance_transform: %dx%d grid, %d seeds, mode=%s",
        width, height, int(np.isfinite(dist).sum()), mode,
    )

    if mode == "offset":
        _relax_columns(dist, closest)
        _row_envelope(dist, closest, scratch, square=True)
    else:
        _column_envelope(dist, closest, scratch)
        _row_envelope(dist, closest, scratch, square=False)

    with np.errstate(over="ignore"):
        committed = dist.reshape(grid.shape).astype(grid.dtype)
    if (np.isinf(committed) & np.isfinite(dist.reshape(grid.shape))).any():
        raise ValueError(
            f"squared distances exceed the range of {grid.dtype}; use a wider grid dtype"
        )

    grid[...] = committed
    if closest_points is not None:
        closest_points[...] = closest.reshape(closest_points.shape)


def squared_edt(
    field: npt.ArrayLike,
    *,
    return_closest: bool = False,
    mode: str = "offset",
):
    """Squared distance transform of a 2-D ``(height, width)`` seed field.

    Returns a new float64 array; *field* is left untouched.  With
    *return_closest* also returns a ``(height, width, 2)`` integer array of
    ``(x, y)`` closest seeds.

    Examples
    --------
    >>> import numpy as np
    >>> from edt2d import INFINITY, squared_edt
    >>> field = np.full((3, 4), INFINITY)
    >>> field[0, 0] = 0.0
    >>> squared_edt(field)[2]
    array([ 4.,  5.,  8., 13.])
    """
    field = np.asarray(field)
    if field.ndim != 2:
        raise ValueError(f"field must be 2-D (height, width), got shape {field.shape}")
    height, width = field.shape
    out = np.array(field, dtype=np.float64)
    closest = np.empty((height, width, 2), dtype=np.intp) if return_closest else None
    squared_distance_transform(out, width, height, closest, mode=mode)
    if return_closest:
        return out, closest
    return out
