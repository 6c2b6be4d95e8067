"""Grid utilities: building seed fields from masks and consuming results."""

from __future__ import annotations

import logging
import os

import numpy as np
import numpy.typing as npt

from .transform import INFINITY, squared_edt

log = logging.getLogger(__name__)

_Array = npt.NDArray[np.floating]


def seeds_from_mask(mask: npt.ArrayLike, *, dtype: npt.DTypeLike = np.float32) -> _Array:
    """Seed field for *mask*: ``0`` where the mask is set, :data:`INFINITY` elsewhere.

    Parameters
    ----------
    mask:
        Array of any shape; truthy cells become seeds.
    dtype:
        Floating dtype of the returned field.
    """
    dtype = np.dtype(dtype)
    if not np.issubdtype(dtype, np.floating) or np.finfo(dtype).bits < 32:
        raise TypeError(f"dtype must be float32 or wider, got {dtype}")
    mask = np.asarray(mask, dtype=bool)
    return np.where(mask, 0.0, INFINITY).astype(dtype)


def distance_from_mask(mask: npt.ArrayLike, *, return_closest: bool = False):
    """Euclidean distance from every cell of a 2-D *mask* to its nearest set cell.

    Returns a float64 ``(height, width)`` array (``inf`` everywhere if the mask
    is empty).  With *return_closest* also returns the ``(height, width, 2)``
    ``(x, y)`` coordinates of the nearest set cell.
    """
    field = seeds_from_mask(mask, dtype=np.float64)
    if not np.isfinite(field).any():
        log.debug("distance_from_mask: empty mask of shape %s", field.shape)
    result = squared_edt(field, return_closest=return_closest)
    if return_closest:
        sq, closest = result
        return np.sqrt(sq), closest
    return np.sqrt(result)


def save_npy(path: str, field: _Array) -> None:
    """Save *field* to *path* (creates parent directories if needed)."""
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    np.save(path, field)
