"""Render a few seed masks and their Euclidean distance fields on one page.

Usage::

    python scripts/edt_gallery.py                    # saves edt_gallery.png
    python scripts/edt_gallery.py --out my_file.png  # custom output path
    python scripts/edt_gallery.py --size 128         # coarser grid
    python scripts/edt_gallery.py --save-npy fields  # also dump fields/<label>.npy

Requirements: numpy, matplotlib
"""
from __future__ import annotations

import argparse
import logging
import os
import sys

# Ensure the repo root (parent of scripts/) is importable regardless of cwd
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import matplotlib.pyplot as plt
import numpy as np

from edt2d import distance_from_mask, save_npy

log = logging.getLogger("edt_gallery")

# ---------------------------------------------------------------------------
# Mask catalogue — (label, boolean mask)
# ---------------------------------------------------------------------------

def _make_masks(n: int) -> list[tuple[str, np.ndarray]]:
    ys, xs = np.indices((n, n))
    c = (n - 1) / 2.0
    r = np.hypot(xs - c, ys - c)

    point = np.zeros((n, n), dtype=bool)
    point[n // 2, n // 2] = True

    corners = np.zeros((n, n), dtype=bool)
    corners[0, 0] = corners[-1, -1] = True

    ring = np.abs(r - 0.35 * n) < 0.75

    line = np.zeros((n, n), dtype=bool)
    idx = np.arange(n // 8, n - n // 8)
    line[idx, idx] = True

    rng = np.random.default_rng(0)
    scatter = rng.random((n, n)) < 20.0 / (n * n)
    scatter[0, -1] = True

    box = np.zeros((n, n), dtype=bool)
    box[n // 4: 3 * n // 4, n // 4: 3 * n // 4] = True
    box[n // 4 + 1: 3 * n // 4 - 1, n // 4 + 1: 3 * n // 4 - 1] = False

    return [
        ("point",   point),
        ("corners", corners),
        ("ring",    ring),
        ("line",    line),
        ("scatter", scatter),
        ("box",     box),
    ]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def render_gallery(
    masks: list[tuple[str, np.ndarray]],
    out_path: str,
    ncols: int = 3,
    npy_dir: str | None = None,
) -> None:
    nrows = (len(masks) + ncols - 1) // ncols
    fig, axes = plt.subplots(
        nrows, ncols,
        figsize=(ncols * 3.2, nrows * 3.2),
        facecolor="#111111",
    )
    axes = np.asarray(axes).ravel()

    for ax, (label, mask) in zip(axes, masks):
        dist = distance_from_mask(mask)
        log.info("%s: %d seeds, max distance %.2f", label, int(mask.sum()), float(dist.max()))
        if npy_dir:
            save_npy(os.path.join(npy_dir, f"{label}.npy"), dist)
        ax.set_facecolor("#111111")
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(label, color="white", fontsize=7, pad=3)
        for spine in ax.spines.values():
            spine.set_edgecolor("#444444")

        ax.imshow(dist, origin="lower", cmap="magma", interpolation="nearest")
        ax.contour(dist, levels=8, colors="white", linewidths=0.5)

    # Hide unused axes
    for ax in axes[len(masks):]:
        ax.set_visible(False)

    fig.suptitle("edt2d — Euclidean Distance Transform Gallery", color="white",
                 fontsize=13, y=1.002)
    plt.tight_layout(pad=0.4)
    fig.savefig(out_path, dpi=200, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    print(f"Saved: {out_path}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Render distance fields of sample masks to a PNG gallery.")
    parser.add_argument("--out", default="edt_gallery.png", help="Output PNG path")
    parser.add_argument("--size", type=int, default=256, help="Grid size in cells (default 256)")
    parser.add_argument("--cols", type=int, default=3, help="Number of columns (default 3)")
    parser.add_argument("--save-npy", metavar="DIR", default=None,
                        help="Also write each distance field to DIR/<label>.npy")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-mask statistics")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(name)s: %(message)s")
    render_gallery(_make_masks(args.size), args.out, ncols=args.cols, npy_dir=args.save_npy)


if __name__ == "__main__":
    main()
