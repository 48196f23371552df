"""A square plate of energy values framed by a one-cell halo, and the stencil on it."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

DEFAULT_ALPHA = 0.6


class Plane:
    """A xsize by ysize patch stored inside a (ysize+2) x (xsize+2) frame.

    Points are addressed as (x, y); the interior runs from 1 to xsize and
    from 1 to ysize, row 0, row ysize+1, column 0 and column xsize+1 form
    the halo.
    """

    __slots__ = ("xsize", "ysize", "data")

    def __init__(self, xsize: int, ysize: int) -> None:
        if xsize < 0 or ysize < 0:
            raise ValueError(f"plane sizes must not be negative: {xsize} x {ysize}")
        self.xsize = xsize
        self.ysize = ysize
        self.data = np.zeros((ysize + 2, xsize + 2), dtype=np.float64)

    def interior(self) -> np.ndarray:
        """Return a writable view of the points that belong to the patch."""
        return self.data[1:-1, 1:-1]

    def __repr__(self) -> str:
        return f"Plane({self.xsize}, {self.ysize})"


def inject_energy(
    plane: Plane,
    sources: Iterable[tuple[int, int]],
    energy: float,
    periodic: bool = False,
) -> None:
    """Add energy at every source point; with periodic borders mirror it into the halo."""
    data = plane.data
    for x, y in sources:
        data[y, x] += energy
        if periodic:
            if x == 1:
                data[y, plane.xsize + 1] += energy
            if x == plane.xsize:
                data[y, 0] += energy
            if y == 1:
                data[plane.ysize + 1, x] += energy
            if y == plane.ysize:
                data[0, x] += energy


def update_plane(
    old: Plane,
    new: Plane,
    periodic: bool = False,
    alpha: float = DEFAULT_ALPHA,
) -> None:
    """Apply the five-point stencil to old and store the result in new.

    Each point keeps alpha of its energy and receives (1 - alpha) / 4 of each
    of its four neighbours.  Halo points act as a sink unless borders are
    periodic, in which case the halo is refreshed from the new interior.
    """
    if old is new:
        raise ValueError("the old and the new plane must be distinct")
    if (old.xsize, old.ysize) != (new.xsize, new.ysize):
        raise ValueError(
            f"plane sizes differ: {old.xsize} x {old.ysize} and {new.xsize} x {new.ysize}"
        )
    o = old.data
    result = o[1:-1, 1:-1] * alpha
    sum_i = (o[1:-1, :-2] + o[1:-1, 2:]) / 4.0 * (1 - alpha)
    sum_j = (o[:-2, 1:-1] + o[2:, 1:-1]) / 4.0 * (1 - alpha)
    result += sum_i + sum_j
    n = new.data
    n[1:-1, 1:-1] = result

    if periodic:
        xsize, ysize = new.xsize, new.ysize
        # The lower halo row is filled from the freshly written upper one.
        n[0, 1:-1] = n[ysize, 1:-1]
        n[ysize + 1, 1:-1] = n[0, 1:-1]
        n[1:-1, 0] = n[1:-1, xsize]
        n[1:-1, xsize + 1] = n[1:-1, 1]


def total_energy(plane: Plane) -> float:
    """Return the energy held by the interior of the plane."""
    return float(np.sum(plane.interior()))