"""Reproducible random seeds laid on a plane along a square spiral.

Every point of an n x n plane gets the k-th output of a Mersenne Twister,
where k is the position of the point along a square spiral centred on the
plane.  A point therefore receives the same seed whichever region of the
plane is generated.
"""

from __future__ import annotations

import os
import random
import re
import sys
import time
from collections.abc import Sequence

import numpy as np

Point = tuple[int, int]
Region = tuple[Point, Point]

REPETITIONS = 100
VERBOSE_LEVEL = 2

_MASK32 = 0xFFFFFFFF
_MT_SIZE = 624
_MT_DEFAULT_SEED = 4357
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    if not match:
        return 0
    value = max(-(1 << 63), min((1 << 63) - 1, int(match[1])))
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


def _random_seed() -> int:
    """Take a seed from the system's entropy source, or from the clock."""
    try:
        return int.from_bytes(os.urandom(4), "little")
    except NotImplementedError:
        now = time.time()
        return (int(now) + int((now % 1) * 1_000_000)) & _MASK32


class MersenneTwister:
    """The 32-bit MT19937 generator, seeded as a zero seed meaning 4357."""

    def __init__(self, seed: int) -> None:
        if seed == 0:
            seed = _MT_DEFAULT_SEED
        state = [seed & _MASK32]
        for i in range(1, _MT_SIZE):
            previous = state[-1]
            state.append((1812433253 * (previous ^ (previous >> 30)) + i) & _MASK32)
        self._engine = random.Random()
        self._engine.setstate((3, tuple(state) + (_MT_SIZE,), None))

    def next(self) -> int:
        """Return the next 32-bit output."""
        return self._engine.getrandbits(32)

    def __iter__(self) -> MersenneTwister:
        return self

    def __next__(self) -> int:
        return self.next()


def spiral_index(x: int, y: int) -> int:
    """Return the 1-based position of (x, y) along the spiral around the origin."""
    ring = 2 * max(abs(x), abs(y))
    turned = (y > x) or (x > 0 and x == y)
    step = ring * 3 + x + y if turned else ring - x - y
    return (ring - 1) * (ring - 1) + step


def plane_subregions(n: int, bottom_left: Sequence[int], top_right: Sequence[int]) -> list[Region]:
    """Cut a rectangle of the n x n plane at n/2 along each axis it straddles.

    Bit 0 of a region's index marks the right half, bit 1 the upper half
    once the rectangle has been cut in both directions.
    """
    bl = tuple(bottom_left)
    tr = tuple(top_right)
    for value in (*bl, *tr):
        if value < 0 or value > n:
            raise ValueError(f"corner coordinate {value} lies outside the plane of side {n}")
    half = n // 2
    regions: list[list[list[int]]] = [[list(bl), list(tr)]]
    for axis in (0, 1):
        pieces = []
        for region in regions:
            low, high = region
            if low[axis] < half < high[axis]:
                upper = [list(low), list(high)]
                upper[0][axis] = half
                high[axis] = half
                pieces.append(upper)
        regions.extend(pieces)
    return [((low[0], low[1]), (high[0], high[1])) for low, high in regions]


def transpose_subregion(
    to_spiral: bool, n: int, bottom_left: Sequence[int], top_right: Sequence[int]
) -> Region:
    """Move a region lying in one quadrant between plane and spiral coordinates."""
    low = list(bottom_left)
    high = list(top_right)
    half = n // 2
    for axis in (0, 1):
        if to_spiral and low[axis] >= half:
            low[axis] -= n
            high[axis] -= n
        elif not to_spiral and low[axis] < 0:
            low[axis] += n
            high[axis] += n
    return (low[0], low[1]), (high[0], high[1])


def generate_seeds_subregion(
    bottom_left: Sequence[int], top_right: Sequence[int], seed: int
) -> np.ndarray:
    """Return the seeds of a region in spiral coordinates, one row per y."""
    x0, y0 = bottom_left
    x1, y1 = top_right
    xlength, ylength = x1 - x0, y1 - y0
    if xlength < 0 or ylength < 0:
        raise ValueError(f"top right corner {tuple(top_right)} lies below or left of {tuple(bottom_left)}")

    order = sorted(
        (spiral_index(x0 + i, y0 + j), j, i) for j in range(ylength) for i in range(xlength)
    )
    seeds = np.zeros((ylength, xlength), dtype=np.uint32)
    generator = MersenneTwister(seed)
    drawn = 0
    for position, j, i in order:
        while drawn < position - 1:
            generator.next()
            drawn += 1
        seeds[j, i] = generator.next()
        drawn += 1
    return seeds


def generate_seeds(n: int, regions: Sequence[Region], seed: int) -> np.ndarray:
    """Fill the rectangle covered by regions (plane coordinates) with its seeds.

    Row 0 of the result is the lowest y of the first region, column 0 its
    lowest x.
    """
    if not regions:
        raise ValueError("at least one region is required")
    ox, oy = regions[0][0]
    width = regions[-1][1][0] - ox
    height = regions[-1][1][1] - oy
    if width < 0 or height < 0:
        raise ValueError("the regions do not span a rectangle")
    plane = np.zeros((height, width), dtype=np.uint32)
    for bottom_left, top_right in regions:
        low, high = transpose_subregion(True, n, bottom_left, top_right)
        block = generate_seeds_subregion(low, high, seed)
        row = bottom_left[1] - oy
        col = bottom_left[0] - ox
        rows, cols = block.shape
        if row < 0 or col < 0 or row + rows > height or col + cols > width:
            raise ValueError(f"region {bottom_left}-{top_right} falls outside the covered rectangle")
        plane[row:row + rows, col:col + cols] = block
    return plane


def _debug(level: int, message: str) -> None:
    if VERBOSE_LEVEL > level:
        sys.stderr.write(message)


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 5:
        print("at least 5 arguments must be provided")
        return 1

    n = _atoi(args[0])
    bottom_left = (_atoi(args[1]), _atoi(args[2]))
    top_right = (_atoi(args[3]), _atoi(args[4]))
    if len(args) > 5:
        seed = _atoi(args[5]) & _MASK32
    else:
        seed = _random_seed()
        print(f"using seed: {seed}")

    try:
        regions = plane_subregions(n, bottom_left, top_right)
    except ValueError as error:
        print(error)
        return 1

    count = len(regions)
    _debug(0, f"{count} subregion{'s' if count > 1 else ' '}: \n\n")
    transposed = []
    for number, (low, high) in enumerate(regions):
        _debug(0, f"\t {number}: bottom left : {low[0]}, {low[1]}\n")
        _debug(0, f"\t {number}: top right : {high[0]}, {high[1]}\n")
        _debug(1, "\t which becomes:\n")
        t_low, t_high = transpose_subregion(True, n, low, high)
        transposed.append((t_low, t_high))
        _debug(1, f"\t\t bottom left : {t_low[0]}, {t_low[1]}\n")
        _debug(1, f"\t\t top right : {t_high[0]}, {t_high[1]}\n")
        _debug(0, "\n")

    for _ in range(REPETITIONS):
        for t_low, t_high in transposed:
            points = (t_high[0] - t_low[0]) * (t_high[1] - t_low[1])
            print(
                f"from ({t_low[0]} , {t_low[1]}) to ({t_high[0]}, {t_high[1]}), {points} points"
            )
        try:
            generate_seeds(n, regions, seed)
        except ValueError:
            print("some problem occured!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())