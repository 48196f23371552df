"""Domain decomposition of the plate over a grid of tasks, and its bookkeeping."""

from __future__ import annotations

import random
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

NORTH = "north"
SOUTH = "south"
EAST = "east"
WEST = "west"
DIRECTIONS = (NORTH, SOUTH, EAST, WEST)

HELP = (
    "\nvalid options are ( values btw [] are the default values ):\n"
    "-x    x size of the plate [10000]\n"
    "-y    y size of the plate [10000]\n"
    "-e    how many energy sources on the plate [4]\n"
    "-E    how many energy sources on the plate [1.0]\n"
    "-n    how many iterations [1000]\n"
    "-p    whether periodic boundaries applies  [0 = false]\n\n"
)

_FLAGS = frozenset("h")
_OPTIONS_WITH_VALUE = frozenset("xyeEnopv")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _atoi(text: str) -> int:
    match = _INT_RE.match(text)
    if not match:
        return 0
    value = max(-(1 << 63), min((1 << 63) - 1, int(match[1])))
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


def _atof(text: str) -> float:
    match = _FLOAT_RE.match(text)
    return float(match[1]) if match else 0.0


def _getopt(args: list[str]) -> Iterator[tuple[str, str]]:
    """Yield (option, value); ('?', letter) for unknown and (':', letter) for a missing value."""
    position = 0
    while position < len(args):
        arg = args[position]
        position += 1
        if arg == "--":
            return
        if not arg.startswith("-") or arg == "-":
            continue
        for offset, letter in enumerate(arg[1:], 2):
            if letter in _FLAGS:
                yield letter, ""
                continue
            if letter not in _OPTIONS_WITH_VALUE:
                yield "?", letter
                continue
            if offset < len(arg):
                yield letter, arg[offset:]
            elif position < len(args):
                yield letter, args[position]
                position += 1
            else:
                yield ":", letter
            break


@dataclass
class ParallelOptions:
    """Settings of a distributed run; help_requested means the run should stop."""

    xsize: int = 10000
    ysize: int = 10000
    periodic: bool = False
    nsources: int = 4
    niterations: int = 1000
    energy_per_source: float = 1.0
    output_energy: bool = False
    verbose: int = 0
    help_requested: bool = False


@dataclass(frozen=True)
class TaskLayout:
    """Where one task sits in the task grid and which patch of the plate it owns."""

    rank: int
    grid: tuple[int, int]
    coords: tuple[int, int]
    size: tuple[int, int]
    neighbours: dict[str, int | None] = field(default_factory=dict)


def parse_options(argv: Sequence[str]) -> ParallelOptions:
    """Read the command-line switches; problems are reported on stdout and skipped."""
    options = ParallelOptions()
    for option, value in _getopt(list(argv)):
        if option == "x":
            options.xsize = _atoi(value)
        elif option == "y":
            options.ysize = _atoi(value)
        elif option == "e":
            options.nsources = _atoi(value)
        elif option == "E":
            options.energy_per_source = _atof(value)
        elif option == "n":
            options.niterations = _atoi(value)
        elif option == "o":
            options.output_energy = _atoi(value) > 0
        elif option == "p":
            options.periodic = _atoi(value) > 0
        elif option == "v":
            options.verbose = _atoi(value)
        elif option == "h":
            options.help_requested = True
        elif option == ":":
            print(f"option -{value} requires an argument")
        else:
            print(" -------- help unavailable ----------")
    return options


def simple_factorization(n: int) -> list[int]:
    """Return the factors of n below n, smallest first; a prime yields none."""
    factors: list[int] = []
    remainder = n
    for f in range(2, max(n, 2)):
        while remainder % f == 0:
            factors.append(f)
            remainder //= f
    return factors


def task_grid(xsize: int, ysize: int, ntasks: int) -> tuple[int, int]:
    """Choose an (x, y) grid of ntasks tasks that follows the shape of the plate."""
    if xsize <= 0 or ysize <= 0:
        raise ValueError(f"plate sizes must be positive: {xsize} x {ysize}")
    if ntasks <= 0:
        raise ValueError(f"the number of tasks must be positive: {ntasks}")
    formfactor = xsize / ysize if xsize >= ysize else ysize / xsize

    if ntasks <= int(formfactor) + 1:
        return (ntasks, 1) if xsize >= ysize else (1, ntasks)

    first = 1
    for factor in simple_factorization(ntasks):
        if (ntasks // first) // first <= formfactor:
            break
        first *= factor

    if xsize > ysize:
        return ntasks // first, first
    return first, ntasks // first


def neighbours(
    rank: int, grid: tuple[int, int], ntasks: int, periodic: bool = False
) -> dict[str, int | None]:
    """Return the ranks around rank, keyed by direction; None where there is none."""
    gx, gy = grid
    x, y = rank % gx, rank // gx
    result: dict[str, int | None] = dict.fromkeys(DIRECTIONS)

    if gx > 1:
        if periodic:
            result[EAST] = y * gx + (rank + 1) % gx
            result[WEST] = rank - 1 if x > 0 else (y + 1) * gx - 1
        else:
            result[EAST] = rank + 1 if x < gx - 1 else None
            result[WEST] = (rank - 1) % ntasks if x > 0 else None

    if gy > 1:
        if periodic:
            result[NORTH] = (ntasks + rank - gx) % ntasks
            result[SOUTH] = (ntasks + rank + gx) % ntasks
        else:
            result[NORTH] = rank - gx if y > 0 else None
            result[SOUTH] = rank + gx if y < gy - 1 else None

    return result


def local_size(xsize: int, ysize: int, grid: tuple[int, int], rank: int) -> tuple[int, int]:
    """Return the size of the patch of rank; the first tasks take the leftover points."""
    gx, gy = grid
    x, y = rank % gx, rank // gx
    sx, rx = divmod(xsize, gx)
    sy, ry = divmod(ysize, gy)
    return sx + (x < rx), sy + (y < ry)


def layout(
    rank: int, ntasks: int, xsize: int, ysize: int, periodic: bool = False
) -> TaskLayout:
    """Work out the grid, coordinates, neighbours and patch size of one task."""
    if not 0 <= rank < ntasks:
        raise ValueError(f"rank {rank} is outside 0..{ntasks - 1}")
    grid = task_grid(xsize, ysize, ntasks)
    return TaskLayout(
        rank=rank,
        grid=grid,
        coords=(rank % grid[0], rank // grid[0]),
        size=local_size(xsize, ysize, grid, rank),
        neighbours=neighbours(rank, grid, ntasks, periodic),
    )


def assign_sources(ntasks: int, nsources: int, rng: random.Random) -> list[int]:
    """Draw, for every heat source, the rank of the task that will host it."""
    if ntasks <= 0:
        raise ValueError(f"the number of tasks must be positive: {ntasks}")
    return [rng.randrange(ntasks) for _ in range(nsources)]


def local_sources(
    rank: int, owners: Sequence[int], mysize: tuple[int, int], rng: random.Random
) -> list[tuple[int, int]]:
    """Place at random interior points the sources that owners gives to rank."""
    count = sum(owner == rank for owner in owners)
    mx, my = mysize
    if count and (mx <= 0 or my <= 0):
        raise ValueError(f"cannot place sources on an empty patch {mx} x {my}")
    return [(1 + rng.randrange(mx), 1 + rng.randrange(my)) for _ in range(count)]


def energy_report(step: int, total_energy: float, budget: float, points: int) -> str:
    """Format the energy line; a negative step leaves the step tag out."""
    if points <= 0:
        raise ValueError(f"the number of grid points must be positive: {points}")
    tag = f" [ step {step:4d} ] " if step >= 0 else ""
    return (
        f"{tag}total injected energy is {budget:g}, "
        f"system energy is {total_energy:g} "
        f"( in avg {total_energy / points:g} per grid point)\n"
    )