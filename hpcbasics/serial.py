"""Serial heat-diffusion run on a plate with randomly placed sources."""

from __future__ import annotations

import random
import re
import sys
from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import numpy as np

from .grid import Plane, inject_energy, total_energy, update_plane

_OPTIONS_WITH_VALUE = frozenset("xyeEfnpo")
_INT_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_DBL_MAX = sys.float_info.max
_DEFAULT_SEED = 0x1234ABCD330E


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
class SerialOptions:
    """Settings of a serial run; frequency is the injection rate in [0, 1]."""

    xsize: int = 1000
    ysize: int = 1000
    periodic: bool = False
    nsources: int = 1
    niterations: int = 99
    output_energy: bool = False
    energy_per_source: float = 1.0
    frequency: float = 0.0
    output_dir: Path = field(default_factory=lambda: Path("."))

    @property
    def injection_frequency(self) -> int:
        """Number of iterations between two injections of energy."""
        if self.frequency == 0:
            return 1
        return int(min(self.frequency, 1.0) * self.niterations)


def parse_options(argv: list[str]) -> SerialOptions:
    """Read the command-line switches; problems are reported on stdout and skipped."""
    options = SerialOptions()
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
        elif option == "p":
            options.periodic = _atoi(value) > 0
        elif option == "o":
            options.output_energy = _atoi(value) > 0
        elif option == "f":
            options.frequency = _atof(value)
        elif option == ":":
            print(f"option -{value} requires an argument")
        else:
            print(" -------- help unavailable ----------")
    return options


def initialize_sources(
    xsize: int, ysize: int, count: int, rng: random.Random
) -> list[tuple[int, int]]:
    """Place count heat sources at random interior points."""
    return [(1 + rng.randrange(xsize), 1 + rng.randrange(ysize)) for _ in range(count)]


def dump(plane: Plane, filename: str | Path) -> tuple[float, float]:
    """Write xsize*ysize values as native float32 rows and return (min, max).

    Rows are taken xsize values at a time from the start of the framed
    buffer.  The minimum starts at the largest double and the maximum at 0.
    """
    if not str(filename):
        raise ValueError("a file name is required")
    count = plane.xsize * plane.ysize
    values = plane.data.ravel()[:count]
    with open(filename, "wb") as outfile:
        outfile.write(values.astype(np.float32).tobytes())
    if count == 0:
        return _DBL_MAX, 0.0
    return min(float(values.min()), _DBL_MAX), max(float(values.max()), 0.0)


def simulate(
    options: SerialOptions, rng: random.Random, out: TextIO | None = None
) -> tuple[float, float]:
    """Run the iterations and return (injected energy, final system energy)."""
    out = sys.stdout if out is None else out
    frequency = options.injection_frequency
    if frequency == 0:
        raise ValueError("the injection frequency leaves no iteration between injections")

    planes = [Plane(options.xsize, options.ysize), Plane(options.xsize, options.ysize)]
    sources = initialize_sources(options.xsize, options.ysize, options.nsources, rng)
    energy = options.energy_per_source
    injected_heat = 0.0
    current = 0

    if frequency > 1:
        inject_energy(planes[current], sources, energy, options.periodic)

    for step in range(options.niterations):
        if step % frequency == 0:
            inject_energy(planes[current], sources, energy, options.periodic)
            injected_heat += options.nsources * energy

        update_plane(planes[current], planes[1 - current], options.periodic)

        if options.output_energy:
            system_heat = total_energy(planes[1 - current])
            out.write(
                f"step {step} :: injected energy is {injected_heat:g}, "
                f"updated system energy is {system_heat:g}\n"
            )
            dump(planes[1 - current], Path(options.output_dir) / f"plane_{step:05d}.bin")

        current = 1 - current

    system_heat = total_energy(planes[current])
    out.write(f"injected energy is {injected_heat:g}, system energy is {system_heat:g}\n")
    return injected_heat, system_heat


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    options = parse_options(args)
    simulate(options, random.Random(_DEFAULT_SEED))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())