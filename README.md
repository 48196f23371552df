# hpcbasics

Small, self-contained tools for exploring the basics of high-performance
computing from Python:

- how a value is laid out in bytes and bits (`hpcbasics.binrepr`),
- how a chain of nested calls descends and unwinds (`hpcbasics.callchain`),
- how a program sees its command line (`hpcbasics.arguments`),
- how a five-point heat-diffusion stencil evolves on a plate
  (`hpcbasics.grid`, `hpcbasics.serial`),
- how a plate is split among a grid of tasks (`hpcbasics.decomposition`),
- how random seeds are assigned to the points of a plane along a square
  spiral, so that a point always gets the same seed whichever region it is
  requested with (`hpcbasics.spiral`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

### `hpc-get-binary`: bytes and bits of a value

The first argument is a size optionally followed by a type letter, `i` for
integers (the default when the specifier ends in a digit) or `f` for
floating point; the second is the value.

```
hpc-get-binary 4i 98767643
hpc-get-binary 8f 3.141573
hpc-get-binary -h
```

Sizes 1 and 2 hold integers, 4 and 8 hold integers or IEEE floats, and 10
holds an 80-bit extended float. Sizes above 10 are rejected (exit code 2),
as are float sizes below 4 (exit code 2) and unknown type letters (exit
code 1). Without arguments, or with `-h`, the usage text is printed and the
exit code is -1. The output numbers every byte and prints its bits from
least to most significant, bytes in little-endian order.

### `hpc-call-chain`: following a nested call stack

Passes an integer through four nested calls: the first doubles it, the
others set bits 16, 32 and 64 in turn. Each level prints an indented line
on the way down, and the value that comes back is printed and returned as
the exit code.

```
hpc-call-chain 3
```

Any arguments are listed first; without one, 1 is used. A negative input
stops the chain and yields a negative error code (-2 for -1, -1 for -2,
-3 otherwise).

### `hpc-arguments`: listing the command line

Prints every argument it is given, numbered from 1, or a note that none
were given.

```
hpc-arguments alpha beta gamma
```

### `hpc-stencil`: serial heat diffusion on a plate

Runs the five-point stencil on an `x` by `y` plate with heat sources placed
at pseudo-random points (the generator is seeded with a fixed value, so a
given command line always places them the same way) and reports the
injected and the resulting system energy.

```
hpc-stencil -x 200 -y 200 -e 4 -E 1.0 -n 50 -p 1
```

Options (defaults in brackets):

| option | meaning |
| ------ | ------- |
| `-x`   | x size of the plate [1000] |
| `-y`   | y size of the plate [1000] |
| `-e`   | number of heat sources [1] |
| `-E`   | energy injected per source [1.0] |
| `-f`   | injection frequency as a fraction of the iterations, capped at 1 [0.0, meaning every step] |
| `-n`   | number of iterations [99] |
| `-p`   | periodic boundaries when greater than 0 [0] |
| `-o`   | report the energy and dump the plane at every step when greater than 0 [0] |

Unknown options and options missing their value are reported and skipped.
With `-o 1` each step also writes `plane_NNNNN.bin` in the current
directory: `x * y` values taken from the start of the framed plane and
stored as native 32-bit floats.

At every point the stencil keeps a fraction `alpha` (0.6) of the energy and
adds a quarter of `1 - alpha` of each of its four neighbours. Without
periodic boundaries the frame around the plate acts as a heat sink.

### `hpc-spiral`: spiral-ordered random seeds

Splits a rectangle of an `N` by `N` plane at `N/2` along each axis it
straddles, moves every piece into coordinates centred on the plane, and
gives each point the k-th output of an MT19937 generator, k being the
point's position along a square spiral around the centre.

```
hpc-spiral 100 10 10 60 60 12345
```

The arguments are `N`, the bottom-left `x y`, the top-right `x y`, and an
optional seed; without one a seed is drawn from the system and printed. The
pieces are described on standard error, and the generation is repeated 100
times, each pass printing the extent and point count of every piece.

## Library use

```python
from hpcbasics.grid import Plane, inject_energy, update_plane, total_energy

old, new = Plane(64, 64), Plane(64, 64)
inject_energy(old, [(10, 10), (40, 20)], 1.0, periodic=False)
update_plane(old, new, periodic=False, alpha=0.6)
print(total_energy(new))
```

```python
from hpcbasics.decomposition import layout, simple_factorization

print(simple_factorization(12))        # [2, 2, 3]
print(layout(rank=3, ntasks=8, xsize=1000, ysize=1000, periodic=True))
```

```python
from hpcbasics.spiral import spiral_index, plane_subregions, generate_seeds

print(spiral_index(0, 0))              # 1
regions = plane_subregions(100, (10, 10), (60, 60))
seeds = generate_seeds(100, regions, 12345)   # numpy uint32 array, one row per y
```

Other names of interest:

- `hpcbasics.binrepr`: `parse_spec`, `encode`, `render`, `SpecError`.
- `hpcbasics.callchain`: `call_chain`, returning a `CallTrace` with the
  argument, the result and the printed lines.
- `hpcbasics.arguments`: `describe_arguments`.
- `hpcbasics.serial`: `SerialOptions`, `parse_options`,
  `initialize_sources`, `dump` (returns the minimum and maximum written)
  and `simulate`.
- `hpcbasics.decomposition`: `ParallelOptions`, `parse_options`,
  `TaskLayout`, `task_grid`, `neighbours`, `local_size`, `assign_sources`,
  `local_sources` and `energy_report`.
- `hpcbasics.spiral`: `MersenneTwister`, `transpose_subregion` and
  `generate_seeds_subregion`.

## What the package does not do

The heat-diffusion run is serial only. `hpcbasics.decomposition` works out
how a plate is split among tasks (the task grid, each task's coordinates,
neighbours and patch size, which task hosts which source) and formats the
energy report, but it does not run anything across several processes: there
is no halo exchange, no collective reduction of energies and no command that
starts a distributed run.