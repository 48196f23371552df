import random

import numpy as np
import pytest

from hpcbasics.grid import Plane
from hpcbasics.serial import (
    SerialOptions,
    dump,
    initialize_sources,
    main,
    parse_options,
    simulate,
)


class _Centre:
    """Places every source in the middle of the plate."""

    def randrange(self, n):
        return n // 2


def test_defaults():
    options = parse_options([])
    assert (options.xsize, options.ysize) == (1000, 1000)
    assert options.nsources == 1
    assert options.niterations == 99
    assert options.energy_per_source == 1.0
    assert options.periodic is False
    assert options.output_energy is False
    assert options.injection_frequency == 1


def test_parse_all_switches():
    options = parse_options(
        ["-x", "10", "-y20", "-e", "3", "-E", "2.5", "-n", "10", "-p", "1", "-o", "1", "-f", "0.5"]
    )
    assert (options.xsize, options.ysize) == (10, 20)
    assert options.nsources == 3
    assert options.energy_per_source == 2.5
    assert options.periodic is True
    assert options.output_energy is True
    assert options.injection_frequency == 5


def test_frequency_above_one_is_clamped():
    options = parse_options(["-n", "7", "-f", "3"])
    assert options.injection_frequency == options.niterations


def test_unknown_option_is_reported(capsys):
    options = parse_options(["-h", "-x", "12"])
    assert "help unavailable" in capsys.readouterr().out
    assert options.xsize == 12


def test_missing_value_is_reported(capsys):
    options = parse_options(["-x"])
    assert "option -x requires an argument" in capsys.readouterr().out
    assert options.xsize == 1000


def test_sources_lie_in_the_interior():
    sources = initialize_sources(7, 3, 50, random.Random(4))
    assert len(sources) == 50
    assert all(1 <= x <= 7 and 1 <= y <= 3 for x, y in sources)
    assert sources == initialize_sources(7, 3, 50, random.Random(4))


def test_dump_round_trip(tmp_path):
    plane = Plane(3, 2)
    plane.data[:] = np.arange(20, dtype=float).reshape(4, 5) - 4.0
    path = tmp_path / "plane.bin"
    low, high = dump(plane, path)
    written = np.fromfile(path, dtype=np.float32)
    assert written.size == 6
    assert np.array_equal(written, plane.data.ravel()[:6].astype(np.float32))
    assert low == float(written.min())
    assert high == float(written.max())


def test_dump_max_never_below_zero(tmp_path):
    plane = Plane(2, 2)
    plane.data[:] = -1.0
    low, high = dump(plane, tmp_path / "neg.bin")
    assert (low, high) == (-1.0, 0.0)


def test_dump_requires_a_name():
    with pytest.raises(ValueError):
        dump(Plane(2, 2), "")


def test_simulate_conserves_energy_inside(capsys):
    options = SerialOptions(xsize=21, ysize=21, nsources=2, niterations=4, energy_per_source=1.5)
    injected, system = simulate(options, _Centre())
    assert injected == pytest.approx(4 * 2 * 1.5)
    assert system == pytest.approx(injected)
    assert capsys.readouterr().out.startswith("injected energy is 12, system energy is 12")


def test_simulate_preinjection_is_not_counted(capsys):
    options = SerialOptions(xsize=21, ysize=21, nsources=1, niterations=4, frequency=1.0)
    injected, system = simulate(options, _Centre())
    assert injected == pytest.approx(options.energy_per_source)
    assert system == pytest.approx(2 * options.energy_per_source)


def test_simulate_writes_steps(tmp_path):
    import io

    out = io.StringIO()
    options = SerialOptions(
        xsize=5, ysize=4, niterations=3, output_energy=True, output_dir=tmp_path
    )
    simulate(options, random.Random(1), out)
    lines = out.getvalue().splitlines()
    assert [line.split(" ::")[0] for line in lines[:3]] == ["step 0", "step 1", "step 2"]
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "plane_00000.bin",
        "plane_00001.bin",
        "plane_00002.bin",
    ]


def test_simulate_rejects_zero_frequency():
    options = SerialOptions(xsize=5, ysize=5, niterations=10, frequency=0.01)
    with pytest.raises(ValueError):
        simulate(options, random.Random(0))


def test_main_reports_final_energy(capsys):
    assert main(["-x", "6", "-y", "6", "-n", "2", "-e", "2"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("injected energy is 4, system energy is ")
    assert "step" not in out