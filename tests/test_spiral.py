import numpy as np
import pytest

from hpcbasics import spiral
from hpcbasics.spiral import (
    MersenneTwister,
    generate_seeds,
    generate_seeds_subregion,
    plane_subregions,
    spiral_index,
    transpose_subregion,
)


def _outputs(seed, count):
    generator = MersenneTwister(seed)
    return [generator.next() for _ in range(count)]


def test_reference_first_output():
    assert MersenneTwister(5489).next() == 3499211612


def test_reference_ten_thousandth_output():
    assert _outputs(5489, 10000)[-1] == 4123659995


def test_zero_seed_means_default_seed():
    assert _outputs(0, 20) == _outputs(4357, 20)


def test_seed_is_reduced_to_32_bits():
    assert _outputs(7 + 2**32, 20) == _outputs(7, 20)


def test_iteration_matches_next():
    generator = MersenneTwister(11)
    first = [next(generator) for _ in range(5)]
    assert first == _outputs(11, 5)


def test_spiral_origin():
    assert spiral_index(0, 0) == 1


@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_spiral_fills_squares(k):
    values = {spiral_index(x, y) for x in range(-k, k + 1) for y in range(-k, k + 1)}
    assert values == set(range(1, (2 * k + 1) ** 2 + 1))


def test_spiral_steps_are_unit_moves():
    position = {spiral_index(x, y): (x, y) for x in range(-3, 4) for y in range(-3, 4)}
    for index in range(1, 49):
        (ax, ay), (bx, by) = position[index], position[index + 1]
        assert abs(ax - bx) + abs(ay - by) == 1


def test_subregions_no_cut():
    assert plane_subregions(10, (0, 0), (4, 3)) == [((0, 0), (4, 3))]


def test_subregions_cut_in_x():
    regions = plane_subregions(10, (2, 1), (8, 4))
    assert regions == [((2, 1), (5, 4)), ((5, 1), (8, 4))]


def test_subregions_cut_in_both():
    regions = plane_subregions(10, (1, 2), (9, 8))
    assert len(regions) == 4
    area = sum((tr[0] - bl[0]) * (tr[1] - bl[1]) for bl, tr in regions)
    assert area == 8 * 6
    assert regions[0][0] == (1, 2)
    assert regions[3][1] == (9, 8)


@pytest.mark.parametrize("bl, tr", [((0, 0), (11, 4)), ((-1, 0), (4, 4))])
def test_subregions_out_of_plane(bl, tr):
    with pytest.raises(ValueError):
        plane_subregions(10, bl, tr)


def test_transpose_round_trip():
    for low, high in plane_subregions(12, (1, 3), (11, 10)):
        there = transpose_subregion(True, 12, low, high)
        assert transpose_subregion(False, 12, *there) == (low, high)


def test_transpose_lands_around_origin():
    for low, high in plane_subregions(12, (0, 0), (12, 12)):
        (ax, ay), (bx, by) = transpose_subregion(True, 12, low, high)
        assert all(-6 <= v <= 6 for v in (ax, ay, bx, by))


def test_transpose_keeps_lower_quadrant():
    assert transpose_subregion(True, 10, (0, 1), (4, 5)) == ((0, 1), (4, 5))


def test_subregion_seeds_follow_spiral():
    outputs = _outputs(42, 49)
    seeds = generate_seeds_subregion((-3, -3), (4, 4), 42)
    assert seeds.shape == (7, 7)
    for j in range(7):
        for i in range(7):
            assert seeds[j, i] == outputs[spiral_index(i - 3, j - 3) - 1]


def test_subregion_deterministic_and_seed_dependent():
    a = generate_seeds_subregion((1, -2), (4, 2), 9)
    b = generate_seeds_subregion((1, -2), (4, 2), 9)
    c = generate_seeds_subregion((1, -2), (4, 2), 10)
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


def test_subregion_reversed_corners():
    with pytest.raises(ValueError):
        generate_seeds_subregion((3, 3), (1, 4), 1)


def test_whole_plane_blocks_match_subregions():
    n = 8
    regions = plane_subregions(n, (0, 0), (n, n))
    plane = generate_seeds(n, regions, 5)
    assert plane.shape == (n, n)
    for low, high in regions:
        block = generate_seeds_subregion(*transpose_subregion(True, n, low, high), 5)
        assert np.array_equal(plane[low[1]:high[1], low[0]:high[0]], block)


def test_window_matches_whole_plane():
    n = 8
    whole = generate_seeds(n, plane_subregions(n, (0, 0), (n, n)), 3)
    window = generate_seeds(n, plane_subregions(n, (2, 2), (7, 6)), 3)
    assert np.array_equal(window, whole[2:6, 2:7])


def test_generate_seeds_needs_regions():
    with pytest.raises(ValueError):
        generate_seeds(8, [], 1)


def test_main_too_few_arguments(capsys):
    assert spiral.main(["8", "0", "0"]) == 1
    assert "at least 5 arguments must be provided" in capsys.readouterr().out


def test_main_out_of_plane(capsys):
    assert spiral.main(["8", "0", "0", "9", "9", "1"]) == 1


def test_main_runs(capsys):
    assert spiral.main(["8", "0", "0", "8", "8", "5"]) == 0
    out = capsys.readouterr().out
    assert out.count("from (") == 4 * spiral.REPETITIONS
    assert "some problem" not in out