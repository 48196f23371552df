import numpy as np
import pytest

from hpcbasics.grid import Plane, inject_energy, total_energy, update_plane


def test_plane_has_a_halo_frame():
    plane = Plane(4, 3)
    assert plane.data.shape == (5, 6)
    assert plane.interior().shape == (3, 4)
    assert total_energy(plane) == 0.0


def test_interior_is_a_view():
    plane = Plane(3, 3)
    plane.interior()[0, 0] = 2.5
    assert plane.data[1, 1] == 2.5


def test_negative_size_is_rejected():
    with pytest.raises(ValueError):
        Plane(-1, 3)


def test_inject_adds_energy_at_source():
    plane = Plane(5, 5)
    inject_energy(plane, [(2, 3), (2, 3), (4, 4)], 1.5)
    assert plane.data[3, 2] == 3.0
    assert plane.data[4, 4] == 1.5
    assert total_energy(plane) == pytest.approx(4.5)


def test_inject_periodic_mirrors_into_halo():
    plane = Plane(4, 4)
    inject_energy(plane, [(1, 1)], 2.0, periodic=True)
    assert plane.data[1, 5] == 2.0
    assert plane.data[5, 1] == 2.0
    assert total_energy(plane) == pytest.approx(2.0)
    inject_energy(plane, [(4, 4)], 1.0, periodic=True)
    assert plane.data[4, 0] == 1.0
    assert plane.data[0, 4] == 1.0


def test_inject_non_periodic_leaves_halo_alone():
    plane = Plane(4, 4)
    inject_energy(plane, [(1, 1)], 2.0)
    assert np.sum(plane.data) == pytest.approx(total_energy(plane))


def test_update_spreads_from_centre():
    old, new = Plane(5, 5), Plane(5, 5)
    inject_energy(old, [(3, 3)], 1.0)
    update_plane(old, new, alpha=0.5)
    assert new.data[3, 3] == pytest.approx(0.5)
    assert new.data[3, 2] == pytest.approx(0.125)
    assert new.data[2, 3] == new.data[4, 3] == new.data[3, 4] == new.data[3, 2]
    assert total_energy(new) == pytest.approx(1.0)


def test_update_conserves_energy_away_from_borders():
    old, new = Plane(9, 9), Plane(9, 9)
    inject_energy(old, [(5, 5)], 3.0)
    for _ in range(3):
        update_plane(old, new)
        old, new = new, old
    assert total_energy(old) == pytest.approx(3.0)


def test_update_loses_energy_at_open_border():
    old, new = Plane(4, 4), Plane(4, 4)
    inject_energy(old, [(1, 2)], 1.0)
    update_plane(old, new)
    assert total_energy(new) < 1.0


def test_update_periodic_refreshes_halo():
    old, new = Plane(4, 3), Plane(4, 3)
    old.interior()[:] = np.arange(12, dtype=float).reshape(3, 4)
    update_plane(old, new, periodic=True)
    d = new.data
    assert np.array_equal(d[1:-1, 0], d[1:-1, 4])
    assert np.array_equal(d[1:-1, 5], d[1:-1, 1])
    assert np.array_equal(d[0, 1:-1], d[3, 1:-1])
    assert np.array_equal(d[4, 1:-1], d[0, 1:-1])


def test_update_rejects_mismatched_planes():
    with pytest.raises(ValueError):
        update_plane(Plane(3, 3), Plane(4, 3))


def test_update_rejects_same_plane():
    plane = Plane(3, 3)
    with pytest.raises(ValueError):
        update_plane(plane, plane)


def test_total_energy_ignores_halo():
    plane = Plane(3, 3)
    plane.data[0, :] = 10.0
    plane.data[2, 2] = 1.25
    assert total_energy(plane) == 1.25