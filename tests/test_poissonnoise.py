import itertools
import math

import pytest

from stationkit.poissonnoise import poisson_map


def ones(output, width):
    return [(i % width, i // width) for i, ch in enumerate(output) if ch == "1"]


def test_length_and_alphabet():
    out = poisson_map(7, 20, 15, 3)
    assert len(out) == 20 * 15
    assert set(out) <= {"0", "1"}


def test_deterministic_for_seed():
    assert poisson_map(42, 25, 25, 2.5) == poisson_map("42", "25", "25", "2.5")


def test_has_points():
    out = poisson_map(1, 30, 30, 2)
    assert out.count("1") >= 1


def test_points_respect_radius():
    radius = 4.0
    out = poisson_map(3, 40, 30, radius)
    points = ones(out, 40)
    assert len(points) > 1
    for (ax, ay), (bx, by) in itertools.combinations(points, 2):
        assert math.hypot(ax - bx, ay - by) >= radius - math.sqrt(2)


def test_smaller_radius_gives_more_points():
    dense = poisson_map(5, 40, 40, 2).count("1")
    sparse = poisson_map(5, 40, 40, 10).count("1")
    assert dense > sparse


def test_empty_dimensions():
    assert poisson_map(1, 0, 10, 2) == ""


@pytest.mark.parametrize(
    "args",
    [(1, -1, 10, 2), (1, 10, 10, 0), (-5, 10, 10, 2), ("x", 10, 10, 2)],
)
def test_invalid_arguments(args):
    with pytest.raises(ValueError):
        poisson_map(*args)