import random

import pytest

from stationkit.worleynoise import worley_noise


def test_length_and_alphabet():
    out = worley_noise(5, 1.0, 100, 20, 2, 5, random.Random(1))
    assert len(out) == 20 * 20
    assert set(out) <= {"0", "1"}


def test_size_not_multiple_of_region():
    out = worley_noise(5, 1.0, 100, 7, 2, 5, random.Random(2))
    assert len(out) == 7 * 7


def test_deterministic_with_seeded_rng():
    a = worley_noise(6, 0.5, 50, 24, 1, 4, random.Random(99))
    b = worley_noise("6", "0.5", "50", "24", "1", "4", random.Random(99))
    assert a == b


def test_huge_threshold_all_zero():
    out = worley_noise(5, 1e9, 100, 15, 2, 5, random.Random(3))
    assert out == "0" * 225


def test_very_negative_threshold_all_one():
    out = worley_noise(5, -1e9, 100, 15, 2, 5, random.Random(4))
    assert out == "1" * 225


def test_mixed_output_for_moderate_threshold():
    out = worley_noise(8, 1.0, 100, 32, 2, 6, random.Random(5))
    assert "0" in out and "1" in out


def test_zero_size():
    assert worley_noise(5, 1.0, 100, 0, 2, 5, random.Random(6)) == ""


def test_not_enough_nodes():
    with pytest.raises(RuntimeError):
        worley_noise(5, 0, 0, 5, 1, 3, random.Random(7))


def test_empty_node_range():
    with pytest.raises(ValueError):
        worley_noise(5, 0, 100, 10, 3, 3, random.Random(8))


@pytest.mark.parametrize(
    "args",
    [(0, 1, 100, 10, 1, 3), (5, 1, -1, 10, 1, 3), (5, 1, 100, -10, 1, 3), (5, "x", 100, 10, 1, 3)],
)
def test_invalid_arguments(args):
    with pytest.raises(ValueError):
        worley_noise(*args, rng=random.Random(9))