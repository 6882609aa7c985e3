"""Poisson disc sampling rendered onto a character grid."""

from __future__ import annotations

import math
import random

_ATTEMPTS = 30


def _uint(value, name: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")
    return number


def _sample(width: float, height: float, radius: float, rng: random.Random):
    """Bridson's algorithm: points at least radius apart filling the rectangle."""
    cell = radius / math.sqrt(2)
    grid: dict[tuple[int, int], tuple[float, float]] = {}
    first = (rng.random() * width, rng.random() * height)
    points = [first]
    grid[(int(first[0] / cell), int(first[1] / cell))] = first
    active = [first]
    radius_sq = radius * radius

    def fits(px: float, py: float) -> bool:
        gx, gy = int(px / cell), int(py / cell)
        for cx in range(gx - 2, gx + 3):
            for cy in range(gy - 2, gy + 3):
                other = grid.get((cx, cy))
                if other is not None and (other[0] - px) ** 2 + (other[1] - py) ** 2 < radius_sq:
                    return False
        return True

    while active:
        index = rng.randrange(len(active))
        ox, oy = active[index]
        for _ in range(_ATTEMPTS):
            angle = rng.random() * math.tau
            dist = radius * (1 + rng.random())
            px, py = ox + dist * math.cos(angle), oy + dist * math.sin(angle)
            if 0 <= px < width and 0 <= py < height and fits(px, py):
                point = (px, py)
                points.append(point)
                active.append(point)
                grid[(int(px / cell), int(py / cell))] = point
                break
        else:
            active[index] = active[-1]
            active.pop()
    return points


def poisson_map(seed, width, length, radius) -> str:
    """A width*length string of '0' and '1', row by row, with '1' at sampled points."""
    width = _uint(width, "width")
    length = _uint(length, "length")
    radius = float(radius)
    seed = _uint(seed, "seed")
    if seed >= 2**64:
        raise ValueError(f"seed out of range: {seed}")
    if not radius > 0 or math.isinf(radius):
        raise ValueError(f"radius must be a positive finite number, got {radius!r}")
    if width == 0 or length == 0:
        return ""
    points = {
        (int(x), int(y)) for x, y in _sample(float(width), float(length), radius, random.Random(seed))
    }
    return "".join(
        "1" if (x, y) in points else "0" for y in range(length) for x in range(width)
    )