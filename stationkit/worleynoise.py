"""Worley (cellular) noise rendered onto a square character grid."""

from __future__ import annotations

import math
import random

_RANGE = 4
_MAX_WIDENING = 32


def _uint(value, name: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")
    return number


class _Region:
    __slots__ = ("coords", "size", "nodes")

    def __init__(self, coords: tuple[int, int], size: int):
        self.coords = coords
        self.size = size
        self.nodes: set[tuple[int, int]] = set()

    def to_global(self, x: int, y: int) -> tuple[int, int]:
        return x + self.coords[0] * self.size, y + self.coords[1] * self.size

    def global_nodes(self):
        return (self.to_global(x, y) for x, y in self.nodes)


def _manhattan(a: tuple[int, int], b: tuple[int, int]) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _nth_smallest_dist(centre: tuple[int, int], nth: int, nodes: set[tuple[int, int]]) -> float:
    remaining = set(nodes)
    while nth > 0 and len(nodes) > 1:
        remaining.remove(min(remaining, key=lambda node: _manhattan(node, centre)))
        nth -= 1
    nearest = min(remaining, key=lambda node: _manhattan(node, centre))
    return math.hypot(centre[0] - nearest[0], centre[1] - nearest[1])


def _fill_nodes(regions, node_min, node_max, chance, reg_size, rng):
    node_min = max(node_min, 1)
    node_max = max(node_min, node_max)
    if node_max == node_min:
        raise ValueError("node_max must be greater than node_min")
    probability = min(max(chance / 100.0, 0.0), 1.0)
    skipped = 0
    for region in (region for column in regions for region in column):
        if skipped < _RANGE and not rng.random() < probability:
            skipped += 1
            continue
        skipped = 0
        for _ in range(rng.randrange(node_min, node_max)):
            region.nodes.add((rng.randrange(reg_size), rng.randrange(reg_size)))


def _nodes_in_range(regions, amount, centre, reach) -> set[tuple[int, int]]:
    found: set[tuple[int, int]] = set()
    for x in range(max(centre[0] - reach, 0), min(centre[0] + reach, amount)):
        for y in range(max(centre[1] - reach, 0), min(centre[1] + reach, amount)):
            found.update(regions[x][y].global_nodes())
    return found


def worley_noise(
    region_size,
    threshold,
    node_per_region_chance,
    size,
    node_min,
    node_max,
    rng: random.Random | None = None,
) -> str:
    """A size*size string of '0' and '1'; '1' where the gap between the two nearest nodes exceeds threshold."""
    region_size = int(region_size)
    threshold = float(threshold)
    size = _uint(size, "size")
    chance = _uint(node_per_region_chance, "node_per_region_chance")
    node_min = _uint(node_min, "node_min")
    node_max = _uint(node_max, "node_max")
    if region_size <= 0:
        raise ValueError(f"region_size must be positive, got {region_size}")
    rng = rng if rng is not None else random.Random()

    amount = math.ceil(size / region_size)
    regions = [[_Region((x, y), region_size) for y in range(amount)] for x in range(amount)]
    _fill_nodes(regions, node_min, node_max, chance, region_size, rng)

    full = amount * region_size
    cells = [[False] * full for _ in range(full)]
    for region in (region for column in regions for region in column):
        nodes = _nodes_in_range(regions, amount, region.coords, _RANGE)
        widening = 1
        while len(nodes) < 2:
            widening += 1
            nodes = _nodes_in_range(regions, amount, region.coords, widening + _RANGE)
            if widening > _MAX_WIDENING:
                raise RuntimeError("Not enough nodes in range!")
        for x in range(region_size):
            for y in range(region_size):
                gx, gy = region.to_global(x, y)
                gap = _nth_smallest_dist((gx, gy), 1, nodes) - _nth_smallest_dist((gx, gy), 0, nodes)
                cells[gx][gy] = gap > threshold

    return "".join("1" if cell else "0" for row in cells[:size] for cell in row[:size])