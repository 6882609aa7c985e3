"""Seeded two-dimensional Perlin noise."""

from __future__ import annotations

import math
import random

_S = 1 / math.sqrt(2)
_GRADIENTS = [(_S, _S), (-_S, _S), (_S, -_S), (-_S, -_S), (1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0)]
_U32_MAX = 2**32 - 1


def _fade(t: float) -> float:
    return t * t * t * (t * (t * 6 - 15) + 10)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class Perlin:
    """Gradient noise, zero at integer points, roughly within ±sqrt(0.5)."""

    def __init__(self, seed: int):
        perm = list(range(256))
        random.Random(seed).shuffle(perm)
        self._perm = perm * 2

    def _grad(self, ix: int, iy: int, dx: float, dy: float) -> float:
        gx, gy = _GRADIENTS[self._perm[self._perm[ix] + iy] % len(_GRADIENTS)]
        return gx * dx + gy * dy

    def get(self, x: float, y: float) -> float:
        """Noise value at (x, y)."""
        x0, y0 = math.floor(x), math.floor(y)
        fx, fy = x - x0, y - y0
        xi, yi = x0 & 255, y0 & 255
        n00 = self._grad(xi, yi, fx, fy)
        n10 = self._grad(xi + 1, yi, fx - 1, fy)
        n01 = self._grad(xi, yi + 1, fx, fy - 1)
        n11 = self._grad(xi + 1, yi + 1, fx - 1, fy - 1)
        u, v = _fade(fx), _fade(fy)
        return _lerp(_lerp(n00, n10, u), _lerp(n01, n11, u), v)


_generators: dict[str, Perlin] = {}


def get_at_coordinates(seed, x, y) -> float:
    """Noise at (x, y) for the seed, scaled and clamped to [0, 1]."""
    fx, fy = float(x), float(y)
    key = str(seed)
    generator = _generators.get(key)
    if generator is None:
        value = int(key)
        if not 0 <= value <= _U32_MAX:
            raise ValueError(f"seed out of range: {seed!r}")
        generator = _generators[key] = Perlin(value)
    scaled = (generator.get(fx, fy) * math.sqrt(2) + 1) / 2
    return min(max(scaled, 0.0), 1.0)