"""Random number helpers bound to explicit generator objects."""

from __future__ import annotations

import math
from typing import MutableSequence

import numpy as np


class GaussianGenerator:
    """Box-Muller normal generator with its phase kept on the instance.

    Draws come in pairs: an even call samples a fresh ``(U, V)`` pair and
    returns the sine branch, the following call returns the cosine branch of
    the same pair.
    """

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng
        self._phase = 0
        self._u = 0.0
        self._v = 0.0

    @property
    def phase(self) -> int:
        return self._phase

    def reset(self) -> None:
        self._phase = 0

    def __call__(self) -> float:
        if self._phase == 0:
            # U lies in (0, 1] so the logarithm stays finite.
            self._u = 1.0 - float(self.rng.random())
            self._v = float(self.rng.random())
            z = math.sqrt(-2.0 * math.log(self._u)) * math.sin(2.0 * math.pi * self._v)
        else:
            z = math.sqrt(-2.0 * math.log(self._u)) * math.cos(2.0 * math.pi * self._v)
        self._phase = 1 - self._phase
        return z


class RandomContext:
    """One seeded generator plus the integer/real helpers built on top of it."""

    def __init__(self, seed: int | None = None, *, rng: np.random.Generator | None = None) -> None:
        self.seed = seed
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.gauss = GaussianGenerator(self.rng)

    def real01(self) -> float:
        """Return a real number from ``[0, 1)``."""

        return float(self.rng.random())

    def real_range(self, minimum: float, maximum: float) -> float:
        return abs(maximum - minimum) * self.real01() + minimum

    def integer(self, high: int) -> int:
        """Return an integer from ``[0, high)``."""

        return int(self.rng.integers(0, high))

    def int_radius(self, center: int, radius: int, maximum: int) -> int:
        """Return an index within ``radius`` of ``center`` wrapped modulo ``maximum``."""

        offset = int(2 * radius * self.real01())
        return (center - radius + offset) % maximum

    def int_radius_2d(self, center: int, radius: int, width: int, maximum: int) -> int:
        """Same as :meth:`int_radius` for a flat index into a ``width``-wide grid."""

        span = 2 * radius
        dx = int(span * self.real01())
        dy = int(span * self.real01())
        return (center - (radius * width + radius) + dx + dy * width) % maximum

    def int_radius_2d_gaussian(self, center: int, radius: int, width: int, maximum: int) -> int:
        span = 2 * radius
        dx = int(span * self.gauss() * 0.4)
        dy = int(span * self.gauss() * 0.4)
        half = radius // 2
        return (center - (half * width + half) + dx + dy * width) % maximum

    def uniform_int(self, low: int, high: int) -> int:
        """Return an integer from ``[low, high]``, both ends included."""

        return int(self.rng.integers(low, high, endpoint=True))

    def permute(self, values: MutableSequence) -> None:
        """Shuffle ``values`` in place."""

        order = self.rng.permutation(len(values))
        values[:] = [values[int(i)] for i in order]


__all__ = ["GaussianGenerator", "RandomContext"]
