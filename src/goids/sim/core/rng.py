from __future__ import annotations

import random

from pygame.math import Vector2


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)

    def reset(self) -> None:
        self._random.seed(self._seed)

    def next_range(self, low: float, high: float) -> float:
        """Uniform sample in ``[low, high)``."""
        return low + (high - low) * self._random.random()

    def next_int(self, max_value: int) -> int:
        return self._random.randrange(max_value)

    def next_point(self, width: float, height: float, integral: bool) -> Vector2:
        if integral:
            return Vector2(self.next_int(int(width)), self.next_int(int(height)))
        return Vector2(self.next_range(0.0, width), self.next_range(0.0, height))
