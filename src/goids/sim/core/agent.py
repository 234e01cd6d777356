from __future__ import annotations

import math
from dataclasses import dataclass

from pygame.math import Vector2


@dataclass(slots=True)
class Agent:
    id: int
    position: Vector2
    velocity: Vector2
    radius: int
    color: tuple[int, int, int, int]

    @property
    def tail(self) -> Vector2:
        return self.position - self.velocity

    def distance_to(self, other: "Agent") -> float:
        return distance(self.position, other.position)


def distance(a: Vector2, b: Vector2) -> float:
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)
