from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from pygame.math import Vector2

from ..core.agent import Agent


@dataclass(frozen=True, slots=True)
class Neighbor:
    """Copy of another agent's state taken when a neighbor query runs."""

    index: int
    distance: float
    position: Vector2
    velocity: Vector2


def nearest_neighbors(agent: Agent, agents: Sequence[Agent], include_self: bool = True) -> List[Neighbor]:
    """
    Rank the whole population by distance from ``agent``.

    The sort is stable, so agents at equal distance keep their population order.
    With ``include_self`` the query agent is part of the result at distance 0 and
    comes first unless an earlier agent shares its
    position.
    """

    candidates: List[Neighbor] = []
    append = candidates.append
    for index, other in enumerate(agents):
        if other is agent and not include_self:
            continue
        append(
            Neighbor(
                index=index,
                distance=agent.distance_to(other),
                position=Vector2(other.position),
                velocity=Vector2(other.velocity),
            )
        )
    candidates.sort(key=lambda neighbor: neighbor.distance)
    return candidates
