from __future__ import annotations

from typing import List

from ..core.agent import Agent
from ..core.config import SimulationConfig
from ..utils.math2d import _divide
from .neighbors import Neighbor


def separate(agent: Agent, neighbors: List[Neighbor], config: SimulationConfig) -> None:
    """Steer away from crowding neighbors; the result replaces the velocity."""
    accum_x = 0.0
    accum_y = 0.0
    threshold = config.separation_distance
    position = agent.position
    for neighbor in neighbors[: config.neighbor_count]:
        if neighbor.distance < threshold:
            accum_x += position.x - neighbor.position.x
            accum_y += position.y - neighbor.position.y
    agent.velocity.update(accum_x, accum_y)
    position.update(position.x + accum_x, position.y + accum_y)


def align(agent: Agent, neighbors: List[Neighbor], config: SimulationConfig) -> None:
    """Steer towards the average heading of the neighbor prefix."""
    k = config.neighbor_count
    sum_x = 0.0
    sum_y = 0.0
    for neighbor in neighbors[:k]:
        sum_x += neighbor.velocity.x
        sum_y += neighbor.velocity.y
    dx = _divide(sum_x, k, config.integer_math)
    dy = _divide(sum_y, k, config.integer_math)
    _nudge(agent, dx, dy)


def cohere(agent: Agent, neighbors: List[Neighbor], config: SimulationConfig) -> None:
    """Steer towards the centroid of the neighbor prefix, damped by ``cohesion_factor``."""
    k = config.neighbor_count
    integer_math = config.integer_math
    sum_x = 0.0
    sum_y = 0.0
    for neighbor in neighbors[:k]:
        sum_x += neighbor.position.x
        sum_y += neighbor.position.y
    centroid_x = _divide(sum_x, k, integer_math)
    centroid_y = _divide(sum_y, k, integer_math)
    dx = _divide(centroid_x - agent.position.x, config.cohesion_factor, integer_math)
    dy = _divide(centroid_y - agent.position.y, config.cohesion_factor, integer_math)
    _nudge(agent, dx, dy)


def _nudge(agent: Agent, dx: float, dy: float) -> None:
    velocity = agent.velocity
    position = agent.position
    velocity.update(velocity.x + dx, velocity.y + dy)
    position.update(position.x + dx, position.y + dy)
