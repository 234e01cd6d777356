from __future__ import annotations

from typing import List

from ..core.agent import Agent
from ..core.config import SimulationConfig
from .boundary import stay_in_window
from .neighbors import nearest_neighbors
from .steering import align, cohere, separate


def move_agent(agent: Agent, agents: List[Agent], config: SimulationConfig) -> int:
    """Apply the three flocking rules and the boundary wrap to one agent.

    Returns the number of distance evaluations made for the neighbor query.
    """
    neighbors = nearest_neighbors(agent, agents, include_self=config.include_self)
    # order matters: separation overwrites the velocity the other two build on
    separate(agent, neighbors, config)
    align(agent, neighbors, config)
    cohere(agent, neighbors, config)
    stay_in_window(agent, config.width, config.height, config.boundary_mode)
    return len(neighbors)


def step(agents: List[Agent], config: SimulationConfig) -> List[Agent]:
    """Advance every agent once, in population order, mutating in place.

    Later agents see the already-updated state of earlier agents in the same tick.
    Raises ``ConfigError`` when ``config`` cannot drive this population.
    """
    if agents:
        config.validate()
        config.check_population(len(agents))
    for agent in agents:
        move_agent(agent, agents, config)
    return agents
