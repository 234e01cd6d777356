from __future__ import annotations

import logging
import math
from time import perf_counter
from typing import Any, Dict, List

from pygame.math import Vector2

from .agent import Agent
from .config import SimulationConfig
from .rng import DeterministicRng
from ..systems import flocking
from ..systems.boundary import in_window
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld

logger = logging.getLogger(__name__)


class World:
    def __init__(self, config: SimulationConfig):
        self._config = config.validate()
        self._rng = DeterministicRng(config.seed)
        self._agents: List[Agent] = []
        self._metrics: TickMetrics | None = None
        self._bootstrap_population()
        logger.debug(
            "World created: %d agents in %dx%d (seed=%d, k=%d)",
            len(self._agents),
            config.width,
            config.height,
            config.seed,
            config.neighbor_count,
        )

    @property
    def agents(self) -> List[Agent]:
        return self._agents

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def reset(self) -> None:
        self._agents.clear()
        self._rng.reset()
        self._metrics = None
        self._bootstrap_population()
        logger.debug("World reset to seed %d", self._config.seed)

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        config = self._config
        agents = self._agents
        neighbor_checks = 0
        for agent in agents:
            neighbor_checks += flocking.move_agent(agent, agents, config)

        speed_sum = 0.0
        out_of_bounds = 0
        for agent in agents:
            speed_sum += math.hypot(agent.velocity.x, agent.velocity.y)
            if not in_window(agent, config.width, config.height):
                out_of_bounds += 1
        population = len(agents)
        self._metrics = TickMetrics(
            tick=tick,
            population=population,
            neighbor_checks=neighbor_checks,
            average_speed=speed_sum / population if population else 0.0,
            out_of_bounds=out_of_bounds,
            tick_duration_ms=(perf_counter() - start) * 1000.0,
        )
        return self._metrics

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics
        if metrics is None:
            metrics = TickMetrics(
                tick=tick,
                population=len(self._agents),
                neighbor_checks=0,
                average_speed=0.0,
                out_of_bounds=0,
            )
        config = self._config
        return Snapshot(
            tick=tick,
            metrics=metrics,
            agents=[self._agent_snapshot(agent) for agent in self._agents],
            world=SnapshotWorld(width=config.width, height=config.height),
            metadata=SnapshotMetadata(
                seed=config.seed,
                config_version=config.config_version,
                integer_math=config.integer_math,
                boundary_mode=config.boundary_mode,
            ),
        )

    def _agent_snapshot(self, agent: Agent) -> Dict[str, Any]:
        tail = agent.tail
        return {
            "id": agent.id,
            "x": agent.position.x,
            "y": agent.position.y,
            "vx": agent.velocity.x,
            "vy": agent.velocity.y,
            "radius": agent.radius,
            "color": list(agent.color),
            "tail_x": tail.x,
            "tail_y": tail.y,
        }

    def _bootstrap_population(self) -> None:
        config = self._config
        integral = config.integer_math
        for index in range(config.population_size):
            position = self._rng.next_point(config.width, config.height, integral)
            if integral:
                velocity = Vector2(self._rng.next_int(config.agent_radius), self._rng.next_int(config.agent_radius))
            else:
                velocity = Vector2(
                    self._rng.next_range(0.0, config.agent_radius),
                    self._rng.next_range(0.0, config.agent_radius),
                )
            self._agents.append(
                Agent(
                    id=index,
                    position=position,
                    velocity=velocity,
                    radius=config.agent_radius,
                    color=config.agent_color,
                )
            )
