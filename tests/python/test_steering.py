from __future__ import annotations

from pygame.math import Vector2
from pytest import approx

from goids.sim.core.config import SimulationConfig
from goids.sim.systems.neighbors import nearest_neighbors
from goids.sim.systems.steering import align, cohere, separate


def _config(**overrides) -> SimulationConfig:
    values = dict(population_size=2, neighbor_count=2, separation_distance=15.0, cohesion_factor=2)
    values.update(overrides)
    return SimulationConfig(**values)


def test_cohesion_pulls_toward_centroid_with_truncation(make_agent):
    agent = make_agent(0, 0, 0)
    other = make_agent(1, 10, 0)
    neighbors = nearest_neighbors(agent, [agent, other])

    cohere(agent, neighbors, _config())

    assert agent.position == Vector2(2, 0)
    assert agent.velocity == Vector2(2, 0)


def test_cohesion_real_arithmetic(make_agent):
    agent = make_agent(0, 0, 0)
    other = make_agent(1, 10, 0)
    neighbors = nearest_neighbors(agent, [agent, other])

    cohere(agent, neighbors, _config(integer_math=False))

    assert agent.position.x == approx(2.5)
    assert agent.position.y == approx(0.0)
    assert agent.velocity.x == approx(2.5)


def test_cohesion_truncates_toward_zero(make_agent):
    agent = make_agent(0, 10, 0)
    other = make_agent(1, 0, 0)
    neighbors = nearest_neighbors(agent, [agent, other])

    cohere(agent, neighbors, _config())

    # (5 - 10) / 2 = -2.5 truncates to -2, not -3
    assert agent.position == Vector2(8, 0)
    assert agent.velocity == Vector2(-2, 0)


def test_separation_overwrites_velocity(make_agent):
    agent = make_agent(0, 0, 0, vx=7, vy=7)
    other = make_agent(1, 3, 4)
    neighbors = nearest_neighbors(agent, [agent, other])

    separate(agent, neighbors, _config())

    assert agent.velocity == Vector2(-3, -4)
    assert agent.position == Vector2(-3, -4)


def test_separation_without_close_neighbors_zeroes_velocity(make_agent):
    agent = make_agent(0, 0, 0, vx=5, vy=5)
    other = make_agent(1, 100, 0)
    neighbors = nearest_neighbors(agent, [agent, other])

    separate(agent, neighbors, _config())

    assert agent.velocity == Vector2(0, 0)
    assert agent.position == Vector2(0, 0)


def test_separation_threshold_is_strict(make_agent):
    agent = make_agent(0, 0, 0)
    other = make_agent(1, 9, 12)
    neighbors = nearest_neighbors(agent, [agent, other])

    separate(agent, neighbors, _config())

    assert agent.velocity == Vector2(0, 0)


def test_separation_only_considers_neighbor_prefix(make_agent):
    agents = [make_agent(0, 0, 0), make_agent(1, 1, 0), make_agent(2, 0, 2)]
    neighbors = nearest_neighbors(agents[0], agents)

    separate(agents[0], neighbors, _config(population_size=3, neighbor_count=2))

    assert agents[0].velocity == Vector2(-1, 0)


def test_alignment_adds_average_heading(make_agent):
    agent = make_agent(0, 0, 0, vx=1, vy=0)
    other = make_agent(1, 50, 0, vx=4, vy=3)
    neighbors = nearest_neighbors(agent, [agent, other])

    align(agent, neighbors, _config())

    assert agent.velocity == Vector2(3, 1)
    assert agent.position == Vector2(2, 1)


def test_alignment_real_arithmetic(make_agent):
    agent = make_agent(0, 0, 0, vx=1, vy=0)
    other = make_agent(1, 50, 0, vx=4, vy=3)
    neighbors = nearest_neighbors(agent, [agent, other])

    align(agent, neighbors, _config(integer_math=False))

    assert agent.velocity.x == approx(3.5)
    assert agent.velocity.y == approx(1.5)
    assert agent.position.x == approx(2.5)


def test_alignment_reads_velocities_from_before_separation(make_agent):
    agent = make_agent(0, 0, 0, vx=4, vy=0)
    other = make_agent(1, 100, 0)
    neighbors = nearest_neighbors(agent, [agent, other])
    config = _config()

    separate(agent, neighbors, config)
    assert agent.velocity == Vector2(0, 0)
    align(agent, neighbors, config)

    assert agent.velocity == Vector2(2, 0)
