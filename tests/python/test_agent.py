from __future__ import annotations

from pygame.math import Vector2
from pytest import approx

from goids.sim.core.agent import Agent, distance


def test_agent_uses_slots(make_agent):
    agent = make_agent(0, 1.0, 2.0)

    assert not hasattr(agent, "__dict__")
    assert hasattr(Agent, "__slots__")


def test_distance_is_euclidean(make_agent):
    a = make_agent(0, 0, 0)
    b = make_agent(1, 3, 4)

    assert distance(a.position, b.position) == approx(5.0)
    assert a.distance_to(b) == approx(5.0)
    assert b.distance_to(a) == approx(5.0)
    assert a.distance_to(a) == 0.0


def test_tail_trails_behind_velocity(make_agent):
    agent = make_agent(0, 10, 10, vx=2, vy=-1)

    assert agent.tail == Vector2(8, 11)
    # tail is derived, not stored
    agent.velocity.update(0, 0)
    assert agent.tail == Vector2(10, 10)
