from __future__ import annotations

from ..core.agent import Agent


def _reflect(value: float, extent: float) -> float:
    # extent - value for an overshoot is not a wrap; large overshoots stay out of range
    if value < 0:
        return extent + value
    if value > extent:
        return extent - value
    return value


def _modulo(value: float, extent: float) -> float:
    if 0 <= value <= extent:
        return value
    return value % extent


def stay_in_window(agent: Agent, width: float, height: float, mode: str = "reflect") -> None:
    """Bring an agent that left the viewport back in on the other side."""
    fold = _modulo if mode == "modulo" else _reflect
    position = agent.position
    position.update(fold(position.x, width), fold(position.y, height))


def in_window(agent: Agent, width: float, height: float) -> bool:
    x = agent.position.x
    y = agent.position.y
    return 0 <= x <= width and 0 <= y <= height
