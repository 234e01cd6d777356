import sys
from pathlib import Path

import pytest
from pygame.math import Vector2

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from goids.sim.core.agent import Agent  # noqa: E402


@pytest.fixture
def make_agent():
    def _make(agent_id: int, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Agent:
        return Agent(
            id=agent_id,
            position=Vector2(x, y),
            velocity=Vector2(vx, vy),
            radius=3,
            color=(200, 200, 100, 255),
        )

    return _make
