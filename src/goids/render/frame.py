from __future__ import annotations

import io
import os
from typing import Optional

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from ..sim.core.config import RenderConfig
from ..sim.types.snapshot import Snapshot


class FrameRenderer:
    """Rasterizes a population snapshot onto an off-screen surface."""

    def __init__(self, width: int, height: int, config: Optional[RenderConfig] = None):
        self.width = int(width)
        self.height = int(height)
        self.config = config or RenderConfig()

    def render(self, snapshot: Snapshot) -> pygame.Surface:
        surface = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        surface.fill(self.config.background_color)
        for agent in snapshot.agents:
            color = tuple(agent["color"])
            center = (int(agent["x"]), int(agent["y"]))
            pygame.draw.circle(surface, color, center, int(agent["radius"]))
            if self.config.draw_tail:
                pygame.draw.line(surface, color, center, (int(agent["tail_x"]), int(agent["tail_y"])))
        return surface

    def render_png(self, snapshot: Snapshot) -> bytes:
        return encode_png(self.render(snapshot))


def encode_png(surface: pygame.Surface) -> bytes:
    buffer = io.BytesIO()
    pygame.image.save(surface, buffer, "frame.png")
    return buffer.getvalue()
