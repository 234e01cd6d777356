from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

BOUNDARY_MODES = ("reflect", "modulo")


class ConfigError(ValueError):
    """Raised when a configuration cannot drive a simulation run."""


@dataclass
class RenderConfig:
    background_color: tuple[int, int, int, int] = (0, 0, 0, 0)
    draw_tail: bool = True
    frame_delay: float = 0.0


@dataclass
class SimulationConfig:
    width: int = 800
    height: int = 600
    agent_radius: int = 3
    agent_color: tuple[int, int, int, int] = (200, 200, 100, 255)
    population_size: int = 150
    ticks: int = 100
    neighbor_count: int = 7
    # None means 5 x agent_radius
    separation_distance: float | None = None
    cohesion_factor: float = 8
    seed: int = 42
    integer_math: bool = True
    boundary_mode: str = "reflect"
    include_self: bool = True
    config_version: str = "v1"
    render: RenderConfig = field(default_factory=RenderConfig)

    def __post_init__(self) -> None:
        if self.separation_distance is None:
            self.separation_distance = float(self.agent_radius * 5)

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping of settings, got {type(data).__name__}")
        return load_config(data)

    def validate(self) -> "SimulationConfig":
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Viewport must be positive, got {self.width}x{self.height}")
        if self.agent_radius < 1:
            raise ConfigError(f"agent_radius must be at least 1, got {self.agent_radius}")
        if self.population_size < 0:
            raise ConfigError(f"population_size must not be negative, got {self.population_size}")
        if self.ticks < 0:
            raise ConfigError(f"ticks must not be negative, got {self.ticks}")
        if self.cohesion_factor == 0:
            raise ConfigError("cohesion_factor must be non-zero")
        if self.boundary_mode not in BOUNDARY_MODES:
            raise ConfigError(f"Unknown boundary mode: {self.boundary_mode}")
        if self.population_size > 0:
            self.check_population(self.population_size)
        return self

    def check_population(self, count: int) -> None:
        if self.neighbor_count < 1:
            raise ConfigError(f"neighbor_count must be at least 1, got {self.neighbor_count}")
        available = count if self.include_self else count - 1
        if self.neighbor_count > available:
            raise ConfigError(
                f"neighbor_count {self.neighbor_count} exceeds the {available} agents available as neighbors"
            )


@dataclass
class AppConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    broadcast_interval: int = 1
    tick_interval: float = 1.0 / 30.0


def _color(value: tuple[int, ...] | list[int] | None, default: tuple[int, int, int, int]) -> tuple[int, int, int, int]:
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = [int(channel) for channel in value]
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    return default


def load_config(raw: dict) -> SimulationConfig:
    default_render = RenderConfig()
    render_raw = dict(raw.get("render") or {})
    render = RenderConfig(
        background_color=_color(render_raw.pop("background_color", None), default_render.background_color),
        **render_raw,
    )
    sim_values = {k: v for k, v in raw.items() if k not in {"render", "agent_color"}}
    return SimulationConfig(
        render=render,
        agent_color=_color(raw.get("agent_color"), SimulationConfig.agent_color),
        **sim_values,
    )


def load_app_config(raw: dict) -> AppConfig:
    app_values = {k: v for k, v in raw.items() if k != "simulation"}
    return AppConfig(simulation=load_config(raw.get("simulation", {})), **app_values)
