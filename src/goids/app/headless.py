from __future__ import annotations

import argparse
import csv
import dataclasses
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..sim.core.config import ConfigError, SimulationConfig
from ..sim.core.world import World

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "neighbor_checks",
    "avg_speed",
    "out_of_bounds",
    "tick_ms",
]


def _format_row(metrics: object, tick_ms: float) -> list[object]:
    return [
        metrics.tick,
        metrics.population,
        metrics.neighbor_checks,
        f"{metrics.average_speed:.4f}",
        metrics.out_of_bounds,
        f"{tick_ms:.3f}",
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0, "p99": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
        "p99": _percentile(sorted_values, 0.99),
    }


def run_headless(
    ticks: int,
    seed: Optional[int],
    log_path: Optional[Path],
    deterministic_log: bool = False,
    summary_path: Optional[Path] = None,
    config: Optional[SimulationConfig] = None,
) -> World:
    if ticks < 0:
        raise ValueError(f"ticks must not be negative, got {ticks}")
    config = config if config is not None else SimulationConfig()
    if seed is not None:
        config = dataclasses.replace(config, seed=seed)
    world = World(config)
    logger.info("Headless run: %d ticks, %d agents, seed %d", ticks, len(world.agents), config.seed)

    tick_ms_series: list[float] = []
    speed_series: list[float] = []
    out_of_bounds_total = 0

    csv_file = Path(log_path).open("w", newline="") if log_path else None
    try:
        writer = csv.writer(csv_file) if csv_file else None
        if writer:
            writer.writerow(_HEADER)
        for tick in range(ticks):
            metrics = world.step(tick)
            tick_ms = 0.0 if deterministic_log else metrics.tick_duration_ms
            tick_ms_series.append(tick_ms)
            speed_series.append(metrics.average_speed)
            out_of_bounds_total += metrics.out_of_bounds
            if writer:
                writer.writerow(_format_row(metrics, tick_ms))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        summary = {
            "ticks": ticks,
            "seed": config.seed,
            "population": len(world.agents),
            "deterministic_log": deterministic_log,
            "integer_math": config.integer_math,
            "boundary_mode": config.boundary_mode,
            "tick_ms": _summary_stats(tick_ms_series),
            "avg_speed": _summary_stats(speed_series),
            "out_of_bounds_total": out_of_bounds_total,
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))
    logger.info("Headless run finished after %d ticks", ticks)
    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless flocking simulation")
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation settings")
    parser.add_argument("--ticks", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write metrics")
    parser.add_argument("--summary", type=Path, default=None, help="Optional JSON file to write summary stats.")
    parser.add_argument(
        "--deterministic-log",
        action="store_true",
        help="Write deterministic CSV (tick_ms is forced to 0.000 so identical seeds match).",
    )
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    try:
        config = SimulationConfig.from_yaml(args.config) if args.config else SimulationConfig()
        run_headless(
            args.ticks if args.ticks is not None else config.ticks,
            args.seed,
            args.log,
            deterministic_log=args.deterministic_log,
            summary_path=args.summary,
            config=config,
        )
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        raise


if __name__ == "__main__":
    main()
