from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Set

import yaml
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse, Response

from ..render.frame import FrameRenderer
from ..sim.core.config import AppConfig, load_app_config
from ..sim.core.world import World

logger = logging.getLogger(__name__)


class SimulationController:
    def __init__(self, app_config: AppConfig):
        self.config = app_config.simulation
        self.world = World(self.config)
        self.renderer = FrameRenderer(self.config.width, self.config.height, self.config.render)
        self.broadcast_interval = max(1, app_config.broadcast_interval)
        self.tick_interval = max(0.0, app_config.tick_interval)
        self.running = False
        self.tick = 0
        self.clients: Set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._loop_task: asyncio.Task | None = None

    async def start(self) -> None:
        if self._loop_task is None:
            self._loop_task = asyncio.create_task(self._loop())
        self.running = True

    async def stop(self) -> None:
        self.running = False

    async def reset(self) -> None:
        async with self._lock:
            self.world.reset()
            self.tick = 0
        await self._broadcast_snapshot()

    async def advance(self) -> None:
        async with self._lock:
            self.world.step(self.tick)
            self.tick += 1
        if self.tick % self.broadcast_interval == 0:
            await self._broadcast_snapshot()

    async def frame_png(self) -> bytes:
        async with self._lock:
            snapshot = self.world.snapshot(self.tick)
        return self.renderer.render_png(snapshot)

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            if self.running:
                await self.advance()

    def _serialize_snapshot(self) -> str:
        snapshot = self.world.snapshot(self.tick)
        return json.dumps(
            {
                "type": "snapshot",
                "tick": snapshot.tick,
                "payload": {
                    "metrics": asdict(snapshot.metrics),
                    "agents": snapshot.agents,
                    "world": asdict(snapshot.world),
                    "metadata": asdict(snapshot.metadata),
                },
            }
        )

    async def _broadcast_snapshot(self) -> None:
        if not self.clients:
            return
        async with self._lock:
            payload = self._serialize_snapshot()
        stale: Set[WebSocket] = set()
        for client in self.clients:
            try:
                await client.send_text(payload)
            except WebSocketDisconnect:
                stale.add(client)
        for client in stale:
            self.clients.discard(client)
        if stale:
            logger.debug("Dropped %d disconnected clients", len(stale))


def _load_app_config() -> AppConfig:
    path = os.environ.get("GOIDS_CONFIG")
    if not path:
        return AppConfig()
    raw = yaml.safe_load(Path(path).read_text()) or {}
    return load_app_config(raw)


app = FastAPI(title="Goids Flocking Simulation")
controller = SimulationController(_load_app_config())


@app.on_event("startup")
async def _startup() -> None:
    await controller.start()


@app.get("/api/status")
async def status() -> JSONResponse:
    metrics = controller.world.metrics
    return JSONResponse(
        {
            "running": controller.running,
            "tick": controller.tick,
            "population": len(controller.world.agents),
            "metrics": asdict(metrics) if metrics is not None else None,
        }
    )


@app.get("/api/frame.png")
async def frame() -> Response:
    return Response(content=await controller.frame_png(), media_type="image/png")


@app.post("/api/control/start")
async def start_simulation() -> JSONResponse:
    controller.running = True
    return JSONResponse({"running": True})


@app.post("/api/control/stop")
async def stop_simulation() -> JSONResponse:
    await controller.stop()
    return JSONResponse({"running": False})


@app.post("/api/control/reset")
async def reset_simulation() -> JSONResponse:
    await controller.reset()
    return JSONResponse({"running": controller.running, "tick": controller.tick})


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    controller.clients.add(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        controller.clients.discard(websocket)


__all__ = ["app", "controller", "SimulationController"]
