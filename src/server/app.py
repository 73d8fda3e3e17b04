from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from dispatch import available_dispatchers, get_dispatcher
from simulation import ConfigurationError, Simulation, SimulationConfig, SimulationResult

logger = logging.getLogger(__name__)

# Upper bounds for a single request; one run holds its whole trace in memory.
MAX_FLOORS = 200
MAX_ELEVATORS = 50
MAX_PASSENGERS = 5000
MAX_CYCLES = 1_000_000


class SimulationRequest(BaseModel):
    min_floor: int = Field(1, ge=-MAX_FLOORS, le=MAX_FLOORS)
    max_floor: int = Field(10, ge=-MAX_FLOORS, le=MAX_FLOORS)
    elevator_count: int = Field(2, ge=1, le=MAX_ELEVATORS)
    elevator_capacity: int = Field(5, ge=1)
    travel_time_per_floor: int = Field(1, ge=1)
    door_hold_ticks: int = Field(1, ge=1)
    generation_interval: int = Field(1, ge=1)
    total_passengers: int = Field(40, ge=0, le=MAX_PASSENGERS)
    estimated_processing_time: float = Field(5, gt=0)
    random_seed: Optional[int] = None
    max_cycles: Optional[int] = Field(None, ge=1, le=MAX_CYCLES)
    dispatcher: Optional[str] = None
    dispatcher_options: Dict[str, Any] = {}

    def to_config(self, default_dispatcher: str) -> SimulationConfig:
        values = self.model_dump()
        values["dispatcher"] = values["dispatcher"] or default_dispatcher
        return SimulationConfig.from_dict(values)


class DispatcherSelection(BaseModel):
    name: str
    options: Dict[str, Any] = {}


class SimulationManager:
    """Runs simulations on request and keeps the latest result for the UI."""

    def __init__(self, replay_interval: float = 0.05) -> None:
        self.replay_interval = replay_interval
        self.dispatcher_name = "cost"
        self.dispatcher_options: Dict[str, Any] = {}
        self.latest: Optional[SimulationResult] = None
        self._lock = asyncio.Lock()

    async def run(self, request: SimulationRequest) -> SimulationResult:
        async with self._lock:
            config = request.to_config(self.dispatcher_name)
            if request.dispatcher is None:
                config.dispatcher_options = {**self.dispatcher_options, **config.dispatcher_options}
            # Runs off the event loop so websocket replays keep streaming.
            result = await asyncio.to_thread(self._run_blocking, config)
            logger.info(
                "Run finished at tick %d (%d/%d completed, aborted=%s)",
                result.total_time,
                result.completed_count,
                config.total_passengers,
                result.aborted,
            )
            self.latest = result
            return result

    @staticmethod
    def _run_blocking(config: SimulationConfig) -> SimulationResult:
        return Simulation(config).run()

    async def set_dispatcher(self, name: str, options: Dict[str, Any]) -> dict:
        async with self._lock:
            # Fail fast on unknown names or bad options.
            get_dispatcher(name, **options)
            self.dispatcher_name = name.lower()
            self.dispatcher_options = dict(options)
            return {"dispatcher": self.dispatcher_name, "options": self.dispatcher_options}

    def latest_or_404(self) -> SimulationResult:
        if self.latest is None:
            raise HTTPException(status_code=404, detail="No simulation has been run yet")
        return self.latest

    async def replay(self, websocket: WebSocket) -> None:
        result = self.latest
        if result is None:
            await websocket.send_text(json.dumps({"type": "empty"}))
            return
        for entry in result.logs:
            await websocket.send_text(json.dumps({"type": "entry", "entry": entry.to_dict()}))
            await asyncio.sleep(self.replay_interval)
        await websocket.send_text(
            json.dumps({"type": "done", "total_time": result.total_time, "aborted": result.aborted})
        )


manager = SimulationManager()
app = FastAPI(title="LiftDispatch Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/config/defaults")
async def get_defaults() -> dict:
    return SimulationConfig().to_dict()


@app.get("/dispatchers")
async def list_dispatchers() -> dict:
    return {"available": available_dispatchers(), "selected": manager.dispatcher_name}


@app.post("/dispatcher")
async def set_dispatcher(selection: DispatcherSelection) -> dict:
    try:
        return await manager.set_dispatcher(selection.name, selection.options)
    except (TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@app.post("/simulations")
async def run_simulation(request: SimulationRequest) -> dict:
    try:
        result = await manager.run(request)
    except (ConfigurationError, ValueError, TypeError) as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return result.to_dict()


@app.get("/simulations/latest")
async def get_latest() -> dict:
    return manager.latest_or_404().to_dict()


@app.get("/simulations/latest/trace")
async def get_latest_trace() -> dict:
    result = manager.latest_or_404()
    lines: List[str] = result.trace_lines()
    return {"total_time": result.total_time, "aborted": result.aborted, "lines": lines}


@app.websocket("/ws/stream")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await websocket.accept()
    try:
        await manager.replay(websocket)
    except WebSocketDisconnect:
        return
    with contextlib.suppress(RuntimeError):
        await websocket.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)
