# schedsim/api/server.py
"""
REST + WebSocket API controlling a live scheduler engine.
"""
import asyncio
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from ..core.broadcaster import StreamEvent
from ..core.engine import SchedulerEngine
from ..core.params import SimulationParams
from ..utils.logger import setup_logger

logger = setup_logger("api")


def create_app(config: Optional[Dict[str, Any]] = None,
               engine: Optional[SchedulerEngine] = None) -> FastAPI:
    """Build the API around an engine.

    Args:
        config: Configuration dictionary used when no engine is given
        engine: Pre-built engine (tests inject one on virtual time)

    Returns:
        FastAPI application
    """
    config = config or {}
    engine = engine or SchedulerEngine(config)
    queue_size = config.get('server', {}).get('client_queue_size', 256)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        engine.shutdown()

    app = FastAPI(title="schedsim API", version="0.1.0", lifespan=lifespan)
    app.state.engine = engine

    @app.get("/")
    async def root():
        return {
            "service": "schedsim API",
            "version": "0.1.0",
            "endpoints": [
                "/api/simulation/start",
                "/api/simulation/stop",
                "/api/simulation/state",
                "/ws",
            ]
        }

    @app.post("/api/simulation/start")
    def start_simulation(req: SimulationParams):
        """Start (or restart) the simulation."""
        simulation_id = engine.start(
            process_count=req.process_count,
            algorithm=req.algorithm,
            speed_multiplier=req.speed_multiplier,
        )

        return {"message": "Simulation started", "simulationId": simulation_id}

    @app.post("/api/simulation/stop")
    def stop_simulation():
        """Stop the simulation."""
        engine.stop()
        return {"message": "Simulation stopped"}

    @app.get("/api/simulation/state")
    def simulation_state():
        """Current processes and latest metrics."""
        return engine.state()

    @app.websocket("/ws")
    async def event_stream(websocket: WebSocket):
        """Push engine events as ``{"type", "payload"}`` messages."""
        await websocket.accept()
        loop = asyncio.get_running_loop()
        outbox: asyncio.Queue = asyncio.Queue(maxsize=queue_size)

        def offer(message: Dict[str, Any]) -> None:
            try:
                outbox.put_nowait(message)
            except asyncio.QueueFull:
                logger.warning(f"Client queue full, dropping {message['type']}")

        def forward(event: StreamEvent, payload: Any) -> None:
            # Engine events arrive on the timer thread
            loop.call_soon_threadsafe(offer, {"type": event.value, "payload": payload})

        async def pump() -> None:
            while True:
                message = await outbox.get()
                try:
                    await websocket.send_json(message)
                except (WebSocketDisconnect, RuntimeError) as e:
                    logger.info(f"WebSocket send failed, closing stream: {e}")
                    return

        # Current snapshot goes out before any live event
        snapshot = engine.snapshot()
        if snapshot:
            offer({"type": StreamEvent.STATE_UPDATE.value, "payload": snapshot})
        unsubscribe = engine.subscribe(forward)
        sender = asyncio.create_task(pump())
        logger.info("WebSocket client connected")
        try:
            # Inbound messages are ignored; this only watches for disconnect
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        finally:
            unsubscribe()
            sender.cancel()
            logger.info("WebSocket client disconnected")

    return app
