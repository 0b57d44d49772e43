"""
valet/api.py
============
Optional FastAPI server exposing a :class:`~valet.session.ValetSession`
over REST.

Start the server::

    python main.py --api            # → http://localhost:8000/state

Endpoints
---------
``GET  /state``      latest snapshot
``POST /start``      begin tracking (idempotent)
``POST /stop``       stop and cancel dispatch (idempotent)
``POST /reset``      restore initial state
``POST /direction``  ``{"offset_deg": float | null}``; null = random turn
``GET  /policy``     active tuning constants
``GET  /health``     liveness probe

.. note::

   This server is **not** required to run the Pygame view.
   It exists for external integrations and testing.
"""

import dataclasses
import math
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from valet.session import ValetSession

# ── Pydantic request schemas ─────────────────────────────────────────────────


class DirectionRequest(BaseModel):
    """Body of ``/direction``; omit ``offset_deg`` for a random turn."""
    offset_deg: Optional[float] = None


class DirectionResponse(BaseModel):
    applied_offset_deg: float
    heading_deg: float


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(session: ValetSession) -> FastAPI:
    """Build an app bound to *session*."""
    app = FastAPI(
        title="Intelligent Valet API",
        description="Predicts a pedestrian's exit gate and dispatches a car.",
        version="1.0",
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "running": session.running}

    @app.get("/state")
    def state():
        return session.snapshot().as_dict()

    @app.get("/policy")
    def policy():
        return dataclasses.asdict(session.policy)

    @app.post("/start")
    def start():
        session.start()
        return session.snapshot().as_dict()

    @app.post("/stop")
    def stop():
        session.stop()
        return session.snapshot().as_dict()

    @app.post("/reset")
    def reset():
        session.reset()
        return session.snapshot().as_dict()

    @app.post("/direction", response_model=DirectionResponse)
    def direction(body: DirectionRequest):
        if body.offset_deg is not None and not math.isfinite(body.offset_deg):
            raise HTTPException(status_code=400, detail="offset_deg must be finite")
        applied = session.perturb_direction(body.offset_deg)
        return DirectionResponse(
            applied_offset_deg=applied,
            heading_deg=session.snapshot().pedestrian.heading_deg,
        )

    return app


def run_api(session: ValetSession, host: str = "0.0.0.0", port: int = 8000) -> None:
    """Serve *session* with uvicorn until interrupted."""
    uvicorn.run(create_app(session), host=host, port=port)
