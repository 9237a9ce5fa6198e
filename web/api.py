"""
web/api.py
==========
FastAPI application exposing the operator command surface and the
observability feed of a :class:`~control.controller.SignalController`.

Build the app with :func:`create_app` and serve it with uvicorn (see
:mod:`main`)::

    python main.py          # → http://localhost:8000/state

Endpoints
---------
``GET  /state``                     controller snapshot (roads, mode, next goal)
``GET  /logs``                      activity log, newest first
``GET  /analytics``                 recent density samples + summary
``POST /control/start``             begin autonomous ticking
``POST /control/stop``              halt ticking
``PUT  /control/mode``              ``{"mode": "MANUAL" | "AUTONOMOUS"}``
``POST /roads/{road_id}/override``  open a road (MANUAL mode only)
``POST /roads/{road_id}/image``     classify a base64 image for a road
``POST /roads/{road_id}/analysis``  push a ready-made classification result
"""

import base64
import binascii
from typing import List

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from control.controller import SignalController
from control.state import AuthorityMode
from vision.classifier import Classifier, to_snapshot
from vision.schemas import AnalysisResultModel, ClassificationRequest


# ── Pydantic request / response schemas ──────────────────────────────────────


class ModeRequest(BaseModel):
    """Body of ``PUT /control/mode``."""
    mode: AuthorityMode


class LogEntryModel(BaseModel):
    id: str
    timestamp: str
    message: str
    severity: str


class ReadingResponse(BaseModel):
    road_id: str
    density: dict


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(controller: SignalController, classifier: Classifier) -> FastAPI:
    """Wire *controller* and *classifier* into a new FastAPI app."""
    app = FastAPI(
        title="SmartFlow Signal Controller API",
        description="Density-aware four-way signal arbitration with operator override.",
        version="1.0",
    )

    def _require_road(road_id: str) -> None:
        if not controller.has_road(road_id):
            raise HTTPException(status_code=404, detail=f"unknown road {road_id!r}")

    @app.get("/state")
    def get_state():
        """Current controller snapshot."""
        return controller.snapshot()

    @app.get("/logs", response_model=List[LogEntryModel])
    def get_logs():
        """Activity log entries, newest first."""
        return [entry.as_dict() for entry in controller.get_logs()]

    @app.get("/analytics")
    def get_analytics():
        return controller.get_analytics()

    @app.post("/control/start")
    def start():
        controller.start()
        return controller.snapshot()

    @app.post("/control/stop")
    def stop():
        controller.stop()
        return controller.snapshot()

    @app.put("/control/mode")
    def set_mode(body: ModeRequest):
        controller.set_mode(body.mode)
        return controller.snapshot()

    @app.post("/roads/{road_id}/override")
    def manual_override(road_id: str):
        """Open *road_id*.  Outside MANUAL mode the command is ignored."""
        _require_road(road_id)
        controller.manual_override(road_id)
        return controller.snapshot()

    @app.post("/roads/{road_id}/image", response_model=ReadingResponse)
    def classify_image(road_id: str, body: ClassificationRequest):
        """Run the classifier on an uploaded image and apply the result."""
        _require_road(road_id)
        try:
            base64.b64decode(body.image, validate=True)
        except (binascii.Error, ValueError):
            raise HTTPException(status_code=422, detail="image is not valid base64")
        snapshot = classifier.classify(body.image, road_id=road_id)
        controller.apply_reading(road_id, snapshot)
        return {"road_id": road_id, "density": snapshot.as_dict()}

    @app.post("/roads/{road_id}/analysis", response_model=ReadingResponse)
    def push_analysis(road_id: str, result: AnalysisResultModel):
        """Apply a classification computed elsewhere."""
        _require_road(road_id)
        snapshot = to_snapshot(result, road_id, controller.policy)
        controller.apply_reading(road_id, snapshot)
        return {"road_id": road_id, "density": snapshot.as_dict()}

    return app
