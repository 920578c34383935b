"""Simulation API endpoints.

Endpoints:
    GET  /api/state
    POST /api/tick?steps=N
    POST /api/reset
    GET  /api/model
    PUT  /api/model
    GET  /api/history
"""

import logging
from typing import TYPE_CHECKING, List

from fastapi import APIRouter, HTTPException, Query

from backend.models import (
    BrainModel,
    GenerationReportData,
    LoadModelResponse,
    ResetRequest,
    WorldState,
)
from evosim.exceptions import ConfigurationError, ModelShapeMismatch

if TYPE_CHECKING:
    from backend.app_factory import AppContext

logger = logging.getLogger(__name__)

MAX_TICKS_PER_REQUEST = 1000


def setup_simulation_router(context: "AppContext") -> APIRouter:
    """Create the simulation router bound to ``context``.

    Args:
        context: Application context owning the GenerationManager

    Returns:
        Configured APIRouter
    """
    router = APIRouter(prefix="/api", tags=["simulation"])

    @router.get("/state", response_model=WorldState)
    async def get_state():
        """Current world state."""
        return context.manager.snapshot().to_dict()

    @router.post("/tick", response_model=WorldState)
    async def tick(steps: int = Query(1, ge=1, le=MAX_TICKS_PER_REQUEST)):
        """Advance the simulation by ``steps`` ticks."""
        manager = context.manager
        snapshot = manager.snapshot()
        for _ in range(steps):
            snapshot = manager.tick()
            if manager.is_finished:
                break
        return snapshot.to_dict()

    @router.post("/reset", response_model=WorldState)
    async def reset(request: ResetRequest):
        """Rebuild the simulation, optionally with a new config and seed."""
        try:
            context.reset(request.config, request.seed)
        except ConfigurationError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return context.manager.snapshot().to_dict()

    @router.get("/model", response_model=BrainModel)
    async def get_model():
        """Brain of the current best creature."""
        exported = context.manager.export_best_model()
        if exported is None:
            raise HTTPException(status_code=404, detail="No creatures alive")
        return exported

    @router.put("/model", response_model=LoadModelResponse)
    async def put_model(payload: BrainModel):
        """Load a brain into every creature."""
        try:
            updated = context.manager.load_model_into_population(payload.model)
        except ModelShapeMismatch as exc:
            logger.warning("Rejected model upload: %s", exc)
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return LoadModelResponse(success=True, creatures_updated=updated)

    @router.get("/history", response_model=List[GenerationReportData])
    async def get_history():
        """Reports of every completed generation."""
        return [report.to_dict() for report in context.manager.history]

    return router
