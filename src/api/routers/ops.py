import logging
import time
from typing import Optional

import asyncpg
from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from api import state
from api.dependencies import get_db_pool
from api.metrics import DB_POOL_SIZE
from storage import db

router = APIRouter()
logger = logging.getLogger(__name__)

PROJECT_NAME = "project-planner-backend"


@router.get("/health")
async def health_check(pool: Optional[asyncpg.Pool] = Depends(get_db_pool)):
    """Health check endpoint for container orchestration."""
    if pool is None:
        return JSONResponse(
            status_code=500, content={"ok": False, "error": "Database not initialized"}
        )

    try:
        db_ok = await db.ping(pool)
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return JSONResponse(
            status_code=500, content={"ok": False, "error": "Database unreachable"}
        )

    return {"ok": True, "db": db_ok}


@router.get("/metrics")
async def metrics(pool: Optional[asyncpg.Pool] = Depends(get_db_pool)) -> Response:
    """
    Prometheus scrape endpoint.
    """
    DB_POOL_SIZE.set(pool.get_size() if pool is not None else 0)

    data = generate_latest()
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)


@router.get("/metrics/carbon")
async def get_carbon_metrics() -> dict:
    """Get carbon emissions metrics from CodeCarbon."""
    summary = {
        "emissions_kg": 0.0,
        "emissions_g": 0.0,
        "energy_kwh": 0.0,
        "duration_seconds": 0.0,
        "project_name": PROJECT_NAME,
        "tracking": state.tracker is not None,
    }

    tracker = state.tracker
    if tracker is None:
        return summary

    try:
        energy = 0.0
        # Energy consumed so far (available while tracking)
        total_energy = getattr(tracker, "_total_energy", None)
        if total_energy is not None and hasattr(total_energy, "kWh"):
            energy = float(total_energy.kWh)

        # CodeCarbon uses time.monotonic for _start_time
        start_time = getattr(tracker, "_start_time", None)
        if start_time is not None:
            summary["duration_seconds"] = time.monotonic() - start_time

        # ~0.4 kg CO2/kWh global average when no live intensity is available
        emissions = energy * 0.4
        summary.update(
            emissions_kg=emissions,
            emissions_g=emissions * 1000,
            energy_kwh=energy,
        )
    except Exception as e:
        logger.warning(f"Could not retrieve carbon metrics: {e}")
        summary["error"] = "Carbon metrics unavailable"

    return summary
