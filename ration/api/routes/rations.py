import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse

from ration.api.dependencies import get_booking_repository
from ration.infra.Booking_Repository import BookingRepository
from ration.logic.rations.errors import RationValidationError
from ration.logic.rations.read import read_week
from ration.logic.rations.upsert import upsert_week
from ration.utilities.validators import AddRationInput

router = APIRouter()
logger = logging.getLogger(__name__)


# === Submit a week ===
@router.post("/api/addRation")
def add_ration(
    payload: Optional[AddRationInput] = Body(default=None),
    repo: BookingRepository = Depends(get_booking_repository),
):
    payload = payload or AddRationInput()
    try:
        result = upsert_week(repo, payload.name, payload.rationType, payload.weekStart, payload.plan)
    except RationValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except Exception:
        logger.exception("POST addRation failed")
        return JSONResponse(status_code=500, content={"error": "Failed to add ration"})

    return {
        "ok": True,
        "weekStart": result.week_start,
        "name": result.name,
        "rationType": result.ration_type,
        "updated": result.updated,
        "appended": result.appended,
        "totalWritten": result.total_written,
    }


# === Read a week back ===
@router.get("/api/getRation")
def get_ration(
    name: str = Query(default=""),
    weekStart: str = Query(default=""),
    repo: BookingRepository = Depends(get_booking_repository),
):
    try:
        result = read_week(repo, name, weekStart)
    except RationValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.message})
    except Exception:
        logger.exception("GET getRation failed")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch rations"})

    return {
        "ok": True,
        "name": result.name,
        "weekStart": result.week_start,
        "rationType": result.ration_type,
        "plan": result.plan.to_dict(),
    }
