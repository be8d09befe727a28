import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ration.api.dependencies import get_namelist_service
from ration.logic.namelist.cache import NamelistService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/getUsers")
def get_users(
    reload: str = Query(default=""),
    service: NamelistService = Depends(get_namelist_service),
):
    """Names allowed to submit. ``?reload=true`` skips the cached copy."""
    try:
        source, rows = service.get_rows(reload=reload == "true")
    except Exception:
        logger.exception("GET getUsers failed")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch namelist"})
    return {"source": source, "rows": rows}
