from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging

from ration.api.routes import rations, users
from ration.utilities import config

# Logging
logger = logging.getLogger("ration_app")

# Initialize FastAPI app
app = FastAPI(title="Weekly Ration Planner API")

# Include routers
app.include_router(rations.router)
app.include_router(users.router)


_REQUEST_PARTS = ("body", "query", "path", "header", "cookie")


def _invalid_field(exc: RequestValidationError) -> str:
    """Dotted name of the first rejected field, or "request body" when the body itself is unusable."""
    for error in exc.errors():
        parts = [p for p in error.get("loc", ()) if isinstance(p, str) and p not in _REQUEST_PARTS]
        if parts:
            return ".".join(parts)
    return "request body"


@app.exception_handler(RequestValidationError)
async def _validation_error(request: Request, exc: RequestValidationError):
    field = _invalid_field(exc)
    logger.info("Rejected %s %s: invalid %s", request.method, request.url.path, field)
    return JSONResponse(status_code=400, content={"error": f"Invalid {field}"})


@app.on_event("startup")
def _startup_check_config():
    """Warn early when the spreadsheet is not configured; requests would fail with 500."""
    if not config.RATION_SHEET_ID:
        logger.warning("RATION_SHEET_ID not set; ration endpoints will fail until it is configured.")
    if not config.GOOGLE_SERVICE_EMAIL or not config.GOOGLE_PRIVATE_KEY:
        logger.warning("Google service account not configured (GOOGLE_SERVICE_EMAIL / GOOGLE_PRIVATE_KEY).")


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "env": config.ENV_NAME}
