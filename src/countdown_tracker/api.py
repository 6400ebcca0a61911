"""
HTTP API for the countdown tracker.

`GET /api/data` returns the canonical snapshot and `POST /api/data` merges a
delta into it. The other routes are read-only views computed from the
snapshot.
"""

from contextlib import asynccontextmanager
from datetime import date
from functools import lru_cache
from typing import Any, Optional

import uvicorn
from fastapi import Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from countdown_tracker.bucketing import weekly_target_for
from countdown_tracker.config import Settings, get_settings
from countdown_tracker.exceptions import ApplicationException, AuthenticationError
from countdown_tracker.logger import get_logger
from countdown_tracker.models.entries import Snapshot
from countdown_tracker.service import TrackerService, build_service, countdown_view, month_view, overview

logger = get_logger("countdown_tracker.api")

NO_STORE = {"Cache-Control": "no-store"}


@lru_cache
def get_service() -> TrackerService:
    return build_service(get_settings())


def check_data_key(
    request: Request,
    x_data_key: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Compare x-data-key with DATA_API_SECRET; mismatches are only logged unless REQUIRE_DATA_KEY is set."""
    if not settings.DATA_API_SECRET or x_data_key == settings.DATA_API_SECRET:
        return
    if settings.REQUIRE_DATA_KEY:
        raise AuthenticationError()
    logger.warning(f"{request.method} {request.url.path}: missing or invalid x-data-key, allowing")


async def application_exception_handler(request: Request, exc: ApplicationException):
    logger.warning(f"Application error on {request.method} {request.url.path}: {exc.message}")
    return exc.to_response()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error on {request.url.path}: {exc.errors()}")
    errors = [
        {"type": error.get("type"), "loc": error.get("loc"), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"error": "Invalid request", "detail": errors})


async def generic_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error: {repr(exc)}")
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Countdown tracker API is starting")
    yield
    logger.info("Countdown tracker API is shutting down")
    if get_service.cache_info().currsize:
        get_service().close()
        get_service.cache_clear()


app = FastAPI(title="Countdown Tracker", version="0.3.0", lifespan=lifespan)

app.add_exception_handler(ApplicationException, application_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/api/data", dependencies=[Depends(check_data_key)])
def get_data(service: TrackerService = Depends(get_service)):
    snapshot = service.load()
    logger.info(
        f"GET /api/data served: {len(snapshot.activity_entries)} activities, "
        f"{len(snapshot.weight_entries)} weights"
    )
    return JSONResponse(snapshot.to_payload(), headers=NO_STORE)


@app.post("/api/data", dependencies=[Depends(check_data_key)])
def post_data(payload: dict[str, Any], service: TrackerService = Depends(get_service)):
    delta = Snapshot.from_payload(payload, strict=True)
    merged = service.submit(delta)
    return JSONResponse(
        {
            "success": True,
            "activityCount": len(merged.activity_entries),
            "weightCount": len(merged.weight_entries),
        },
        headers=NO_STORE,
    )


@app.get("/api/calendar/{year}/{month}", dependencies=[Depends(check_data_key)])
def get_calendar(
    year: int,
    month: int,
    service: TrackerService = Depends(get_service),
    settings: Settings = Depends(get_settings),
):
    if not 1 <= month <= 12:
        raise ApplicationException(f"Invalid month: {month}")
    view = month_view(
        service.load(),
        year,
        month,
        service.today(),
        settings.highlight_ranges,
        tz=service.tz,
    )
    return JSONResponse(view, headers=NO_STORE)


@app.get("/api/summary", dependencies=[Depends(check_data_key)])
def get_summary(service: TrackerService = Depends(get_service), settings: Settings = Depends(get_settings)):
    return JSONResponse(overview(service.load(), settings, service.tz), headers=NO_STORE)


@app.get("/api/targets/{day}")
def get_target(day: date):
    return {"date": day.isoformat(), "distanceKm": weekly_target_for(day)}


@app.get("/api/countdown")
def get_countdown(settings: Settings = Depends(get_settings)):
    return countdown_view(settings)


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "countdown_tracker.api:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        timeout_keep_alive=30,
    )


if __name__ == "__main__":
    main()
