# type: ignore
# pyright: reportGeneralTypeIssues=false
"""
Swim Team Scheduling Service
============================
Training calendar with recurring sessions and a rotating leader duty roster.

    controllers  ─►  services  ─►  repositories (in-memory storage)
                        │
                        └─►  RotationScheduler / RecurrenceExpander (pure)

Port: 8000
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from swimteam.controllers import (
    leader_controller,
    roster_controller,
    system_controller,
    training_controller,
)
from swimteam.core.config import settings
from swimteam.core.dependencies import get_roster_service
from swimteam.core.logging import get_logger
from swimteam.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger("app")


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.SEED_DEFAULT_DATA:
        try:
            get_roster_service().seed_from_file(settings.SEED_ROSTER_PATH)
        except (OSError, ValueError) as exc:
            logger.warning("Roster seed skipped: %s", exc)
    logger.info("%s %s started", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    logger.info("Shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Swim Team Scheduling Service",
    description="Training sessions, recurring schedules and leader duty rotation.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception(
        "Unhandled exception on %s %s", request.method, request.url.path,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "detail": str(exc),
            "request_id": getattr(request.state, "request_id", None),
        },
    )


app.include_router(system_controller.router)
app.include_router(roster_controller.router)
app.include_router(leader_controller.router)
app.include_router(training_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
