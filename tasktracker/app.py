# tasktracker/app.py
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tasktracker.config import Settings, configure_logging
from tasktracker.database import build_engine, build_session_factory, init_db
from tasktracker.exceptions import TaskTrackerError
from tasktracker.routers import auth, health, tasks

logger = logging.getLogger(__name__)


def _field_errors(exc: RequestValidationError) -> list:
    errors = []
    for error in exc.errors():
        # Drop the "body"/"query"/"path" prefix so the field name is what the client sent
        loc = [str(part) for part in error.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc) or None, "message": error.get("msg", "Invalid value")})
    return errors


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Wire settings, database, routes and error handling into one app"""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Task Tracker API")

    engine = build_engine(settings.database_url, settings.db_sslmode)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TaskTrackerError)
    async def task_tracker_error_handler(request: Request, exc: TaskTrackerError):
        if exc.status_code >= 500:
            logger.error("Unhandled service error on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Validation failed", "errors": _field_errors(exc)},
        )

    # Route registration
    app.include_router(health.router, tags=["Health"])
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    @app.on_event("startup")
    def startup_event():
        init_db(engine)
        logger.info("Task Tracker API started")

    @app.on_event("shutdown")
    def shutdown_event():
        engine.dispose()
        logger.info("Task Tracker API stopped")

    return app
