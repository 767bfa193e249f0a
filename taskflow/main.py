"""
TaskFlow FastAPI application entry point.

Request flow: bearer token → identity → membership scope → repository → JSON
"""

import logging
from contextlib import asynccontextmanager
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from taskflow import __version__
from taskflow.config import Settings, get_settings
from taskflow.db.session import check_db_connection, engine_for
from taskflow.errors import AuthenticationError, TaskFlowError
from taskflow.services.tokens import TokenService
from taskflow.storage import LocalFileStorage

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("TaskFlow starting")
    try:
        try:
            check_db_connection(app.state.engine)
            logger.info("Database connection verified")
        except Exception as e:
            logger.critical("Database unreachable: %s", e)
            raise
        app.state.storage.ensure_root()
        yield
    finally:
        logger.info("TaskFlow shutting down")
        app.state.engine.dispose()
        logger.info("Database connection pool closed")


def _format_validation_errors(exc: RequestValidationError) -> str:
    """Collapse pydantic errors into one readable sentence."""
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        field = ".".join(loc)
        msg = err.get("msg", "Invalid value")
        parts.append(f"{field}: {msg}" if field else msg)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """Map service errors to JSON bodies. No stack traces reach the client."""

    @app.exception_handler(TaskFlowError)
    async def taskflow_error_handler(request: Request, exc: TaskFlowError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message},
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": _format_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        if settings.debug:
            return JSONResponse(status_code=500, content={"detail": str(exc)})
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The database engine, token secret and upload root are bound here, once,
    from ``settings`` and reached by request handlers through ``app.state``.
    """
    settings = settings or get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.engine = engine_for(settings)
    app.state.session_factory = sessionmaker(
        autocommit=False, autoflush=False, bind=app.state.engine
    )
    app.state.token_service = TokenService(
        settings.secret_key,
        expires_delta=timedelta(days=settings.access_token_expire_days),
    )
    app.state.storage = LocalFileStorage(settings.upload_dir)

    register_exception_handlers(app, settings)

    # Mount API routes
    from taskflow.api.auth import router as auth_router
    from taskflow.api.projects import router as projects_router
    from taskflow.api.tasks import router as tasks_router
    from taskflow.api.team import router as team_router
    from taskflow.api.uploads import router as uploads_router

    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(projects_router, prefix="/api/projects", tags=["projects"])
    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(team_router, prefix="/api/team", tags=["team"])
    app.include_router(uploads_router, prefix="/uploads", tags=["uploads"])

    @app.get("/health")
    def health(request: Request) -> dict:
        """Health check endpoint. Confirms DB connectivity."""
        try:
            with request.app.state.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": "ok",
                "version": __version__,
                "database": "connected",
            }
        except Exception:
            return JSONResponse(
                status_code=503,
                content={
                    "status": "unhealthy",
                    "version": __version__,
                    "database": "disconnected",
                },
            )

    return app


app = create_app()
