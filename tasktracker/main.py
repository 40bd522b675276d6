"""FastAPI main application with app factory and route configuration."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .deps import get_settings
from .routes import tasks
from .services.task_store import initialize_task_store
from .utils.logging import (
    configure_request_logging,
    log_shutdown_info,
    log_startup_info,
    setup_logging,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    settings: Settings = app.state.settings
    log_startup_info(settings)

    app.state.task_store = initialize_task_store(settings)
    logger.info("Task store initialized")

    yield

    log_shutdown_info()


def _validation_message(exc: RequestValidationError) -> str:
    """Collapse request validation errors into one line of text."""
    messages = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            detail = error.get("ctx", {}).get("error")
            messages.append(f"{error['msg']}: {detail}" if detail else error["msg"])
            continue
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(messages) or "Invalid request body"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the global instance

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="Task Tracker",
        description="Minimal task-tracking API with JSON file persistence",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()

    app.middleware("http")(configure_request_logging())

    # Registered last so it wraps everything else, including OPTIONS and errors
    @app.middleware("http")
    async def cors_headers(request: Request, call_next):
        """Attach permissive CORS headers and answer preflight requests."""
        app_settings: Settings = request.app.state.settings

        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_200_OK)
        else:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Unexpected error for {request.method} {request.url}: {str(e)}",
                    exc_info=True,
                )
                response = PlainTextResponse(
                    "Internal server error",
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                )

        response.headers["Access-Control-Allow-Origin"] = request.headers.get("origin") or "*"
        response.headers["Vary"] = "Origin"
        response.headers["Access-Control-Allow-Methods"] = app_settings.cors_allow_methods
        response.headers["Access-Control-Allow-Headers"] = app_settings.cors_allow_headers
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render HTTP errors as a single line of plain text."""
        logger.debug(
            f"HTTP {exc.status_code}: {exc.detail} for {request.method} {request.url}"
        )

        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Reject malformed or mistyped request bodies with a 400."""
        logger.debug(
            f"Validation error for {request.method} {request.url}: {exc.errors()}"
        )

        return PlainTextResponse(
            _validation_message(exc),
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    @app.get("/healthz", tags=["health"])
    def health_check(request: Request):
        """Health check endpoint for monitoring and load balancers."""
        task_store = request.app.state.task_store
        app_settings: Settings = request.app.state.settings

        return {
            "status": "healthy",
            "version": VERSION,
            "tasks": task_store.count(),
            "next_id": task_store.next_id,
            "data_file": str(app_settings.data_file),
        }

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Task Tracker API",
            "version": VERSION,
            "docs_url": "/docs",
            "health_check": "/healthz",
            "endpoints": {
                "tasks": "/tasks",
            },
        }

    app.include_router(tasks.router)

    logger.debug("FastAPI application created and configured")

    return app


# Create the app instance
app = create_app()


def run() -> None:
    """Start the HTTP listener; exits with status 1 if it cannot bind."""
    settings = get_settings()
    setup_logging(settings)

    try:
        uvicorn.run(
            app,
            host=settings.app_host,
            port=settings.app_port,
            log_config=None,
        )
    except OSError as e:
        logger.critical(
            f"Cannot listen on {settings.app_host}:{settings.app_port}: {e}"
        )
        sys.exit(1)
    except SystemExit as e:
        # uvicorn logs the bind error itself and exits with a non-zero code
        if not e.code:
            raise
        logger.critical(
            f"Cannot listen on {settings.app_host}:{settings.app_port}: "
            f"server exited with status {e.code}"
        )
        sys.exit(1)


if __name__ == "__main__":
    run()
