"""
FastAPI application entry point.

``create_app`` builds the application around a ``Settings`` value and,
optionally, a ready-made object store. When no store is given, the lifespan
builds one before the server accepts requests; a store that cannot resolve
region or credentials aborts startup.

Run the service:
    upload-service

Or with uvicorn directly:
    uvicorn upload_service.main:app --port 8080
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .api.routes import files, health
from .config.settings import Settings, get_settings
from .infrastructure.storage.client import (
    ObjectStore,
    StorageConfig,
    create_object_store,
)

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=level.upper(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the shared object store on startup unless one was injected.
    """
    settings: Settings = app.state.settings

    if app.state.object_store is None:
        config = StorageConfig(
            bucket_name=settings.s3_bucket,
            region=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        # StorageError propagates; uvicorn logs it and aborts startup
        app.state.object_store = create_object_store(
            config=config,
            mock_mode=settings.storage_mock_mode,
        )

    logger.info(
        "Upload service starting",
        extra={
            "version": __version__,
            "bucket": settings.s3_bucket,
            "key_prefix": settings.s3_key_path,
            "mock_mode": settings.storage_mock_mode,
        }
    )

    yield

    logger.info("Upload service shutting down")


def create_app(
    settings: Optional[Settings] = None,
    object_store: Optional[ObjectStore] = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Resolved configuration (defaults to the environment)
        object_store: Store to use instead of building one at startup
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="S3 Upload Service",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.object_store = object_store

    # Plain Starlette routes: no method filter, so any method reaches them
    app.router.routes.extend(health.routes + files.routes)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Render routing and framework errors (404, 405, ...) as plain text."""
        return PlainTextResponse(
            str(exc.detail),
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Logs the full error server-side and returns a plain-text 500.
        """
        logger.error(
            "Unhandled exception",
            extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
            },
            exc_info=exc,
        )

        return PlainTextResponse("Internal server error", status_code=500)

    return app


configure_logging(get_settings().log_level)

# Create the application instance
# This is what uvicorn imports
app = create_app()


def main() -> None:
    """Run the service on all interfaces at the configured port."""
    settings = get_settings()

    logger.info("Server is running on port %s", settings.port)

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port_number,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
