"""
FastAPI application entry point.

This module creates and configures the FastAPI application.
Using an application factory pattern (create_app function) because:
- Easier to test with different configurations
- Explicit about initialization order
- Settings and the object store are passed in, not looked up globally

For local development:
    uvicorn gps_gateway.main:app --reload

For production:
    gps-gateway
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.routes import gps_data, health
from .config.settings import Settings, get_settings
from .core.errors import GatewayError
from .infrastructure.storage.client import ObjectStore, StorageConfig, create_object_store

# Configure logging
logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)

logger = logging.getLogger(__name__)


def build_object_store(settings: Settings) -> ObjectStore:
    """Build the process-wide object store from settings."""
    config = StorageConfig(
        region=settings.aws_region,
        endpoint_url=settings.s3_endpoint_url,
        connect_timeout=settings.s3_connect_timeout,
        read_timeout=settings.s3_read_timeout,
        buffer_dir=settings.buffer_dir,
    )
    return create_object_store(
        config=config,
        mock_mode=settings.storage_mock_mode,
        mock_buckets=(settings.bucket_name,),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the object store once at startup unless one was injected,
    and reports missing configuration.
    """
    settings: Settings = app.state.settings

    logger.info(
        "GPS Data Gateway starting",
        extra={
            "version": settings.api_version,
            "bucket": settings.bucket_name,
            "region": settings.aws_region,
            "mock_mode": {"storage": settings.storage_mock_mode},
        }
    )

    missing_fields = settings.validate_required_fields()
    if missing_fields:
        logger.error(
            "Missing required configuration",
            extra={"missing_fields": missing_fields}
        )

    if getattr(app.state, "object_store", None) is None:
        app.state.object_store = build_object_store(settings)

    yield

    logger.info("GPS Data Gateway shutting down")


def create_app(
    settings: Optional[Settings] = None,
    object_store: Optional[ObjectStore] = None,
) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Settings to use; defaults to the cached environment settings
        object_store: Store to serve from; built in the lifespan when omitted
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="""
        Serves stored GPS data documents from S3.

        `GET /get-data?user_id=&vehicle_id=&year=&month=&day=` returns the
        JSON document stored for that user, vehicle and date. `month` is a
        zero-padded number (01-12).
        """,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.object_store = object_store

    app.include_router(gps_data.router, tags=["GPS Data"])

    app.include_router(
        health.router,
        prefix="/health",
        tags=["Health"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """
        Map a gateway error to its status and public message.

        Only the fixed message is sent; detail stays in the log.
        """
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            "Request failed",
            extra={
                "path": request.url.path,
                "status_code": exc.status_code,
                "error": str(exc),
            }
        )
        return PlainTextResponse(exc.public_message, status_code=exc.status_code)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all exception handler.

        Prevents stack traces from leaking to clients. We log the full
        error server-side but return a generic message.
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

    logger.info(
        "FastAPI application created",
        extra={
            "title": settings.api_title,
            "version": settings.api_version,
        }
    )

    return app


# Create the application instance
# This is what uvicorn imports
app = create_app()


def run() -> None:
    """Start uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
