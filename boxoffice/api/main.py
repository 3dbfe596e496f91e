"""FastAPI application entry point.

Creates and configures the box-office REST API: routers, typed
error handling, CORS and Prometheus metrics.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from boxoffice.api.dependencies import close_services
from boxoffice.api.routers import movies
from boxoffice.api.schemas import ErrorDetail, ErrorResponse, HealthResponse
from boxoffice.exceptions import BoxOfficeError, ServerError
from boxoffice.monitoring.middleware import PrometheusMiddleware, mount_metrics
from boxoffice.settings import settings
from boxoffice.utils import configure_logging, setup_logger

logger = structlog.get_logger(__name__)

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Closes the shared TMDB HTTP client on shutdown.

    Args:
        _app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    if not settings.tmdb.is_configured:
        logger.warning("tmdb_not_configured")
    yield
    await close_services()


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    configure_logging()
    setup_logger("boxoffice")

    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="Monthly box-office rankings from TMDB",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    _configure_cors(app)
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)
    _register_exception_handlers(app)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application instance.
    """
    app.include_router(movies.router, prefix="/api")
    app.add_api_route(
        "/api/health",
        health_check,
        methods=["GET"],
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )


# =============================================================================
# ERROR HANDLING
# =============================================================================


def _error_response(error: BoxOfficeError) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=error.code, message=error.message))
    return JSONResponse(status_code=int(error.status_code), content=body.model_dump(mode="json"))


async def handle_box_office_error(request: Request, exc: BoxOfficeError) -> JSONResponse:
    """Render a typed error as the error envelope."""
    logger.warning(
        "request_failed",
        path=request.url.path,
        code=exc.code.value,
        status_code=int(exc.status_code),
        error=exc.message,
    )
    return _error_response(exc)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Render any unclassified failure as a generic SERVER_ERROR.

    Internal details are logged only.
    """
    logger.error("request_crashed", path=request.url.path, error=repr(exc), exc_info=exc)
    return _error_response(ServerError())


def _register_exception_handlers(app: FastAPI) -> None:
    """Register typed and catch-all exception handlers.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(BoxOfficeError, handle_box_office_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================


def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns:
        API health status with version.
    """
    return HealthResponse(
        status="healthy",
        version=settings.api.version,
        tmdb_configured=settings.tmdb.is_configured,
    )


app = create_app()


# =============================================================================
# CLI ENTRY POINT
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "boxoffice.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
