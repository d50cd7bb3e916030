"""
Main FastAPI application entry point.
Wires settings, middleware and the time tracking routers together.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException as FastAPIHTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.application.dto.base_dto import HealthCheckResponseDTO
from app.infrastructure.db.database import engine
from app.infrastructure.db.models import create_all_tables
from app.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware
from app.infrastructure.web.routers import time_entries, reports

logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {settings.api_title} v{settings.api_version} ({settings.environment})")
    logger.info(f"Storage backend: {settings.storage_backend}")

    # SQLite databases are created on the fly; other databases use migrations
    if settings.storage_backend == "sql" and settings.is_sqlite:
        create_all_tables(engine)
        logger.info("SQLite tables ensured")

    yield

    logger.info("Shutting down, disposing database engine")
    engine.dispose()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    API docs are only served in debug mode.
    """
    docs_base = settings.api_prefix if settings.debug else None

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{docs_base}/docs" if docs_base else None,
        redoc_url=f"{docs_base}/redoc" if docs_base else None,
        openapi_url=f"{docs_base}/openapi.json" if docs_base else None,
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(ErrorHandlerMiddleware)

    app.include_router(time_entries.router, prefix=f"{settings.api_prefix}/time-entries", tags=["Time Entries"])
    app.include_router(reports.router, prefix=f"{settings.api_prefix}/reports", tags=["Reports"])

    @app.get("/")
    async def root() -> Dict[str, Any]:
        """API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "time_entries": f"{settings.api_prefix}/time-entries",
            "health": f"{settings.api_prefix}/health",
        }

    @app.get(f"{settings.api_prefix}/health", response_model=HealthCheckResponseDTO)
    async def health_check() -> HealthCheckResponseDTO:
        return HealthCheckResponseDTO(
            status="healthy",
            environment=settings.environment,
            version=settings.api_version,
            dependencies={"storage": settings.storage_backend},
        )

    # Unknown paths get a path message; 404s raised by routes keep their detail
    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc):
        detail = getattr(exc, "detail", None)
        if isinstance(exc, FastAPIHTTPException) and isinstance(detail, dict):
            return JSONResponse(status_code=404, content={"detail": detail})
        return JSONResponse(
            status_code=404,
            content={
                "error": "Not Found",
                "message": f"The path {request.url.path} was not found",
                "path": request.url.path
            }
        )

    return app


app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
