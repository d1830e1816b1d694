import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_admin.api.api import api_router
from catalog_admin.core.config import settings
from catalog_admin.core.error_handlers import (
    general_exception_handler,
    http_exception_handler,
    integrity_exception_handler,
    sqlalchemy_exception_handler,
    validation_exception_handler,
)
from catalog_admin.db.session import AsyncSessionLocal

logger = logging.getLogger(__name__)

# Most specific first; Starlette picks the handler by walking the MRO
EXCEPTION_HANDLERS = (
    (StarletteHTTPException, http_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (IntegrityError, integrity_exception_handler),
    (SQLAlchemyError, sqlalchemy_exception_handler),
    (Exception, general_exception_handler),
)


async def ping_database() -> None:
    """Run a trivial query on a fresh session, raising if the database is unreachable."""
    async with AsyncSessionLocal() as session:
        await session.execute(text("SELECT 1"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s (ENV=%s)", settings.PROJECT_NAME, settings.ENV)
    try:
        await ping_database()
        logger.info("Database connection verified")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        if settings.ENV == "production":
            raise
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


def cors_origins() -> list[str]:
    if settings.ENV == "development":
        logger.info("Development mode: allowing all CORS origins")
        return ["*"]
    return list(settings.BACKEND_CORS_ORIGINS)


def create_app() -> FastAPI:
    """Create FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
    )

    @app.get("/healthz", tags=["health"])
    async def health_check():
        """Liveness probe that also checks the database."""
        try:
            await ping_database()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            raise HTTPException(status_code=503, detail="Service unhealthy")
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.PROJECT_NAME,
        }

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %s in %.1fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)

    origins = cors_origins()
    logger.info("CORS origins: %s", origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=600,
    )

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="localhost", port=settings.SERVER_PORT)
