"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from wms.application.services import DemoSeeder
from wms.config import get_settings
from wms.infrastructure.database import Base, engine
from wms.infrastructure.database.repositories import SQLAlchemyRecordService
from wms.infrastructure.database.session import async_session_factory
from wms.infrastructure.dependencies import get_error_reporter
from wms.infrastructure.logging.log_config import setup_logging
from wms.presentation.api.v1.router import router as v1_router

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong"


async def _seed_demo_data() -> None:
    """Fill empty collections with demo records. Idempotent."""
    settings = get_settings()
    try:
        async with async_session_factory() as session:
            seeder = DemoSeeder(settings.demo_data_file, SQLAlchemyRecordService(session))
            created = await seeder.seed()
            await session.commit()
            if created:
                logger.info("Seeded %d demo records", created)
    except Exception as exc:
        logger.warning("Could not seed demo data: %s", exc)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables, seed demo data."""
    settings = get_settings()
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if settings.seed_demo_data and settings.record_backend == "database":
        await _seed_demo_data()

    yield

    await engine.dispose()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Top-level boundary: log, record, and answer with a generic message."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    get_error_reporter().report(
        exc, {"method": request.method, "path": request.url.path}
    )
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR_MESSAGE})


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Mount versioned API routes under /api
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "wms.main:app",
        host="0.0.0.0",
        port=8030,
        reload=True,
    )
