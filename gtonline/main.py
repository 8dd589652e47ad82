import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from gtonline.api.error_handlers import register_error_handlers
from gtonline.api.v1.router import api_router
from gtonline.core.config import Settings, get_settings
from gtonline.core.database import Database
from gtonline.core.observability import setup_logging
from gtonline.core.redis import RedisClient
from gtonline.repositories.memory import MemoryStorage
import gtonline.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    memory_storage: Optional[MemoryStorage] = None,
) -> FastAPI:
    """Build the application and the storage handles it owns"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle"""
        setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
        if app.state.database is not None:
            await app.state.database.create_all()
        await app.state.redis.connect()
        logger.info("Starting up...", extra={"storage_backend": settings.STORAGE_BACKEND})

        yield

        logger.info("Shutting down...")
        await app.state.redis.disconnect()
        if app.state.database is not None:
            await app.state.database.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        openapi_url="/api/v1/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.redis = RedisClient(settings.REDIS_URL)
    if settings.STORAGE_BACKEND == "memory":
        app.state.database = None
        app.state.memory_storage = memory_storage or MemoryStorage()
    else:
        app.state.database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
        app.state.memory_storage = None

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include API router
    app.include_router(api_router, prefix="/api/v1")

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "app": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/api/docs",
            "health": "/health",
            "api": "/api/v1"
        }

    # Health check endpoint
    @app.get("/health")
    async def health_check(request: Request):
        storage_status = "healthy"
        database: Optional[Database] = request.app.state.database
        if database is not None:
            try:
                await database.ping()
            except Exception as e:
                logger.error(f"Database health check failed: {e}")
                storage_status = "unhealthy"

        redis_client: RedisClient = request.app.state.redis
        redis_status = "disabled"
        if redis_client.enabled:
            try:
                await redis_client.ping()
                redis_status = "healthy"
            except Exception as e:
                logger.error(f"Redis health check failed: {e}")
                redis_status = "unhealthy"

        healthy = storage_status == "healthy" and redis_status != "unhealthy"
        return {
            "status": "healthy" if healthy else "degraded",
            "services": {
                "storage": storage_status,
                "redis": redis_status
            }
        }

    return app


app = create_app()
