"""Main application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy import select

from . import __version__
from .api.v1.api import api_v1_router
from .api.v1.middleware import (
    base_error_handler,
    limiter,
    ratelimit_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .core import BaseError, get_settings
from .deps import SessionDep
from .infrastructure.database import AsyncSessionFactory, engine
from .models import Base
from .services import AuthService
from .state import AppState
from .storage import BUCKET, client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Startup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Nobody could log in to an empty users table
    async with AsyncSessionFactory() as s:
        await AuthService(s).ensure_default_users(
            settings.DEFAULT_ADMIN_USERNAME, settings.DEFAULT_ADMIN_PASSWORD,
            settings.DEFAULT_STAFF_USERNAME, settings.DEFAULT_STAFF_PASSWORD,
        )

    yield

    # Shutdown
    app.state.store.invalidate_all()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title="Hostel Ops API",
        description="Rooms, staff, sales and expenses for a hostel dashboard",
        version=__version__,
        lifespan=lifespan
    )

    # In-memory mirrors of every collection, shared by all requests
    app.state.store = AppState()

    # Attach rate-limiter
    app.state.limiter = limiter

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"]
    )
    app.add_middleware(SlowAPIMiddleware)

    # Exception handling
    app.add_exception_handler(RateLimitExceeded, ratelimit_handler)
    app.add_exception_handler(BaseError, base_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include v1 API with all endpoints
    app.include_router(api_v1_router, prefix="/api/v1")

    @app.get("/healthz")
    async def healthz(sess: SessionDep):
        """Health check endpoint."""
        status = {"db": "ok", "s3": "ok"}

        try:
            await sess.scalar(select(1))
        except Exception:
            logger.exception("Database health check failed")
            status["db"] = "error"

        try:
            client.bucket_exists(BUCKET)
        except Exception:
            logger.warning("Object storage health check failed")
            status["s3"] = "error"

        return status

    @app.get("/")
    async def root():
        """API root."""
        return {
            "message": "Hostel Ops API",
            "docs": "/docs",
            "health": "/healthz"
        }

    return app


app = create_app()
