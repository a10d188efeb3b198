"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intake import __version__
from intake.api.v1 import router as api_v1_router
from intake.config import Settings, get_settings
from intake.store import InMemoryStore

logger = logging.getLogger("intake")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[InMemoryStore] = None,
) -> FastAPI:
    """Build the application around an explicitly owned store."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events."""
        logging.basicConfig(level=settings.LOG_LEVEL.upper())
        logger.info("Starting %s...", settings.APP_NAME)
        yield
        logger.info("Shutting down %s...", settings.APP_NAME)

    app = FastAPI(
        title=settings.APP_NAME,
        description="물건 접수 및 담당자 지역 배정 관리",
        version=__version__,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else InMemoryStore(settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    # Include API routers
    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.APP_NAME}

    return app


app = create_app()
