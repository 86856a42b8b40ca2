import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.core.config import Settings, settings as default_settings
from app.core.logging_config import setup_logging
from app.core.seed import seed_demo_data
from app.core.sessions import SessionStore, get_session_store
from app.core.storage import StorageBackend, get_storage_backend
from app.api.error_handlers import register_error_handlers
from app.api.endpoints import applications, auth, editor_profiles, health, jobs, reviews, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    settings: Settings = app.state.settings
    storage: StorageBackend = app.state.storage

    # Startup
    logger.info(f"Starting up {settings.PROJECT_NAME} ({type(storage).__name__}, {type(app.state.session_store).__name__})")
    if settings.CREATE_TABLES_ON_STARTUP:
        logger.info("Creating database tables...")
        storage.init_schema()
    if settings.SEED_DEMO_DATA:
        seed_demo_data(storage)

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


def create_app(
    settings: Optional[Settings] = None,
    storage: Optional[StorageBackend] = None,
    session_store: Optional[SessionStore] = None
) -> FastAPI:
    """
    Build the FastAPI application.

    The storage backend and session store are injected here (or built from
    settings) and shared with request handlers through app.state.
    """
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Marketplace API connecting video creators with freelance video editors",
        lifespan=lifespan
    )

    app.state.settings = settings
    app.state.storage = storage or get_storage_backend(settings)
    app.state.session_store = session_store or get_session_store(settings)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    for module in (auth, users, jobs, editor_profiles, reviews, applications):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root():
        """Root endpoint - API health check"""
        return {
            "message": settings.PROJECT_NAME,
            "version": "1.0.0",
            "status": "healthy"
        }

    return app


setup_logging(
    default_settings.LOG_LEVEL,
    json_logs=default_settings.JSON_LOGS,
    service=default_settings.PROJECT_NAME,
    environment=default_settings.ENVIRONMENT
)
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload during development
        log_level="info"
    )
