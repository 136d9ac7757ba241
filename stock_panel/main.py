"""
Stock Panel - Main Application Entry Point
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from sqlalchemy import text

from stock_panel import __version__
from stock_panel.api.endpoints import pages
from stock_panel.api.router import api_router
from stock_panel.config import settings
from stock_panel.core.sessions import create_bearer_store, create_reset_store
from stock_panel.db.database import engine, init_db
from stock_panel.middleware import register_request_logging
from stock_panel.scheduler import TokenSweepScheduler
from stock_panel.utils.exceptions import register_exception_handlers
from stock_panel.utils.logger import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events handler."""
    # Startup
    configure_logging(settings)
    logger.info(f"Starting {settings.APP_NAME}...")

    await init_db()
    logger.info("Database initialized")

    app.state.bearer_tokens = create_bearer_store(hours=settings.TOKEN_EXPIRE_HOURS)
    app.state.reset_tokens = create_reset_store(minutes=settings.RESET_TOKEN_EXPIRE_MINUTES)

    sweeper = TokenSweepScheduler(
        [app.state.bearer_tokens, app.state.reset_tokens],
        interval_minutes=settings.TOKEN_SWEEP_INTERVAL_MINUTES,
    )
    sweeper.start()
    app.state.token_sweeper = sweeper

    logger.info(f"{settings.APP_NAME} started on port {settings.BACKEND_PORT}")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}...")
    sweeper.stop()
    await engine.dispose()
    logger.info("Goodbye!")


def create_application() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.APP_NAME,
        description="Personal trading journal with daily P&L and price alerts",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app)
    register_exception_handlers(app)

    # API routes, then pages and static assets
    app.include_router(api_router, prefix=settings.API_PREFIX)
    app.include_router(pages.router)
    pages.mount_static(app)

    # Health check endpoint
    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint for load balancers."""
        return {
            "status": "healthy",
            "app": settings.APP_NAME,
            "version": __version__,
        }

    @app.get("/ready", tags=["Health"])
    async def readiness_check():
        """Readiness check - verifies the database is reachable."""
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            database = "connected"
        except Exception as e:
            logger.error(f"Readiness check failed: {e}")
            database = f"error: {str(e)[:50]}"

        return {
            "status": "ready" if database == "connected" else "degraded",
            "checks": {"database": database},
        }

    return app


# Create the application instance
app = create_application()


def run() -> None:
    """Console entry point."""
    import uvicorn
    uvicorn.run(
        "stock_panel.main:app",
        host=settings.BACKEND_HOST,
        port=settings.BACKEND_PORT,
        reload=settings.DEBUG,
        log_level="info",
    )


if __name__ == "__main__":
    run()
