"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomcraft.app.api import assets, designs, leaderboard, themes, votes
from roomcraft.app.core.config import settings
from roomcraft.app.core.exception_handlers import register_exception_handlers
from roomcraft.app.db.base import AsyncSessionLocal, Base, engine
# Import all models to register them with SQLAlchemy
from roomcraft.app.models.record import KeyValueRecord, SetMember, RankedMember
from roomcraft.app.services.theme_manager import ThemeManager
from roomcraft.app.storage.record_store import SqlRecordStore
from roomcraft.app.storage.storage_service import StorageService

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup: Create database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # Make sure a theme is live before the first request
    try:
        async with AsyncSessionLocal() as session:
            theme_manager = ThemeManager(
                StorageService(SqlRecordStore(session)),
                theme_duration_hours=settings.theme_duration_hours,
            )
            theme = await theme_manager.initialize_default_theme()
            logger.info(f"[STARTUP] Current theme: {theme.name} ({theme.id})")
    except Exception as e:
        logger.warning(f"[STARTUP] Failed to initialize default theme: {e}")

    yield

    # Shutdown: Close database connections
    await engine.dispose()
    logger.info("[SHUTDOWN] Cleaned up resources")


app = FastAPI(
    title="RoomCraft API",
    description="Themed room design challenges with community voting",
    version="1.0.0",
    lifespan=lifespan,
)

# Register custom exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(designs.router, prefix="/api")
app.include_router(votes.router, prefix="/api")
app.include_router(leaderboard.router, prefix="/api")
app.include_router(themes.router, prefix="/api")
app.include_router(assets.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "RoomCraft API",
        "version": "1.0.0",
        "description": "Themed room design challenges with community voting",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
