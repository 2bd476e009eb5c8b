"""ADLENS — FastAPI Application Entry Point.

Marketing dashboard backend: Google Ads + Meta Ads performance, reconciled.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adlens.analyzer.pipeline import ViewSession
from adlens.api.insight_routes import router as insight_router
from adlens.api.source_routes import router as source_router
from adlens.api.view_routes import router as view_router
from adlens.config import settings
from adlens.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 ADLENS starting up...")
    for name, url in (
        ("Google Ads", settings.google_supabase_url),
        ("Meta Ads", settings.meta_supabase_url),
    ):
        if not url:
            logger.warning(f"⚠️  {name} Supabase URL not configured, its view will report an error")
    app.state.view_session = ViewSession(settings)
    yield
    logger.info("ADLENS shut down")


app = FastAPI(
    title="ADLENS",
    description="Google Ads and Meta Ads performance, reconciled into campaign and daily views.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(view_router)
app.include_router(insight_router)
app.include_router(source_router)


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "adlens",
        "version": "1.0.0",
    }
