"""Coach Marketplace Ranking API -- Main Application Entry Point

Creates the FastAPI application, configures logging and CORS middleware, and
registers the API route modules under the /api/v1 prefix.

Run with::

    uvicorn coach_marketplace.main:app --host 0.0.0.0 --port 8000 --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coach_marketplace.core.config import settings
from coach_marketplace.core.logging import configure_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: startup / shutdown hooks
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Startup:
      - Configure root logging from settings.
    """
    configure_logging()
    logger.info("%s %s starting", settings.app_name, settings.app_version)

    yield

    logger.info("%s shutting down", settings.app_name)


# ---------------------------------------------------------------------------
# Application instance
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    debug=settings.debug,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# CORS middleware
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_allowed_origins.split(",")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------

@app.get("/health", tags=["Health"])
async def health():
    """Lightweight health check for load balancers and readiness probes."""
    return {"status": "ok", "version": settings.app_version}


# ---------------------------------------------------------------------------
# Register API route modules
# ---------------------------------------------------------------------------

from coach_marketplace.api.routes import marketplace  # noqa: E402

app.include_router(marketplace.router, prefix=settings.api_v1_prefix)
