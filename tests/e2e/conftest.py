"""
E2E test fixtures for the coach marketplace ranking API.

Provides:
- An in-process FastAPI test app with the marketplace routes registered
- httpx AsyncClient wired via ASGI transport (no network needed)
- Sample request payloads
"""

from __future__ import annotations

from typing import Any, AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


# ---------------------------------------------------------------------------
# FastAPI test application
# ---------------------------------------------------------------------------

def _create_test_app():
    """Build a FastAPI app with the marketplace routes under /api/v1."""
    from fastapi import FastAPI

    from coach_marketplace.api.routes.marketplace import router as marketplace_router

    app = FastAPI(title="Coach Marketplace Test")
    app.include_router(marketplace_router, prefix="/api/v1")
    return app


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """httpx AsyncClient connected to the test app via ASGI transport."""
    transport = ASGITransport(app=_create_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def full_coach_payload() -> dict[str, Any]:
    """Coach A: local to Leeds, complete profile, strong engagement."""
    return {
        "id": "coach-a",
        "display_name": "Coach A",
        "location_city": "Leeds",
        "location_country": "United Kingdom",
        "online_available": False,
        "in_person_available": True,
        "bio": "Strength and conditioning coach with ten years of experience.",
        "profile_image_url": "https://cdn.example.com/coaches/a.jpg",
        "card_image_url": "https://cdn.example.com/coaches/a-card.jpg",
        "coach_types": ["strength"],
        "hourly_rate": 45,
        "certifications": ["Level 3 Personal Trainer"],
        "is_verified": True,
        "engagement": {
            "review_count": 50,
            "avg_rating": 4.8,
            "session_count": 120,
            "last_session_at": "2025-05-29T09:00:00Z",
        },
    }
