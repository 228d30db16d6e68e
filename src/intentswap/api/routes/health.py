"""Health check endpoints."""

from fastapi import APIRouter, Request

from intentswap import __version__
from intentswap.config import get_settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "intentswap"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Live sessions, token catalog freshness and configuration."""
    settings = get_settings()
    agent = request.app.state.agent
    catalog = agent.catalog
    snapshot = catalog.snapshot
    age = catalog.snapshot_age()

    return {
        "status": "healthy",
        "service": "intentswap",
        "version": __version__,
        "sessions": await agent.store.count(),
        "catalog": {
            "tokens": len(snapshot.entries) if snapshot else 0,
            "age_seconds": round(age, 1) if age is not None else None,
            "stale": age is None or age >= catalog.ttl_seconds,
        },
        "config": settings.get_safe_dict(),
    }
