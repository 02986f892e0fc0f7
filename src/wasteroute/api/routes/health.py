"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/data", status_code=status.HTTP_200_OK)
def health_data() -> dict:
    """Report whether the bin and request snapshots are present."""
    return {
        "bins_file": str(settings.bins_file),
        "bins_available": settings.bins_file.exists(),
        "requests_file": str(settings.requests_file),
        "requests_available": settings.requests_file.exists(),
    }
