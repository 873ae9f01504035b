"""Liveness endpoint."""
from __future__ import annotations

from fastapi import APIRouter

from ..config import get_settings
from ..models.schemas import SystemHealth

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
async def health() -> SystemHealth:
    settings = get_settings()
    components = {
        "http": "enabled",
        "https": "enabled" if settings.tls_enabled else "disabled",
    }
    return SystemHealth(status="ok", components=components)
