"""ASGI application reporting the caller's apparent IP address."""
from __future__ import annotations

from fastapi import FastAPI

from .config import get_settings
from .logging_config import logger, setup_logging
from .routes import health, ip

settings = get_settings()
setup_logging(settings.log_level)
app = FastAPI(title=settings.app_name, version="1.0.0")

logger.info("app.start", tls=settings.tls_enabled)

app.include_router(health.router)
app.include_router(ip.router)
