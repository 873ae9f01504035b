"""Shared fixtures for the realip backend tests."""
from __future__ import annotations

import os
from collections.abc import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app import app
from backend.config import get_settings


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith('REALIP_'):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def peer_client() -> Callable[..., httpx.AsyncClient]:
    """Build an async client whose requests arrive from the given TCP peer."""

    def _factory(host: str = '10.10.10.10', port: int = 10000) -> httpx.AsyncClient:
        transport = httpx.ASGITransport(app=app, client=(host, port))
        return httpx.AsyncClient(transport=transport, base_url='http://testserver')

    return _factory
