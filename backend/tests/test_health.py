"""Tests for health check and info endpoints."""

import pytest
import uvicorn
from httpx import AsyncClient

from app import main
from app.config import get_settings


@pytest.mark.asyncio
async def test_health_check(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": get_settings().app_version}


@pytest.mark.asyncio
async def test_root_endpoint(client: AsyncClient):
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Maze Runner"
    assert data["docs"] == "/docs"


@pytest.mark.asyncio
async def test_openapi_lists_engine_routes(client: AsyncClient):
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    paths = response.json()["paths"]
    assert "/v1/maze/upload" in paths
    assert "/v1/session/{session_id}/move" in paths


def test_run_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    main.run()

    settings = main.settings
    assert calls == [
        (
            main.app,
            {
                "host": settings.host,
                "port": settings.port,
                "log_level": settings.log_level.lower(),
            },
        )
    ]
