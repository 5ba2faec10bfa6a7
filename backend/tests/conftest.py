"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.main import app
from app.api.deps import get_engine
from app.api.rate_limit import limiter
from app.core.maze_engine import MazeEngine


@pytest.fixture
def engine() -> MazeEngine:
    """A fresh engine per test."""
    return MazeEngine(lock_timeout=1.0)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield


@pytest_asyncio.fixture(scope="function")
async def client(engine) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client bound to the test engine."""
    app.dependency_overrides[get_engine] = lambda: engine

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def upload_file():
    """Build the multipart payload for POST /v1/maze/upload."""

    def _build(content: str | bytes, filename: str = "maze.txt") -> dict:
        if isinstance(content, str):
            content = content.encode("utf-8")
        return {"file": (filename, content, "text/plain")}

    return _build
