"""Tests for session management endpoints."""

import asyncio

import pytest
from httpx import AsyncClient


# Sample maze for testing
SIMPLE_MAZE = """XXXXX
XSOOX
XOXOX
XOOEX
XXXXX"""

CORRIDOR_MAZE = """XXXXX
XSOEX
XXXXX"""


@pytest.fixture
def upload_maze(client: AsyncClient, upload_file):
    async def _upload(maze_text: str = SIMPLE_MAZE) -> str:
        response = await client.post("/v1/maze/upload", files=upload_file(maze_text))
        assert response.status_code == 200
        return response.json()["maze_id"]

    return _upload


@pytest.mark.asyncio
async def test_create_session(client: AsyncClient, upload_maze):
    maze_id = await upload_maze()

    response = await client.post("/v1/session", json={"maze_id": maze_id})
    assert response.status_code == 200
    data = response.json()

    assert data["session_id"]
    assert data["maze_id"] == maze_id
    assert data["current_position"] == {"x": 1, "y": 1}
    assert data["is_complete"] is False
    assert data["available_moves"] == ["Down", "Right"]
    assert data["move_count"] == 0


@pytest.mark.asyncio
async def test_create_session_unknown_maze(client: AsyncClient):
    response = await client.post("/v1/session", json={"maze_id": "missing"})
    assert response.status_code == 404
    assert "Maze not found" in response.json()["detail"]


@pytest.mark.asyncio
async def test_get_session(client: AsyncClient, upload_maze):
    maze_id = await upload_maze()
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    response = await client.get(f"/v1/session/{session_id}")
    assert response.status_code == 200
    assert response.json()["session_id"] == session_id

    response = await client.get("/v1/session/missing")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_list_sessions(client: AsyncClient, upload_maze):
    maze_id = await upload_maze()
    await client.post("/v1/session", json={"maze_id": maze_id})
    await client.post("/v1/session", json={"maze_id": maze_id})

    response = await client.get("/v1/session")
    assert response.status_code == 200
    assert response.json()["total"] == 2


@pytest.mark.asyncio
async def test_play_to_exit(client: AsyncClient, upload_maze):
    maze_id = await upload_maze(CORRIDOR_MAZE)
    response = await client.post("/v1/session", json={"maze_id": maze_id})
    session_id = response.json()["session_id"]
    assert response.json()["available_moves"] == ["Right"]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "Right"})
    assert response.status_code == 200
    data = response.json()
    assert data["current_position"] == {"x": 2, "y": 1}
    assert data["is_complete"] is False
    assert data["available_moves"] == ["Right", "Left"]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "Right"})
    assert response.status_code == 200
    data = response.json()
    assert data["current_position"] == {"x": 3, "y": 1}
    assert data["is_complete"] is True
    assert data["available_moves"] == []
    assert data["move_count"] == 2

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "Left"})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_operation"
    assert "already complete" in response.json()["detail"]


@pytest.mark.asyncio
async def test_move_by_ordinal(client: AsyncClient, upload_maze):
    maze_id = await upload_maze()
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    # 2 = Right
    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": 2})
    assert response.status_code == 200
    assert response.json()["current_position"] == {"x": 2, "y": 1}


@pytest.mark.asyncio
async def test_move_into_wall(client: AsyncClient, upload_maze):
    maze_id = await upload_maze()
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    response = await client.post(f"/v1/session/{session_id}/move", json={"direction": "Up"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid move: Up"

    state = (await client.get(f"/v1/session/{session_id}")).json()
    assert state["current_position"] == {"x": 1, "y": 1}
    assert state["move_count"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("direction", ["north", "up", 4, -1, True, None])
async def test_move_invalid_direction(client: AsyncClient, upload_maze, direction):
    maze_id = await upload_maze()
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    response = await client.post(
        f"/v1/session/{session_id}/move", json={"direction": direction}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_move_unknown_session(client: AsyncClient):
    response = await client.post("/v1/session/missing/move", json={"direction": "Up"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_concurrent_moves(client: AsyncClient, upload_maze):
    """Two requests race to the exit; only one of them gets there."""
    maze_id = await upload_maze("XXXX\nXSEX\nXXXX")
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    responses = await asyncio.gather(
        client.post(f"/v1/session/{session_id}/move", json={"direction": "Right"}),
        client.post(f"/v1/session/{session_id}/move", json={"direction": "Right"}),
    )

    assert sorted(r.status_code for r in responses) == [200, 400]


@pytest.mark.asyncio
async def test_concurrent_opposite_moves(client: AsyncClient, upload_maze):
    """Right and Left race from the cell next to the exit."""
    maze_id = await upload_maze("XXXXX\nXOSEX\nXXXXX")
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    responses = await asyncio.gather(
        client.post(f"/v1/session/{session_id}/move", json={"direction": "Right"}),
        client.post(f"/v1/session/{session_id}/move", json={"direction": "Left"}),
    )
    accepted = [r for r in responses if r.status_code == 200]

    state = (await client.get(f"/v1/session/{session_id}")).json()
    assert state["move_count"] == len(accepted)
    if len(accepted) == 1:
        rejected = next(r for r in responses if r.status_code != 200)
        assert rejected.status_code == 400
        assert rejected.json()["detail"] == "Game is already complete"
        assert state["current_position"] == {"x": 3, "y": 1}
        assert state["is_complete"] is True
    else:
        assert state["current_position"] == {"x": 2, "y": 1}
        assert state["is_complete"] is False


@pytest.mark.asyncio
async def test_view(client: AsyncClient, upload_maze):
    maze_id = await upload_maze(CORRIDOR_MAZE)
    session_id = (await client.post("/v1/session", json={"maze_id": maze_id})).json()["session_id"]

    response = await client.get(f"/v1/session/{session_id}/view")
    assert response.status_code == 200
    assert response.json()["grid"] == "XXXXX\nX@OEX\nXXXXX"


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/v1/session")
    assert len(response.headers["X-Request-ID"]) == 8
