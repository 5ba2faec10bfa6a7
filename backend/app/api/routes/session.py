"""Session routes for playing through a maze."""

from fastapi import APIRouter

from app.api.deps import Engine
from app.schemas.session import (
    GameStateResponse,
    MoveRequest,
    SessionCreateRequest,
    SessionListResponse,
    SessionView,
)

router = APIRouter(prefix="/session", tags=["Sessions"])


@router.post(
    "",
    response_model=GameStateResponse,
)
async def create_session(
    request: SessionCreateRequest,
    engine: Engine,
) -> GameStateResponse:
    """Create a new maze session.

    The player starts at the maze's start position (S).
    """
    state = await engine.initialize(request.maze_id)
    return GameStateResponse.from_state(state)


@router.get(
    "",
    response_model=SessionListResponse,
)
async def list_sessions(engine: Engine) -> SessionListResponse:
    """List all active sessions."""
    sessions = [GameStateResponse.from_state(s) for s in await engine.list_sessions()]
    return SessionListResponse(sessions=sessions, total=len(sessions))


@router.get(
    "/{session_id}",
    response_model=GameStateResponse,
)
async def get_session(session_id: str, engine: Engine) -> GameStateResponse:
    """Get session state by ID."""
    return GameStateResponse.from_state(await engine.get_session(session_id))


@router.post(
    "/{session_id}/move",
    response_model=GameStateResponse,
)
async def move(
    session_id: str,
    request: MoveRequest,
    engine: Engine,
) -> GameStateResponse:
    """Move one step in a direction.

    Rejected with 400 when the target is a wall, outside the maze, or the
    game is already complete.
    """
    state = await engine.make_move(session_id, request.direction)
    return GameStateResponse.from_state(state)


@router.get(
    "/{session_id}/view",
    response_model=SessionView,
)
async def view(session_id: str, engine: Engine) -> SessionView:
    """ASCII view of the maze with "@" at the player position."""
    grid = await engine.render_session(session_id)
    return SessionView(session_id=session_id, grid=grid)
