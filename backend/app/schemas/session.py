"""Session schemas for request/response validation."""

from typing import Any

from pydantic import BaseModel, field_validator

from app.core.types import Direction, GameState
from app.schemas.maze import MazePosition


class SessionCreateRequest(BaseModel):
    """Schema for creating a new session."""

    maze_id: str


class GameStateResponse(BaseModel):
    """Schema for a session's game state."""

    session_id: str
    maze_id: str
    current_position: MazePosition
    is_complete: bool
    available_moves: list[Direction]
    move_count: int

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateResponse":
        return cls(
            session_id=state.session_id,
            maze_id=state.maze_id,
            current_position=MazePosition.from_position(state.current_position),
            is_complete=state.is_complete,
            available_moves=state.available_moves,
            move_count=state.move_count,
        )


class SessionListResponse(BaseModel):
    """Schema for session list response."""

    sessions: list[GameStateResponse]
    total: int


class MoveRequest(BaseModel):
    """Schema for move request. Accepts a direction name or its ordinal."""

    direction: Direction

    @field_validator("direction", mode="before")
    @classmethod
    def coerce_ordinal(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return Direction.from_ordinal(v)
        return v


class SessionView(BaseModel):
    """Schema for the ASCII view of a session."""

    session_id: str
    grid: str
