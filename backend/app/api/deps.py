"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, Request

from app.core.maze_engine import MazeEngine


def get_engine(request: Request) -> MazeEngine:
    """Get the engine built by the application lifespan."""
    return request.app.state.engine


# Type alias for cleaner route signatures
Engine = Annotated[MazeEngine, Depends(get_engine)]
