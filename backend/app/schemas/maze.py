"""Maze schemas for request/response validation."""

from pydantic import BaseModel, Field

from app.core.types import MazeDefinition, Position


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    x: int
    y: int

    @classmethod
    def from_position(cls, position: Position) -> "MazePosition":
        return cls(x=position.x, y=position.y)


class MazeDetail(BaseModel):
    """Schema for a maze definition, including its grid text."""

    id: str
    name: str
    grid: str
    width: int = Field(..., ge=2)
    height: int = Field(..., ge=2)
    start: MazePosition
    exit: MazePosition

    @classmethod
    def from_maze(cls, maze: MazeDefinition) -> "MazeDetail":
        return cls(
            id=maze.id,
            name=maze.name,
            grid=maze.to_text(),
            width=maze.width,
            height=maze.height,
            start=MazePosition.from_position(maze.start),
            exit=MazePosition.from_position(maze.exit),
        )


class MazeListResponse(BaseModel):
    """Schema for maze list response."""

    mazes: list[MazeDetail]
    total: int


class MazeUploadResponse(BaseModel):
    """Schema for a successful upload."""

    maze_id: str
