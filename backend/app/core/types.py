"""
Shared data model for the maze engine.

Maze Format:
    S = Start position
    E = Exit (goal)
    X = Wall (impassable)
    O = Open path
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class CellType(Enum):
    """Types of cells in the maze."""
    WALL = "X"
    OPEN = "O"
    START = "S"
    EXIT = "E"

    @classmethod
    def from_char(cls, char: str) -> "CellType":
        """Convert character to CellType. Raises ValueError for unknown symbols."""
        return cls(char)

    @property
    def passable(self) -> bool:
        return self is not CellType.WALL


class Direction(str, Enum):
    """Movement directions, declared in stable ordinal order."""
    UP = "Up"
    DOWN = "Down"
    RIGHT = "Right"
    LEFT = "Left"

    @property
    def delta(self) -> tuple[int, int]:
        """Get (dx, dy) for this direction."""
        deltas = {
            Direction.UP: (0, -1),
            Direction.DOWN: (0, 1),
            Direction.RIGHT: (1, 0),
            Direction.LEFT: (-1, 0),
        }
        return deltas[self]

    @property
    def ordinal(self) -> int:
        return list(Direction).index(self)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> "Direction":
        members = list(cls)
        if not 0 <= ordinal < len(members):
            raise ValueError(f"Invalid direction ordinal: {ordinal}")
        return members[ordinal]


@dataclass(frozen=True)
class Position:
    """2D position in the maze. y grows downward."""
    x: int
    y: int

    def move(self, direction: Direction) -> "Position":
        """Return new position after moving in direction."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class MazeDefinition:
    """A validated, immutable maze grid with its start and exit."""
    id: str
    name: str
    grid: tuple[tuple[CellType, ...], ...]
    start: Position
    exit: Position

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def in_bounds(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def cell_at(self, position: Position) -> Optional[CellType]:
        """Get cell type at position, or None when out of bounds."""
        if not self.in_bounds(position):
            return None
        return self.grid[position.y][position.x]

    def is_legal(self, position: Position) -> bool:
        """A position is legal when it is in bounds and not a wall."""
        cell = self.cell_at(position)
        return cell is not None and cell.passable

    def available_moves(self, position: Position) -> list[Direction]:
        """Legal directions from position, in Direction ordinal order."""
        return [d for d in Direction if self.is_legal(position.move(d))]

    def to_text(self, marker: Optional[Position] = None) -> str:
        """
        Render the grid back to its text format.

        Args:
            marker: If provided, draws "@" at this position.
        """
        lines = []
        for y, row in enumerate(self.grid):
            line = ""
            for x, cell in enumerate(row):
                if marker is not None and marker.x == x and marker.y == y:
                    line += "@"
                else:
                    line += cell.value
            lines.append(line)
        return "\n".join(lines)


@dataclass
class GameState:
    """Current state of a maze session."""
    session_id: str
    maze_id: str
    current_position: Position
    is_complete: bool = False
    available_moves: list[Direction] = field(default_factory=list)
    move_count: int = 0

    def snapshot(self) -> "GameState":
        """Detached copy safe to hand to callers."""
        return replace(self, available_moves=list(self.available_moves))
