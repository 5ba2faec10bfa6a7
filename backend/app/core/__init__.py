# Core module
from .errors import (
    InternalFailureError,
    InvalidMazeError,
    InvalidMazeReason,
    InvalidOperationError,
    LockTimeoutError,
    MazeError,
    NotFoundError,
)
from .maze_engine import MazeEngine
from .maze_parser import (
    ParsedMaze,
    parse_maze_text,
    load_maze_file,
    load_all_mazes,
    validate_maze_text,
)
from .maze_registry import MazeRegistry
from .session_manager import SessionManager
from .types import CellType, Direction, GameState, MazeDefinition, Position

__all__ = [
    "MazeEngine",
    "MazeRegistry",
    "SessionManager",
    "CellType",
    "Direction",
    "GameState",
    "MazeDefinition",
    "Position",
    "MazeError",
    "InvalidMazeError",
    "InvalidMazeReason",
    "NotFoundError",
    "InvalidOperationError",
    "InternalFailureError",
    "LockTimeoutError",
    "ParsedMaze",
    "parse_maze_text",
    "load_maze_file",
    "load_all_mazes",
    "validate_maze_text",
]
