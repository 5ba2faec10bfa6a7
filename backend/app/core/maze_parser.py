"""
Maze Parser for Maze Runner.

Validates raw maze text and parses it into a grid of cells. Also loads
maze files from the filesystem.

Maze Format:
    S = Start position (exactly one)
    E = Exit (exactly one)
    X = Wall (impassable)
    O = Open path

Validation stops at the first violation found, scanning rows top to
bottom and characters left to right.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from app.core.errors import InvalidMazeError, InvalidMazeReason
from app.core.types import CellType, MazeDefinition, Position

logger = logging.getLogger(__name__)

MIN_MAZE_SIZE = 2
MAX_MAZE_SIZE = 1000
MAX_UPLOAD_BYTES = 1024 * 1024

VALID_CHARS = {cell.value for cell in CellType}


@dataclass
class ParsedMaze:
    """Parsed maze data, not yet registered."""

    name: str
    grid: tuple[tuple[CellType, ...], ...]
    start: Position
    exit: Position

    @property
    def width(self) -> int:
        return len(self.grid[0])

    @property
    def height(self) -> int:
        return len(self.grid)

    def to_definition(self, maze_id: str) -> MazeDefinition:
        """Bind the parsed grid to a registry id."""
        return MazeDefinition(
            id=maze_id,
            name=self.name,
            grid=self.grid,
            start=self.start,
            exit=self.exit,
        )


def decode_maze_bytes(raw: bytes) -> str:
    """
    Decode uploaded bytes as UTF-8 maze text.

    Raises:
        InvalidMazeError: If the payload is too large or not UTF-8.
    """
    if len(raw) > MAX_UPLOAD_BYTES:
        raise InvalidMazeError(
            InvalidMazeReason.SIZE_OUT_OF_BOUNDS,
            f"Maze file must be at most {MAX_UPLOAD_BYTES} bytes",
        )
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidMazeError(
            InvalidMazeReason.ILLEGAL_CHARACTER,
            f"Maze file is not valid UTF-8 text (byte offset {e.start})",
        ) from e


def normalize_line_endings(maze_text: str) -> str:
    return maze_text.replace("\r\n", "\n").replace("\r", "\n")


def parse_maze_text(maze_text: str, name: str = "Unnamed") -> ParsedMaze:
    """
    Validate maze text and parse it into a grid.

    Args:
        maze_text: Multi-line string representing the maze grid.
        name: Name of the maze.

    Returns:
        ParsedMaze with grid, start and exit.

    Raises:
        InvalidMazeError: On the first validation rule violated.
    """
    if len(maze_text.encode("utf-8")) > MAX_UPLOAD_BYTES:
        raise InvalidMazeError(
            InvalidMazeReason.SIZE_OUT_OF_BOUNDS,
            f"Maze file must be at most {MAX_UPLOAD_BYTES} bytes",
        )

    maze_text = normalize_line_endings(maze_text)
    if not maze_text.strip():
        raise InvalidMazeError(InvalidMazeReason.EMPTY, "Maze content cannot be empty")

    # Blank lines carry no cells
    lines = [line for line in maze_text.split("\n") if line]

    if not MIN_MAZE_SIZE <= len(lines) <= MAX_MAZE_SIZE:
        raise InvalidMazeError(
            InvalidMazeReason.SIZE_OUT_OF_BOUNDS,
            f"Maze must be between {MIN_MAZE_SIZE} and {MAX_MAZE_SIZE} rows "
            f"(got {len(lines)})",
        )

    width = len(lines[0])
    if not MIN_MAZE_SIZE <= width <= MAX_MAZE_SIZE:
        raise InvalidMazeError(
            InvalidMazeReason.SIZE_OUT_OF_BOUNDS,
            f"Maze width must be between {MIN_MAZE_SIZE} and {MAX_MAZE_SIZE} columns "
            f"(got {width})",
        )

    start_pos: Optional[Position] = None
    exit_pos: Optional[Position] = None
    grid: list[tuple[CellType, ...]] = []

    for y, line in enumerate(lines):
        if len(line) != width:
            raise InvalidMazeError(
                InvalidMazeReason.RAGGED_ROWS,
                f"All maze rows must have the same width: row {y} has "
                f"{len(line)} columns, expected {width}",
            )

        row = []
        for x, char in enumerate(line):
            if char not in VALID_CHARS:
                raise InvalidMazeError(
                    InvalidMazeReason.ILLEGAL_CHARACTER,
                    f"Invalid character {char!r} at position ({x}, {y}). "
                    f"Valid characters: {', '.join(sorted(VALID_CHARS))}",
                )

            cell = CellType.from_char(char)
            if cell is CellType.START:
                if start_pos is not None:
                    raise InvalidMazeError(
                        InvalidMazeReason.DUPLICATE_START,
                        f"Maze cannot have multiple start positions: "
                        f"first at ({start_pos.x}, {start_pos.y}), second at ({x}, {y})",
                    )
                start_pos = Position(x, y)
            elif cell is CellType.EXIT:
                if exit_pos is not None:
                    raise InvalidMazeError(
                        InvalidMazeReason.DUPLICATE_EXIT,
                        f"Maze cannot have multiple exit positions: "
                        f"first at ({exit_pos.x}, {exit_pos.y}), second at ({x}, {y})",
                    )
                exit_pos = Position(x, y)
            row.append(cell)

        grid.append(tuple(row))

    if start_pos is None:
        raise InvalidMazeError(
            InvalidMazeReason.MISSING_START, "Maze must have a start position (S)"
        )

    if exit_pos is None:
        raise InvalidMazeError(
            InvalidMazeReason.MISSING_EXIT, "Maze must have an exit position (E)"
        )

    return ParsedMaze(name=name, grid=tuple(grid), start=start_pos, exit=exit_pos)


def load_maze_file(file_path: Union[Path, str], name: Optional[str] = None) -> ParsedMaze:
    """
    Load and parse a maze file from the filesystem.

    Args:
        file_path: Path to the maze file.
        name: Optional name override. If not provided, uses filename.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        InvalidMazeError: If the maze is invalid.
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    maze_text = decode_maze_bytes(file_path.read_bytes())

    if name is None:
        name = file_path.stem.replace("_", " ").replace("-", " ").title()

    return parse_maze_text(maze_text, name=name)


def load_all_mazes(mazes_dir: Union[Path, str]) -> list[ParsedMaze]:
    """
    Load all *.txt maze files from a directory, in filename order.

    Invalid files are logged and skipped.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.is_dir():
        raise FileNotFoundError(f"Mazes directory not found: {mazes_dir}")

    mazes = []
    for maze_file in sorted(mazes_dir.glob("*.txt")):
        try:
            mazes.append(load_maze_file(maze_file))
        except InvalidMazeError as e:
            logger.warning(f"Skipping invalid maze file {maze_file}: {e.message}")

    return mazes


def validate_maze_text(maze_text: str) -> tuple[bool, Optional[str]]:
    """
    Validate maze text without raising exceptions.

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        parse_maze_text(maze_text)
        return True, None
    except InvalidMazeError as e:
        return False, e.message
