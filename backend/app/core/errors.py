"""
Maze Runner error taxonomy.

Every failure raised by the core derives from MazeError. The core never
knows about HTTP; the API layer maps these kinds to status codes.
"""

from enum import Enum


class InvalidMazeReason(str, Enum):
    """Which upload validation rule was violated."""

    EMPTY = "empty"
    SIZE_OUT_OF_BOUNDS = "size_out_of_bounds"
    RAGGED_ROWS = "ragged_rows"
    ILLEGAL_CHARACTER = "illegal_character"
    MISSING_START = "missing_start"
    DUPLICATE_START = "duplicate_start"
    MISSING_EXIT = "missing_exit"
    DUPLICATE_EXIT = "duplicate_exit"


class MazeError(Exception):
    """Base exception for all maze engine failures."""

    code = "maze_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidMazeError(MazeError):
    """Raised when an uploaded grid fails validation."""

    code = "invalid_maze"

    def __init__(self, reason: InvalidMazeReason, message: str):
        super().__init__(message)
        self.reason = reason


class NotFoundError(MazeError):
    """Raised for an unknown maze or session id."""

    code = "not_found"


class InvalidOperationError(MazeError):
    """Raised for an illegal move or a move after completion."""

    code = "invalid_operation"


class InternalFailureError(MazeError):
    """Raised for unexpected faults. Shared state is left untouched."""

    code = "internal_failure"


class LockTimeoutError(InternalFailureError):
    """Raised when a registry lock could not be acquired in time."""

    code = "lock_timeout"
