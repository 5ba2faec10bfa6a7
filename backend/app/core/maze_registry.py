"""In-memory registry of validated maze definitions."""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Union

from app.core.errors import InternalFailureError, MazeError, NotFoundError
from app.core.locking import guarded
from app.core.maze_parser import ParsedMaze, decode_maze_bytes, parse_maze_text
from app.core.types import MazeDefinition

logger = logging.getLogger(__name__)


class MazeRegistry:
    """
    Stores maze definitions keyed by generated id.

    All access to the map happens under a single asyncio lock. Definitions
    are frozen, so callers may hold on to the instances they get back.
    """

    def __init__(self, lock_timeout: Optional[float] = None):
        self._mazes: dict[str, MazeDefinition] = {}
        self._lock = asyncio.Lock()
        self._lock_timeout = lock_timeout

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[None]:
        """Hold the maze lock. Callers holding the session lock may enter this."""
        async with guarded(self._lock, name="maze", timeout=self._lock_timeout):
            yield

    async def upload(self, raw: Union[str, bytes], name: str = "Unnamed") -> str:
        """
        Validate, parse and register a maze.

        Args:
            raw: Maze text, or its UTF-8 bytes.
            name: Display name for the maze.

        Returns:
            The new maze id.

        Raises:
            InvalidMazeError: If the maze fails validation. Nothing is stored.
            InternalFailureError: On any unexpected fault. Nothing is stored.
        """
        try:
            text = decode_maze_bytes(raw) if isinstance(raw, bytes) else raw
            parsed = parse_maze_text(text, name=name)
        except MazeError as e:
            logger.warning(f"Rejected maze upload '{name}': {e.message}")
            raise
        except Exception as e:
            logger.exception(f"Unexpected failure parsing maze '{name}'")
            raise InternalFailureError("Failed to process maze file") from e

        return await self.register(parsed)

    async def register(self, parsed: ParsedMaze) -> str:
        """Assign an id to an already-parsed maze and store it."""
        maze = parsed.to_definition(str(uuid.uuid4()))
        async with self.locked():
            self._mazes[maze.id] = maze

        logger.info(
            f"Maze uploaded: {maze.id} '{maze.name}' ({maze.width}x{maze.height})"
        )
        return maze.id

    async def get(self, maze_id: str) -> MazeDefinition:
        async with self.locked():
            return self.get_locked(maze_id)

    def get_locked(self, maze_id: str) -> MazeDefinition:
        """Look up a maze. The caller must hold the maze lock."""
        maze = self._mazes.get(maze_id)
        if maze is None:
            logger.warning(f"Maze not found: {maze_id}")
            raise NotFoundError(f"Maze not found: {maze_id}")
        return maze

    async def list_mazes(self) -> list[MazeDefinition]:
        """Snapshot of all mazes, in insertion order."""
        async with self.locked():
            return list(self._mazes.values())

    async def clear(self) -> None:
        async with self.locked():
            self.clear_locked()

    def clear_locked(self) -> None:
        self._mazes.clear()

    def __len__(self) -> int:
        return len(self._mazes)
