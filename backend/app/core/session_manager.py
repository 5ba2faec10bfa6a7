"""
Game sessions and the move engine.

Lock order: the session lock is always taken before the maze lock, never
the other way around.
"""

import asyncio
import logging
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from app.core.errors import InvalidOperationError, NotFoundError
from app.core.locking import guarded
from app.core.maze_registry import MazeRegistry
from app.core.types import Direction, GameState, MazeDefinition

logger = logging.getLogger(__name__)


class SessionManager:
    """Stores active sessions keyed by generated id and advances them."""

    def __init__(self, registry: MazeRegistry, lock_timeout: Optional[float] = None):
        self._registry = registry
        self._sessions: dict[str, GameState] = {}
        self._lock = asyncio.Lock()
        self._lock_timeout = lock_timeout

    @asynccontextmanager
    async def locked(self) -> AsyncIterator[None]:
        async with guarded(self._lock, name="session", timeout=self._lock_timeout):
            yield

    async def initialize(self, maze_id: str) -> GameState:
        """
        Start a new session at the maze's start position.

        Raises:
            NotFoundError: If the maze does not exist.
        """
        session_id = str(uuid.uuid4())

        async with self.locked():
            async with self._registry.locked():
                maze = self._registry.get_locked(maze_id)

            state = GameState(
                session_id=session_id,
                maze_id=maze.id,
                current_position=maze.start,
                available_moves=maze.available_moves(maze.start),
            )
            self._sessions[session_id] = state
            snapshot = state.snapshot()

        logger.info(f"Session {session_id} started on maze {maze_id}")
        return snapshot

    async def make_move(self, session_id: str, direction: Direction) -> GameState:
        """
        Move one step in a direction.

        The legality check and the update happen under the session lock, so
        concurrent moves on one session are applied one after the other.

        Raises:
            NotFoundError: If the session, or the maze behind it, is gone.
            InvalidOperationError: If the game is complete or the move is illegal.
        """
        async with self.locked():
            state = self._get_locked(session_id)

            if state.is_complete:
                raise InvalidOperationError("Game is already complete")

            maze = await self._resolve_maze(state)

            candidate = state.current_position.move(direction)
            if not maze.is_legal(candidate):
                raise InvalidOperationError(f"Invalid move: {direction.value}")

            is_complete = candidate == maze.exit
            available_moves = [] if is_complete else maze.available_moves(candidate)

            state.current_position = candidate
            state.is_complete = is_complete
            state.available_moves = available_moves
            state.move_count += 1
            snapshot = state.snapshot()

        if snapshot.is_complete:
            logger.info(
                f"Game completed. Session {session_id} in {snapshot.move_count} moves"
            )
        return snapshot

    async def get(self, session_id: str) -> GameState:
        async with self.locked():
            return self._get_locked(session_id).snapshot()

    def _get_locked(self, session_id: str) -> GameState:
        state = self._sessions.get(session_id)
        if state is None:
            logger.warning(f"Session not found: {session_id}")
            raise NotFoundError(f"Session not found: {session_id}")
        return state

    async def _resolve_maze(self, state: GameState) -> MazeDefinition:
        # Maze lock nested inside the session lock
        try:
            return await self._registry.get(state.maze_id)
        except NotFoundError:
            raise NotFoundError(
                f"Maze {state.maze_id} for session {state.session_id} no longer exists"
            ) from None

    async def render(self, session_id: str) -> str:
        """ASCII view of the session's maze with "@" at the player."""
        async with self.locked():
            state = self._get_locked(session_id)
            maze = await self._resolve_maze(state)
            return maze.to_text(marker=state.current_position)

    async def list_sessions(self) -> list[GameState]:
        async with self.locked():
            return [state.snapshot() for state in self._sessions.values()]

    async def clear(self) -> None:
        async with self.locked():
            self.clear_locked()

    def clear_locked(self) -> None:
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)
