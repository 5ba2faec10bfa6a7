"""
Maze Runner Engine

Owns the two shared stores of the service:
- MazeRegistry: uploaded maze definitions
- SessionManager: per-player game sessions and the move engine

One engine is built per process (or per test) and handed to the API
layer. Nothing here is module-level state.

Example usage:
    engine = MazeEngine()
    maze_id = await engine.upload_maze(TUTORIAL_MAZE, name="Tutorial")
    state = await engine.initialize(maze_id)
    state = await engine.make_move(state.session_id, Direction.RIGHT)
"""

import logging
from pathlib import Path
from typing import Optional, Union

from app.core.maze_parser import load_all_mazes
from app.core.maze_registry import MazeRegistry
from app.core.session_manager import SessionManager
from app.core.types import Direction, GameState, MazeDefinition

logger = logging.getLogger(__name__)


class MazeEngine:
    """Maze registry and session manager behind one object."""

    def __init__(self, lock_timeout: Optional[float] = None):
        """
        Args:
            lock_timeout: Seconds any operation may wait for a lock before
                failing with LockTimeoutError. None waits until cancelled.
        """
        self.mazes = MazeRegistry(lock_timeout=lock_timeout)
        self.sessions = SessionManager(self.mazes, lock_timeout=lock_timeout)

    async def upload_maze(self, raw: Union[str, bytes], name: str = "Unnamed") -> str:
        return await self.mazes.upload(raw, name=name)

    async def list_mazes(self) -> list[MazeDefinition]:
        return await self.mazes.list_mazes()

    async def get_maze(self, maze_id: str) -> MazeDefinition:
        return await self.mazes.get(maze_id)

    async def initialize(self, maze_id: str) -> GameState:
        return await self.sessions.initialize(maze_id)

    async def make_move(self, session_id: str, direction: Direction) -> GameState:
        return await self.sessions.make_move(session_id, direction)

    async def get_session(self, session_id: str) -> GameState:
        return await self.sessions.get(session_id)

    async def list_sessions(self) -> list[GameState]:
        return await self.sessions.list_sessions()

    async def render_session(self, session_id: str) -> str:
        return await self.sessions.render(session_id)

    async def clear_all(self) -> None:
        """Drop every maze and session in one critical section."""
        async with self.sessions.locked():
            async with self.mazes.locked():
                maze_count = len(self.mazes)
                session_count = len(self.sessions)
                self.sessions.clear_locked()
                self.mazes.clear_locked()

        logger.info(
            f"Cleared {maze_count} mazes and {session_count} active sessions"
        )

    async def preload(self, mazes_dir: Union[Path, str]) -> list[str]:
        """Register every valid *.txt maze in a directory."""
        maze_ids = []
        for parsed in load_all_mazes(mazes_dir):
            maze_ids.append(await self.mazes.register(parsed))
        logger.info(f"Preloaded {len(maze_ids)} mazes from {mazes_dir}")
        return maze_ids

    @staticmethod
    def directions() -> list[str]:
        """Direction names in ordinal order."""
        return [d.value for d in Direction]


# Sample mazes for testing
TUTORIAL_MAZE = """
XXXXXXXXXX
XSOOOOOOOX
XOXXXXXXOX
XOXOOOOXOX
XOXOXXOXOX
XOXOXXOXOX
XOXOOOOXOX
XOXXXXXXOX
XOOOOOOOOE
XXXXXXXXXX
""".strip()

CORRIDOR_MAZE = """
XXXXX
XSOEX
XXXXX
""".strip()
