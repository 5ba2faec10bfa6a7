"""Maze routes for uploading, listing and clearing mazes."""

from pathlib import Path

from fastapi import APIRouter, File, Request, Response, UploadFile, status

from app.api.deps import Engine
from app.api.rate_limit import limiter
from app.config import get_settings
from app.core.maze_engine import MazeEngine
from app.core.maze_parser import MAX_UPLOAD_BYTES
from app.schemas.maze import MazeDetail, MazeListResponse, MazeUploadResponse

settings = get_settings()

router = APIRouter(prefix="/maze", tags=["Mazes"])


@router.post(
    "/upload",
    response_model=MazeUploadResponse,
)
@limiter.limit(f"{settings.rate_limit_uploads}/minute")
async def upload_maze(
    request: Request,
    engine: Engine,
    file: UploadFile = File(..., description="Maze text file (S, E, O, X)"),
) -> MazeUploadResponse:
    """Upload a maze file.

    The maze name is taken from the file name. Returns the new maze id.
    """
    # One byte past the limit is enough to reject oversized uploads
    raw = await file.read(MAX_UPLOAD_BYTES + 1)
    name = Path(file.filename).stem if file.filename else ""

    maze_id = await engine.upload_maze(raw, name=name or "Unnamed")
    return MazeUploadResponse(maze_id=maze_id)


@router.get(
    "",
    response_model=MazeListResponse,
)
async def list_mazes(engine: Engine) -> MazeListResponse:
    """List all uploaded mazes, oldest first."""
    mazes = [MazeDetail.from_maze(maze) for maze in await engine.list_mazes()]
    return MazeListResponse(mazes=mazes, total=len(mazes))


@router.get(
    "/directions",
    response_model=list[str],
)
async def list_directions() -> list[str]:
    """Direction names in ordinal order (Up=0, Down=1, Right=2, Left=3)."""
    return MazeEngine.directions()


@router.delete(
    "/clear",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def clear_mazes(engine: Engine) -> Response:
    """Remove every maze and every active session."""
    await engine.clear_all()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{maze_id}",
    response_model=MazeDetail,
)
async def get_maze(maze_id: str, engine: Engine) -> MazeDetail:
    """Get a single maze including its grid."""
    return MazeDetail.from_maze(await engine.get_maze(maze_id))
