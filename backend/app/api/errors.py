"""Map engine errors to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from app.core.errors import (
    InternalFailureError,
    InvalidMazeError,
    InvalidOperationError,
    MazeError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[MazeError], int] = {
    InvalidMazeError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidOperationError: status.HTTP_400_BAD_REQUEST,
}


def status_for(exc: MazeError) -> int:
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def maze_error_handler(request: Request, exc: MazeError) -> JSONResponse:
    """Handle all engine errors."""
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.url.path}: {exc.message}",
            exc_info=exc,
        )
        content = {"detail": "An unexpected error occurred", "code": exc.code}
    else:
        content = {"detail": exc.message, "code": exc.code}
        if isinstance(exc, InvalidMazeError):
            content["reason"] = exc.reason.value

    return JSONResponse(status_code=status_code, content=content)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all. Never leaks internal details."""
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "An unexpected error occurred",
            "code": InternalFailureError.code,
        },
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MazeError, maze_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
