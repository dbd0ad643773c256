"""Session routes for live maze play."""

import logging

from fastapi import APIRouter, HTTPException, Response, status
from starlette.concurrency import run_in_threadpool

from labyrinth.api.deps import Registry, Sessions, require_maze
from labyrinth.core.cell import Direction
from labyrinth.models.session import SessionRecord
from labyrinth.schemas.maze import MazePosition
from labyrinth.schemas.session import (
    HintResponse,
    LookResponse,
    MoveRequest,
    MoveResponse,
    SessionCreateRequest,
    SessionState,
)
from labyrinth.services.session_service import SessionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/session", tags=["Sessions"])


def _to_state(record: SessionRecord) -> SessionState:
    return SessionState(
        id=record.id,
        maze_id=record.maze_id,
        current_position=MazePosition.from_tuple(record.position),
        keys=record.keys,
        keys_remaining=len(record.remaining_keys),
        locked_doors=len(record.locked_doors),
        turn_count=record.turn_count,
        status=record.status,
        created_at=record.created_at,
        completed_at=record.completed_at,
    )


async def _require_session(sessions: SessionService, session_id: str) -> SessionRecord:
    record = await sessions.get(session_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return record


def _require_active(record: SessionRecord) -> None:
    if record.status != "active":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Session is not active (status: {record.status})",
        )


@router.post(
    "",
    response_model=SessionState,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    request: SessionCreateRequest,
    registry: Registry,
    sessions: Sessions,
) -> SessionState:
    """Create a new play session.

    The player starts at the maze's start cell with no keys and every door
    locked.
    """
    entry = require_maze(registry, request.maze_id)
    record = await sessions.create(entry.id, entry.maze)
    return _to_state(record)


@router.get(
    "/{session_id}",
    response_model=SessionState,
)
async def get_session(session_id: str, sessions: Sessions) -> SessionState:
    """Get session state by ID."""
    return _to_state(await _require_session(sessions, session_id))


@router.delete(
    "/{session_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_session(session_id: str, sessions: Sessions) -> Response:
    """End and remove a session."""
    if not await sessions.delete(session_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Session not found: {session_id}",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{session_id}/move",
    response_model=MoveResponse,
)
async def move(
    session_id: str,
    request: MoveRequest,
    registry: Registry,
    sessions: Sessions,
) -> MoveResponse:
    """Move in a direction. COSTS 1 TURN.

    Walking into a locked door spends a key if one is held; stepping onto a
    key picks it up.
    """
    record = await _require_session(sessions, session_id)
    _require_active(record)
    maze = require_maze(registry, record.maze_id).maze

    result = await sessions.move(record, maze, Direction(request.direction))

    return MoveResponse(**result.to_dict(), turns=record.turn_count)


@router.post(
    "/{session_id}/look",
    response_model=LookResponse,
)
async def look(session_id: str, registry: Registry, sessions: Sessions) -> LookResponse:
    """Look at the four sides of the current cell. FREE - does not cost a turn."""
    record = await _require_session(sessions, session_id)
    _require_active(record)
    maze = require_maze(registry, record.maze_id).maze

    return LookResponse(**sessions.look(record, maze).to_dict())


@router.get(
    "/{session_id}/hint",
    response_model=HintResponse,
)
async def hint(session_id: str, registry: Registry, sessions: Sessions) -> HintResponse:
    """Shortest path from the session's current position, keys and open doors."""
    record = await _require_session(sessions, session_id)
    maze = require_maze(registry, record.maze_id).maze

    path = await run_in_threadpool(sessions.hint, record, maze)
    if path is None:
        return HintResponse(found=False)
    return HintResponse(
        found=True,
        length=len(path),
        path=[MazePosition.from_tuple(p) for p in path],
    )
