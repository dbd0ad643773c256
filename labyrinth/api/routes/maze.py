"""Maze routes for listing mazes and querying paths."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status
from starlette.concurrency import run_in_threadpool

from labyrinth.api.deps import AppSettings, Registry, require_maze
from labyrinth.core.converter import convert_text_to_bytes
from labyrinth.core.maze import NeighborKind
from labyrinth.core.maze_parser import parse_maze_bytes
from labyrinth.core.errors import MazeParseError, MazeValidationError
from labyrinth.core.search import SearchStrategy
from labyrinth.core.state import SearchState
from labyrinth.schemas.maze import (
    CellDetail,
    MazeCreateRequest,
    MazeDetail,
    MazeListItem,
    MazeListResponse,
    MazePosition,
    NeighborsResponse,
    PathResponse,
)
from labyrinth.services.maze_registry import MazeEntry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/maze", tags=["Mazes"])


def _to_detail(entry: MazeEntry) -> MazeDetail:
    maze = entry.maze
    return MazeDetail(
        id=entry.id,
        name=entry.name,
        rows=maze.rows,
        cols=maze.cols,
        start=MazePosition.from_tuple(maze.start),
        exits=[MazePosition.from_tuple(p) for p in sorted(maze.exits)],
        keys=[MazePosition.from_tuple(p) for p in sorted(maze.keys)],
        door_count=maze.get_maze_info()["door_count"],
        cells=[[CellDetail(**cell.to_dict()) for cell in row] for row in maze.fields],
        source=entry.source,
        created_at=entry.created_at,
    )


@router.get(
    "",
    response_model=MazeListResponse,
)
async def list_mazes(registry: Registry) -> MazeListResponse:
    """List all available mazes.

    Cell data is not included - use GET /v1/maze/{id} for full details.
    """
    maze_items = [
        MazeListItem(
            id=entry.id,
            name=entry.name,
            rows=entry.maze.rows,
            cols=entry.maze.cols,
            exit_count=len(entry.maze.exits),
            key_count=len(entry.maze.keys),
            source=entry.source,
            created_at=entry.created_at,
        )
        for entry in registry.list()
    ]

    return MazeListResponse(
        mazes=maze_items,
        total=len(maze_items),
    )


@router.post(
    "",
    response_model=MazeDetail,
    status_code=status.HTTP_201_CREATED,
)
async def create_maze(
    request: MazeCreateRequest,
    registry: Registry,
    settings: AppSettings,
) -> MazeDetail:
    """Register a maze from bit text.

    The bits are packed into bytes and decoded with the configured (or
    requested) dimensions.
    """
    data = convert_text_to_bytes(request.bits)
    rows = request.rows or settings.maze_rows
    cols = request.cols or settings.maze_cols
    start = (request.start.row, request.start.col) if request.start else settings.start

    try:
        maze = parse_maze_bytes(data, rows, cols, start, **settings.maze_options)
    except (MazeParseError, MazeValidationError) as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    entry = registry.register(request.name, maze)
    logger.info(f"Registered maze {entry.id} ({rows}x{cols}) '{entry.name}'")
    return _to_detail(entry)


@router.get(
    "/{maze_id}",
    response_model=MazeDetail,
)
async def get_maze(maze_id: str, registry: Registry) -> MazeDetail:
    """Get detailed information about a specific maze, including every cell."""
    return _to_detail(require_maze(registry, maze_id))


@router.delete(
    "/{maze_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_maze(maze_id: str, registry: Registry) -> Response:
    """Remove a maze from the registry. Open sessions on it can no longer move."""
    if not registry.remove(maze_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Maze not found: {maze_id}",
        )
    logger.info(f"Removed maze {maze_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{maze_id}/path",
    response_model=PathResponse,
)
async def get_path(
    maze_id: str,
    registry: Registry,
    strategy: Optional[SearchStrategy] = Query(
        None,
        description="Search engine (sequential, parallel). Defaults to the configured one.",
    ),
    global_dedup: Optional[bool] = Query(
        None,
        description="Expand each distinct state only once across branches",
    ),
) -> PathResponse:
    """Get the shortest path from the start to any exit.

    Without options the maze's cached result is used. With options a fresh
    search runs from the initial state and nothing is cached.
    """
    maze = require_maze(registry, maze_id).maze

    if strategy is None and global_dedup is None:
        cached = maze.path_computed
        path = await run_in_threadpool(maze.get_shortest_path)
        used_strategy, used_dedup = maze.strategy, maze.global_dedup
    else:
        cached = False
        used_strategy = strategy or maze.strategy
        used_dedup = maze.global_dedup if global_dedup is None else global_dedup
        path = await run_in_threadpool(
            maze.find_path_from,
            SearchState.create_initial(maze),
            used_strategy,
            used_dedup,
        )

    return PathResponse(
        maze_id=maze_id,
        strategy=used_strategy.value,
        global_dedup=used_dedup,
        found=path is not None,
        length=len(path) if path is not None else None,
        path=[MazePosition.from_tuple(p) for p in path] if path is not None else None,
        cached=cached,
    )


@router.get(
    "/{maze_id}/neighbors",
    response_model=NeighborsResponse,
)
async def get_neighbors(
    maze_id: str,
    registry: Registry,
    row: int = Query(..., ge=0),
    col: int = Query(..., ge=0),
    via: NeighborKind = Query(NeighborKind.WALLS, description="walls or doors"),
) -> NeighborsResponse:
    """Get the immediate neighbours of a cell through free passages or doors."""
    maze = require_maze(registry, maze_id).maze

    if not maze.in_bounds((row, col)):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Position ({row}, {col}) is outside the maze",
        )

    neighbors = maze.get_reachable_neighbors((row, col), via)
    return NeighborsResponse(
        position=MazePosition(row=row, col=col),
        via=via.value,
        neighbors=[MazePosition.from_tuple(p) for p in sorted(neighbors)],
    )
