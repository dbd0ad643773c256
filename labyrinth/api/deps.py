"""API dependencies for dependency injection."""

from typing import Annotated

import redis.asyncio as redis
from fastapi import Depends, HTTPException, status

from labyrinth.config import Settings, get_settings
from labyrinth.db.redis import get_redis
from labyrinth.services.maze_registry import MazeEntry, MazeRegistry, get_maze_registry
from labyrinth.services.session_service import SessionService


def get_registry() -> MazeRegistry:
    """Get the maze registry."""
    return get_maze_registry()


async def get_session_service(
    redis_client: redis.Redis = Depends(get_redis),
    settings: Settings = Depends(get_settings),
) -> SessionService:
    """Get a session service bound to the Redis client."""
    return SessionService(redis_client, settings.session_ttl_seconds)


def require_maze(registry: MazeRegistry, maze_id: str) -> MazeEntry:
    """Look up a maze or fail with 404."""
    entry = registry.get(maze_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Maze not found: {maze_id}",
        )
    return entry


# Type aliases for cleaner route signatures
Registry = Annotated[MazeRegistry, Depends(get_registry)]
Sessions = Annotated[SessionService, Depends(get_session_service)]
AppSettings = Annotated[Settings, Depends(get_settings)]
