"""Live play sessions stored in Redis."""

import logging
from datetime import datetime, timezone
from typing import Optional

import redis.asyncio as redis

from labyrinth.config import get_settings
from labyrinth.core.cell import Direction, Position
from labyrinth.core.maze import Maze
from labyrinth.core.maze_engine import LookResult, MoveResult, look, move
from labyrinth.core.state import SearchState
from labyrinth.models.session import SessionRecord

logger = logging.getLogger(__name__)


class SessionService:
    """Creates, loads and advances play sessions."""

    # Redis key patterns
    SESSION_KEY = "session:{session_id}"

    def __init__(self, redis_client: redis.Redis, ttl_seconds: Optional[int] = None):
        self.redis = redis_client
        self.ttl_seconds = (
            ttl_seconds if ttl_seconds is not None else get_settings().session_ttl_seconds
        )

    def _key(self, session_id: str) -> str:
        return self.SESSION_KEY.format(session_id=session_id)

    async def save(self, record: SessionRecord) -> None:
        await self.redis.set(self._key(record.id), record.model_dump_json(), ex=self.ttl_seconds)

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        raw = await self.redis.get(self._key(session_id))
        if raw is None:
            return None
        return SessionRecord.model_validate_json(raw)

    async def delete(self, session_id: str) -> bool:
        return await self.redis.delete(self._key(session_id)) > 0

    async def create(self, maze_id: str, maze: Maze) -> SessionRecord:
        """Start a new session at the maze start with a fresh state."""
        record = SessionRecord.from_state(maze_id, SearchState.create_initial(maze))
        await self.save(record)
        logger.info(f"Created session {record.id} on maze {maze_id}")
        return record

    @staticmethod
    def load_state(record: SessionRecord, maze: Maze) -> SearchState:
        positions: list[Position] = [cell.position for cell in maze.cells()]
        return record.to_state(positions)

    async def move(
        self,
        record: SessionRecord,
        maze: Maze,
        direction: Direction,
    ) -> MoveResult:
        """
        Apply one move to the session and persist it. COSTS 1 TURN.

        Raises:
            ValueError: If the session is not active.
        """
        if record.status != "active":
            raise ValueError(f"Session is not active (status: {record.status})")

        state = self.load_state(record, maze)
        result = move(maze, state, direction)

        record.turn_count += 1
        record.update_from_state(state)

        if result.status == "completed":
            record.status = "completed"
            record.completed_at = datetime.now(timezone.utc)
            logger.info(f"Session {record.id} completed in {record.turn_count} turns")

        await self.save(record)
        return result

    def look(self, record: SessionRecord, maze: Maze) -> LookResult:
        """Look around. FREE - does not cost a turn."""
        return look(maze, self.load_state(record, maze))

    def hint(self, record: SessionRecord, maze: Maze) -> Optional[list[Position]]:
        """Shortest path from the session's current state, or None."""
        return maze.find_path_from(self.load_state(record, maze))
