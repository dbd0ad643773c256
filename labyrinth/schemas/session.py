"""Session schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from labyrinth.schemas.maze import MazePosition


class SessionCreateRequest(BaseModel):
    """Schema for creating a new session."""

    maze_id: str


class SessionState(BaseModel):
    """Schema for session state."""

    id: str
    maze_id: str
    current_position: MazePosition
    keys: int
    keys_remaining: int
    locked_doors: int
    turn_count: int
    status: str  # active, completed, abandoned
    created_at: datetime
    completed_at: Optional[datetime] = None


class MoveRequest(BaseModel):
    """Schema for move request."""

    direction: str = Field(..., pattern="^(north|south|east|west)$")


class MoveResponse(BaseModel):
    """Schema for move response."""

    status: str  # moved, blocked, locked, completed
    position: MazePosition
    turns: int
    keys: int
    unlocked_door: bool = False
    collected_key: bool = False
    message: Optional[str] = None


class LookResponse(BaseModel):
    """Schema for look response."""

    north: str
    south: str
    east: str
    west: str
    current: str


class HintResponse(BaseModel):
    """Schema for the shortest path from a session's current state."""

    found: bool
    length: Optional[int] = None
    path: Optional[list[MazePosition]] = None
