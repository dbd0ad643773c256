"""Maze schemas for request/response validation."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MazePosition(BaseModel):
    """Schema for a position in the maze."""

    row: int
    col: int

    @classmethod
    def from_tuple(cls, position: tuple[int, int]) -> "MazePosition":
        return cls(row=position[0], col=position[1])


class MazeBase(BaseModel):
    """Base maze schema with common fields."""

    name: str
    rows: int = Field(..., gt=0)
    cols: int = Field(..., gt=0)


class MazeListItem(MazeBase):
    """Schema for maze list item (without cell data)."""

    id: str
    exit_count: int
    key_count: int
    source: Optional[str] = None
    created_at: datetime


class MazeListResponse(BaseModel):
    """Schema for maze list response."""

    mazes: list[MazeListItem]
    total: int


class CellDetail(BaseModel):
    """Schema for one cell's walls, doors, key and exit flags."""

    row: int
    col: int
    walls: dict[str, bool]
    doors: dict[str, bool]
    has_key: bool
    is_exit: bool


class MazeDetail(MazeBase):
    """Schema for detailed maze response with cell data."""

    id: str
    start: MazePosition
    exits: list[MazePosition]
    keys: list[MazePosition]
    door_count: int
    cells: list[list[CellDetail]]
    source: Optional[str] = None
    created_at: datetime


class MazeCreateRequest(BaseModel):
    """Schema for registering a maze from bit text."""

    name: str = Field(..., min_length=1, max_length=100)
    bits: str = Field(..., min_length=8, description="'0'/'1' characters, other characters ignored")
    rows: Optional[int] = Field(None, gt=0)
    cols: Optional[int] = Field(None, gt=0)
    start: Optional[MazePosition] = None


class PathResponse(BaseModel):
    """Schema for a shortest path query."""

    maze_id: str
    strategy: str
    global_dedup: bool
    found: bool
    length: Optional[int] = None
    path: Optional[list[MazePosition]] = None
    cached: bool = False


class NeighborsResponse(BaseModel):
    """Schema for a neighbour query."""

    position: MazePosition
    via: str
    neighbors: list[MazePosition]
