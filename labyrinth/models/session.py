"""Session record for live maze play, stored in Redis as JSON."""

import uuid
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

from labyrinth.core.cell import Position
from labyrinth.core.state import SearchState


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SessionRecord(BaseModel):
    """A player's progress through one maze."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    maze_id: str
    position: tuple[int, int]
    keys: int = 0
    # Each locked door edge as (row, col, target_row, target_col)
    locked_doors: list[tuple[int, int, int, int]] = Field(default_factory=list)
    remaining_keys: list[tuple[int, int]] = Field(default_factory=list)
    turn_count: int = 0
    status: Literal["active", "completed", "abandoned"] = "active"
    created_at: datetime = Field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None

    @classmethod
    def from_state(cls, maze_id: str, state: SearchState, **fields) -> "SessionRecord":
        """Snapshot a live state."""
        locked = sorted(
            (source[0], source[1], target[0], target[1])
            for source, targets in state.doors.items()
            for target in targets
        )
        return cls(
            maze_id=maze_id,
            position=state.position,
            keys=state.keys,
            locked_doors=locked,
            remaining_keys=sorted(state.remaining_keys),
            **fields,
        )

    def to_state(self, positions: list[Position]) -> SearchState:
        """
        Rebuild the live state.

        Args:
            positions: Every cell of the maze, so cells without locked doors
                still get an (empty) entry in the doors graph.
        """
        doors: dict[Position, set[Position]] = {position: set() for position in positions}
        for row, col, target_row, target_col in self.locked_doors:
            doors.setdefault((row, col), set()).add((target_row, target_col))
        return SearchState(
            position=tuple(self.position),
            keys=self.keys,
            doors=doors,
            remaining_keys={tuple(p) for p in self.remaining_keys},
        )

    def update_from_state(self, state: SearchState) -> None:
        """Copy a mutated live state back into this record."""
        snapshot = SessionRecord.from_state(self.maze_id, state)
        self.position = snapshot.position
        self.keys = snapshot.keys
        self.locked_doors = snapshot.locked_doors
        self.remaining_keys = snapshot.remaining_keys
