"""
Grid model for the keyed labyrinth.

A maze is a row-major grid of cells. Every cell carries, for each of the
four directions, a wall flag and a door flag:

    wall=False, door=False  -> free passage
    wall=True,  door=True   -> locked door (passable after spending a key)
    wall=True,  door=False  -> solid wall

Cells may also hold a collectible key or be an exit.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


Position = tuple[int, int]  # (row, col)


class Direction(Enum):
    """Movement directions, in the order they are packed on disk."""
    WEST = "west"
    EAST = "east"
    NORTH = "north"
    SOUTH = "south"

    @property
    def bit(self) -> int:
        """Bit used for this direction inside a wall/door nibble."""
        bits = {
            Direction.WEST: 0b1000,
            Direction.EAST: 0b0100,
            Direction.NORTH: 0b0010,
            Direction.SOUTH: 0b0001,
        }
        return bits[self]

    @property
    def delta(self) -> tuple[int, int]:
        """Get (drow, dcol) for this direction."""
        deltas = {
            Direction.WEST: (0, -1),
            Direction.EAST: (0, 1),
            Direction.NORTH: (-1, 0),
            Direction.SOUTH: (1, 0),
        }
        return deltas[self]

    @property
    def opposite(self) -> "Direction":
        opposites = {
            Direction.WEST: Direction.EAST,
            Direction.EAST: Direction.WEST,
            Direction.NORTH: Direction.SOUTH,
            Direction.SOUTH: Direction.NORTH,
        }
        return opposites[self]

    def step(self, position: Position) -> Position:
        """Return the neighbouring position in this direction (may be off-grid)."""
        drow, dcol = self.delta
        return (position[0] + drow, position[1] + dcol)

    @classmethod
    def between(cls, source: Position, target: Position) -> Optional["Direction"]:
        """Direction leading from source to an orthogonally adjacent target."""
        for direction in cls:
            if direction.step(source) == target:
                return direction
        return None


def _all_directions(value: bool) -> dict[Direction, bool]:
    return {direction: value for direction in Direction}


@dataclass
class Cell:
    """A single grid cell with per-direction walls and doors."""
    row: int
    col: int
    walls: dict[Direction, bool] = field(default_factory=lambda: _all_directions(True))
    doors: dict[Direction, bool] = field(default_factory=lambda: _all_directions(False))
    has_key: bool = False
    is_exit: bool = False

    @property
    def position(self) -> Position:
        return (self.row, self.col)

    def is_open(self, direction: Direction) -> bool:
        """True if moving in direction is a free passage."""
        return not self.walls[direction] and not self.doors[direction]

    def has_door(self, direction: Direction) -> bool:
        return self.doors[direction]

    def open_side(self, direction: Direction) -> None:
        """Turn a side into a free passage."""
        self.walls[direction] = False
        self.doors[direction] = False

    def place_door(self, direction: Direction) -> None:
        """Turn a side into a locked door."""
        self.walls[direction] = True
        self.doors[direction] = True

    def seal_side(self, direction: Direction) -> None:
        """Turn a side into a solid wall."""
        self.walls[direction] = True
        self.doors[direction] = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "row": self.row,
            "col": self.col,
            "walls": {d.value: self.walls[d] for d in Direction},
            "doors": {d.value: self.doors[d] for d in Direction},
            "has_key": self.has_key,
            "is_exit": self.is_exit,
        }

    def __str__(self) -> str:
        walls = ", ".join(str(self.walls[d]) for d in Direction)
        doors = ", ".join(str(self.doors[d]) for d in Direction)
        return (
            f"Position({self.row}, {self.col}) - Exit: {self.is_exit} - "
            f"Key: {self.has_key} - Walls: ({walls}) - Doors: ({doors})"
        )
