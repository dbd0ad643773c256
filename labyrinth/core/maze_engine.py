"""
Live play rules for the keyed labyrinth.

Applies single moves of an actor to a mutable SearchState:
- Moving through a free passage always succeeds
- Moving through a locked door spends one key (or is refused without one)
- Stepping onto a cell with a key picks it up
- Stepping onto an exit completes the maze

Look is free and reports what lies in every direction from the actor's
point of view, so a door this actor already unlocked shows up as open.
"""

from dataclasses import dataclass
from typing import Literal, Optional

from .cell import Direction, Position
from .maze import Maze
from .state import SearchState, UnlockResult


MoveStatus = Literal["moved", "blocked", "locked", "completed"]
SideView = Literal["open", "wall", "door"]


@dataclass
class MoveResult:
    """Result of a move action."""
    status: MoveStatus
    position: Position
    keys: int
    unlocked_door: bool = False
    collected_key: bool = False
    message: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        result = {
            "status": self.status,
            "position": {"row": self.position[0], "col": self.position[1]},
            "keys": self.keys,
            "unlocked_door": self.unlocked_door,
            "collected_key": self.collected_key,
        }
        if self.message:
            result["message"] = self.message
        return result


@dataclass
class LookResult:
    """Result of a look action."""
    north: SideView
    south: SideView
    east: SideView
    west: SideView
    current: Literal["exit", "key", "floor"]

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "north": self.north,
            "south": self.south,
            "east": self.east,
            "west": self.west,
            "current": self.current,
        }


def side_view(maze: Maze, state: SearchState, direction: Direction) -> SideView:
    """What the actor sees on one side of its cell."""
    target = direction.step(state.position)
    if not maze.in_bounds(target):
        return "wall"
    cell = maze.cell(state.position)
    if cell.is_open(direction):
        return "open"
    if cell.has_door(direction):
        return "door" if state.is_locked(target) else "open"
    return "wall"


def look(maze: Maze, state: SearchState) -> LookResult:
    """
    Look at the surrounding sides. Does not change the state.
    """
    position = state.position
    if position in maze.exits:
        current = "exit"
    elif position in state.remaining_keys:
        current = "key"
    else:
        current = "floor"

    return LookResult(
        north=side_view(maze, state, Direction.NORTH),
        south=side_view(maze, state, Direction.SOUTH),
        east=side_view(maze, state, Direction.EAST),
        west=side_view(maze, state, Direction.WEST),
        current=current,
    )


def move(maze: Maze, state: SearchState, direction: Direction) -> MoveResult:
    """
    Move the actor one cell, mutating state in place.

    Args:
        maze: Maze the actor is in.
        state: The actor's live state.
        direction: Direction to move.

    Returns:
        MoveResult describing what happened.
    """
    target = direction.step(state.position)

    # Edge of the grid - can't move
    if not maze.in_bounds(target):
        return MoveResult(
            status="blocked",
            position=state.position,
            keys=state.keys,
            message=f"Cannot move {direction.value} - edge of the maze",
        )

    cell = maze.cell(state.position)
    unlocked = False

    if cell.has_door(direction):
        outcome = state.unlock_door(target)
        if outcome == UnlockResult.LOCKED_NO_KEY:
            return MoveResult(
                status="locked",
                position=state.position,
                keys=state.keys,
                message=f"The door {direction.value} is locked and you have no key",
            )
        unlocked = outcome == UnlockResult.UNLOCKED
    elif not cell.is_open(direction):
        return MoveResult(
            status="blocked",
            position=state.position,
            keys=state.keys,
            message=f"Cannot move {direction.value} - wall blocking",
        )

    # Valid move - update position
    state.move_to(target)
    collected = state.collect_key(target)

    if target in maze.exits:
        return MoveResult(
            status="completed",
            position=state.position,
            keys=state.keys,
            unlocked_door=unlocked,
            collected_key=collected,
            message="Congratulations! You escaped the maze!",
        )

    return MoveResult(
        status="moved",
        position=state.position,
        keys=state.keys,
        unlocked_door=unlocked,
        collected_key=collected,
    )
