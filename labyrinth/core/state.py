"""
Search state for the keyed labyrinth.

A SearchState is a snapshot of where an actor stands, how many keys it
holds, which door edges are still locked for it and which keys are still
lying in the maze. The search engine treats states as values and only ever
derives new ones through transfer(); the live play layer instead mutates a
single working state through unlock_door(), collect_key() and move_to().
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Optional

from .cell import Position
from .graph import AdjacencyGraph, copy_graph

if TYPE_CHECKING:
    from .maze import Maze


class UnlockResult(Enum):
    """Outcome of trying to pass through a door."""
    LOCKED_NO_KEY = "locked"
    NOT_A_DOOR = "not_a_door"
    UNLOCKED = "unlocked"


StateFingerprint = tuple[Position, int, frozenset, frozenset]


class SearchState:
    """
    Position, held keys, remaining locked doors and remaining keys.

    Equality and hashing only look at (position, keys). Two states at the
    same cell holding the same number of keys compare equal even when they
    opened different doors; use fingerprint() when the full identity matters.
    """

    __slots__ = ("position", "keys", "doors", "remaining_keys")

    def __init__(
        self,
        position: Position,
        keys: int = 0,
        doors: Optional[AdjacencyGraph] = None,
        remaining_keys: Optional[set[Position]] = None,
    ):
        self.position = position
        self.keys = keys
        self.doors: AdjacencyGraph = doors if doors is not None else {}
        self.remaining_keys: set[Position] = (
            remaining_keys if remaining_keys is not None else set()
        )

    @classmethod
    def create_initial(cls, maze: Maze) -> SearchState:
        """
        Fresh state at the maze start with every door locked.

        A key lying on the start cell is picked up straight away.
        """
        state = cls(
            position=maze.start,
            keys=0,
            doors=copy_graph(maze.doors_graph),
            remaining_keys=set(maze.keys),
        )
        state.collect_key(maze.start)
        return state

    def copy(self) -> SearchState:
        return SearchState(
            position=self.position,
            keys=self.keys,
            doors=copy_graph(self.doors),
            remaining_keys=set(self.remaining_keys),
        )

    def is_locked(self, target: Position) -> bool:
        """True if the edge from the current position to target is a locked door."""
        return target in self.doors.get(self.position, ())

    def unlock_door(self, target: Position) -> UnlockResult:
        """
        Try to open the door between the current position and target.

        Spends one key and removes the door edge from this state's private
        doors graph. Does nothing if there is no locked door on that edge or
        if no key is held.
        """
        if not self.is_locked(target):
            return UnlockResult.NOT_A_DOOR
        if self.keys == 0:
            return UnlockResult.LOCKED_NO_KEY
        self.keys -= 1
        self.doors[self.position].discard(target)
        return UnlockResult.UNLOCKED

    def collect_key(self, position: Position) -> bool:
        """Pick up the key lying at position, if one is still there."""
        if position in self.remaining_keys:
            self.remaining_keys.discard(position)
            self.keys += 1
            return True
        return False

    def move_to(self, position: Position) -> None:
        """Set the position directly; the caller has already validated the move."""
        self.position = position

    def transfer(self, target: Position) -> Optional[SearchState]:
        """
        Derive the state reached by stepping onto target.

        Returns None if a locked door blocks the step and no key is held.
        Never mutates self.
        """
        if self.is_locked(target) and self.keys == 0:
            return None
        new_state = self.copy()
        new_state.unlock_door(target)
        new_state.move_to(target)
        new_state.collect_key(target)
        return new_state

    def fingerprint(self) -> StateFingerprint:
        """Full identity of the state, including which doors and keys remain."""
        locked = frozenset(
            (source, target)
            for source, targets in self.doors.items()
            for target in targets
        )
        return (self.position, self.keys, locked, frozenset(self.remaining_keys))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchState):
            return NotImplemented
        return self.position == other.position and self.keys == other.keys

    def __hash__(self) -> int:
        return hash((self.position, self.keys))

    def __repr__(self) -> str:
        return (
            f"SearchState(position={self.position}, keys={self.keys}, "
            f"keys_left={len(self.remaining_keys)})"
        )
