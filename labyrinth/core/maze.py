"""
Maze facade.

Owns the decoded grid, the walls/doors graphs derived from it, a lazily
created live state and the cached shortest path from the start.

Example usage:
    maze = parse_maze_bytes(data)

    path = maze.get_shortest_path()      # None when no exit is reachable
    free = maze.get_reachable_neighbors((0, 0), NeighborKind.WALLS)

    state = maze.state                   # live state for interactive play
    state.unlock_door((0, 1))
"""

import logging
from enum import Enum
from typing import Iterable, Optional

from .cell import Cell, Position
from .errors import MazeValidationError, NoExitError
from .graph import AdjacencyGraph, build_doors_graph, build_walls_graph, count_edges
from .search import MAX_BRANCHING, SearchStrategy, find_shortest_path
from .state import SearchState


logger = logging.getLogger(__name__)


class NeighborKind(Enum):
    """Which kind of boundary a neighbour query follows."""
    WALLS = "walls"
    DOORS = "doors"


_NOT_SEARCHED = object()


class Maze:
    """
    A decoded labyrinth with walls, doors, keys and exits.

    The grid and both graphs are never modified after construction and can
    be shared freely between search threads.
    """

    def __init__(
        self,
        cells: Iterable[Iterable[Cell]],
        rows: int,
        cols: int,
        start: Position = (0, 0),
        *,
        strategy: SearchStrategy = SearchStrategy.PARALLEL,
        global_dedup: bool = False,
        max_workers: int = MAX_BRANCHING,
    ):
        """
        Build a maze from a row-major grid of cells.

        Args:
            cells: rows x cols grid, cells[row][col].
            rows: Number of rows.
            cols: Number of columns.
            start: Start position (row, col).
            strategy: Engine used by get_shortest_path().
            global_dedup: Enable the engine-wide seen-table.
            max_workers: Thread pool size for the parallel engine.

        Raises:
            MazeValidationError: If the grid shape or start position is invalid.
            NoExitError: If no cell is an exit.
        """
        self.fields: list[list[Cell]] = [list(row) for row in cells]

        if rows <= 0 or cols <= 0:
            raise MazeValidationError(f"Invalid dimensions: {rows}x{cols}")
        if len(self.fields) != rows or any(len(row) != cols for row in self.fields):
            raise MazeValidationError(f"Grid does not match dimensions {rows}x{cols}")
        if not (0 <= start[0] < rows and 0 <= start[1] < cols):
            raise MazeValidationError(f"Start position {start} is outside the maze")

        self.rows = rows
        self.cols = cols
        self.start = start
        self.strategy = strategy
        self.global_dedup = global_dedup
        self.max_workers = max_workers

        self.exits: frozenset[Position] = frozenset(
            cell.position for cell in self.cells() if cell.is_exit
        )
        if not self.exits:
            raise NoExitError()

        self.keys: frozenset[Position] = frozenset(
            cell.position for cell in self.cells() if cell.has_key
        )
        self.walls_graph: AdjacencyGraph = build_walls_graph(self.cells(), rows, cols)
        self.doors_graph: AdjacencyGraph = build_doors_graph(self.cells(), rows, cols)

        self._state: Optional[SearchState] = None
        self._shortest_path = _NOT_SEARCHED

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.rows, self.cols)

    def cells(self) -> Iterable[Cell]:
        """Iterate over all cells in row-major order."""
        for row in self.fields:
            yield from row

    def in_bounds(self, position: Position) -> bool:
        row, col = position
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, position: Position) -> Cell:
        """Get the cell at position."""
        if not self.in_bounds(position):
            raise IndexError(f"Position out of bounds: {position}")
        return self.fields[position[0]][position[1]]

    @property
    def state(self) -> SearchState:
        """Live state for interactive play, created on first access."""
        if self._state is None:
            self._state = SearchState.create_initial(self)
        return self._state

    def reset_state(self) -> None:
        """Forget the live state; the next access starts over at the start cell."""
        self._state = None

    @property
    def path_computed(self) -> bool:
        """True once get_shortest_path() has run, whether or not it found a path."""
        return self._shortest_path is not _NOT_SEARCHED

    def get_shortest_path(self) -> Optional[list[Position]]:
        """
        Shortest path from the start, with every door locked, to any exit.

        The live state is never consulted, so play before or after this call
        does not change the answer.

        Searches on the first call and returns the cached result afterwards.

        Returns:
            List of positions starting at the maze start and
            ending on an exit, or None if no exit is reachable.
        """
        if not self.path_computed:
            logger.debug(
                f"Searching {self.rows}x{self.cols} maze with {self.strategy.value} engine"
            )
            self._shortest_path = self.find_path_from(SearchState.create_initial(self))
        return self._shortest_path

    def find_path_from(
        self,
        state: SearchState,
        strategy: Optional[SearchStrategy] = None,
        global_dedup: Optional[bool] = None,
    ) -> Optional[list[Position]]:
        """Uncached search from an arbitrary state."""
        return find_shortest_path(
            self,
            state.copy(),
            strategy or self.strategy,
            global_dedup=self.global_dedup if global_dedup is None else global_dedup,
            max_workers=self.max_workers,
        )

    def get_reachable_neighbors(
        self,
        position: Position,
        via: NeighborKind = NeighborKind.WALLS,
    ) -> set[Position]:
        """
        Immediate neighbours of position.

        WALLS follows free passages only; DOORS follows doors regardless of
        whether they have been unlocked by anyone.
        """
        graph = self.walls_graph if via == NeighborKind.WALLS else self.doors_graph
        return set(graph.get(position, ()))

    def get_maze_info(self) -> dict:
        """Get maze metadata."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "start": list(self.start),
            "exits": sorted(list(p) for p in self.exits),
            "keys": sorted(list(p) for p in self.keys),
            "door_count": count_edges(self.doors_graph),
        }

    def describe(self) -> str:
        """Multi-line dump of dimensions, exits and every cell."""
        lines = [
            f"Dimensions: ({self.rows}, {self.cols})",
            f"Exit count: ({len(self.exits)})",
            "Field data:",
        ]
        for row_index, row in enumerate(self.fields):
            lines.append(f"Row[{row_index}]:")
            lines.extend(f"  {cell}" for cell in row)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Maze(rows={self.rows}, cols={self.cols}, start={self.start}, exits={len(self.exits)})"
