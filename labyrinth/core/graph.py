"""Adjacency relations derived from the maze grid."""

from typing import Callable, Iterable

from .cell import Cell, Direction, Position


AdjacencyGraph = dict[Position, set[Position]]


def _in_bounds(position: Position, rows: int, cols: int) -> bool:
    return 0 <= position[0] < rows and 0 <= position[1] < cols


def _build_graph(
    cells: Iterable[Cell],
    rows: int,
    cols: int,
    connects: Callable[[Cell, Direction], bool],
) -> AdjacencyGraph:
    graph: AdjacencyGraph = {}
    for cell in cells:
        neighbours = graph.setdefault(cell.position, set())
        for direction in Direction:
            if not connects(cell, direction):
                continue
            target = direction.step(cell.position)
            if _in_bounds(target, rows, cols):
                neighbours.add(target)
    return graph


def build_walls_graph(cells: Iterable[Cell], rows: int, cols: int) -> AdjacencyGraph:
    """Cells connected wherever no wall or door blocks movement."""
    return _build_graph(cells, rows, cols, Cell.is_open)


def build_doors_graph(cells: Iterable[Cell], rows: int, cols: int) -> AdjacencyGraph:
    """Cells connected only through a locked door."""
    return _build_graph(cells, rows, cols, Cell.has_door)


def copy_graph(graph: AdjacencyGraph) -> AdjacencyGraph:
    """Copy a graph so its edge sets can be mutated independently."""
    return {node: set(neighbours) for node, neighbours in graph.items()}


def count_edges(graph: AdjacencyGraph) -> int:
    return sum(len(neighbours) for neighbours in graph.values())
