# Core module
from .cell import Cell, Direction, Position
from .converter import bytes_to_text, convert_text_to_bytes, convert_txt_to_bin
from .errors import IncompleteDataError, MazeParseError, MazeValidationError, NoExitError
from .graph import AdjacencyGraph, build_doors_graph, build_walls_graph
from .maze import Maze, NeighborKind
from .maze_engine import LookResult, MoveResult, look, move
from .maze_parser import (
    ParsedMaze,
    encode_maze,
    parse_maze_bytes,
    load_maze_file,
    load_all_mazes,
)
from .search import (
    SearchStrategy,
    SerialExecutor,
    compare_search_times,
    find_shortest_path,
    search_parallel,
    search_sequential,
)
from .state import SearchState, UnlockResult

__all__ = [
    "AdjacencyGraph",
    "Cell",
    "Direction",
    "Position",
    "Maze",
    "NeighborKind",
    "LookResult",
    "MoveResult",
    "look",
    "move",
    "SearchState",
    "UnlockResult",
    "SearchStrategy",
    "SerialExecutor",
    "search_sequential",
    "search_parallel",
    "find_shortest_path",
    "compare_search_times",
    "build_walls_graph",
    "build_doors_graph",
    "MazeParseError",
    "MazeValidationError",
    "IncompleteDataError",
    "NoExitError",
    "ParsedMaze",
    "encode_maze",
    "parse_maze_bytes",
    "load_maze_file",
    "load_all_mazes",
    "bytes_to_text",
    "convert_text_to_bytes",
    "convert_txt_to_bin",
]
