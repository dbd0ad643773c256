"""
Maze Parser for the keyed labyrinth.

Decodes binary maze data and loads maze files from the filesystem.

Binary format:
    Cells are stored row-major, two cells per three bytes:

        byte 0: walls(cell 0) << 4 | doors(cell 0)
        byte 1: meta(cell 0)  << 4 | walls(cell 1)
        byte 2: doors(cell 1) << 4 | meta(cell 1)

    The pairing continues across row boundaries. Inside a walls or doors
    nibble the bits are W=8, E=4, N=2, S=1. A set wall bit means that side
    is OPEN; a set door bit means that side is a locked door. In the meta
    nibble, 0b1100 marks a key and 0b0011 marks an exit.

Maze files:
    *.bin   raw binary data
    *.txt   bit text ('0'/'1' characters, see converter.py)
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .cell import Cell, Direction, Position
from .converter import convert_text_to_bytes
from .errors import IncompleteDataError, MazeParseError, MazeValidationError
from .maze import Maze


logger = logging.getLogger(__name__)

DEFAULT_ROWS = 6
DEFAULT_COLUMNS = 9
DEFAULT_START: Position = (0, 0)

KEY_MASK = 0b1100
EXIT_MASK = 0b0011

MAZE_SUFFIXES = (".bin", ".txt")


@dataclass
class ParsedMaze:
    """A decoded maze together with where it came from."""

    name: str
    slug: str
    maze: Maze
    source: Optional[Path] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "slug": self.slug,
            "source": str(self.source) if self.source else None,
            **self.maze.get_maze_info(),
        }


def required_length(rows: int, cols: int) -> int:
    """Bytes needed for rows x cols cells (1.5 bytes per cell, rounded up)."""
    return (rows * cols * 3 + 1) // 2


def _cell_nibbles(data: bytes, index: int) -> tuple[int, int, int]:
    """Return (walls, doors, meta) nibbles of the cell at row-major index."""
    offset = (index // 2) * 3
    if index % 2 == 0:
        return data[offset] >> 4, data[offset] & 0xF, data[offset + 1] >> 4
    return data[offset + 1] & 0xF, data[offset + 2] >> 4, data[offset + 2] & 0xF


def _decode_cell(row: int, col: int, nibbles: tuple[int, int, int], rows: int, cols: int) -> Cell:
    walls, doors, meta = nibbles
    cell = Cell(row, col)

    for direction in Direction:
        target_row, target_col = direction.step((row, col))
        if not (0 <= target_row < rows and 0 <= target_col < cols):
            cell.seal_side(direction)
        elif doors & direction.bit:
            cell.place_door(direction)
        elif walls & direction.bit:
            cell.open_side(direction)
        else:
            cell.seal_side(direction)

    cell.has_key = (meta & KEY_MASK) == KEY_MASK
    cell.is_exit = (meta & EXIT_MASK) == EXIT_MASK
    return cell


def parse_maze_bytes(
    data: bytes,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLUMNS,
    start: Position = DEFAULT_START,
    **maze_options: Any,
) -> Maze:
    """
    Decode binary maze data.

    Args:
        data: Raw maze bytes. Bytes past the last cell are ignored.
        rows: Number of rows.
        cols: Number of columns.
        start: Start position (row, col).
        **maze_options: Passed on to Maze (strategy, global_dedup, max_workers).

    Returns:
        Fully built Maze.

    Raises:
        MazeValidationError: If the dimensions or start position are invalid.
        IncompleteDataError: If data is shorter than the dimensions require.
        NoExitError: If no cell is marked as an exit.
    """
    if rows <= 0 or cols <= 0:
        raise MazeValidationError(f"Invalid dimensions: {rows}x{cols}")

    needed = required_length(rows, cols)
    if len(data) < needed:
        raise IncompleteDataError(len(data), needed)

    fields = [
        [
            _decode_cell(row, col, _cell_nibbles(data, row * cols + col), rows, cols)
            for col in range(cols)
        ]
        for row in range(rows)
    ]

    return Maze(fields, rows, cols, start, **maze_options)


def _encode_cell(cell: Cell) -> tuple[int, int, int]:
    walls = 0
    doors = 0
    for direction in Direction:
        if cell.is_open(direction):
            walls |= direction.bit
        if cell.has_door(direction):
            doors |= direction.bit
    meta = (KEY_MASK if cell.has_key else 0) | (EXIT_MASK if cell.is_exit else 0)
    return walls, doors, meta


def encode_maze(maze: Maze) -> bytes:
    """Encode a maze back into the binary format."""
    data = bytearray(required_length(maze.rows, maze.cols))
    for index, cell in enumerate(maze.cells()):
        walls, doors, meta = _encode_cell(cell)
        offset = (index // 2) * 3
        if index % 2 == 0:
            data[offset] = (walls << 4) | doors
            data[offset + 1] |= meta << 4
        else:
            data[offset + 1] |= walls
            data[offset + 2] = (doors << 4) | meta
    return bytes(data)


def _slugify(stem: str) -> str:
    return stem.strip().lower().replace(" ", "-").replace("_", "-")


def read_maze_data(file_path: Path | str) -> bytes:
    """
    Read maze bytes from a .bin file, or convert a .txt bit-text file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the path is not a readable file.
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Maze file not found: {file_path}")

    if not file_path.is_file():
        raise MazeParseError(f"Path is not a file: {file_path}")

    try:
        if file_path.suffix.lower() == ".txt":
            return convert_text_to_bytes(file_path.read_text(encoding="utf-8"))
        return file_path.read_bytes()
    except OSError as e:
        raise MazeParseError(f"Failed to read maze file: {e}") from e


def load_maze_file(
    file_path: Path | str,
    name: Optional[str] = None,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLUMNS,
    start: Position = DEFAULT_START,
    **maze_options: Any,
) -> ParsedMaze:
    """
    Load and decode a maze file from the filesystem.

    Args:
        file_path: Path to the maze file.
        name: Optional name override. If not provided, uses filename.
        rows: Number of rows.
        cols: Number of columns.
        start: Start position (row, col).
        **maze_options: Passed on to Maze.

    Returns:
        ParsedMaze with the decoded maze.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        MazeParseError: If the maze cannot be decoded.
        MazeValidationError: If the dimensions or start position are invalid.
    """
    file_path = Path(file_path)
    data = read_maze_data(file_path)

    # Infer name from filename if not provided
    if name is None:
        name = file_path.stem.replace("_", " ").replace("-", " ").title()

    maze = parse_maze_bytes(data, rows, cols, start, **maze_options)
    logger.debug(f"Loaded {rows}x{cols} maze '{name}' from {file_path}")

    return ParsedMaze(name=name, slug=_slugify(file_path.stem), maze=maze, source=file_path)


def load_all_mazes(
    mazes_dir: Path | str,
    rows: int = DEFAULT_ROWS,
    cols: int = DEFAULT_COLUMNS,
    start: Position = DEFAULT_START,
    **maze_options: Any,
) -> list[ParsedMaze]:
    """
    Load all maze files (.bin and .txt) from a directory.

    Files that fail to decode are logged and skipped.

    Raises:
        FileNotFoundError: If the directory doesn't exist.
        MazeParseError: If the path is not a directory.
    """
    mazes_dir = Path(mazes_dir)

    if not mazes_dir.exists():
        raise FileNotFoundError(f"Mazes directory not found: {mazes_dir}")

    if not mazes_dir.is_dir():
        raise MazeParseError(f"Path is not a directory: {mazes_dir}")

    mazes = []
    for maze_file in sorted(mazes_dir.iterdir()):
        if maze_file.suffix.lower() not in MAZE_SUFFIXES:
            continue
        try:
            mazes.append(load_maze_file(maze_file, None, rows, cols, start, **maze_options))
        except (MazeParseError, MazeValidationError) as e:
            # Log error but continue loading other mazes
            logger.warning(f"Failed to load {maze_file}: {e}")

    return mazes
