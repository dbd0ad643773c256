"""In-memory registry of decoded mazes."""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from labyrinth.config import Settings, get_settings
from labyrinth.core.maze import Maze
from labyrinth.core.maze_parser import load_all_mazes

logger = logging.getLogger(__name__)


@dataclass
class MazeEntry:
    """A registered maze."""

    id: str
    name: str
    maze: Maze
    source: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class MazeRegistry:
    """Holds every maze the service can serve, keyed by id."""

    def __init__(self):
        self._mazes: dict[str, MazeEntry] = {}

    def register(
        self,
        name: str,
        maze: Maze,
        maze_id: Optional[str] = None,
        source: Optional[str] = None,
    ) -> MazeEntry:
        """Add a maze, replacing any maze registered under the same id."""
        if maze_id is None:
            maze_id = uuid.uuid4().hex[:12]
        entry = MazeEntry(id=maze_id, name=name, maze=maze, source=source)
        self._mazes[maze_id] = entry
        return entry

    def get(self, maze_id: str) -> Optional[MazeEntry]:
        return self._mazes.get(maze_id)

    def remove(self, maze_id: str) -> bool:
        return self._mazes.pop(maze_id, None) is not None

    def list(self) -> list[MazeEntry]:
        return sorted(self._mazes.values(), key=lambda entry: entry.name)

    def __len__(self) -> int:
        return len(self._mazes)

    def load_directory(self, mazes_dir: Path | str, settings: Optional[Settings] = None) -> int:
        """
        Register every decodable maze file in a directory.

        Returns:
            Number of mazes registered.
        """
        settings = settings or get_settings()
        parsed = load_all_mazes(
            mazes_dir,
            settings.maze_rows,
            settings.maze_cols,
            settings.start,
            **settings.maze_options,
        )
        for item in parsed:
            self.register(item.name, item.maze, maze_id=item.slug, source=str(item.source))
        logger.info(f"Registered {len(parsed)} maze(s) from {mazes_dir}")
        return len(parsed)


# Global registry instance
_maze_registry: Optional[MazeRegistry] = None


def get_maze_registry() -> MazeRegistry:
    """Get singleton maze registry."""
    global _maze_registry
    if _maze_registry is None:
        _maze_registry = MazeRegistry()
    return _maze_registry
