"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import AsyncGenerator, Iterable

import fakeredis.aioredis as fakeredis
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from labyrinth.api.deps import get_registry
from labyrinth.config import get_settings
from labyrinth.core.cell import Cell, Direction, Position
from labyrinth.core.maze import Maze
from labyrinth.db.redis import get_redis
from labyrinth.main import app
from labyrinth.services.maze_registry import MazeRegistry

MAZES_DIR = Path(__file__).resolve().parent.parent / "mazes"

Edge = tuple[Position, Position]


def build_maze(
    rows: int,
    cols: int,
    passages: Iterable[Edge] = (),
    doors: Iterable[Edge] = (),
    keys: Iterable[Position] = (),
    exits: Iterable[Position] = (),
    start: Position = (0, 0),
    **maze_options,
) -> Maze:
    """
    Build a maze from edge lists.

    Every side starts sealed. Passages are opened on both cells; doors are
    one-way, placed only on the source cell's side.
    """
    fields = [[Cell(row, col) for col in range(cols)] for row in range(rows)]

    def side(source: Position, target: Position) -> tuple[Cell, Direction]:
        direction = Direction.between(source, target)
        if direction is None:
            raise ValueError(f"{source} and {target} are not adjacent")
        return fields[source[0]][source[1]], direction

    for a, b in passages:
        cell, direction = side(a, b)
        cell.open_side(direction)
        cell, direction = side(b, a)
        cell.open_side(direction)

    for source, target in doors:
        cell, direction = side(source, target)
        cell.place_door(direction)

    for row, col in keys:
        fields[row][col].has_key = True
    for row, col in exits:
        fields[row][col].is_exit = True

    return Maze(fields, rows, cols, start, **maze_options)


@pytest.fixture
def make_maze():
    """Factory for mazes built from edge lists."""
    return build_maze


@pytest.fixture
def corridor_maze() -> Maze:
    """1x2: start (0,0) opens east onto the exit at (0,1)."""
    return build_maze(1, 2, passages=[((0, 0), (0, 1))], exits=[(0, 1)])


@pytest.fixture
def key_at_start_maze() -> Maze:
    """1x3: key on the start cell, a door to (0,1), free passage to the exit."""
    return build_maze(
        1,
        3,
        passages=[((0, 1), (0, 2))],
        doors=[((0, 0), (0, 1))],
        keys=[(0, 0)],
        exits=[(0, 2)],
    )


@pytest.fixture
def keyless_door_maze() -> Maze:
    """Same layout as key_at_start_maze, with no key anywhere."""
    return build_maze(
        1,
        3,
        passages=[((0, 1), (0, 2))],
        doors=[((0, 0), (0, 1))],
        exits=[(0, 2)],
    )


@pytest.fixture
def key_detour_maze() -> Maze:
    """
    2x3 where the exit sits behind a two-way door and the key is in a side room.

        (0,0) -- (0,1) =door= (0,2) exit
                   |
                 (1,1) key
    """
    return build_maze(
        2,
        3,
        passages=[((0, 0), (0, 1)), ((0, 1), (1, 1))],
        doors=[((0, 1), (0, 2)), ((0, 2), (0, 1))],
        keys=[(1, 1)],
        exits=[(0, 2)],
    )


@pytest.fixture
def registry(corridor_maze, key_detour_maze, keyless_door_maze) -> MazeRegistry:
    """Registry with the sample maze files and a few hand-built mazes."""
    registry = MazeRegistry()
    registry.load_directory(MAZES_DIR, get_settings())
    registry.register("Corridor", corridor_maze, maze_id="corridor")
    registry.register("Key Detour", key_detour_maze, maze_id="key-detour")
    registry.register("Keyless Door", keyless_door_maze, maze_id="keyless-door")
    return registry


@pytest_asyncio.fixture
async def redis_client():
    client = fakeredis.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(registry, redis_client) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""

    async def override_get_redis():
        return redis_client

    app.dependency_overrides[get_redis] = override_get_redis
    app.dependency_overrides[get_registry] = lambda: registry

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
