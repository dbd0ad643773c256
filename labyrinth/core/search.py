"""
Shortest-path search over the labyrinth's state space.

Both engines run a breadth-first search over (history, state) frontier
entries, where history is the tuple of states visited on that branch. Moves
follow free passages and doors alike; whether a door can be passed is up to
SearchState.transfer(). The first exit reached in FIFO order is returned,
which is a path of minimal length because every move costs the same.

Loop prevention is per branch: a successor equal to a state already on its
own branch is dropped, but different branches are never merged, which is
exponential in the worst case. Passing global_dedup=True adds an engine-wide
table of full state fingerprints so identical states reached by different
branches are expanded only once.

The parallel engine fans out one task per outgoing edge of the entry being
expanded, waits for all of them, then drains what they reported.
"""

import logging
import time
from collections import deque
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from enum import Enum
from queue import SimpleQueue
from typing import TYPE_CHECKING, Optional

from .cell import Position
from .state import SearchState, StateFingerprint

if TYPE_CHECKING:
    from .maze import Maze


logger = logging.getLogger(__name__)

# A cell has at most four neighbours, so a fork never needs more workers.
MAX_BRANCHING = 4

History = tuple[SearchState, ...]


class SearchStrategy(Enum):
    """Available search engines."""
    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"


class SerialExecutor(Executor):
    """Executor that runs every task inline, in submission order."""

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(result)
        return future


def candidate_moves(maze: "Maze", position: Position) -> list[Position]:
    """Neighbours reachable through a free passage or a door, in stable order."""
    targets = maze.walls_graph.get(position, set()) | maze.doors_graph.get(position, set())
    return sorted(targets)


def _advance(history: History, target: Position) -> Optional[SearchState]:
    """Successor of the branch's last state, or None if blocked or already on the branch."""
    new_state = history[-1].transfer(target)
    if new_state is None or new_state in history:
        return None
    return new_state


def _positions(history: History) -> list[Position]:
    return [state.position for state in history]


def _first_visit(seen: Optional[set[StateFingerprint]], state: SearchState) -> bool:
    if seen is None:
        return True
    fingerprint = state.fingerprint()
    if fingerprint in seen:
        return False
    seen.add(fingerprint)
    return True


def search_sequential(
    maze: "Maze",
    state: SearchState,
    *,
    global_dedup: bool = False,
) -> Optional[list[Position]]:
    """
    Breadth-first search on the calling thread.

    Args:
        maze: Maze providing the graphs and exits.
        state: State to search from. It is not modified.
        global_dedup: Expand each distinct full state only once across branches.

    Returns:
        Positions from the state's position to an exit, or None if no exit
        can be reached.
    """
    if state.position in maze.exits:
        return [state.position]

    seen: Optional[set[StateFingerprint]] = None
    if global_dedup:
        seen = {state.fingerprint()}

    queue: deque[History] = deque([(state,)])
    expanded = 0

    while queue:
        history = queue.popleft()
        expanded += 1

        for target in candidate_moves(maze, history[-1].position):
            new_state = _advance(history, target)
            if new_state is None:
                continue

            new_history = history + (new_state,)
            if target in maze.exits:
                logger.debug(f"Sequential search solved after {expanded} expansions")
                return _positions(new_history)

            if _first_visit(seen, new_state):
                queue.append(new_history)

    logger.debug(f"Sequential search exhausted after {expanded} expansions")
    return None


def _expand_edge(
    history: History,
    target: Position,
    exits: frozenset[Position],
    solutions: SimpleQueue,
    continuations: SimpleQueue,
) -> None:
    new_state = _advance(history, target)
    if new_state is None:
        return
    new_history = history + (new_state,)
    if target in exits:
        solutions.put(new_history)
    else:
        continuations.put(new_history)


def search_parallel(
    maze: "Maze",
    state: SearchState,
    *,
    global_dedup: bool = False,
    executor: Optional[Executor] = None,
    max_workers: int = MAX_BRANCHING,
) -> Optional[list[Position]]:
    """
    Breadth-first search with a fork-join burst per frontier entry.

    Every outgoing edge of the entry being expanded becomes one task. The
    engine waits for all of them, returns the first reported solution if
    there is one and otherwise queues every reported continuation. Ties
    between equally short solutions found in the same burst are broken by
    whichever was reported first.

    Args:
        maze: Maze providing the graphs and exits.
        state: State to search from. It is not modified.
        global_dedup: Expand each distinct full state only once across branches.
        executor: Executor to run the tasks on. When omitted a thread pool is
            created for this search and shut down afterwards.
        max_workers: Size of the thread pool created when no executor is given.

    Returns:
        Positions from the state's position to an exit, or None if no exit
        can be reached.
    """
    if state.position in maze.exits:
        return [state.position]

    owns_executor = executor is None
    if executor is None:
        executor = ThreadPoolExecutor(
            max_workers=max(1, min(max_workers, MAX_BRANCHING)),
            thread_name_prefix="maze-search",
        )

    seen: Optional[set[StateFingerprint]] = None
    if global_dedup:
        seen = {state.fingerprint()}

    solutions: SimpleQueue = SimpleQueue()
    continuations: SimpleQueue = SimpleQueue()
    queue: deque[History] = deque([(state,)])
    expanded = 0

    try:
        while queue:
            history = queue.popleft()
            expanded += 1

            futures = [
                executor.submit(
                    _expand_edge, history, target, maze.exits, solutions, continuations
                )
                for target in candidate_moves(maze, history[-1].position)
            ]
            done, _ = wait(futures)
            for future in done:
                # Re-raise anything a task raised.
                future.result()

            if not solutions.empty():
                logger.debug(f"Parallel search solved after {expanded} expansions")
                return _positions(solutions.get())

            while not continuations.empty():
                new_history = continuations.get()
                if _first_visit(seen, new_history[-1]):
                    queue.append(new_history)
    finally:
        if owns_executor:
            executor.shutdown(wait=True)

    logger.debug(f"Parallel search exhausted after {expanded} expansions")
    return None


def find_shortest_path(
    maze: "Maze",
    state: SearchState,
    strategy: SearchStrategy = SearchStrategy.PARALLEL,
    *,
    global_dedup: bool = False,
    max_workers: int = MAX_BRANCHING,
) -> Optional[list[Position]]:
    """Run the engine selected by strategy."""
    if strategy == SearchStrategy.SEQUENTIAL:
        return search_sequential(maze, state, global_dedup=global_dedup)
    return search_parallel(
        maze, state, global_dedup=global_dedup, max_workers=max_workers
    )


@dataclass
class SearchTimings:
    """Wall-clock comparison of both engines on the same input."""
    sequential_seconds: float
    parallel_seconds: float
    sequential_length: Optional[int]
    parallel_length: Optional[int]

    @property
    def same_length(self) -> bool:
        return self.sequential_length == self.parallel_length

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "sequential_seconds": self.sequential_seconds,
            "parallel_seconds": self.parallel_seconds,
            "sequential_length": self.sequential_length,
            "parallel_length": self.parallel_length,
            "same_length": self.same_length,
        }


def compare_search_times(
    maze: "Maze",
    state: SearchState,
    repeat: int = 1,
    *,
    global_dedup: bool = False,
) -> SearchTimings:
    """
    Time the sequential and parallel engines on copies of the same state.

    Each engine runs repeat times; the best time is kept.
    """
    if repeat < 1:
        raise ValueError("repeat must be at least 1")

    def timed(run) -> tuple[float, Optional[list[Position]]]:
        best = float("inf")
        path = None
        for _ in range(repeat):
            start = time.perf_counter()
            path = run(maze, state.copy(), global_dedup=global_dedup)
            best = min(best, time.perf_counter() - start)
        return best, path

    sequential_seconds, sequential_path = timed(search_sequential)
    parallel_seconds, parallel_path = timed(search_parallel)

    timings = SearchTimings(
        sequential_seconds=sequential_seconds,
        parallel_seconds=parallel_seconds,
        sequential_length=len(sequential_path) if sequential_path else None,
        parallel_length=len(parallel_path) if parallel_path else None,
    )
    logger.info(f"Sequential time taken: {timings.sequential_seconds:.6f}s")
    logger.info(f"Parallel time taken: {timings.parallel_seconds:.6f}s")
    return timings
