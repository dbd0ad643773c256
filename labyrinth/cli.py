#!/usr/bin/env python3
"""
Command line tools for the keyed labyrinth.

Maze files may be raw binary (.bin) or bit text (.txt). Dimensions and the
start cell come from the usual settings (MAZE_ROWS, MAZE_COLS, START_ROW,
START_COL).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import uvicorn

from labyrinth.config import get_settings
from labyrinth.core.converter import bytes_to_text, convert_txt_to_bin
from labyrinth.core.errors import MazeParseError, MazeValidationError
from labyrinth.core.maze_parser import ParsedMaze, encode_maze, load_maze_file
from labyrinth.core.search import SearchStrategy, compare_search_times
from labyrinth.core.state import SearchState


def _load(path: str) -> ParsedMaze:
    settings = get_settings()
    return load_maze_file(
        path,
        rows=settings.maze_rows,
        cols=settings.maze_cols,
        start=settings.start,
        **settings.maze_options,
    )


def cmd_convert(args: argparse.Namespace) -> int:
    written = convert_txt_to_bin(args.source, args.output)
    print(json.dumps({"output": args.output, "bytes": written}))
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    maze = _load(args.maze_file).maze
    if args.bits:
        print(bytes_to_text(encode_maze(maze)))
    else:
        print(maze.describe())
    return 0


def cmd_info(args: argparse.Namespace) -> int:
    print(json.dumps(_load(args.maze_file).to_dict()))
    return 0


def cmd_solve(args: argparse.Namespace) -> int:
    maze = _load(args.maze_file).maze
    if args.strategy:
        maze.strategy = SearchStrategy(args.strategy)

    path = maze.get_shortest_path()
    print(json.dumps({
        "strategy": maze.strategy.value,
        "found": path is not None,
        "length": len(path) if path is not None else None,
        "path": [list(p) for p in path] if path is not None else None,
    }))
    return 0 if path is not None else 2


def cmd_benchmark(args: argparse.Namespace) -> int:
    maze = _load(args.maze_file).maze
    timings = compare_search_times(
        maze,
        SearchState.create_initial(maze),
        repeat=args.repeat,
        global_dedup=maze.global_dedup,
    )
    print(json.dumps(timings.to_dict()))
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Decode a maze and write it back out, as bit text when the output ends in .txt."""
    data = encode_maze(_load(args.maze_file).maze)
    output = Path(args.output)
    if output.suffix == ".txt":
        output.write_text(bytes_to_text(data) + "\n", encoding="utf-8")
    else:
        output.write_bytes(data)
    print(json.dumps({"output": args.output, "bytes": len(data)}))
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "labyrinth.main:app",
        host=args.host,
        port=args.port,
        log_level=get_settings().log_level.lower(),
    )
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="labyrinth",
        description="Solve, inspect and serve mazes with keys and locked doors.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    convert = commands.add_parser("convert", help="Pack a bit-text maze file into binary")
    convert.add_argument("source", help="Bit-text maze file")
    convert.add_argument("output", help="Binary file to write")
    convert.set_defaults(handler=cmd_convert)

    show = commands.add_parser("show", help="Print every cell of a maze")
    show.add_argument("maze_file")
    show.add_argument(
        "--bits",
        action="store_true",
        help="Print the encoded maze as bit text instead",
    )
    show.set_defaults(handler=cmd_show)

    info = commands.add_parser("info", help="Print maze metadata as JSON")
    info.add_argument("maze_file")
    info.set_defaults(handler=cmd_info)

    solve = commands.add_parser("solve", help="Find the shortest path to an exit")
    solve.add_argument("maze_file")
    solve.add_argument(
        "--strategy",
        choices=[strategy.value for strategy in SearchStrategy],
        help="Search engine (defaults to the configured one)",
    )
    solve.set_defaults(handler=cmd_solve)

    benchmark = commands.add_parser("benchmark", help="Time both search engines")
    benchmark.add_argument("maze_file")
    benchmark.add_argument("--repeat", type=int, default=1, help="Runs per engine")
    benchmark.set_defaults(handler=cmd_benchmark)

    export = commands.add_parser("export", help="Re-encode a maze as .bin or .txt")
    export.add_argument("maze_file")
    export.add_argument("output", help="File to write; a .txt suffix writes bit text")
    export.set_defaults(handler=cmd_export)

    serve = commands.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.set_defaults(handler=cmd_serve)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    try:
        return args.handler(args)
    except (FileNotFoundError, MazeParseError, MazeValidationError, ValueError) as e:
        print(json.dumps({"error": f"{type(e).__name__}: {e}"}), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
