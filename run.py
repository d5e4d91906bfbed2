"""mazelevel CLI entry point.

Provides subcommands for generating a level to stdout (ASCII map or JSON)
and for running the HTTP level server. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from mazelevel import __version__

_color_init()


def _color_enabled() -> bool:
    # Disable colors if output is not a real terminal (e.g., during pytest capture)
    return sys.stdout.isatty()


_ASCII_COLORS = {
    "#": Fore.WHITE + Style.DIM,
    "P": Fore.GREEN + Style.BRIGHT,
    "D": Fore.YELLOW + Style.BRIGHT,
    "E": Fore.RED + Style.BRIGHT,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Maze Level Generator

    Generate a playable maze level (walls, floor, entrance, exit, player,
    door and enemies) or serve levels over HTTP. Configuration can be
    provided via CLI flags or environment variables. If both are present,
    CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          MAZE_WIDTH              Maze width in cells (default: 15)
          MAZE_HEIGHT             Maze height in cells (default: 15)
          MAZE_ENSURE_REACHABLE   Guarantee exit reachable from entrance (default: 1)
          MAZE_SEED               Seed (int or any string) for reproducible output
          HOST / PORT             Bind address for the server (default: 0.0.0.0:5000)

        Examples:
          # Print a random 15x15 level
          python run.py generate

          # Reproducible 10x10 level as JSON
          python run.py generate --width 10 --height 10 --seed 42 --json

          # Serve levels on port 8080
          python run.py server --port 8080
        """
    )

    parser = argparse.ArgumentParser(
        prog="mazelevel",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )

    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Maze Level Generator {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one level and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one level and print it as an ASCII map or JSON",
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Width in cells (default: env MAZE_WIDTH or 15)")
    gen_parser.add_argument("--height", type=int, default=None, help="Height in cells (default: env MAZE_HEIGHT or 15)")
    gen_parser.add_argument("--seed", default=None, help="Seed; integers are used as-is, other strings are hashed")
    gen_parser.add_argument(
        "--no-ensure-reachable",
        dest="ensure_reachable",
        action="store_false",
        default=None,
        help="Skip the entrance-to-exit reachability check and repair",
    )
    gen_parser.add_argument("--json", action="store_true", help="Print the level as JSON instead of ASCII")
    gen_parser.set_defaults(command="generate")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the HTTP level server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/level",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    # If no subcommand provided, default to generate
    if len(argv) == 0:
        argv = ["generate"]

    return parser.parse_args(argv)


def _colorize(ascii_map: str) -> str:
    out = []
    for ch in ascii_map:
        color = _ASCII_COLORS.get(ch)
        out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
    return "".join(out)


def run_generate(args: argparse.Namespace) -> int:
    from mazelevel.maze import MazeConfig, MazeError, MazeGenerator, coerce_seed

    try:
        config = MazeConfig.from_env(
            width=args.width,
            height=args.height,
            ensure_reachable=args.ensure_reachable,
            seed=coerce_seed(args.seed) if args.seed is not None else None,
        )
        gen = MazeGenerator(config)
        level = gen.generate()
    except MazeError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps({"seed": level.seed, "level": level.to_dict(), "metrics": gen.metrics}))
        return 0

    ascii_map = level.to_ascii()
    print(_colorize(ascii_map) if _color_enabled() else ascii_map)
    summary = (
        f"seed={level.seed} size={config.width}x{config.height} "
        f"player={level.player.pos} door={level.door.pos} enemies={len(level.enemies)}"
    )
    print(f"{Fore.CYAN}{summary}{Style.RESET_ALL}" if _color_enabled() else summary)
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if args.command is None:
        # Only global flags were given (e.g. --env-file)
        args = parse_args([*argv, "generate"])
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    if args.command == "server":
        from mazelevel.server import start_server

        host = args.host or os.getenv("HOST", "0.0.0.0")
        port = int(args.port or os.getenv("PORT", "5000"))
        start_server(host, port, args.debug)
        return 0
    return run_generate(args)


def main_entry() -> None:
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    main_entry()
