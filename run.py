"""cavegen CLI entry point.

Provides subcommands for running the cave API server and for generating a
single map straight to stdout. Accepts configuration via flags and
environment variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from cavegen import __version__

_color_init()

# Disable colors if output is not a real terminal (e.g., during pytest capture)
try:
    _COLOR_ENABLED = sys.stdout.isatty()
except (AttributeError, ValueError):  # pragma: no cover - detached stdout
    _COLOR_ENABLED = False

# Flag name -> GenerationConfig field
GENERATE_FIELDS = {
    "width": "width",
    "height": "height",
    "fill_percent": "fill_percent",
    "birth_limit": "birth_limit",
    "death_limit": "death_limit",
    "steps": "steps",
    "min_cave_size": "min_cave_size",
    "seed": "seed",
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    cavegen: cellular-automaton cave generator

    Run the HTTP API server or generate a single cave map to stdout.
    Configuration can be provided via CLI flags or environment variables.
    If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                                Bind address for the web server (default: 0.0.0.0)
          PORT                                Port for the web server (default: 5000)
          CAVEGEN_MAX_DIMENSION               Largest width/height the API accepts (default: 512)
          CAVEGEN_ENABLE_GENERATION_METRICS   Include metrics in API responses (default: 1)
          CAVEGEN_LOG_LEVEL                   debug | info | warn | error (default: info)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a reproducible 80x40 cave
          python run.py generate --width 80 --height 40 --seed 12345

          # Same cave as JSON (rows + metrics)
          python run.py generate --width 80 --height 40 --seed 12345 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="cavegen",
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
        version=f"cavegen {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Run the cave API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask server exposing /api/cave/*",
    )
    server_parser.add_argument(
        "--host",
        default=None,
        help="Host interface to bind (default: env HOST or 0.0.0.0)",
    )
    server_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: env PORT or 5000)",
    )
    server_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable Flask debug mode with verbose error pages",
    )
    server_parser.set_defaults(command="server")

    # generate subcommand
    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one cave map and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate a single cave and print it, one line per row.
            'W' marks wall and 'F' marks floor; use --json for rows plus metrics.
            Omitting --seed (or passing --random-seed) draws a fresh seed,
            which is reported on stderr so the map can be reproduced.
            """
        ),
    )
    gen_parser.add_argument("--width", type=int, default=None, help="Map width in cells (default: 200)")
    gen_parser.add_argument("--height", type=int, default=None, help="Map height in cells (default: 120)")
    gen_parser.add_argument(
        "--fill-percent", dest="fill_percent", type=int, default=None, help="Chance (0-100) a cell starts as wall"
    )
    gen_parser.add_argument("--birth-limit", dest="birth_limit", type=int, default=None, help="Floor->wall threshold (0-8)")
    gen_parser.add_argument("--death-limit", dest="death_limit", type=int, default=None, help="Wall->floor threshold (0-8)")
    gen_parser.add_argument("--steps", type=int, default=None, help="Automaton iterations (>= 0)")
    gen_parser.add_argument(
        "--min-cave-size", dest="min_cave_size", type=int, default=None, help="Smallest region kept (>= 1)"
    )
    gen_parser.add_argument("--seed", type=int, default=None, help="Seed; omit to draw one")
    gen_parser.add_argument(
        "--random-seed", dest="use_random_seed", action="store_true", help="Ignore --seed and draw a fresh seed"
    )
    gen_parser.add_argument("--json", dest="as_json", action="store_true", help="Emit JSON instead of text rows")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    args = parser.parse_args(argv)
    if args.command is None:
        args.command = "server"
    return args


def run_generate(args: argparse.Namespace) -> int:
    from cavegen.cave import Cave, ConfigError, GenerationConfig

    values = {field: getattr(args, flag) for flag, field in GENERATE_FIELDS.items() if getattr(args, flag) is not None}
    values["use_random_seed"] = bool(getattr(args, "use_random_seed", False))
    try:
        cave = Cave(GenerationConfig.from_mapping(values))
    except ConfigError as e:
        print(f"[ERROR] invalid configuration: {e}", file=sys.stderr)
        return 2
    if args.as_json:
        print(json.dumps(cave.map.to_dict({"seed": cave.seed, "metrics": cave.metrics}), indent=2))
    else:
        print(f"[INFO] seed={cave.seed}", file=sys.stderr)
        print("\n".join(cave.map.rows()))
    return 0


def main(argv: list[str]) -> int:
    # Load .env if requested, otherwise the default .env if present
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    # Resolve configuration from CLI flags or env vars
    env_host = os.getenv("HOST", "0.0.0.0")
    env_port = int(os.getenv("PORT", "5000"))
    host = getattr(args, "host", None) or env_host
    port = int(getattr(args, "port", None) or env_port)
    debug = bool(getattr(args, "debug", False))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from cavegen.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Cave Generator Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Cave Generator Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Debug:'):12} {value('YES' if debug else 'NO')}",
        divider,
        "",
    ]
    print("\n".join(lines))

    from cavegen.logging_utils import log

    log.info(event="startup", mode=mode, host=host, port=port)
    start_server(host=host, port=port, debug=debug)
    return 0


def _console_main() -> int:  # pragma: no cover - console_scripts shim
    return main(sys.argv[1:])


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
