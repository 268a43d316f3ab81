"""Overworld CLI entry point.

Provides subcommands for running the zone API server and for previewing a
generated neighborhood as colored ASCII in the terminal. Accepts
configuration via flags and environment variables, with optional .env
loading.

Run `python run.py --help` for details.
"""

import argparse
import os
import signal
import sys
from pathlib import Path
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        return (Path(__file__).resolve().parent / "VERSION").read_text(encoding="utf-8").strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()

GLYPHS = {
    "floor": ".",
    "wall": "#",
    "grass": ",",
    "shrubbery": '"',
    "rock": "o",
    "exit": "+",
    "water": "~",
    "food": "%",
    "note": "?",
    "axe": "a",
    "hammer": "h",
    "bomb": "b",
    "bishop_spear": "/",
    "sign": "S",
    "lion": "L",
    "squig": "Q",
    "multi_tile": "H",
    "port": "D",
}
ENEMY_GLYPH = "e"

_COLORS = {
    "#": Fore.WHITE,
    ",": Fore.GREEN,
    '"': Fore.GREEN + Style.BRIGHT,
    "o": Fore.YELLOW,
    "+": Fore.CYAN + Style.BRIGHT,
    "~": Fore.BLUE,
    "H": Fore.MAGENTA,
    "e": Fore.RED + Style.BRIGHT,
}


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Overworld zone server

    Serve the zone generation API or preview a generated neighborhood in the
    terminal. Configuration can be provided via CLI flags or environment
    variables. If both are present, CLI flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST              Bind address for the web server (default: 0.0.0.0)
          PORT              Port for the web server (default: 5000)
          WORLD_SEED        World seed (default: random)
          WORLD_SAVE_PATH   JSON save file to resume from and write on shutdown

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Preview the 3x3 zones around the origin with a fixed seed
          python run.py preview --seed 42

          # Preview further out and keep the generated world
          python run.py preview --x 20 --y -4 --radius 2 --save world.json
        """
    )

    parser = argparse.ArgumentParser(
        prog="Overworld",
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
        version=f"Overworld Zone Server {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the zone API web server",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Run the Flask zone API server",
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    preview_parser = subparsers.add_parser(
        "preview",
        help="Render generated zones as ASCII",
        formatter_class=argparse.RawTextHelpFormatter,
        description=dedent(
            """
            Generate the zones around a coordinate and print them stitched
            together, north at the top. Legend:
              #  wall   +  exit   o  rock   "  shrubbery   ,  grass
              ~  water  %  food   H  house  S  sign        e  enemy
            """
        ),
    )
    preview_parser.add_argument("--x", type=int, default=0, help="Center zone x (default: 0)")
    preview_parser.add_argument("--y", type=int, default=0, help="Center zone y (default: 0)")
    preview_parser.add_argument("--dim", type=int, default=0, help="Dimension (0 surface, 1 interior, 2 underground)")
    preview_parser.add_argument("--radius", type=int, default=1, help="Zones to show around the center (default: 1)")
    preview_parser.add_argument("--seed", type=int, default=None, help="World seed (default: env WORLD_SEED or random)")
    preview_parser.add_argument("--save", default=None, help="Write the generated world state to this JSON file")
    preview_parser.set_defaults(command="preview")

    args = parser.parse_args(argv)
    if not getattr(args, "command", None):
        args.command = "server"
    return args


def _paint(ch: str) -> str:
    color = _COLORS.get(ch)
    if not _COLOR_ENABLED or not color:
        return ch
    return f"{color}{ch}{Style.RESET_ALL}"


def render_zone(zone) -> list[str]:
    """Rows of glyphs (y down) for one zone, enemies drawn over their tiles."""
    size = zone.size
    enemies = {(s.x, s.y) for s in zone.enemy_seeds}
    rows = []
    for y in range(size):
        row = []
        for x in range(size):
            ch = ENEMY_GLYPH if (x, y) in enemies else GLYPHS.get(zone.grid[x][y].kind, "?")
            row.append(_paint(ch))
        rows.append("".join(row))
    return rows


def render_region(world, center, radius: int) -> str:
    from overworld.world import ZoneCoordinate

    blocks = []
    for zy in range(center.y - radius, center.y + radius + 1):
        zones = [
            render_zone(world.generate_zone(ZoneCoordinate(zx, zy, center.dimension)))
            for zx in range(center.x - radius, center.x + radius + 1)
        ]
        blocks.append("\n".join(" ".join(parts) for parts in zip(*zones)))
    return "\n\n".join(blocks)


def run_preview(args) -> int:
    from overworld.logging_utils import log
    from overworld.world import WorldConfig, WorldState, ZoneCoordinate, tier_for

    seed = args.seed
    if seed is None and os.getenv("WORLD_SEED"):
        seed = int(os.environ["WORLD_SEED"])
    world = WorldState(WorldConfig.from_env(seed=seed))
    center = ZoneCoordinate(args.x, args.y, args.dim)
    radius = max(0, args.radius)
    title = f"Seed {world.config.seed}  center {center.key()}  tier {tier_for(center).value}"
    print(f"{Fore.CYAN}{Style.BRIGHT}{title}{Style.RESET_ALL}" if _COLOR_ENABLED else title)
    print(render_region(world, center, radius))
    if args.save:
        world.save(args.save)
        log.info(event="world_saved", path=args.save, zones=len(world.store))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "preview":
        return run_preview(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoint only after environment is ready
    from overworld.logging_utils import log
    from overworld.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Overworld Zone Server{Style.RESET_ALL}" if _COLOR_ENABLED else "Overworld Zone Server"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Seed:'):12} {value(os.getenv('WORLD_SEED') or 'random')}",
        f"  {label('Save file:'):12} {value(os.getenv('WORLD_SAVE_PATH') or 'none')}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
