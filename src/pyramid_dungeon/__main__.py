from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from . import __version__
from .errors import TopologyError
from .logging_config import configure_logging
from .settings import TopologySettings
from .topology import DungeonTopology, describe, signature


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    # stdout is reserved for the JSON report
    configure_logging(level, stream=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyramid-dungeon",
        description="Generate a pyramid dungeon room graph and print it as JSON",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--seed", type=int, default=None, help="Generation seed (random if omitted)")
    parser.add_argument("--side", dest="grid_side_length", type=int, default=None, help="Rooms per grid side")
    parser.add_argument("--cell-size", dest="room_cell_size", type=int, default=None, help="Room size in tiles")
    parser.add_argument("--padding", dest="border_padding", type=int, default=None, help="World border padding")
    parser.add_argument("--depth", dest="decoy_depth", type=int, default=None, help="Decoy branch generations")
    parser.add_argument(
        "--settings",
        dest="settings_path",
        type=Path,
        default=None,
        help="Path to a YAML file overriding the default generation settings.",
    )
    parser.add_argument("--signature", action="store_true", help="Print only the topology signature")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        settings = TopologySettings.load(
            args.settings_path,
            seed=args.seed,
            grid_side_length=args.grid_side_length,
            room_cell_size=args.room_cell_size,
            border_padding=args.border_padding,
            decoy_depth=args.decoy_depth,
        )
        topology = DungeonTopology.from_settings(settings)
    except TopologyError as exc:
        logging.getLogger(__name__).error("Generation failed: %s", exc)
        return 1

    if args.signature:
        print(signature(topology))
    else:
        print(json.dumps(describe(topology), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
