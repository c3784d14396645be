"""Command line preview: generate a dungeon and print it as text."""

from __future__ import annotations

import argparse
import logging

from . import config
from .environment.connectivity import floor_regions
from .environment.generators import Dungeon


def _non_negative(value: str) -> int:
    count = int(value)
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {count}")
    return count


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="undercroft", description="Generate a rooms-and-corridors dungeon"
    )
    parser.add_argument(
        "--rooms",
        type=_non_negative,
        default=config.DEFAULT_ROOM_COUNT,
        help=f"Number of rooms to scatter (default: {config.DEFAULT_ROOM_COUNT})",
    )
    parser.add_argument(
        "--seed",
        type=str,
        default=config.RANDOM_SEED,
        help=f"Master seed (default: {config.RANDOM_SEED})",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Log every pipeline stage"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dungeon = Dungeon.generate(args.rooms, seed=args.seed)
    tile_map = dungeon.tile_map
    _, regions = floor_regions(tile_map)

    print(tile_map.to_text())
    print(
        f"seed={args.seed} rooms={len(dungeon.rooms)}/{args.rooms} "
        f"corridors={len(dungeon.corridors)} "
        f"size={tile_map.width}x{tile_map.height} "
        f"separation_passes={dungeon.separation_iterations} "
        f"floor_regions={regions}"
    )


if __name__ == "__main__":
    main()
