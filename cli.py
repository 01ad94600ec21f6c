#!/usr/bin/env python
"""
Command-line interface for Overpass Tiles

Usage:
    python cli.py fetch --bbox 51.50 -0.13 51.52 -0.11 --output result.json
    python cli.py tiles --bbox 51.50 -0.13 51.52 -0.11 --exclude 51.505 -0.125 51.515 -0.115
"""

import os
import copy
import sys
import json
import argparse

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from overpass_tiles.config import get_config, validate_config
from overpass_tiles.exceptions import OverpassError
from overpass_tiles.export import export_result, export_tiles
from overpass_tiles.geometry import Box
from overpass_tiles.osm import OverpassCollector


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def parse_box(values):
    """Build a Box from [s, w, n, e]; None passes through"""
    if values is None:
        return None
    s, w, n, e = values
    return Box(s=s, w=w, n=n, e=e)


def apply_overrides(args):
    """Apply command line overrides to a copy of the global config and validate it"""
    config = copy.deepcopy(get_config())
    if getattr(args, "tile_size", None):
        config.tiling.max_tile_lat, config.tiling.max_tile_lon = args.tile_size
    if getattr(args, "types", None):
        config.tiling.element_types = list(args.types)
    if getattr(args, "url", None):
        config.api.overpass_url = args.url
    validate_config(config)
    return config


def cmd_fetch(args):
    """Fetch all elements of a region and write them as JSON"""
    setup_logging(args.verbose)

    try:
        config = apply_overrides(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    bounds = parse_box(args.bbox)
    exclude = parse_box(args.exclude)
    collector = OverpassCollector(cache_dir=args.cache_dir, config=config)

    try:
        tiles = collector.plan_tiles(bounds, exclude)
        result = collector.fetch(bounds, exclude=exclude)
    except OverpassError as e:
        logger.error(f"Failed to fetch {bounds}: {e}")
        return 1

    export = export_result(result, tiles=len(tiles))
    if args.output:
        os.makedirs(os.path.dirname(args.output) or ".", exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(export.model_dump(), f, indent=2, ensure_ascii=False)
        logger.info(f"✓ Saved: {args.output}")
    else:
        print(json.dumps(export.summary.model_dump(), indent=2))

    return 0


def cmd_tiles(args):
    """Print the tiles a fetch would request"""
    setup_logging(args.verbose)

    try:
        config = apply_overrides(args)
    except ValueError as e:
        logger.error(str(e))
        return 1

    bounds = parse_box(args.bbox)
    collector = OverpassCollector(config=config)
    tiles = collector.plan_tiles(bounds, parse_box(args.exclude))

    logger.info(f"{len(tiles)} tiles for {bounds}")
    print(json.dumps(export_tiles(bounds, tiles).model_dump(), indent=2))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Overpass Tiles CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Fetch a region:
    python cli.py fetch --bbox 51.50 -0.13 51.52 -0.11 --output result.json

  Fetch only what is missing around an already fetched box:
    python cli.py fetch --bbox 51.50 -0.13 51.52 -0.11 --exclude 51.505 -0.125 51.515 -0.115

  Show tiles:
    python cli.py tiles --bbox 51.50 -0.13 51.52 -0.11 --tile-size 0.01 0.01
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    def add_region_arguments(sub):
        sub.add_argument("--bbox", type=float, nargs=4, required=True, metavar=("S", "W", "N", "E"),
                         help="Region to fetch")
        sub.add_argument("--exclude", type=float, nargs=4, metavar=("S", "W", "N", "E"),
                         help="Already fetched box, only the remainder is requested")
        sub.add_argument("--tile-size", type=float, nargs=2, metavar=("LAT", "LON"),
                         help="Maximum tile extent in degrees")

    # Fetch command
    fetch_parser = subparsers.add_parser("fetch", help="Fetch elements for a region")
    add_region_arguments(fetch_parser)
    fetch_parser.add_argument("--types", nargs="+", choices=["node", "way", "relation"],
                              help="Element types to request")
    fetch_parser.add_argument("--url", help="Overpass interpreter URL")
    fetch_parser.add_argument("--cache-dir", help="Directory for cached responses")
    fetch_parser.add_argument("--output", "-o", help="Output JSON file (summary on stdout if omitted)")
    fetch_parser.set_defaults(func=cmd_fetch)

    # Tiles command
    tiles_parser = subparsers.add_parser("tiles", help="Show the tiles for a region")
    add_region_arguments(tiles_parser)
    tiles_parser.set_defaults(func=cmd_tiles)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
