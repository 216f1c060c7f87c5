#!/usr/bin/env python
"""
Command-line interface for the street gender pipeline

Usage:
    python cli.py overpass --city belgium/brussels
    python cli.py wikidata --city belgium/brussels
    python cli.py geojson --city belgium/brussels
    python cli.py all --city belgium/brussels
"""

import os
import sys
import argparse
from dataclasses import replace

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from loguru import logger
from streetgender.config import get_config
from streetgender.pipeline import GeoJSONPipeline


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def build_pipeline(args) -> GeoJSONPipeline:
    config = get_config()
    overrides = {}
    if args.data_dir:
        overrides["data_dir"] = args.data_dir
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if overrides:
        config = replace(config, **overrides)
    return GeoJSONPipeline(args.city, config=config)


def cmd_overpass(args):
    """Download named streets from Overpass"""
    build_pipeline(args).fetch_overpass(refresh=args.refresh)
    return 0


def cmd_wikidata(args):
    """Download Wikidata entities referenced by the streets"""
    build_pipeline(args).fetch_wikidata()
    return 0


def cmd_geojson(args):
    """Generate relations.geojson and ways.geojson"""
    pipeline = build_pipeline(args)
    collections = pipeline.run()
    for kind, path in pipeline.save(collections).items():
        logger.info(f"✓ Generated {kind}s: {path}")
    return 0


def cmd_all(args):
    """Run every stage in order"""
    pipeline = build_pipeline(args)
    pipeline.fetch_overpass(refresh=args.refresh)
    pipeline.fetch_wikidata()
    pipeline.save(pipeline.run())
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Street gender GeoJSON generator CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Download streets, then their Wikidata entities:
    python cli.py overpass --city belgium/brussels
    python cli.py wikidata --city belgium/brussels

  Generate GeoJSON from downloaded data:
    python cli.py geojson --city belgium/brussels
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    commands = [
        ("overpass", "Download streets from Overpass", cmd_overpass),
        ("wikidata", "Download Wikidata entities", cmd_wikidata),
        ("geojson", "Generate GeoJSON files", cmd_geojson),
        ("all", "Run all stages", cmd_all),
    ]
    for name, help_text, func in commands:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--city", "-c", required=True, help="City directory, e.g. belgium/brussels")
        sub.add_argument("--data-dir", help="Directory holding city configuration")
        sub.add_argument("--output-dir", help="Directory for downloaded and generated files")
        if name in ("overpass", "all"):
            sub.add_argument("--refresh", action="store_true", help="Re-download cached Overpass data")
        sub.set_defaults(func=func)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.verbose)

    try:
        return args.func(args)
    except Exception as e:
        logger.error(f"{e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
