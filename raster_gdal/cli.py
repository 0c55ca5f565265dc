#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line entry point for the GDAL raster bindings.

Sub-commands print raster structure, metadata, subdatasets and reference
systems, or export the cells of a raster as point/polygon WKT.
"""
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from raster_gdal import __version__
from raster_gdal.core.config import DEFAULT_OUTPUT_DIR, load_config_file
from raster_gdal.core.exceptions import RasterGdalError
from raster_gdal.core.logging_config import setup_logging, get_module_logger

# Initialize logger
logger = get_module_logger(__name__)


def cell_indices(value: str) -> List[int]:
    """Parse a comma-separated list of 1-based cell indices."""
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected comma-separated integers, got '{value}'")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input", "-i",
        required=True,
        help="Path to input raster dataset"
    )

    parser.add_argument(
        "--open-option", "-oo",
        action="append",
        default=[],
        dest="options",
        help="GDAL open option KEY=VALUE (repeatable)"
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Inspect GDAL rasters and convert their cells to geometries."
    )

    parser.add_argument(
        "--config", "-c",
        help="Path to custom YAML configuration file"
    )

    parser.add_argument(
        "--log-level", "-l",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Logging level (default: from configuration, INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"raster-gdal v{__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to execute")

    info_parser = subparsers.add_parser("info", help="Print raster structure")
    _add_common_arguments(info_parser)
    info_parser.add_argument(
        "--driver", "-d",
        help="GDAL short driver name (default: auto-detect)"
    )

    metadata_parser = subparsers.add_parser("metadata", help="Print or export dataset metadata")
    _add_common_arguments(metadata_parser)
    metadata_parser.add_argument(
        "--domain",
        help="Metadata domain (default: the default domain)"
    )
    metadata_parser.add_argument(
        "--item",
        help="Single metadata item to retrieve"
    )
    metadata_parser.add_argument(
        "--list-domains",
        action="store_true",
        help="List metadata domain names instead"
    )
    metadata_parser.add_argument(
        "--output", "-o",
        help="Save parsed metadata to this file"
    )
    metadata_parser.add_argument(
        "--format",
        choices=["json", "yaml"],
        default=None,
        help="Output format (default: from configuration, json)"
    )

    subdatasets_parser = subparsers.add_parser("subdatasets", help="List subdatasets")
    _add_common_arguments(subdatasets_parser)
    subdatasets_parser.add_argument(
        "--descriptions",
        action="store_true",
        help="Print subdataset descriptions instead of names"
    )

    crs_parser = subparsers.add_parser("crs", help="Print the coordinate reference system")
    _add_common_arguments(crs_parser)

    cells_parser = subparsers.add_parser("cells", help="Export raster cells as WKT geometries")
    _add_common_arguments(cells_parser)
    cells_parser.add_argument(
        "--mode", "-m",
        choices=["points", "polygons"],
        default="polygons",
        help="Cell representation (default: polygons)"
    )
    cells_parser.add_argument(
        "--which", "-w",
        type=cell_indices,
        help="Comma-separated 1-based cell indices (default: all cells)"
    )
    cells_parser.add_argument(
        "--output", "-o",
        help="Path to output CSV file (default: <input_basename>_<mode>.csv)"
    )

    return parser.parse_args(argv)


def print_info(args: argparse.Namespace) -> int:
    from raster_gdal.core.io import read_gdal

    info = read_gdal(args.input, options=args.options, driver=args.driver, read_data=False)
    print(f"Driver: {info.driver}")
    print(f"Size: {info.cols} x {info.rows}, {info.bands} band(s) of {info.datatype}")
    print(f"Geotransform: {tuple(info.geotransform)}")
    print(f"CRS: {info.crs.to_string() if info.crs else None}")
    if info.bands:
        print(info.band_table().to_string(index=False))
    return 0


def print_metadata(args: argparse.Namespace) -> int:
    from raster_gdal.utils.metadata import DOMAIN_LIST, gdal_metadata

    if args.list_domains:
        for domain in gdal_metadata(args.input, DOMAIN_LIST, options=args.options):
            print(domain if domain else "(default)")
        return 0

    md = gdal_metadata(args.input, args.domain, args.item, options=args.options)
    if args.output:
        from raster_gdal.core.io import export_metadata
        export_metadata(md, args.output, args.format)
    else:
        for key, value in md.items():
            print(f"{key}: {value}")
    return 0


def print_subdatasets(args: argparse.Namespace) -> int:
    from raster_gdal.utils.metadata import gdal_subdatasets

    subdatasets = gdal_subdatasets(args.input, options=args.options, name=not args.descriptions)
    if not subdatasets:
        logger.info(f"{args.input} has no subdatasets")
    for value in subdatasets.values():
        print(value)
    return 0


def print_crs(args: argparse.Namespace) -> int:
    from raster_gdal.core.io import read_crs

    crs = read_crs(args.input, options=args.options)
    print(crs.to_wkt() if crs else "")
    return 0


def export_cells(args: argparse.Namespace) -> int:
    from raster_gdal.core.io import export_geometries, read_gdal
    from raster_gdal.geo.grid_geometry import dimensions_to_geometries

    if not args.output:
        input_path = Path(args.input)
        args.output = str(DEFAULT_OUTPUT_DIR / f"{input_path.stem}_{args.mode}.csv")

    info = read_gdal(args.input, options=args.options, read_data=False)
    cells = dimensions_to_geometries(info.dimensions(), args.mode, args.which)
    logger.info(f"Converted {len(cells)} cells of {args.input} to {args.mode}")

    export_geometries(cells.to_frame(), args.output)
    return 0


COMMANDS = {
    "info": print_info,
    "metadata": print_metadata,
    "subdatasets": print_subdatasets,
    "crs": print_crs,
    "cells": export_cells,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line interface.
    """
    args = parse_arguments(argv)

    if args.config:
        load_config_file(args.config)

    setup_logging(log_level=args.log_level)

    try:
        return COMMANDS[args.command](args)
    except RasterGdalError as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
