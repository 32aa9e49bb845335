#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ******************************************************************************
# Project: Geode
# Author: Eric Robeck <robeckgeo@gmail.com>
#
# Copyright (c) 2025, Eric Robeck
# Licensed under the MIT License
# ******************************************************************************

"""
Command-line interface for Geode.

This script provides the main entry point for the `geode` command,
parsing user arguments and dispatching them to the appropriate tool.
"""
import argparse
import logging
import sys
from pathlib import Path
from geode.utils.config_loader import config
from geode.utils.log_helpers import get_log_level, setup_logger, shutdown_logger
from geode.utils.script_arguments import InfoArguments, ReprojectArguments
from geode.utils.srs_logic import RESAMPLE_ALG_MAP

def str2bool(v):
    if isinstance(v, bool):
        return v
    if v.lower() in ('yes', 'true', 't', 'y', '1'):
        return True
    elif v.lower() in ('no', 'false', 'f', 'n', '0'):
        return False
    else:
        raise argparse.ArgumentTypeError('Boolean value expected.')

def positive_int(value: str) -> int:
    """Validate a 1-based band index."""
    try:
        ivalue = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Band index must be an integer, got '{value}'")
    if ivalue < 1:
        raise argparse.ArgumentTypeError(f"Band index must be 1 or greater, got '{ivalue}'")
    return ivalue

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Geode',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('-c', '--config', type=Path, dest='config_path', help='Path to a custom configuration file.')
    subparsers = parser.add_subparsers(dest='tool', help='Available tools')
    subparsers.required = True

    # --- Info Tool ---
    info_parser = subparsers.add_parser(
        'info',
        help='Report size, georeferencing, metadata and band statistics of a raster.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    info_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Path to the input raster.')
    info_parser.add_argument('-b', '--bands', type=positive_int, nargs='+', dest='bands', help='Bands to describe (default: all).')
    info_parser.add_argument('--approx', type=str2bool, default=None, dest='approx_ok', help='Allow approximate statistics (default: from config).')
    info_parser.add_argument('--json', action='store_true', dest='json_output', help='Print the report as JSON.')
    info_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    info_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    # --- Reproject Tool ---
    reproject_parser = subparsers.add_parser(
        'reproject',
        help='Reproject a raster into another spatial reference system.',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    reproject_parser.add_argument('-i', '--input', required=True, type=Path, dest='input_path', help='Path to the input raster.')
    reproject_parser.add_argument('-o', '--output', required=True, type=Path, dest='output_path', help='Path of the reprojected raster.')
    reproject_parser.add_argument('-s', '--target-srs', required=True, type=str, dest='target_srs', help="Target SRS (e.g. 'EPSG:3857', WKT or PROJ string).")
    reproject_parser.add_argument('-r', '--resample', type=str.lower, choices=sorted(RESAMPLE_ALG_MAP), dest='resample_alg', help='Resampling algorithm (default: from config).')
    reproject_parser.add_argument('-e', '--max-error', type=float, dest='max_error', help='Approximation error threshold in pixels (default: from config).')
    reproject_parser.add_argument('-d', '--driver', type=str, default='GTiff', dest='driver', help='GDAL driver for the output.')
    reproject_parser.add_argument('--co', type=str, action='append', dest='creation_options', help='Driver creation option NAME=VALUE (repeatable).')
    reproject_parser.add_argument('--overwrite', type=str2bool, default=False, dest='overwrite', help='Overwrite an existing output file.')
    reproject_parser.add_argument('--log-file', type=Path, dest='log_file', help='Path to a log file for debugging.')
    reproject_parser.add_argument('-v', '--verbose', action='store_true', dest='verbose', help='Enable verbose logging.')

    return parser

def main(argv=None):
    """
    Main function to parse arguments and call the appropriate tool.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    tool = args.tool
    args_dict = vars(args)
    args_dict.pop('tool', None)
    config_path = args_dict.pop('config_path', None)
    if config_path:
        config.reload(config_path)

    # --- Logger Setup ---
    log_level = logging.DEBUG if args.verbose else get_log_level(config.get('logging.level'))
    log_file = args.log_file or config.get('logging.file') or None
    # JSON reports own stdout; log messages go to stderr
    stream = sys.stderr if args_dict.get('json_output') else sys.stdout
    logger = setup_logger(log_file=str(log_file) if log_file else None, level=log_level, stream=stream)

    exit_code = 0
    try:
        if tool == 'info':
            from geode.tools.describe_dataset import describe_dataset
            describe_dataset(InfoArguments(**args_dict))
        elif tool == 'reproject':
            from geode.tools.reproject_dataset import reproject_dataset
            reproject_dataset(ReprojectArguments(**args_dict))
    except Exception as e:
        logger.error(f"An unexpected error occurred: {e}", exc_info=args.verbose)
        exit_code = 1
    finally:
        shutdown_logger(logger)
    if exit_code:
        sys.exit(exit_code)

if __name__ == "__main__":
    main()
