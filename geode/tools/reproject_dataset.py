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
Reprojection Tool for Geode.

This module powers the 'reproject' command: open a raster, reproject it into
a target spatial reference in memory, and save the result with a GDAL driver.
"""

import logging
from pathlib import Path
from geode.utils.gdal_dataset import GdalDataset
from geode.utils.script_arguments import ReprojectArguments

logger = logging.getLogger(__name__)


def reproject_dataset(args: ReprojectArguments) -> Path:
    """
    Reproject `args.input_path` to `args.target_srs` and write `args.output_path`.

    Returns:
        The output path.
    """
    logger.info(f"Reprojecting {args.input_path} to {args.target_srs} ({args.resample_alg})")
    output_path = Path(args.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with GdalDataset(args.input_path, update=False) as source:
        with source.reproject(args.target_srs, resample_alg=args.resample_alg,
                              max_error=args.max_error) as reprojected:
            reprojected.save_as(output_path, driver_name=args.driver,
                                options=args.creation_options)
            logger.info(f"Output size: {reprojected.x_size} x {reprojected.y_size}")
    return output_path
