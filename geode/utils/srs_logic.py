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
Spatial Reference System (SRS) Handling and Logic for Geode.

This module centralizes the SRS helpers used by reprojection: parsing user
input into an `osr.SpatialReference`, normalizing axis order, and resolving
resampling algorithm names to GDAL constants.
"""
import logging
from osgeo import gdal, osr
from typing import Dict, Optional

logger = logging.getLogger(__name__)

# Resampling algorithm name to GDAL constant
RESAMPLE_ALG_MAP: Dict[str, int] = {
    "nearest": gdal.GRA_NearestNeighbour,
    "bilinear": gdal.GRA_Bilinear,
    "cubic": gdal.GRA_Cubic,
    "cubicspline": gdal.GRA_CubicSpline,
    "lanczos": gdal.GRA_Lanczos,
    "average": gdal.GRA_Average,
    "mode": gdal.GRA_Mode,
    "max": gdal.GRA_Max,
    "min": gdal.GRA_Min,
    "med": gdal.GRA_Med,
    "q1": gdal.GRA_Q1,
    "q3": gdal.GRA_Q3,
    "sum": gdal.GRA_Sum,
    "rms": gdal.GRA_RMS,
}


def get_srs_from_user_input(srs_input: str) -> Optional[osr.SpatialReference]:
    """
    Creates an osr.SpatialReference object from various user inputs.

    Args:
        srs_input (str): The user input, which can be an EPSG code (e.g., "4326", "EPSG:4326"),
                         a WKT string, a PROJ string, or other formats recognized by GDAL.

    Returns:
        Optional[osr.SpatialReference]: A spatial reference object, or None if parsing fails.
    """
    if not srs_input or not srs_input.strip():
        return None
    srs_input = srs_input.strip()
    srs = osr.SpatialReference()
    srs_upper = srs_input.upper()
    logger.debug(f"Parsing user input SRS: {srs_input}")
    try:
        if srs_upper.startswith('EPSG:') and srs_upper[5:].isdigit():
            err = srs.ImportFromEPSG(int(srs_upper[5:]))
        elif srs_input.isdigit():
            err = srs.ImportFromEPSG(int(srs_input))
        else:
            err = srs.SetFromUserInput(srs_input)
        return srs if err == 0 else None
    except (RuntimeError, ValueError):
        return None


def srs_from_wkt(wkt: str) -> Optional[osr.SpatialReference]:
    """Build a spatial reference from a WKT string, or None if it does not parse."""
    if not wkt:
        return None
    srs = osr.SpatialReference()
    try:
        if srs.ImportFromWkt(wkt) != 0:
            return None
    except RuntimeError:
        return None
    return srs


def set_traditional_axis_order(srs: osr.SpatialReference) -> osr.SpatialReference:
    """
    Force x=easting/longitude, y=northing/latitude axis order on GDAL 3+.

    Geotransforms are always expressed in this order, so every SRS that takes
    part in a coordinate transformation must use it.
    """
    if int(gdal.VersionInfo('VERSION_NUM')[0]) >= 3:
        srs.SetAxisMappingStrategy(osr.OAMS_TRADITIONAL_GIS_ORDER)
    return srs


def get_resample_alg(name: str) -> int:
    """
    Resolve a resampling algorithm name to its GDAL constant.

    Raises:
        ValueError: If the name is not a known algorithm.
    """
    key = (name or "").strip().lower()
    if key == "near":
        key = "nearest"
    if key not in RESAMPLE_ALG_MAP:
        raise ValueError(
            f"Unknown resampling algorithm '{name}'. "
            f"Expected one of: {', '.join(sorted(RESAMPLE_ALG_MAP))}"
        )
    return RESAMPLE_ALG_MAP[key]
