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
Custom Exceptions Module.

A centralized module for the exceptions raised by the Geode dataset facade.
Every failure reported by GDAL is translated into one of these classes so
callers only need to catch `GeodeError` (or one of its subclasses).
"""
from typing import Optional


class GeodeError(Exception):
    """Base exception for all Geode errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class DatasetOpenFailedError(GeodeError):
    """Raised when GDAL cannot open a dataset."""
    pass


class DatasetClosedError(GeodeError):
    """Raised when an operation is attempted on a released dataset handle."""
    pass


class InvalidBandError(GeodeError):
    """Raised for a band index outside [1, band_count]."""

    def __init__(self, band: int, message: str = ""):
        super().__init__(message or f"Invalid band index: {band}")
        self.band = band


class DimensionMismatchError(GeodeError):
    """Raised when a write buffer does not match the declared or actual band size."""
    pass


class MetadataOperationFailedError(GeodeError):
    """Raised when a metadata item cannot be set."""

    def __init__(self, message: str = "", key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class GeotransformOperationFailedError(GeodeError):
    """Raised when a geotransform cannot be set."""
    pass


class ReprojectionError(GeodeError):
    """Raised when a dataset cannot be reprojected."""
    pass


class GdalError(GeodeError):
    """
    A non-success status reported by GDAL.

    Attributes:
        code: The CPLErr class of the failure (e.g. gdal.CE_Failure).
        error_no: The CPLE error number, when GDAL reported one.
    """

    def __init__(self, code: int, message: str = "", error_no: int = 0):
        super().__init__(message or f"GDAL error (code {code})")
        self.code = code
        self.error_no = error_no


class WriteFailedError(GdalError):
    """Raised when GDAL fails to write a raster buffer."""
    pass


class StatisticsComputationFailedError(GdalError):
    """Raised when GDAL fails to compute band statistics."""
    pass
