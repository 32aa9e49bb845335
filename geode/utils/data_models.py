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
Data Models for Geode.

This module defines the value types returned by the dataset facade. None of
them hold a reference to the GDAL dataset that produced them; they are plain
copies that stay valid after the dataset is closed.

Classes:
    BandInfo: Size and data type of a single raster band
    BandStatistics: Minimum, maximum, mean and standard deviation of a band
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BandInfo:
    """
    Size and data type of a raster band.

    Attributes:
        index: 1-based band index within the dataset
        x_size: Band width in pixels
        y_size: Band height in lines
        data_type: GDAL data type name (e.g., 'Float32', 'Byte')

    Example:
        >>> info = BandInfo(index=1, x_size=2, y_size=2, data_type='Float32')
        >>> info.pixel_count
        4
    """
    index: int
    x_size: int
    y_size: int
    data_type: str

    @property
    def pixel_count(self) -> int:
        """Number of samples in the full band extent."""
        return self.x_size * self.y_size


@dataclass(frozen=True)
class BandStatistics:
    """
    Statistics computed by GDAL for one band.

    Attributes:
        minimum: Minimum sample value
        maximum: Maximum sample value
        mean: Mean sample value
        std_dev: Population standard deviation

    Example:
        >>> stats = BandStatistics(minimum=1.0, maximum=4.0, mean=2.5, std_dev=1.118)
        >>> stats.as_tuple()
        (1.0, 4.0, 2.5, 1.118)
    """
    minimum: float
    maximum: float
    mean: float
    std_dev: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Return the statistics as a (min, max, mean, std_dev) tuple."""
        return (self.minimum, self.maximum, self.mean, self.std_dev)

    def to_dict(self) -> dict:
        return {
            'minimum': self.minimum,
            'maximum': self.maximum,
            'mean': self.mean,
            'std_dev': self.std_dev,
        }
