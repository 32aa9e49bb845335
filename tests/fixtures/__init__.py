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
Test fixtures and mock data factories for Geode tests.

This package contains:
- MockRaster: Factory for creating in-memory or on-disk test rasters
"""

from tests.fixtures.mock_raster_factory import MockRaster

__all__ = ['MockRaster']
