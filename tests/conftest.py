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
Pytest configuration and shared fixtures for the Geode test suite.

Fixtures that return paths write GeoTIFFs into pytest's per-test `tmp_path`,
so every test gets fresh files it may modify.
"""

import numpy as np
import pytest
from osgeo import osr

# pythonpath is configured in pyproject.toml to include project root
from tests.fixtures.mock_raster_factory import MockRaster
from geode.utils.config_loader import config


# =============================================================================
# Session and module fixtures
# =============================================================================

@pytest.fixture(scope="module")
def sample_wkt_geographic():
    """WKT string for WGS 84 geographic coordinate system (EPSG:4326)."""
    srs = osr.SpatialReference()
    srs.ImportFromEPSG(4326)
    return srs.ExportToWkt()


@pytest.fixture(autouse=True)
def reset_config():
    """Restore the packaged configuration after each test."""
    yield
    config.reload()


# =============================================================================
# Raster fixtures
# =============================================================================

@pytest.fixture
def small_raster_path(tmp_path):
    """
    A 2x2 single-band Float32 GeoTIFF holding [1, 2, 3, 4].

    Returns:
        Path: Path to the GeoTIFF
    """
    mock = MockRaster(
        pixel_data=np.array([[1.0, 2.0], [3.0, 4.0]], dtype=np.float32),
        geo_transform=(10.0, 1.0, 0.0, 20.0, 0.0, -1.0),
        metadata={'SENSOR': 'TEST', 'AREA_OR_POINT': 'Area'},
    )
    return mock.save_to_file(tmp_path / "small.tif")


@pytest.fixture
def constant_raster_path(tmp_path):
    """A 4x3 single-band Float32 GeoTIFF where every sample is 7.5."""
    mock = MockRaster(pixel_data=np.full((3, 4), 7.5, dtype=np.float32))
    return mock.save_to_file(tmp_path / "constant.tif")


@pytest.fixture
def multiband_raster_path(tmp_path):
    """An 8x6 three-band Float32 GeoTIFF with distinct values per band."""
    mock = MockRaster(width=8, height=6, bands=3)
    return mock.save_to_file(tmp_path / "multiband.tif")


@pytest.fixture
def geographic_raster_path(tmp_path):
    """A 20x20 EPSG:4326 GeoTIFF around (10E, 50N) with 0.01 degree pixels."""
    mock = MockRaster(
        width=20,
        height=20,
        crs='EPSG:4326',
        geo_transform=(10.0, 0.01, 0.0, 50.0, 0.0, -0.01),
        pixel_data=np.full((20, 20), 42.0, dtype=np.float32),
    )
    return mock.save_to_file(tmp_path / "geographic.tif")


@pytest.fixture
def unreferenced_raster_path(tmp_path):
    """A 4x4 GeoTIFF with neither a projection nor a geotransform."""
    mock = MockRaster(width=4, height=4, crs=None, georeferenced=False)
    return mock.save_to_file(tmp_path / "unreferenced.tif")


@pytest.fixture
def nodata_raster_path(tmp_path):
    """A 3x3 GeoTIFF whose every sample equals its NoData value."""
    mock = MockRaster(
        pixel_data=np.full((3, 3), -9999.0, dtype=np.float32),
        nodata_value=-9999.0,
    )
    return mock.save_to_file(tmp_path / "all_nodata.tif")
