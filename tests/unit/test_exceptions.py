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
Unit tests for the Geode exception hierarchy.
"""

import pytest
from osgeo import gdal
from geode.utils.exceptions import (
    DatasetClosedError,
    DatasetOpenFailedError,
    DimensionMismatchError,
    GdalError,
    GeodeError,
    GeotransformOperationFailedError,
    InvalidBandError,
    MetadataOperationFailedError,
    ReprojectionError,
    StatisticsComputationFailedError,
    WriteFailedError,
)


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test that every error can be caught as GeodeError."""

    @pytest.mark.parametrize("exc_cls", [
        DatasetOpenFailedError,
        DatasetClosedError,
        DimensionMismatchError,
        GeotransformOperationFailedError,
        ReprojectionError,
    ])
    def test_message_errors(self, exc_cls):
        err = exc_cls("something went wrong")
        assert isinstance(err, GeodeError)
        assert err.message == "something went wrong"
        assert str(err) == "something went wrong"

    @pytest.mark.parametrize("exc_cls", [WriteFailedError, StatisticsComputationFailedError])
    def test_gdal_status_errors(self, exc_cls):
        err = exc_cls(gdal.CE_Failure, "write failed", error_no=4)
        assert isinstance(err, GdalError)
        assert isinstance(err, GeodeError)
        assert err.code == gdal.CE_Failure
        assert err.error_no == 4


@pytest.mark.unit
class TestErrorAttributes:
    """Test the context carried by individual errors."""

    def test_invalid_band_carries_band(self):
        err = InvalidBandError(5)
        assert err.band == 5
        assert "5" in str(err)

    def test_invalid_band_custom_message(self):
        err = InvalidBandError(0, "Band 0 does not exist")
        assert err.message == "Band 0 does not exist"

    def test_metadata_error_carries_key(self):
        err = MetadataOperationFailedError("Failed to set 'SENSOR'", key="SENSOR")
        assert err.key == "SENSOR"

    def test_metadata_error_key_optional(self):
        assert MetadataOperationFailedError("failed").key is None

    def test_gdal_error_default_message(self):
        err = GdalError(gdal.CE_Fatal)
        assert err.code == gdal.CE_Fatal
        assert err.error_no == 0
        assert str(gdal.CE_Fatal) in err.message
