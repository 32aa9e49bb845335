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
Unit tests for parsing GDAL 'KEY=VALUE' metadata lists.
"""

import pytest
from geode.utils.gdal_dataset import parse_metadata_entries


@pytest.mark.unit
class TestParseMetadataEntries:
    """Test parse_metadata_entries."""

    def test_well_formed_entries(self):
        entries = ["AREA_OR_POINT=Area", "SENSOR=TEST"]
        assert parse_metadata_entries(entries) == {"AREA_OR_POINT": "Area", "SENSOR": "TEST"}

    def test_none_yields_empty_dict(self):
        assert parse_metadata_entries(None) == {}

    def test_empty_list_yields_empty_dict(self):
        assert parse_metadata_entries([]) == {}

    def test_malformed_entries_dropped(self):
        entries = ["A=1", "B", "C=x=y", "=V", "K="]
        assert parse_metadata_entries(entries) == {"A": "1"}

    def test_empty_pieces_are_ignored(self):
        """Doubled separators collapse, matching a split that drops empty pieces."""
        assert parse_metadata_entries(["KEY==VALUE"]) == {"KEY": "VALUE"}

    def test_values_with_spaces_kept(self):
        assert parse_metadata_entries(["TITLE=A Digital Elevation Model"]) == {
            "TITLE": "A Digital Elevation Model"
        }

    def test_last_duplicate_wins(self):
        assert parse_metadata_entries(["K=1", "K=2"]) == {"K": "2"}
