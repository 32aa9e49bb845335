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
Unit tests for the TOML configuration singleton.
"""

import pytest
from geode.utils.config_loader import DEFAULT_CONFIG_PATH, Config, config


@pytest.mark.unit
class TestConfig:
    """Test Config loading and access."""

    def test_singleton(self):
        assert Config() is config

    def test_packaged_config_exists(self):
        assert DEFAULT_CONFIG_PATH.name == "config.toml"
        assert DEFAULT_CONFIG_PATH.exists()

    def test_packaged_defaults(self):
        assert config.get("dataset.access") == "read_only"
        assert config.get("statistics.approx_ok") is True
        assert config.get("reproject.resample_alg") == "nearest"
        assert config.get("reproject.max_error") == pytest.approx(0.125)
        assert config.get("logging.level") == "INFO"

    def test_missing_key_returns_default(self):
        assert config.get("reproject.no_such_key") is None
        assert config.get("no_such_section.key", "fallback") == "fallback"

    def test_get_section(self):
        section = config.get_section("reproject")
        assert section["resample_alg"] == "nearest"
        assert config.get_section("no_such_section") == {}

    def test_set_in_memory(self):
        config.set("reproject.resample_alg", "bilinear")
        assert config.get("reproject.resample_alg") == "bilinear"

    def test_set_creates_sections(self):
        config.set("new.nested.key", 5)
        assert config.get("new.nested.key") == 5

    def test_reload_restores_file_values(self):
        config.set("dataset.access", "update")
        config.reload()
        assert config.get("dataset.access") == "read_only"

    def test_reload_custom_file_layers_over_defaults(self, tmp_path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[reproject]\nresample_alg = "cubic"\n')
        config.reload(custom)

        assert config.get("reproject.resample_alg") == "cubic"
        # Keys absent from the custom file keep their defaults
        assert config.get("reproject.max_error") == pytest.approx(0.125)
        assert config.get("dataset.access") == "read_only"

    def test_reload_missing_file_uses_defaults(self, tmp_path):
        config.reload(tmp_path / "missing.toml")
        assert config.get("statistics.approx_ok") is True

    def test_reload_invalid_toml_uses_defaults(self, tmp_path):
        broken = tmp_path / "broken.toml"
        broken.write_text("[reproject\nresample_alg = ")
        config.reload(broken)
        assert config.get("reproject.resample_alg") == "nearest"
