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
Configuration Management for Geode.

This module provides a singleton configuration manager (`Config`) that loads,
parses, and provides access to settings from the packaged `config.toml` file.
Values missing from the file fall back to built-in defaults, so the facade
always has a complete configuration.

Classes:
    Config: A singleton class for managing application-wide configuration.
"""
import copy
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.toml"


class Config:
    """Singleton configuration manager"""
    _instance = None
    _config: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._load_config(DEFAULT_CONFIG_PATH)
        return cls._instance

    def _load_config(self, config_path: Path):
        """Load configuration from a TOML file, layered over the defaults."""
        self._config = self._default_config()
        if not config_path.exists():
            logger.debug(f"No configuration file at {config_path}; using defaults.")
            return
        try:
            with open(config_path, "rb") as f:
                loaded = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Could not load {config_path}: {e}")
            return
        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(self._config.get(section), dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _default_config(self) -> Dict[str, Any]:
        """Default configuration if config.toml doesn't exist"""
        return copy.deepcopy({
            "dataset": {
                "access": "read_only"
            },
            "statistics": {
                "approx_ok": True
            },
            "reproject": {
                "resample_alg": "nearest",
                "max_error": 0.125
            },
            "logging": {
                "level": "INFO",
                "file": ""
            }
        })

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value using dot notation

        Args:
            key: Configuration key in dot notation (e.g., "reproject.resample_alg")
            default: Default value if key is not found

        Returns:
            Configuration value or default

        Example:
            >>> config.get("reproject.max_error")
            0.125
            >>> config.get("dataset.access")
            'read_only'
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """Get entire configuration section

        Args:
            section: Section name (e.g., "dataset", "reproject")

        Returns:
            Dictionary containing the section configuration
        """
        return self._config.get(section, {})

    def set(self, key: str, value: Any):
        """Set configuration value using dot notation

        Args:
            key: Configuration key in dot notation
            value: Value to set

        Note:
            This only modifies the in-memory configuration.
            Changes are not persisted to config.toml.
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def reload(self, config_path: Optional[Union[str, Path]] = None):
        """Reload configuration from config.toml, or from `config_path` if given"""
        self._load_config(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)

# Singleton instance
config = Config()
