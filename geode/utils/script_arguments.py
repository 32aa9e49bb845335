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
Dataclass-based Argument Models for Geode Tools.

This module defines strongly-typed dataclasses for parsing and validating the
command-line arguments for each tool (`info`, `reproject`). It uses
`__post_init__` for validation and resolving defaults from the configuration,
ensuring that the tools receive clean and validated inputs.

Classes:
    BaseArguments: A base dataclass for common script arguments.
    InfoArguments: Arguments for the describe_dataset tool.
    ReprojectArguments: Arguments for the reproject_dataset tool.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional
from geode.utils.config_loader import config
from geode.utils.srs_logic import RESAMPLE_ALG_MAP

logger = logging.getLogger(__name__)

@dataclass
class BaseArguments:
    """A base dataclass for common script arguments."""
    input_path: Optional[Path] = None
    output_path: Optional[Path] = None
    log_file: Optional[Path] = None
    verbose: bool = False

    def __post_init__(self):
        """Coerce path-like arguments to Path objects."""
        if self.input_path and isinstance(self.input_path, str):
            self.input_path = Path(self.input_path)
        if self.output_path and isinstance(self.output_path, str):
            self.output_path = Path(self.output_path)
        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)

    def handle_error(self, message: str):
        """Logs an error and raises ValueError."""
        logger.error(message)
        raise ValueError(message)

@dataclass
class InfoArguments(BaseArguments):
    """Arguments for the describe_dataset tool."""
    bands: Optional[List[int]] = None
    approx_ok: Optional[bool] = None
    json_output: bool = False

    def __post_init__(self):
        """Validation for describe_dataset arguments."""
        super().__post_init__()
        try:
            self._validate_info()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_info(self):
        if self.input_path is None:
            raise ValueError("The 'input_path' argument is required.")
        if self.bands is not None and any(b < 1 for b in self.bands):
            raise ValueError(f"Band indices are 1-based, got {self.bands}")
        if self.approx_ok is None:
            self.approx_ok = bool(config.get("statistics.approx_ok", True))

@dataclass
class ReprojectArguments(BaseArguments):
    """Arguments for the reproject_dataset tool."""
    target_srs: Optional[str] = None
    resample_alg: Optional[str] = None
    max_error: Optional[float] = None
    driver: str = 'GTiff'
    creation_options: Optional[List[str]] = None
    overwrite: bool = False

    def __post_init__(self):
        """Validation and default resolution for reprojection arguments."""
        super().__post_init__()
        try:
            self._validate_reproject()
            self._resolve_defaults()
        except ValueError as e:
            self.handle_error(str(e))

    def _validate_reproject(self):
        if self.input_path is None or self.output_path is None:
            raise ValueError("Both 'input_path' and 'output_path' are required.")
        if not self.input_path.exists():
            raise ValueError(f"Input file not found: {self.input_path}")
        if self.output_path.exists() and not self.overwrite:
            raise ValueError(f"Output file already exists: {self.output_path}")
        if not self.target_srs:
            raise ValueError("The 'target_srs' argument is required.")
        if self.resample_alg and self.resample_alg.lower() not in RESAMPLE_ALG_MAP:
            raise ValueError(f"Unknown resampling algorithm: {self.resample_alg}")

    def _resolve_defaults(self):
        if self.resample_alg is None:
            self.resample_alg = config.get("reproject.resample_alg", "nearest")
        if self.max_error is None:
            self.max_error = float(config.get("reproject.max_error", 0.125))
        if self.creation_options is None:
            self.creation_options = []
