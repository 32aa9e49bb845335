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
Process-wide GDAL initialization.

Driver registration and the switch to exception-raising bindings happen once
per process, on first use. Later calls return immediately.
"""
import logging
import threading
from osgeo import gdal, osr

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_registered = False


def ensure_registered() -> None:
    """Register all GDAL drivers and enable binding exceptions, once."""
    global _registered
    if _registered:
        return
    with _lock:
        if _registered:
            return
        gdal.AllRegister()
        gdal.UseExceptions()
        osr.UseExceptions()
        _registered = True
        logger.debug(f"GDAL {gdal.VersionInfo('RELEASE_NAME')} registered "
                     f"with {gdal.GetDriverCount()} drivers.")


def is_registered() -> bool:
    return _registered
