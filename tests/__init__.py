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
Geode Test Suite.

This package contains tests for Geode components including:
- Unit tests for individual functions and classes
- Integration tests for the dataset facade against real GDAL files
- End-to-end tests for CLI commands
"""
