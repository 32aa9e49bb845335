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
Dataset Description Tool for Geode.

This module powers the 'info' command. It opens a raster read-only and
reports its size, band layout, georeferencing, metadata and per-band
statistics, either as Markdown-style text or as JSON.
"""

import json
import logging
from osgeo import gdal
from typing import Any, Dict, List, Optional
from geode.utils.exceptions import StatisticsComputationFailedError
from geode.utils.gdal_dataset import GdalDataset
from geode.utils.script_arguments import InfoArguments

logger = logging.getLogger(__name__)


def build_dataset_summary(ds: GdalDataset, bands: Optional[List[int]] = None,
                          approx_ok: bool = True) -> Dict[str, Any]:
    """
    Collect a JSON-serializable summary of an open dataset.

    Args:
        ds: Open dataset.
        bands: Band indices to describe (default: all bands).
        approx_ok: Allow approximate statistics.

    Returns:
        Dictionary with size, projection, geotransform, metadata and bands.
    """
    band_indices = bands or list(range(1, ds.band_count + 1))
    band_entries = []
    for index in band_indices:
        info = ds.band_info(index)
        entry: Dict[str, Any] = {
            'band': info.index,
            'x_size': info.x_size,
            'y_size': info.y_size,
            'data_type': info.data_type,
            'statistics': None,
        }
        try:
            entry['statistics'] = ds.compute_statistics(index, approx_ok=approx_ok).to_dict()
        except StatisticsComputationFailedError as e:
            logger.warning(f"Statistics unavailable for band {index}: {e}")
        band_entries.append(entry)

    geotransform = ds.get_geotransform()
    return {
        'path': ds.path,
        'x_size': ds.x_size,
        'y_size': ds.y_size,
        'band_count': ds.band_count,
        'projection': ds.projection,
        'geotransform': list(geotransform) if geotransform else None,
        'metadata': ds.get_metadata(),
        'bands': band_entries,
    }


def format_summary(summary: Dict[str, Any]) -> str:
    """Render a dataset summary as Markdown text."""
    lines = [
        f"# {summary['path']}\n",
        f"**Size:** {summary['x_size']} x {summary['y_size']}  ",
        f"**Bands:** {summary['band_count']}  ",
        f"**Projection:** {'Yes' if summary['projection'] else 'None'}  ",
    ]
    gt = summary['geotransform']
    if gt:
        lines.append(f"**Origin:** ({gt[0]}, {gt[3]})  ")
        lines.append(f"**Pixel Size:** ({gt[1]}, {gt[5]})  ")
    else:
        lines.append("**Geotransform:** None  ")

    if summary['metadata']:
        lines.append("\n## Metadata\n")
        for key, value in sorted(summary['metadata'].items()):
            lines.append(f"- {key}={value}")

    lines.append("\n## Bands\n")
    lines.append("| Band | Size | Type | Minimum | Maximum | Mean | Std Dev |")
    lines.append("|---|---|---|---|---|---|---|")
    for band in summary['bands']:
        stats = band['statistics']
        if stats:
            values = [f"{stats[k]:.4f}" for k in ('minimum', 'maximum', 'mean', 'std_dev')]
        else:
            values = ['N/A'] * 4
        lines.append(
            f"| {band['band']} | {band['x_size']} x {band['y_size']} | {band['data_type']} | "
            + " | ".join(values) + " |"
        )
    return "\n".join(lines)


def describe_dataset(args: InfoArguments) -> Dict[str, Any]:
    """
    Run the 'info' tool: open, summarize and print a dataset.

    Returns:
        The summary dictionary that was printed.
    """
    logger.debug(f"Describing {args.input_path}")
    # Keep computed statistics out of a .aux.xml sidecar next to the input
    previous_pam = gdal.GetConfigOption('GDAL_PAM_ENABLED')
    gdal.SetConfigOption('GDAL_PAM_ENABLED', 'NO')
    try:
        with GdalDataset(args.input_path, update=False) as ds:
            summary = build_dataset_summary(ds, bands=args.bands, approx_ok=bool(args.approx_ok))
    finally:
        gdal.SetConfigOption('GDAL_PAM_ENABLED', previous_pam)

    if args.json_output:
        print(json.dumps(summary, indent=2))
    else:
        print(format_summary(summary))
    return summary
