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
GDAL Dataset Facade.

This module provides `GdalDataset`, a single-owner wrapper around an open
GDAL raster dataset. It exposes typed accessors for band I/O, metadata,
geotransform, statistics and reprojection. Raster work is done by GDAL; the
facade validates inputs, marshals buffers, and translates GDAL failures into
the exceptions defined in `geode.utils.exceptions`.

Example:
    >>> with GdalDataset('dem.tif') as ds:
    ...     data = ds.read_raster_data([1])[1]
    ...     stats = ds.compute_statistics(1)
"""
import logging
import math
import numpy as np
from osgeo import gdal, osr
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Type, Union
from geode.utils.config_loader import config
from geode.utils.data_models import BandInfo, BandStatistics
from geode.utils.exceptions import (
    DatasetClosedError,
    DatasetOpenFailedError,
    DimensionMismatchError,
    GdalError,
    GeotransformOperationFailedError,
    InvalidBandError,
    MetadataOperationFailedError,
    ReprojectionError,
    StatisticsComputationFailedError,
    WriteFailedError,
)
from geode.utils.gdal_registry import ensure_registered
from geode.utils.srs_logic import (
    get_resample_alg,
    get_srs_from_user_input,
    set_traditional_axis_order,
    srs_from_wkt,
)

logger = logging.getLogger(__name__)

GeoTransformTuple = Tuple[float, float, float, float, float, float]


def parse_metadata_entries(entries: Optional[Iterable[str]]) -> Dict[str, str]:
    """
    Parse GDAL 'KEY=VALUE' metadata entries into a dictionary.

    Entries are split on '=' with empty pieces discarded; only entries that
    yield exactly two pieces are kept. 'KEY', 'KEY=', '=VALUE' and
    'KEY=A=B' are all dropped.

    Args:
        entries: The metadata list returned by GDAL (may be None).

    Returns:
        Dictionary of metadata keys to values.
    """
    metadata: Dict[str, str] = {}
    for entry in entries or []:
        parts = [part for part in str(entry).split('=') if part]
        if len(parts) == 2:
            metadata[parts[0]] = parts[1]
    return metadata


def _gdal_failure(exc_cls: Type[GdalError], message: str,
                  cause: Optional[BaseException] = None) -> GdalError:
    """Build a GdalError subclass from GDAL's last reported error."""
    code = gdal.GetLastErrorType()
    if code < gdal.CE_Failure:
        code = gdal.CE_Failure
    detail = str(cause) if cause else gdal.GetLastErrorMsg()
    full_message = f"{message}: {detail}" if detail else message
    return exc_cls(code, full_message, error_no=gdal.GetLastErrorNo())


def _is_failure(status: Optional[int]) -> bool:
    """True if a returned CPLErr status reports failure."""
    return status is not None and status != gdal.CE_None


class GdalDataset:
    """
    Single-owner facade over an open GDAL raster dataset.

    The underlying handle is acquired in the constructor, never exposed, and
    released exactly once by `close()` (also called on context-manager exit
    and garbage collection). Operations on a closed dataset raise
    `DatasetClosedError`.

    Instances are not thread-safe; use one instance per thread.
    """

    _dataset: Optional[gdal.Dataset] = None

    def __init__(self, path: Union[str, Path], update: Optional[bool] = None):
        """
        Open a raster dataset.

        Args:
            path: Path (or any GDAL connection string) of the dataset.
            update: Open for update if True, read-only if False. Defaults to the
                `dataset.access` configuration value.

        Raises:
            DatasetOpenFailedError: If GDAL cannot open the dataset.
        """
        ensure_registered()
        self._path: Optional[str] = str(path)
        if update is None:
            update = str(config.get("dataset.access", "read_only")).lower() == "update"
        self._update = bool(update)

        access = gdal.GA_Update if self._update else gdal.GA_ReadOnly
        try:
            dataset = gdal.Open(self._path, access)
        except RuntimeError as e:
            raise DatasetOpenFailedError(f"Failed to open dataset '{self._path}': {e}") from e
        if dataset is None:
            raise DatasetOpenFailedError(f"Failed to open dataset '{self._path}'")

        self._dataset = dataset
        logger.debug(f"Opened '{self._path}' ({'update' if self._update else 'read-only'}): "
                     f"{dataset.RasterXSize}x{dataset.RasterYSize}, {dataset.RasterCount} band(s)")

    @classmethod
    def _from_handle(cls, dataset: gdal.Dataset, path: Optional[str] = None) -> "GdalDataset":
        """Take ownership of a dataset created inside this module."""
        instance = cls.__new__(cls)
        instance._path = path
        instance._update = True
        instance._dataset = dataset
        return instance

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Flush and release the dataset handle. Safe to call more than once."""
        if self._dataset is None:
            return
        dataset, self._dataset = self._dataset, None
        try:
            dataset.FlushCache()
        except RuntimeError as e:
            logger.warning(f"Flushing '{self._path}' before close failed: {e}")
        dataset = None
        logger.debug(f"Closed '{self._path}'")

    def __enter__(self) -> "GdalDataset":
        self._require_open()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __del__(self):
        if getattr(self, '_dataset', None) is not None:
            self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.band_count} band(s)"
        return f"GdalDataset(path={self._path!r}, {state})"

    def _require_open(self) -> gdal.Dataset:
        if self._dataset is None:
            raise DatasetClosedError(f"Dataset '{self._path}' has been closed")
        return self._dataset

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def path(self) -> Optional[str]:
        """Source path, or None for in-memory datasets."""
        return self._path

    @property
    def closed(self) -> bool:
        return self._dataset is None

    @property
    def update(self) -> bool:
        return self._update

    @property
    def band_count(self) -> int:
        return self._require_open().RasterCount

    @property
    def x_size(self) -> int:
        return self._require_open().RasterXSize

    @property
    def y_size(self) -> int:
        return self._require_open().RasterYSize

    @property
    def projection(self) -> str:
        """Projection WKT, or an empty string if the dataset has none."""
        return self._require_open().GetProjection() or ""

    # ------------------------------------------------------------------
    # Bands
    # ------------------------------------------------------------------

    def _validate_band_index(self, band: int) -> int:
        dataset = self._require_open()
        if isinstance(band, bool) or not isinstance(band, (int, np.integer)):
            raise InvalidBandError(band, f"Band index must be an integer, got {band!r}")
        band = int(band)
        if band < 1 or band > dataset.RasterCount:
            raise InvalidBandError(
                band, f"Band {band} does not exist (dataset has {dataset.RasterCount} band(s))"
            )
        return band

    def _get_band(self, band: int) -> Tuple[gdal.Band, BandInfo]:
        """Resolve a 1-based band index to its GDAL band and size."""
        index = self._validate_band_index(band)
        try:
            gdal_band = self._require_open().GetRasterBand(index)
        except RuntimeError as e:
            raise InvalidBandError(index, f"Band {index} could not be fetched: {e}") from e
        if gdal_band is None:
            raise InvalidBandError(index)
        info = BandInfo(
            index=index,
            x_size=gdal_band.XSize,
            y_size=gdal_band.YSize,
            data_type=gdal.GetDataTypeName(gdal_band.DataType),
        )
        return gdal_band, info

    def band_info(self, band: int) -> BandInfo:
        """Return the size and data type of a band."""
        return self._get_band(band)[1]

    def read_raster_data(self, bands: Union[int, Iterable[int]]) -> Dict[int, np.ndarray]:
        """
        Read the full extent of one or more bands as float32.

        Every index is validated before any band is read, and the first read
        failure aborts the call without returning partial results.

        Args:
            bands: A band index or an iterable of 1-based band indices.

        Returns:
            Mapping of band index to a flat, row-major float32 array of
            x_size * y_size samples.

        Raises:
            InvalidBandError: If any index is out of range.
            GdalError: If GDAL reports a read failure.
        """
        if isinstance(bands, (int, np.integer)):
            bands = [bands]
        indices: List[int] = [self._validate_band_index(b) for b in bands]

        results: Dict[int, np.ndarray] = {}
        for index in indices:
            gdal_band, info = self._get_band(index)
            try:
                raw = gdal_band.ReadRaster(
                    xoff=0, yoff=0,
                    xsize=info.x_size, ysize=info.y_size,
                    buf_xsize=info.x_size, buf_ysize=info.y_size,
                    buf_type=gdal.GDT_Float32,
                )
            except RuntimeError as e:
                raise _gdal_failure(GdalError, f"Failed to read band {index}", e) from e
            if raw is None:
                raise _gdal_failure(GdalError, f"Failed to read band {index}")
            results[index] = np.frombuffer(raw, dtype=np.float32).copy()
            logger.debug(f"Read band {index} ({info.x_size}x{info.y_size})")
        return results

    def write_raster_data(self, band: int, data: Union[Sequence[float], np.ndarray],
                          x_size: Optional[int] = None, y_size: Optional[int] = None) -> None:
        """
        Write a float32 buffer over the full extent of a band.

        Args:
            band: 1-based band index.
            data: Row-major samples (flat or 2D) of length x_size * y_size.
            x_size: Buffer width; defaults to the band width.
            y_size: Buffer height; defaults to the band height.

        Raises:
            InvalidBandError: If the band does not exist.
            DimensionMismatchError: If the buffer length or dimensions do not
                match the band's full extent.
            WriteFailedError: If GDAL reports a write failure.
        """
        gdal_band, info = self._get_band(band)
        x_size = info.x_size if x_size is None else int(x_size)
        y_size = info.y_size if y_size is None else int(y_size)

        buffer = np.ascontiguousarray(np.asarray(data, dtype=np.float32).ravel())
        if buffer.size != x_size * y_size:
            raise DimensionMismatchError(
                f"Buffer holds {buffer.size} samples but {x_size}x{y_size} = {x_size * y_size} were declared"
            )
        if (x_size, y_size) != (info.x_size, info.y_size):
            raise DimensionMismatchError(
                f"Declared size {x_size}x{y_size} does not match band {info.index} "
                f"size {info.x_size}x{info.y_size}"
            )

        try:
            status = gdal_band.WriteRaster(
                0, 0, x_size, y_size, buffer.tobytes(),
                buf_xsize=x_size, buf_ysize=y_size, buf_type=gdal.GDT_Float32,
            )
        except RuntimeError as e:
            raise _gdal_failure(WriteFailedError, f"Failed to write band {info.index}", e) from e
        if _is_failure(status):
            raise _gdal_failure(WriteFailedError, f"Failed to write band {info.index}")
        logger.debug(f"Wrote band {info.index} ({x_size}x{y_size})")

    # ------------------------------------------------------------------
    # Metadata and georeferencing
    # ------------------------------------------------------------------

    def get_metadata(self, domain: Optional[str] = None) -> Dict[str, str]:
        """
        Return the dataset metadata for the default domain (or `domain`).

        Malformed entries are dropped; see `parse_metadata_entries`.
        """
        dataset = self._require_open()
        return parse_metadata_entries(dataset.GetMetadata_List(domain or ""))

    def set_metadata(self, metadata: Mapping[str, str], domain: Optional[str] = None) -> None:
        """
        Set metadata items one key at a time.

        The first failure stops the operation; later keys are not attempted.

        Raises:
            MetadataOperationFailedError: If GDAL rejects an item.
        """
        dataset = self._require_open()
        for key, value in metadata.items():
            try:
                status = dataset.SetMetadataItem(str(key), str(value), domain or "")
            except RuntimeError as e:
                raise MetadataOperationFailedError(
                    f"Failed to set metadata item '{key}': {e}", key=key
                ) from e
            if _is_failure(status):
                raise MetadataOperationFailedError(
                    f"Failed to set metadata item '{key}': {gdal.GetLastErrorMsg()}", key=key
                )
        logger.debug(f"Set {len(metadata)} metadata item(s) on '{self._path}'")

    def get_geotransform(self) -> Optional[GeoTransformTuple]:
        """Return the six geotransform coefficients, or None if none are set."""
        dataset = self._require_open()
        try:
            transform = dataset.GetGeoTransform(can_return_null=True)
        except RuntimeError as e:
            logger.debug(f"No geotransform for '{self._path}': {e}")
            return None
        if transform is None:
            return None
        return tuple(float(c) for c in transform)

    def set_geotransform(self, transform: Sequence[float]) -> None:
        """
        Set the six geotransform coefficients.

        Raises:
            GeotransformOperationFailedError: If the coefficients are invalid
                or GDAL rejects them.
        """
        dataset = self._require_open()
        try:
            coefficients = tuple(float(c) for c in transform)
        except (TypeError, ValueError) as e:
            raise GeotransformOperationFailedError(f"Invalid geotransform {transform!r}: {e}") from e
        if len(coefficients) != 6:
            raise GeotransformOperationFailedError(
                f"A geotransform needs 6 coefficients, got {len(coefficients)}"
            )
        if not all(math.isfinite(c) for c in coefficients):
            raise GeotransformOperationFailedError(f"Geotransform coefficients must be finite: {coefficients}")

        try:
            status = dataset.SetGeoTransform(coefficients)
        except RuntimeError as e:
            raise GeotransformOperationFailedError(f"Failed to set geotransform: {e}") from e
        if _is_failure(status):
            raise GeotransformOperationFailedError(f"Failed to set geotransform: {gdal.GetLastErrorMsg()}")

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def compute_statistics(self, band: int, approx_ok: Optional[bool] = None) -> BandStatistics:
        """
        Compute band statistics with GDAL.

        Args:
            band: 1-based band index.
            approx_ok: Allow approximate statistics (overviews or a subset of
                blocks). Defaults to the `statistics.approx_ok` config value.

        Raises:
            InvalidBandError: If the band does not exist.
            StatisticsComputationFailedError: If GDAL cannot compute statistics.
        """
        gdal_band, info = self._get_band(band)
        if approx_ok is None:
            approx_ok = bool(config.get("statistics.approx_ok", True))

        try:
            values = gdal_band.ComputeStatistics(bool(approx_ok))
        except RuntimeError as e:
            raise _gdal_failure(
                StatisticsComputationFailedError, f"Failed to compute statistics for band {info.index}", e
            ) from e
        if not values or len(values) < 4:
            raise _gdal_failure(
                StatisticsComputationFailedError, f"Failed to compute statistics for band {info.index}"
            )

        minimum, maximum, mean, std_dev = (float(v) for v in values[:4])
        return BandStatistics(minimum=minimum, maximum=maximum, mean=mean, std_dev=std_dev)

    # ------------------------------------------------------------------
    # Reprojection and output
    # ------------------------------------------------------------------

    def reproject(self, target_projection: str, resample_alg: Optional[str] = None,
                  max_error: Optional[float] = None) -> "GdalDataset":
        """
        Reproject the dataset into a new in-memory dataset.

        The destination size and geotransform come from GDAL's suggested warp
        output for the source extent; the pixels are then warped with
        `gdal.ReprojectImage`.

        Args:
            target_projection: Any SRS definition GDAL accepts ('EPSG:3857',
                '3857', WKT, PROJ string).
            resample_alg: Resampling algorithm name. Defaults to the
                `reproject.resample_alg` config value.
            max_error: Approximation error threshold in pixels. Defaults to the
                `reproject.max_error` config value.

        Returns:
            A new GdalDataset owning the reprojected in-memory raster.

        Raises:
            ReprojectionError: If any step of the reprojection fails.
        """
        dataset = self._require_open()
        if dataset.RasterCount == 0:
            raise ReprojectionError(f"Dataset '{self._path}' has no bands to reproject")

        src_wkt = dataset.GetProjection()
        if not src_wkt:
            raise ReprojectionError(f"Dataset '{self._path}' has no projection")

        alg_name = resample_alg or config.get("reproject.resample_alg", "nearest")
        try:
            alg = get_resample_alg(alg_name)
        except ValueError as e:
            raise ReprojectionError(str(e)) from e
        if max_error is None:
            max_error = float(config.get("reproject.max_error", 0.125))

        src_srs = srs_from_wkt(src_wkt)
        if src_srs is None:
            raise ReprojectionError(f"Could not parse the source projection of '{self._path}'")
        dst_srs = get_srs_from_user_input(target_projection)
        if dst_srs is None:
            raise ReprojectionError(f"Could not parse target projection '{target_projection}'")

        transformation = None
        warped_vrt = None
        destination = None
        try:
            set_traditional_axis_order(src_srs)
            set_traditional_axis_order(dst_srs)
            transformation = osr.CoordinateTransformation(src_srs, dst_srs)
            if transformation is None:
                raise ReprojectionError(f"No transformation from the source projection to '{target_projection}'")
            self._log_center(dataset, transformation)

            dst_wkt = dst_srs.ExportToWkt()
            warped_vrt = gdal.AutoCreateWarpedVRT(dataset, src_wkt, dst_wkt, alg, max_error)
            if warped_vrt is None:
                raise ReprojectionError("GDAL could not compute the destination extent")
            x_size, y_size = warped_vrt.RasterXSize, warped_vrt.RasterYSize
            geotransform = warped_vrt.GetGeoTransform()
            if x_size <= 0 or y_size <= 0:
                raise ReprojectionError(f"Destination extent is empty ({x_size}x{y_size})")

            data_type = dataset.GetRasterBand(1).DataType
            destination = gdal.GetDriverByName('MEM').Create('', x_size, y_size, dataset.RasterCount, data_type)
            if destination is None:
                raise ReprojectionError("Failed to create the in-memory destination dataset")
            destination.SetProjection(dst_wkt)
            destination.SetGeoTransform(geotransform)

            for index in range(1, dataset.RasterCount + 1):
                nodata = dataset.GetRasterBand(index).GetNoDataValue()
                if nodata is not None:
                    dst_band = destination.GetRasterBand(index)
                    dst_band.SetNoDataValue(nodata)
                    dst_band.Fill(nodata)

            status = gdal.ReprojectImage(dataset, destination, src_wkt, dst_wkt, alg, 0, max_error)
            if _is_failure(status):
                raise ReprojectionError(f"Image reprojection failed: {gdal.GetLastErrorMsg()}")

            logger.info(f"Reprojected '{self._path}' to {target_projection} ({x_size}x{y_size})")
            result = GdalDataset._from_handle(destination)
            destination = None
            return result
        except RuntimeError as e:
            raise ReprojectionError(f"Failed to reproject '{self._path}' to '{target_projection}': {e}") from e
        finally:
            destination = None
            warped_vrt = None
            transformation = None
            dst_srs = None
            src_srs = None

    @staticmethod
    def _log_center(dataset: gdal.Dataset, transformation: osr.CoordinateTransformation) -> None:
        """Log where the source center lands in the target SRS."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        gt = dataset.GetGeoTransform()
        cx = gt[0] + dataset.RasterXSize / 2.0 * gt[1] + dataset.RasterYSize / 2.0 * gt[2]
        cy = gt[3] + dataset.RasterXSize / 2.0 * gt[4] + dataset.RasterYSize / 2.0 * gt[5]
        try:
            tx, ty, _ = transformation.TransformPoint(cx, cy)
        except RuntimeError as e:
            # The center may lie outside the target projection's domain
            logger.debug(f"Source center ({cx:.6f}, {cy:.6f}) does not project: {e}")
            return
        logger.debug(f"Source center ({cx:.6f}, {cy:.6f}) -> ({tx:.6f}, {ty:.6f})")

    def save_as(self, path: Union[str, Path], driver_name: str = 'GTiff',
                options: Optional[List[str]] = None) -> None:
        """
        Copy the dataset to a new file.

        Args:
            path: Output path.
            driver_name: GDAL driver short name.
            options: Driver creation options (e.g. ['COMPRESS=DEFLATE']).

        Raises:
            GdalError: If the driver is unknown or the copy fails.
        """
        dataset = self._require_open()
        try:
            driver = gdal.GetDriverByName(driver_name)
        except RuntimeError as e:
            raise _gdal_failure(GdalError, f"Unknown GDAL driver '{driver_name}'", e) from e
        if driver is None:
            raise GdalError(gdal.CE_Failure, f"Unknown GDAL driver '{driver_name}'")

        output = None
        try:
            output = driver.CreateCopy(str(path), dataset, 0, list(options or []))
            if output is None:
                raise _gdal_failure(GdalError, f"Failed to write '{path}'")
            output.FlushCache()
        except RuntimeError as e:
            raise _gdal_failure(GdalError, f"Failed to write '{path}'", e) from e
        finally:
            output = None
        logger.info(f"Saved dataset to {path} ({driver_name})")
