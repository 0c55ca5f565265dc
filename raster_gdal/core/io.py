#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Input/output handling for the GDAL raster bindings.

This module opens datasets through GDAL and hands back their structure,
pixel data, metadata and reference system. Decoding, driver detection and
WKT parsing all stay inside GDAL and rasterio.
"""
import os
import json
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union
import numpy as np
import pandas as pd
import yaml
from osgeo import gdal
from rasterio.crs import CRS
from rasterio.errors import CRSError

from raster_gdal.core.config import EXPORT_CONFIG, GEOTRANSFORM_CONFIG, READ_CONFIG
from raster_gdal.core.exceptions import RasterIOError, ValidationError
from raster_gdal.core.logging_config import get_module_logger
from raster_gdal.geo.dimensions import XYDimensions
from raster_gdal.geo.geotransform import Geotransform

# Initialize logger
logger = get_module_logger(__name__)

PathLike = Union[str, Path]


@dataclass
class RasterInfo:
    """
    Structural description of a GDAL raster dataset.

    Attributes
    ----------
    path : str
        Dataset identifier as passed to GDAL.
    driver : str
        GDAL short driver name.
    cols, rows, bands : int
        Raster size and band count.
    datatype : str
        GDAL data type name of the first band (e.g. ``'Float32'``).
    geotransform : Geotransform
        Pixel to georeferenced coordinate mapping.
    crs : rasterio.crs.CRS or None
        Reference system of the dataset.
    nodata : list
        Per-band nodata value, None where unset.
    descriptions : list
        Per-band description strings.
    data : np.ndarray or None
        Pixel values with shape ``(bands, rows, cols)`` when read.
    """
    path: str
    driver: str
    cols: int
    rows: int
    bands: int
    datatype: str
    geotransform: Geotransform
    crs: Optional[CRS] = None
    nodata: List[Optional[float]] = field(default_factory=list)
    descriptions: List[str] = field(default_factory=list)
    data: Optional[np.ndarray] = None

    def dimensions(self) -> XYDimensions:
        """Regular x/y dimensions covering the full raster."""
        return XYDimensions.regular(self.cols, self.rows, self.geotransform, self.crs)

    def band_table(self) -> pd.DataFrame:
        return pd.DataFrame({
            "band": np.arange(1, self.bands + 1),
            "description": self.descriptions,
            "nodata": self.nodata,
        })


@contextmanager
def open_dataset(path: PathLike, options: Sequence[str] = (),
                 driver: Optional[str] = None) -> Iterator[Any]:
    """
    Open a raster dataset read-only and release it on exit.

    Parameters
    ----------
    path : str or Path
        Dataset identifier (file name, subdataset name, or VSI path).
    options : sequence of str
        GDAL open options as ``KEY=VALUE`` strings.
    driver : str, optional
        GDAL short driver name; when given, only that driver is tried.

    Raises
    ------
    RasterIOError
        If GDAL cannot open the dataset.
    """
    gdal.UseExceptions()

    allowed = [driver] if driver else []
    try:
        ds = gdal.OpenEx(str(path), gdal.OF_RASTER | gdal.OF_READONLY,
                         allowed_drivers=allowed, open_options=list(options))
    except RuntimeError as e:
        logger.error(f"GDAL failed to open {path}: {e}")
        raise RasterIOError(f"Failed to open raster: {path}") from e

    if ds is None:
        logger.error(f"GDAL returned no dataset for {path}")
        raise RasterIOError(f"Failed to open raster: {path}")

    try:
        yield ds
    finally:
        # Dropping the reference closes the dataset
        ds = None


def _wkt_to_crs(wkt: Optional[str]) -> Optional[CRS]:
    if not wkt:
        return None
    try:
        return CRS.from_wkt(wkt)
    except CRSError as e:
        logger.error(f"Could not parse coordinate reference system: {e}")
        raise RasterIOError(f"Invalid coordinate reference system WKT: {wkt[:80]}") from e


def _read_one(path: PathLike, options: Sequence[str], driver: Optional[str],
              read_data: bool) -> RasterInfo:
    logger.info(f"Reading raster from {path}")

    with open_dataset(path, options, driver) as ds:
        gt = ds.GetGeoTransform(can_return_null=True)
        if gt is None:
            gt = GEOTRANSFORM_CONFIG["default_geotransform"]
            logger.warning(f"No geotransform found for {path}, using default: {gt}")

        bands = [ds.GetRasterBand(i) for i in range(1, ds.RasterCount + 1)]
        datatype = gdal.GetDataTypeName(bands[0].DataType) if bands else "Unknown"

        info = RasterInfo(
            path=str(path),
            driver=ds.GetDriver().ShortName,
            cols=ds.RasterXSize,
            rows=ds.RasterYSize,
            bands=ds.RasterCount,
            datatype=datatype,
            geotransform=Geotransform.from_sequence(gt),
            crs=_wkt_to_crs(ds.GetProjection()),
            nodata=[b.GetNoDataValue() for b in bands],
            descriptions=[b.GetDescription() for b in bands],
        )

        if read_data and bands:
            try:
                arr = ds.ReadAsArray()
            except RuntimeError as e:
                logger.error(f"GDAL failed to read pixels of {path}: {e}")
                raise RasterIOError(f"Failed to read raster data: {path}") from e
            if arr is None:
                logger.error(f"GDAL returned no pixel data for {path}")
                raise RasterIOError(f"Failed to read raster data: {path}")
            info.data = arr.reshape(info.bands, info.rows, info.cols)

    logger.info(f"Loaded {info.driver} raster {info.cols}x{info.rows} with {info.bands} band(s)")
    return info


def read_gdal(paths: Union[PathLike, Sequence[PathLike]], options: Sequence[str] = (),
              driver: Optional[str] = None,
              read_data: Optional[bool] = None) -> Union[RasterInfo, List[RasterInfo]]:
    """
    Read the structure, and optionally the pixels, of one or more rasters.

    Parameters
    ----------
    paths : str, Path, or sequence of them
        Dataset identifier(s).
    options : sequence of str
        GDAL open options.
    driver : str, optional
        GDAL short driver name; auto-detected when None.
    read_data : bool, optional
        Whether to read pixel data. Defaults to ``READ_CONFIG['read_data']``.

    Returns
    -------
    RasterInfo or list of RasterInfo
        A single description for a single path, else one per path in order.
    """
    if read_data is None:
        read_data = READ_CONFIG.get("read_data", True)

    if isinstance(paths, (str, Path)):
        return _read_one(paths, options, driver, read_data)
    return [_read_one(p, options, driver, read_data) for p in paths]


def list_metadata_domains(path: PathLike, options: Sequence[str] = ()) -> List[str]:
    """Names of the metadata domains a dataset provides."""
    with open_dataset(path, options) as ds:
        return list(ds.GetMetadataDomainList() or [])


def get_metadata(path: PathLike, domain: Optional[str] = None, item: Optional[str] = None,
                 options: Sequence[str] = ()) -> List[str]:
    """
    Raw ``key=value`` metadata strings of a dataset.

    Parameters
    ----------
    path : str or Path
        Dataset identifier.
    domain : str, optional
        Metadata domain; the default domain when None.
    item : str, optional
        Restrict the result to a single key.
    options : sequence of str
        GDAL open options.

    Returns
    -------
    list of str
        Metadata entries in GDAL order; empty when there are none.
    """
    domain = domain or ""
    with open_dataset(path, options) as ds:
        if item is not None:
            value = ds.GetMetadataItem(item, domain)
            return [] if value is None else [f"{item}={value}"]
        return list(ds.GetMetadata_List(domain) or [])


def read_crs(path: PathLike, options: Sequence[str] = ()) -> Optional[CRS]:
    """
    Read the coordinate reference system of a dataset.

    Returns
    -------
    rasterio.crs.CRS or None
        The dataset WKT as a structured CRS, None when it has none.
    """
    with open_dataset(path, options) as ds:
        wkt = ds.GetProjection()
    if not wkt:
        logger.warning(f"No coordinate reference system found for {path}")
    return _wkt_to_crs(wkt)


def export_metadata(metadata: Dict[str, Any], output_path: PathLike,
                    format: Optional[str] = None) -> None:
    """
    Save a metadata mapping to JSON or YAML.

    Parameters
    ----------
    metadata : dict
        Mapping to save, e.g. the result of ``gdal_metadata``.
    output_path : str or Path
        Path to the output file.
    format : str, optional
        'json' or 'yaml'. Defaults to ``EXPORT_CONFIG['metadata_format']``.
    """
    format = (format or EXPORT_CONFIG.get("metadata_format", "json")).lower()

    document = {
        "timestamp": datetime.now().isoformat(),
        "metadata": dict(metadata),
    }

    output_dir = os.path.dirname(os.path.abspath(output_path))
    os.makedirs(output_dir, exist_ok=True)

    if format == "json":
        with open(output_path, "w") as f:
            json.dump(document, f, indent=2)
    elif format == "yaml":
        with open(output_path, "w") as f:
            yaml.safe_dump(document, f, default_flow_style=False)
    else:
        raise ValidationError(f"Unsupported format: {format}")

    logger.info(f"Saved {len(document['metadata'])} metadata items to {output_path}")


def export_geometries(frame: pd.DataFrame, output_path: PathLike) -> None:
    """
    Export a geometry table to CSV, in chunks for large tables.

    Parameters
    ----------
    frame : pd.DataFrame
        Table such as ``CellGeometries.to_frame()``.
    output_path : str or Path
        Path to output CSV file.
    """
    output_dir = os.path.dirname(str(output_path))
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)

    chunk_size = EXPORT_CONFIG.get("chunk_size", 10000)
    if EXPORT_CONFIG.get("chunk_export", True) and len(frame) > chunk_size:
        n_chunks = (len(frame) + chunk_size - 1) // chunk_size
        logger.info(f"Exporting {len(frame)} rows in {n_chunks} chunks of size {chunk_size}")

        frame.iloc[:chunk_size].to_csv(output_path, index=False)
        for i in range(1, n_chunks):
            frame.iloc[i * chunk_size:(i + 1) * chunk_size].to_csv(
                output_path,
                mode="a",
                header=False,
                index=False
            )
    else:
        logger.info(f"Exporting {len(frame)} rows to {output_path}")
        frame.to_csv(output_path, index=False)
