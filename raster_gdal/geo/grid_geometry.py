#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Conversion of raster x/y dimensions into point or polygon geometries.

Cells are numbered 1-based in row-major order with x varying fastest. Point
mode yields one point per cell center; polygon mode yields one closed
four-corner ring per cell, assembled from the corner grid of the raster.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, List, Optional, Tuple
import numpy as np
import pandas as pd
import shapely

from raster_gdal.core.config import CELL_CENTER_OFFSET
from raster_gdal.core.exceptions import (
    CellSelectionError, MissingCellSizeError, UnsupportedGridShapeError
)
from raster_gdal.core.logging_config import get_module_logger
from raster_gdal.geo.dimensions import IrregularAxis, RegularAxis, XYDimensions
from raster_gdal.geo.geotransform import apply_geotransform

logger = get_module_logger(__name__)


class CellMode(Enum):
    POINTS = "points"
    POLYGONS = "polygons"


@dataclass(frozen=True, eq=False)
class CellGeometries:
    """
    Ordered geometries for a selection of grid cells.

    Attributes
    ----------
    geometries : np.ndarray
        Object array of shapely geometries, in selection order.
    cells : np.ndarray
        1-based cell index of each geometry.
    crs : Any
        Reference system tag carried over from the dimensions, unchanged.
    """
    geometries: np.ndarray
    cells: np.ndarray
    crs: Any = None

    def __len__(self) -> int:
        return len(self.geometries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.geometries)

    def __getitem__(self, i):
        return self.geometries[i]

    def to_wkt(self) -> List[str]:
        return [shapely.to_wkt(g) for g in self.geometries]

    def to_frame(self) -> pd.DataFrame:
        """Table with one row per geometry: 1-based ``cell`` and ``wkt``."""
        return pd.DataFrame({"cell": self.cells, "wkt": self.to_wkt()})


def _selection(which: Optional[Iterable[int]], n: int) -> np.ndarray:
    """Validate 1-based cell indices and return them as 0-based positions."""
    if which is None:
        return np.arange(n)

    idx = np.asarray(list(which) if not isinstance(which, np.ndarray) else which)
    if idx.size == 0:
        return np.zeros(0, dtype=np.int64)
    if idx.ndim != 1:
        raise CellSelectionError(f"Cell selection must be one-dimensional, got shape {idx.shape}")
    if not np.issubdtype(idx.dtype, np.number) or np.issubdtype(idx.dtype, np.bool_):
        raise CellSelectionError(f"Cell indices must be integers, got dtype {idx.dtype}")
    if not np.all(np.mod(idx, 1) == 0):
        raise CellSelectionError("Cell indices must be whole numbers")

    idx = idx.astype(np.int64)
    bad = idx[(idx < 1) | (idx > n)]
    if bad.size:
        raise CellSelectionError(f"Cell indices {bad[:5].tolist()} outside 1..{n}")
    return idx - 1


def _check_regular_pair(dims: XYDimensions) -> Tuple[RegularAxis, RegularAxis]:
    x, y = dims.x, dims.y
    if x.geotransform != y.geotransform:
        raise UnsupportedGridShapeError(
            f"x and y axes have different geotransforms: {tuple(x.geotransform)} "
            f"vs {tuple(y.geotransform)}"
        )
    return x, y


def _cartesian(xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
    # x varies fastest
    xx, yy = np.meshgrid(xs, ys)
    return np.column_stack([xx.ravel(), yy.ravel()])


def cell_centers(dims: XYDimensions) -> np.ndarray:
    """
    Coordinates of all cell centers, one row per cell in cell order.

    Raises
    ------
    UnsupportedGridShapeError
        For mixed regular/irregular axes or unequal geotransforms.
    """
    x, y = dims.x, dims.y
    if isinstance(x, RegularAxis) and isinstance(y, RegularAxis):
        x, y = _check_regular_pair(dims)
        cols = np.arange(x.start, x.end + 1) - CELL_CENTER_OFFSET
        rows = np.arange(y.start, y.end + 1) - CELL_CENTER_OFFSET
        return apply_geotransform(x.geotransform, _cartesian(cols, rows))
    if isinstance(x, IrregularAxis) and isinstance(y, IrregularAxis):
        return _cartesian(np.asarray(x.values), np.asarray(y.values))
    raise UnsupportedGridShapeError(
        f"Cannot combine {type(x).__name__} x axis with {type(y).__name__} y axis"
    )


def cell_corners(dims: XYDimensions) -> np.ndarray:
    """
    Coordinates of the ``(nx + 1) * (ny + 1)`` corner grid, row-major.

    Raises
    ------
    MissingCellSizeError
        When both axes are irregular, so cell boundaries are undefined.
    UnsupportedGridShapeError
        For mixed axes or unequal geotransforms.
    """
    x, y = dims.x, dims.y
    if isinstance(x, IrregularAxis) and isinstance(y, IrregularAxis):
        raise MissingCellSizeError("grid cell sizes not available for irregular axes")
    if not (isinstance(x, RegularAxis) and isinstance(y, RegularAxis)):
        raise UnsupportedGridShapeError(
            f"Cannot combine {type(x).__name__} x axis with {type(y).__name__} y axis"
        )
    x, y = _check_regular_pair(dims)
    cols = np.arange(x.start - 1, x.end + 1)
    rows = np.arange(y.start - 1, y.end + 1)
    return apply_geotransform(x.geotransform, _cartesian(cols, rows))


def polygon_rings(nx: int, ny: int) -> np.ndarray:
    """
    Corner-grid indices of every cell ring, shape ``(nx * ny, 5)``.

    Indices are 0-based into a corner grid that is ``nx + 1`` wide; each ring
    runs top-left, top-right, bottom-right, bottom-left and back to top-left.
    Rows are in cell order.
    """
    width = nx + 1
    x0, y0 = np.meshgrid(np.arange(nx), np.arange(ny))
    x0 = x0.ravel()
    y0 = y0.ravel()
    i1 = y0 * width + x0
    i2 = i1 + 1
    i3 = (y0 + 1) * width + x0 + 1
    i4 = (y0 + 1) * width + x0
    return np.column_stack([i1, i2, i3, i4, i1])


def cells_as_points(dims: XYDimensions, which: Optional[Iterable[int]] = None) -> CellGeometries:
    """
    Point geometries at the centers of the selected cells.

    Parameters
    ----------
    dims : XYDimensions
        Both axes regular (sharing one geotransform) or both irregular.
    which : iterable of int, optional
        1-based cell indices; the output follows their order. All cells
        when None.

    Returns
    -------
    CellGeometries
        One point per selected cell.
    """
    centers = cell_centers(dims)
    sel = _selection(which, len(centers))
    geoms = shapely.points(centers[sel]) if sel.size else np.empty(0, dtype=object)
    logger.debug(f"Built {len(sel)} of {len(centers)} cell center points")
    return CellGeometries(np.asarray(geoms, dtype=object), sel + 1, dims.refsys)


def cells_as_polygons(dims: XYDimensions, which: Optional[Iterable[int]] = None) -> CellGeometries:
    """
    Square (or sheared) polygons outlining the selected cells.

    Parameters
    ----------
    dims : XYDimensions
        Both axes regular, sharing one geotransform.
    which : iterable of int, optional
        1-based cell indices; the output follows their order. All cells
        when None.

    Returns
    -------
    CellGeometries
        One polygon per selected cell, each ring closed with 5 vertices.
    """
    corners = cell_corners(dims)
    nx, ny = dims.shape
    rings = polygon_rings(nx, ny)
    sel = _selection(which, len(rings))
    geoms = shapely.polygons(corners[rings[sel]]) if sel.size else np.empty(0, dtype=object)
    logger.debug(f"Built {len(sel)} of {len(rings)} cell polygons")
    return CellGeometries(np.asarray(geoms, dtype=object), sel + 1, dims.refsys)


def dimensions_to_geometries(dims: XYDimensions, mode: CellMode,
                             which: Optional[Iterable[int]] = None) -> CellGeometries:
    """Dispatch to :func:`cells_as_points` or :func:`cells_as_polygons`."""
    mode = CellMode(mode)
    if mode is CellMode.POINTS:
        return cells_as_points(dims, which)
    return cells_as_polygons(dims, which)
