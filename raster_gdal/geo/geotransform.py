#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Affine geotransforms between pixel/line and georeferenced coordinates.

GDAL describes the mapping of a raster with six coefficients::

    X = c0 + P * c1 + L * c2
    Y = c3 + P * c4 + L * c5

where ``(P, L)`` are 0-based column/row offsets in pixel space and 0.5
refers to the center of the first cell.
"""
from typing import NamedTuple, Optional, Sequence, Union
import numpy as np
from rasterio.transform import Affine

from raster_gdal.core.config import GEOTRANSFORM_CONFIG
from raster_gdal.core.exceptions import SingularTransformError, ValidationError
from raster_gdal.core.logging_config import get_module_logger

logger = get_module_logger(__name__)


class Geotransform(NamedTuple):
    """Six GDAL geotransform coefficients, in GDAL order."""

    x_origin: float
    pixel_width: float
    row_rotation: float
    y_origin: float
    column_rotation: float
    pixel_height: float

    @classmethod
    def from_sequence(cls, gt: Sequence[float]) -> "Geotransform":
        if isinstance(gt, cls):
            return gt
        values = [float(v) for v in gt]
        if len(values) != 6:
            raise ValidationError(f"A geotransform has 6 coefficients, got {len(values)}")
        return cls(*values)

    @classmethod
    def from_affine(cls, affine: Affine) -> "Geotransform":
        return cls(*affine.to_gdal())

    def to_affine(self) -> Affine:
        return Affine.from_gdal(*self)

    def apply(self, colrow: np.ndarray) -> np.ndarray:
        return apply_geotransform(self, colrow)

    def invert(self, tolerance: Optional[float] = None) -> "Geotransform":
        return invert_geotransform(self, tolerance)


GeotransformLike = Union[Geotransform, Sequence[float]]


def _as_colrow(colrow: np.ndarray) -> np.ndarray:
    arr = np.asarray(colrow, dtype=np.float64)
    if arr.ndim == 1 and arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValidationError(f"Expected a two-column coordinate array, got shape {arr.shape}")
    return arr


def apply_geotransform(gt: GeotransformLike, colrow: np.ndarray) -> np.ndarray:
    """
    Map column/row pairs through a geotransform.

    Parameters
    ----------
    gt : Geotransform or sequence of 6 floats
        The geotransform to apply.
    colrow : np.ndarray
        Array of shape ``(n, 2)`` holding column and row offsets.

    Returns
    -------
    np.ndarray
        Array of shape ``(n, 2)`` holding X and Y, in input order.
    """
    gt = Geotransform.from_sequence(gt)
    arr = _as_colrow(colrow)

    offset = np.array([gt[0], gt[3]])
    linear = np.array([[gt[1], gt[4]],
                       [gt[2], gt[5]]])
    return offset + arr @ linear


def invert_geotransform(gt: GeotransformLike, tolerance: Optional[float] = None) -> Geotransform:
    """
    Compute the geotransform mapping X/Y back to column/row.

    Parameters
    ----------
    gt : Geotransform or sequence of 6 floats
        The forward geotransform.
    tolerance : float, optional
        Relative determinant threshold below which the transform counts as
        singular. Defaults to ``GEOTRANSFORM_CONFIG['singular_tolerance']``.

    Returns
    -------
    Geotransform
        The inverse geotransform.

    Raises
    ------
    SingularTransformError
        If the linear part of ``gt`` is not invertible.
    """
    gt = Geotransform.from_sequence(gt)
    if tolerance is None:
        tolerance = GEOTRANSFORM_CONFIG["singular_tolerance"]

    det = gt[1] * gt[5] - gt[2] * gt[4]
    magnitude = max(abs(gt[1]), abs(gt[2]), abs(gt[4]), abs(gt[5]))
    if not np.isfinite(det) or abs(det) <= tolerance * magnitude * magnitude:
        logger.debug(f"Geotransform {tuple(gt)} is singular (det={det})")
        raise SingularTransformError(f"geotransform not invertible: {tuple(gt)}")

    inv_det = 1.0 / det
    inverse = Geotransform(
        (gt[2] * gt[3] - gt[0] * gt[5]) * inv_det,
        gt[5] * inv_det,
        -gt[2] * inv_det,
        (gt[0] * gt[4] - gt[1] * gt[3]) * inv_det,
        -gt[4] * inv_det,
        gt[1] * inv_det,
    )
    # Non-finite origin terms leave no usable inverse either
    if not np.all(np.isfinite(inverse)):
        logger.debug(f"Inverse of geotransform {tuple(gt)} is not finite: {tuple(inverse)}")
        raise SingularTransformError(f"geotransform not invertible: {tuple(gt)}")
    return inverse


def xy_from_colrow(colrow: np.ndarray, gt: GeotransformLike, inverse: bool = False) -> np.ndarray:
    """
    Convert column/row pairs to X/Y, or X/Y to column/row when ``inverse``.

    Parameters
    ----------
    colrow : np.ndarray
        Two-column coordinate array.
    gt : Geotransform or sequence of 6 floats
        The forward geotransform of the raster.
    inverse : bool, optional
        Apply the inverse geotransform instead, by default False.

    Returns
    -------
    np.ndarray
        Two-column array with the same number of rows as ``colrow``.
    """
    if inverse:
        gt = invert_geotransform(gt)
    return apply_geotransform(gt, colrow)
