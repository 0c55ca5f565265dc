#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exception hierarchy for the GDAL raster bindings.

Every error raised by the package subclasses ``RasterGdalError`` and the
closest built-in exception, so callers can catch either.
"""


class RasterGdalError(Exception):
    """Base exception for all raster_gdal errors."""


class ValidationError(RasterGdalError, ValueError):
    """Malformed input, e.g. a coordinate array that is not two-column."""


class SingularTransformError(RasterGdalError, ArithmeticError):
    """The linear part of a geotransform has no inverse."""


class UnsupportedGridShapeError(RasterGdalError, ValueError):
    """The x/y axis pair cannot be combined for the requested cell mode.

    Raised for mixed regular/irregular axes and for regular axes that do
    not share one geotransform.
    """


class MissingCellSizeError(UnsupportedGridShapeError):
    """Polygons were requested for axes without a cell size."""


class CellSelectionError(RasterGdalError, IndexError):
    """A requested cell index lies outside the grid."""


class UnknownMetadataDomainError(RasterGdalError, KeyError):
    """A metadata domain was requested that the dataset does not have."""


class RasterIOError(RasterGdalError, IOError):
    """GDAL failed to open or read a dataset."""
