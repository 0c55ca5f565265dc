#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Axis descriptors for the x and y dimensions of a raster.

A raster axis is either *regular*, where cell positions follow from a
geotransform and a 1-based cell range, or *irregular*, where each cell
carries an explicit coordinate value.
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Tuple, Union

from raster_gdal.core.exceptions import ValidationError
from raster_gdal.geo.geotransform import Geotransform, GeotransformLike


@dataclass(frozen=True)
class RegularAxis:
    """
    Axis whose cells are positioned by a geotransform.

    Parameters
    ----------
    start : int
        First cell index (1-based, inclusive).
    end : int
        Last cell index (1-based, inclusive).
    geotransform : Geotransform
        Geotransform shared by the x and y axes.
    refsys : Any, optional
        Opaque reference system tag, e.g. a ``rasterio.crs.CRS``.
    """
    start: int
    end: int
    geotransform: Geotransform
    refsys: Any = field(default=None, compare=False)

    def __post_init__(self):
        if self.end < self.start:
            raise ValidationError(f"Axis end ({self.end}) precedes start ({self.start})")
        object.__setattr__(self, "geotransform", Geotransform.from_sequence(self.geotransform))

    @property
    def size(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True)
class IrregularAxis:
    """Axis with one explicit coordinate value per cell."""
    values: Tuple[float, ...]
    refsys: Any = field(default=None, compare=False)

    def __post_init__(self):
        values = tuple(float(v) for v in self.values)
        if not values:
            raise ValidationError("An irregular axis needs at least one value")
        object.__setattr__(self, "values", values)

    @property
    def size(self) -> int:
        return len(self.values)


Axis = Union[RegularAxis, IrregularAxis]


@dataclass(frozen=True)
class XYDimensions:
    """The x and y axes of a raster grid."""
    x: Axis
    y: Axis

    @classmethod
    def regular(cls, nx: int, ny: int, geotransform: GeotransformLike,
                refsys: Any = None) -> "XYDimensions":
        """Full-extent regular dimensions of an ``nx`` by ``ny`` raster."""
        gt = Geotransform.from_sequence(geotransform)
        return cls(RegularAxis(1, nx, gt, refsys), RegularAxis(1, ny, gt, refsys))

    @classmethod
    def irregular(cls, x_values: Sequence[float], y_values: Sequence[float],
                  refsys: Any = None) -> "XYDimensions":
        return cls(IrregularAxis(tuple(x_values), refsys), IrregularAxis(tuple(y_values), refsys))

    @property
    def shape(self) -> Tuple[int, int]:
        """Number of cells along x and along y."""
        return self.x.size, self.y.size

    @property
    def n_cells(self) -> int:
        return self.x.size * self.y.size

    @property
    def refsys(self) -> Optional[Any]:
        # x and y share one reference system
        return self.x.refsys
