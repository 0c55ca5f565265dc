#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Geotransform math and grid-to-geometry conversion.
"""
from raster_gdal.geo.geotransform import (
    Geotransform, apply_geotransform, invert_geotransform, xy_from_colrow
)
from raster_gdal.geo.dimensions import IrregularAxis, RegularAxis, XYDimensions
from raster_gdal.geo.grid_geometry import (
    CellGeometries, CellMode, cells_as_points, cells_as_polygons, dimensions_to_geometries
)
