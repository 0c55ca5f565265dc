#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Raster GDAL Package.

Thin bindings over GDAL for raster metadata, subdatasets and reference
systems, together with affine geotransform math and conversion of raster
grids into point or polygon geometries.
"""

__version__ = "0.1.0"
__author__ = "Elena Project Team"
__email__ = "user@example.com"
