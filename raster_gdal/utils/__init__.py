#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Utility functions for the GDAL raster bindings.
"""
