#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Core functionality for the GDAL raster bindings.

This module contains the GDAL-backed dataset readers, configuration
management, the exception hierarchy and logging setup.
"""
