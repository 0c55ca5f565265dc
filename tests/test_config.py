#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for configuration loading and logging setup.
"""

import os
import copy
import logging
import shutil
import tempfile
import unittest

from raster_gdal.core import config
from raster_gdal.core.config import GEOTRANSFORM_CONFIG, load_config_file
from raster_gdal.core.exceptions import SingularTransformError
from raster_gdal.core.logging_config import get_module_logger, setup_logging
from raster_gdal.geo.geotransform import invert_geotransform


class TestLoadConfigFile(unittest.TestCase):
    """Test YAML configuration overrides."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.saved = copy.deepcopy(GEOTRANSFORM_CONFIG)

    def tearDown(self):
        GEOTRANSFORM_CONFIG.clear()
        GEOTRANSFORM_CONFIG.update(self.saved)
        shutil.rmtree(self.tmpdir)

    def write(self, text):
        path = os.path.join(self.tmpdir, "config.yaml")
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_override_tolerance(self):
        load_config_file(self.write("geotransform:\n  singular_tolerance: 0.5\n"))
        self.assertEqual(config.GEOTRANSFORM_CONFIG["singular_tolerance"], 0.5)
        # det = 0.9 * 1 - 0.5 * 1 = 0.4 <= 0.5 * 1.0**2
        with self.assertRaises(SingularTransformError):
            invert_geotransform((0, 0.9, 0.5, 0, 1.0, 1.0))

    def test_unknown_section(self):
        with self.assertRaises(ValueError):
            load_config_file(self.write("rendering:\n  dpi: 300\n"))

    def test_section_must_be_mapping(self):
        with self.assertRaises(ValueError):
            load_config_file(self.write("read: true\n"))

    def test_empty_file(self):
        sections = load_config_file(self.write(""))
        self.assertIn("geotransform", sections)


class TestLogging(unittest.TestCase):
    """Test logger naming and setup."""

    def test_module_logger_is_package_child(self):
        self.assertEqual(get_module_logger("tests.x").name, "raster_gdal.tests.x")
        self.assertEqual(get_module_logger("raster_gdal.geo").name, "raster_gdal.geo")

    def test_setup_sets_level(self):
        logger = setup_logging("DEBUG")
        self.assertEqual(logger.level, logging.DEBUG)
        logger = setup_logging("WARNING")
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(len(logger.handlers), len(setup_logging("WARNING").handlers))

    def test_invalid_level(self):
        with self.assertRaises(ValueError):
            setup_logging("LOUD")


if __name__ == '__main__':
    unittest.main()
