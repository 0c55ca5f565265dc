#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for command line argument parsing.
"""

import io
import argparse
import unittest
from contextlib import redirect_stderr

from raster_gdal.cli import cell_indices, parse_arguments


class TestCellIndices(unittest.TestCase):
    """Test parsing of the --which option."""

    def test_comma_separated(self):
        self.assertEqual(cell_indices("5,2"), [5, 2])

    def test_blank_entries_are_skipped(self):
        self.assertEqual(cell_indices("1, ,3,"), [1, 3])

    def test_non_integer(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            cell_indices("1,x")

    def test_parser_rejects_non_integer(self):
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(SystemExit) as ctx:
            parse_arguments(["cells", "-i", "raster.tif", "-w", "1,x"])
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("--which", stderr.getvalue())

    def test_parser_accepts_indices(self):
        args = parse_arguments(["cells", "-i", "raster.tif", "-w", "4,1"])
        self.assertEqual(args.which, [4, 1])

    def test_default_selects_all(self):
        args = parse_arguments(["cells", "-i", "raster.tif"])
        self.assertIsNone(args.which)


if __name__ == '__main__':
    unittest.main()
