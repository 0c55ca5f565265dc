#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Test suite for metadata parsing, domain checks and subdataset listing.

Dataset access is replaced with canned GDAL responses so that these tests
run without the GDAL python bindings.
"""

import unittest
from unittest import mock

from raster_gdal.core.exceptions import UnknownMetadataDomainError
from raster_gdal.utils import metadata
from raster_gdal.utils.metadata import (
    DOMAIN_LIST, gdal_metadata, gdal_subdatasets, parse_metadata
)

NETCDF_DOMAINS = ["", "SUBDATASETS", "DERIVED_SUBDATASETS"]

NETCDF_METADATA = {
    "": ["NC_GLOBAL#Conventions=CF-1.6", "NC_GLOBAL#title=AVHRR OI SST", "NC_GLOBAL#flag"],
    "SUBDATASETS": [
        'SUBDATASET_1_NAME=NETCDF:"avhrr.nc":anom',
        "SUBDATASET_1_DESC=[1x1x720x1440] anom (16-bit integer)",
        'SUBDATASET_2_NAME=NETCDF:"avhrr.nc":sst',
        "SUBDATASET_2_DESC=[1x1x720x1440] sst (16-bit integer)",
    ],
}


def fake_entries(path, domain, item, options):
    entries = NETCDF_METADATA.get(domain or "", [])
    if item is not None:
        entries = [e for e in entries if e.partition("=")[0] == item]
    return entries


class TestParseMetadata(unittest.TestCase):
    """Test the key=value parser."""

    def test_key_value_pairs(self):
        md = parse_metadata(["AREA_OR_POINT=Area", "TIFFTAG_XRESOLUTION=72"])
        self.assertEqual(md, {"AREA_OR_POINT": "Area", "TIFFTAG_XRESOLUTION": "72"})

    def test_order_is_kept(self):
        md = parse_metadata(["b=1", "a=2", "c=3"])
        self.assertEqual(list(md), ["b", "a", "c"])

    def test_key_without_separator(self):
        self.assertEqual(parse_metadata(["<xml/>"]), {"<xml/>": None})

    def test_key_with_empty_value(self):
        self.assertEqual(parse_metadata(["units="]), {"units": None})

    def test_value_keeps_later_separators(self):
        md = parse_metadata(["SUBDATASET_1_NAME=HDF5:\"f.h5\"://grid=a"])
        self.assertEqual(md["SUBDATASET_1_NAME"], "HDF5:\"f.h5\"://grid=a")

    def test_custom_separator(self):
        self.assertEqual(parse_metadata(["a:b"], sep=":"), {"a": "b"})

    def test_empty(self):
        self.assertEqual(parse_metadata([]), {})


class TestGdalMetadata(unittest.TestCase):
    """Test domain-checked metadata retrieval."""

    def setUp(self):
        patch_domains = mock.patch.object(metadata, "_domains", return_value=NETCDF_DOMAINS)
        patch_entries = mock.patch.object(metadata, "_entries", side_effect=fake_entries)
        self.domains = patch_domains.start()
        self.entries = patch_entries.start()
        self.addCleanup(mock.patch.stopall)

    def test_default_domain_is_parsed(self):
        md = gdal_metadata("avhrr.nc")
        self.assertEqual(md["NC_GLOBAL#title"], "AVHRR OI SST")
        self.assertIsNone(md["NC_GLOBAL#flag"])
        self.domains.assert_not_called()

    def test_domain_list(self):
        self.assertEqual(gdal_metadata("avhrr.nc", DOMAIN_LIST), NETCDF_DOMAINS)
        self.entries.assert_not_called()

    def test_unknown_domain(self):
        with self.assertRaises(UnknownMetadataDomainError):
            gdal_metadata("avhrr.nc", "wrongDomain")
        self.entries.assert_not_called()

    def test_unknown_domain_is_key_error(self):
        with self.assertRaises(KeyError):
            gdal_metadata("avhrr.nc", "IMAGE_STRUCTURE")

    def test_explicit_default_domain_with_item(self):
        md = gdal_metadata("avhrr.nc", "", "NC_GLOBAL#Conventions")
        self.assertEqual(md, {"NC_GLOBAL#Conventions": "CF-1.6"})

    def test_unparsed(self):
        raw = gdal_metadata("avhrr.nc", "SUBDATASETS", parse=False)
        self.assertEqual(raw, NETCDF_METADATA["SUBDATASETS"])

    def test_options_are_forwarded(self):
        gdal_metadata("avhrr.nc", "", options=["HONOUR_VALID_RANGE=NO"])
        self.domains.assert_called_once_with("avhrr.nc", ["HONOUR_VALID_RANGE=NO"])
        self.entries.assert_called_once_with("avhrr.nc", "", None, ["HONOUR_VALID_RANGE=NO"])


class TestGdalSubdatasets(unittest.TestCase):
    """Test subdataset listing."""

    def test_names(self):
        with mock.patch.object(metadata, "_domains", return_value=NETCDF_DOMAINS), \
                mock.patch.object(metadata, "_entries", side_effect=fake_entries):
            names = gdal_subdatasets("avhrr.nc")
        self.assertEqual(names, {
            "SUBDATASET_1_NAME": 'NETCDF:"avhrr.nc":anom',
            "SUBDATASET_2_NAME": 'NETCDF:"avhrr.nc":sst',
        })

    def test_descriptions(self):
        with mock.patch.object(metadata, "_domains", return_value=NETCDF_DOMAINS), \
                mock.patch.object(metadata, "_entries", side_effect=fake_entries):
            descriptions = gdal_subdatasets("avhrr.nc", name=False)
        self.assertEqual(list(descriptions), ["SUBDATASET_1_DESC", "SUBDATASET_2_DESC"])

    def test_domains_read_once(self):
        with mock.patch.object(metadata, "_domains", return_value=NETCDF_DOMAINS) as domains, \
                mock.patch.object(metadata, "_entries", side_effect=fake_entries) as entries:
            gdal_subdatasets("avhrr.nc", options=["A=B"])
        domains.assert_called_once_with("avhrr.nc", ["A=B"])
        entries.assert_called_once_with("avhrr.nc", "SUBDATASETS", None, ["A=B"])

    def test_no_subdatasets(self):
        with mock.patch.object(metadata, "_domains", return_value=["", "IMAGE_STRUCTURE"]), \
                mock.patch.object(metadata, "_entries") as entries:
            self.assertEqual(gdal_subdatasets("L7_ETMs.tif"), {})
        entries.assert_not_called()


if __name__ == '__main__':
    unittest.main()
