#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Metadata utilities for the GDAL raster bindings.

GDAL reports metadata as flat lists of ``key=value`` strings grouped into
named domains. This module parses those lists into mappings, checks
requested domains against the ones a dataset provides, and lists
subdatasets.
"""
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from raster_gdal.core.config import METADATA_SEPARATOR, SUBDATASETS_DOMAIN
from raster_gdal.core.exceptions import UnknownMetadataDomainError
from raster_gdal.core.logging_config import get_module_logger

# Initialize logger
logger = get_module_logger(__name__)

PathLike = Union[str, Path]
Metadata = Dict[str, Optional[str]]


class _DomainList:
    """Sentinel requesting the names of the available metadata domains."""

    def __repr__(self) -> str:
        return "DOMAIN_LIST"


DOMAIN_LIST = _DomainList()


def _domains(path: PathLike, options: Sequence[str]) -> List[str]:
    # Import here so that parsing works without the GDAL bindings
    from raster_gdal.core.io import list_metadata_domains
    return list_metadata_domains(path, options)


def _entries(path: PathLike, domain: Optional[str], item: Optional[str],
             options: Sequence[str]) -> List[str]:
    from raster_gdal.core.io import get_metadata
    return get_metadata(path, domain, item, options)


def parse_metadata(lines: Iterable[str], sep: str = METADATA_SEPARATOR) -> Metadata:
    """
    Parse ``key=value`` strings into an ordered mapping.

    Parameters
    ----------
    lines : iterable of str
        Metadata entries as returned by GDAL.
    sep : str, optional
        Key/value separator, by default ``'='``.

    Returns
    -------
    dict
        Mapping from key to value. The value is split off at the first
        separator; keys without a separator, or with nothing after it,
        map to None. A repeated key keeps its last value.
    """
    parsed: Metadata = {}
    for line in lines:
        key, found, value = line.partition(sep)
        parsed[key] = value if found and value else None
    return parsed


def gdal_metadata(path: PathLike, domain: Union[str, _DomainList, None] = None,
                  item: Optional[str] = None, options: Sequence[str] = (),
                  parse: bool = True) -> Union[Metadata, List[str]]:
    """
    Get metadata of a raster dataset.

    Parameters
    ----------
    path : str or Path
        Dataset identifier.
    domain : str, DOMAIN_LIST or None
        Metadata domain. None reads the default domain without checking it;
        ``''`` names the default domain explicitly; ``DOMAIN_LIST`` returns
        the list of available domain names instead of metadata.
    item : str, optional
        Restrict the result to a single key of the domain.
    options : sequence of str
        GDAL open options.
    parse : bool, optional
        Return a parsed mapping (default) or the raw ``key=value`` list.

    Returns
    -------
    dict or list of str
        Parsed metadata, raw entries, or domain names.

    Raises
    ------
    UnknownMetadataDomainError
        If ``domain`` names a domain the dataset does not provide.

    Examples
    --------
    >>> gdal_metadata("avhrr-only-v2.19810901.nc")
    >>> gdal_metadata("avhrr-only-v2.19810901.nc", DOMAIN_LIST)
    >>> gdal_metadata("L7_ETMs.tif", "", "AREA_OR_POINT")
    """
    if domain is DOMAIN_LIST:
        return _domains(path, options)

    if domain is not None:
        available = _domains(path, options)
        if domain not in available:
            logger.error(f"Metadata domain '{domain}' not found in {path}; available: {available}")
            raise UnknownMetadataDomainError(
                f"domain '{domain}' not found in available metadata domains {available}"
            )

    entries = _entries(path, domain, item, options)
    logger.debug(f"Read {len(entries)} metadata entries from {path}")
    return parse_metadata(entries) if parse else entries


def gdal_subdatasets(path: PathLike, options: Sequence[str] = (), name: bool = True) -> Metadata:
    """
    List the subdatasets of a raster dataset.

    Parameters
    ----------
    path : str or Path
        Dataset identifier.
    options : sequence of str
        GDAL open options.
    name : bool, optional
        Return subdataset names (default) or their descriptions.

    Returns
    -------
    dict
        Empty when the dataset has no subdatasets, else ``SUBDATASET_<n>_NAME``
        (or ``SUBDATASET_<n>_DESC``) keys mapped to their values.
    """
    if SUBDATASETS_DOMAIN not in _domains(path, options):
        return {}

    md = parse_metadata(_entries(path, SUBDATASETS_DOMAIN, None, options))
    items = list(md.items())
    selected = items[0::2] if name else items[1::2]
    logger.info(f"Found {len(selected)} subdatasets in {path}")
    return dict(selected)
