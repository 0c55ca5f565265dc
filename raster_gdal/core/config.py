#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration settings for the GDAL raster bindings.

This module centralizes all configuration parameters used across the
geotransform, grid geometry and I/O modules, making it easier to modify
settings in one place.
"""
from typing import Dict, Any, Union
import os
from pathlib import Path

import yaml

# General configuration
CELL_CENTER_OFFSET: float = 0.5   # Pixel-space offset of a cell center
METADATA_SEPARATOR: str = "="
SUBDATASETS_DOMAIN: str = "SUBDATASETS"

# Path configuration
PROJECT_ROOT: Path = Path(__file__).parent.absolute()
DEFAULT_OUTPUT_DIR: Path = Path(os.environ.get("RASTER_GDAL_OUTPUT_DIR", Path.cwd() / "output"))

# Geotransform configuration
GEOTRANSFORM_CONFIG: Dict[str, Any] = {
    # |det| <= tolerance * max(|c1|, |c2|, |c4|, |c5|)**2 is treated as singular
    "singular_tolerance": 1e-10,
    # Used when a dataset carries no geotransform
    "default_geotransform": (0.0, 1.0, 0.0, 0.0, 0.0, 1.0),
}

# Raster reading configuration
READ_CONFIG: Dict[str, Any] = {
    "read_data": True,         # Materialize pixel arrays by default
}

# Export configuration
EXPORT_CONFIG: Dict[str, Any] = {
    "metadata_format": "json",  # Options: 'json', 'yaml'
    "chunk_export": True,        # Export geometry tables in chunks
    "chunk_size": 10000,         # Rows per chunk when exporting
}

# Logging configuration
LOGGING_CONFIG: Dict[str, Any] = {
    "level": "INFO",  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    "log_to_file": False,
    "log_file": DEFAULT_OUTPUT_DIR / "raster_gdal.log",
    "log_format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

_SECTIONS: Dict[str, Dict[str, Any]] = {
    "geotransform": GEOTRANSFORM_CONFIG,
    "read": READ_CONFIG,
    "export": EXPORT_CONFIG,
    "logging": LOGGING_CONFIG,
}


def load_config_file(path: Union[str, Path]) -> Dict[str, Dict[str, Any]]:
    """
    Merge a YAML configuration file into the module-level sections.

    The file is a mapping of section names (``geotransform``, ``read``,
    ``export``, ``logging``) to key/value overrides. Unknown sections are
    rejected so that typos do not pass silently.

    Parameters
    ----------
    path : str or Path
        Path to the YAML file.

    Returns
    -------
    dict
        The updated sections, keyed by section name.
    """
    with open(path, "r") as f:
        overrides = yaml.safe_load(f) or {}

    if not isinstance(overrides, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")

    for section, values in overrides.items():
        if section not in _SECTIONS:
            raise ValueError(f"Unknown configuration section '{section}', "
                             f"expected one of {sorted(_SECTIONS)}")
        if not isinstance(values, dict):
            raise ValueError(f"Configuration section '{section}' must be a mapping")
        _SECTIONS[section].update(values)

    return _SECTIONS
