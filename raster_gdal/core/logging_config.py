#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging configuration for the GDAL raster bindings.

This module provides centralized configuration for the logging system
used throughout the package.
"""
import logging
import os
from typing import Optional
from raster_gdal.core.config import LOGGING_CONFIG

PACKAGE_LOGGER_NAME = "raster_gdal"


def setup_logging(log_level: Optional[str] = None,
                  log_file: Optional[str] = None,
                  module_name: str = PACKAGE_LOGGER_NAME) -> logging.Logger:
    """
    Configure and return a logger with the specified settings.

    Parameters
    ----------
    log_level : str, optional
        Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        If None, uses the level from config.py.
    log_file : str, optional
        Path to log file. If given, a file handler is added even when
        file logging is disabled in config.py.
    module_name : str, optional
        Name of the logger, by default the package logger.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(module_name)

    level = log_level or LOGGING_CONFIG.get("level", "INFO")
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")
    logger.setLevel(numeric_level)

    # Already configured: only the level may change
    if logger.handlers:
        return logger

    log_to_file = LOGGING_CONFIG.get("log_to_file", False) or log_file is not None
    log_file_path = log_file or LOGGING_CONFIG.get("log_file")
    log_format = LOGGING_CONFIG.get("log_format",
                                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file and log_file_path:
        log_dir = os.path.dirname(str(log_file_path))
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug(f"Logging initialized at level: {level}")
    return logger


def get_module_logger(module_name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Parameters
    ----------
    module_name : str
        Name of the module, typically __name__.

    Returns
    -------
    logging.Logger
        Child of the package logger.
    """
    if module_name == PACKAGE_LOGGER_NAME or module_name.startswith(PACKAGE_LOGGER_NAME + "."):
        return logging.getLogger(module_name)
    return logging.getLogger(f"{PACKAGE_LOGGER_NAME}.{module_name}")
