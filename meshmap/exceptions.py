#!/usr/bin/env python3
"""
MeshMap Exceptions

This module defines custom exceptions used throughout the meshmap library.
"""


class HeightMapException(Exception):
    """Base class for all meshmap exceptions."""
    pass


class InvalidArgument(HeightMapException, ValueError):
    """Exception raised when a configuration value fails a precondition."""
    pass


class HeightMapInputError(HeightMapException):
    """Exception raised when the supplied point data cannot be rasterized."""
    pass


class EmptyInputError(HeightMapInputError):
    """Exception raised when no points are supplied."""
    pass


class DegenerateInputError(HeightMapInputError):
    """Exception raised when the points have zero extent along X or Z."""
    pass


class HeightMapFileError(HeightMapException, IOError):
    """Exception raised when a mesh or heightmap file cannot be read or written."""
    pass


class ConfigError(HeightMapException):
    """Exception raised for configuration file errors."""
    pass
