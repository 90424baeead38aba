"""
Utility functions and helpers.
"""

from .sysfs import (
    EnumerationError,
    ParseError,
    ReadError,
    SysfsError,
    enumerate_devices,
    read_attribute,
    read_attribute_float,
    try_read_attribute,
    try_read_attribute_float,
)

__all__ = [
    "SysfsError",
    "EnumerationError",
    "ReadError",
    "ParseError",
    "enumerate_devices",
    "read_attribute",
    "read_attribute_float",
    "try_read_attribute",
    "try_read_attribute_float",
]
