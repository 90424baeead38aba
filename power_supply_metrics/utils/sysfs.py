"""
Helpers for reading the power_supply device class from sysfs.

Layout:
- {root}/class/power_supply/{device}/{attribute}

Every attribute is a plain-text file whose first line is the value.
Readers raise typed errors; the try_* variants return (value, error)
so the caller can decide what a failed read turns into.
"""

import fnmatch
from pathlib import Path

# Device class directory relative to the sysfs mount point
POWER_SUPPLY_CLASS = Path("class") / "power_supply"

# Supplies are numbered (BAT0, AC1, hidpp_battery_12, ...)
DEVICE_GLOB = "*[0-9]*"


class SysfsError(Exception):
    """Base class for sysfs access errors."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = path
        super().__init__(message)


class EnumerationError(SysfsError):
    """The device class directory cannot be listed."""


class ReadError(SysfsError):
    """An attribute file is missing, unreadable or empty."""


class ParseError(SysfsError):
    """An attribute value is not a valid number."""


def power_supply_dir(sysfs_root: str | Path) -> Path:
    """Get the power_supply class directory under a sysfs root."""
    return Path(sysfs_root) / POWER_SUPPLY_CLASS


def enumerate_devices(sysfs_root: str | Path) -> list[Path]:
    """
    List power supply device directories.

    Args:
        sysfs_root: sysfs mount point (usually /sys)

    Returns:
        Device directories sorted by name, possibly empty

    Raises:
        EnumerationError: If the class directory cannot be listed
    """
    class_dir = power_supply_dir(sysfs_root)

    try:
        entries = sorted(class_dir.iterdir())
    except OSError as e:
        raise EnumerationError(f"couldn't list {class_dir}: {e}", class_dir) from e

    return [
        entry
        for entry in entries
        if fnmatch.fnmatchcase(entry.name, DEVICE_GLOB) and entry.is_dir()
    ]


def read_attribute(device_path: Path, name: str) -> str:
    """
    Read the first line of an attribute file.

    Args:
        device_path: Device directory
        name: Attribute file name (status, model_name, ...)

    Returns:
        First line without line terminators

    Raises:
        ReadError: If the file is absent, unreadable or has no content
    """
    path = device_path / name

    try:
        with path.open(encoding="utf-8", errors="replace") as f:
            line = f.readline()
    except OSError as e:
        raise ReadError(f"couldn't read {path}: {e}", path) from e

    text = line.rstrip("\r\n")
    if not text:
        raise ReadError(f"empty attribute {path}", path)

    return text


def read_attribute_float(device_path: Path, name: str) -> float:
    """
    Read an attribute and parse it as a float.

    Raises:
        ReadError: If the file cannot be read
        ParseError: If the value is not a number
    """
    text = read_attribute(device_path, name)
    path = device_path / name

    # float() would accept padding and digit separators
    if text != text.strip() or "_" in text:
        raise ParseError(f"invalid number {text!r} in {path}", path)

    try:
        return float(text)
    except ValueError as e:
        raise ParseError(f"invalid number {text!r} in {path}", path) from e


def try_read_attribute(device_path: Path, name: str) -> tuple[str | None, SysfsError | None]:
    """Read an attribute, returning (text, None) or (None, error)."""
    try:
        return read_attribute(device_path, name), None
    except SysfsError as e:
        return None, e


def try_read_attribute_float(
    device_path: Path, name: str
) -> tuple[float | None, SysfsError | None]:
    """Read a numeric attribute, returning (value, None) or (None, error)."""
    try:
        return read_attribute_float(device_path, name), None
    except SysfsError as e:
        return None, e
