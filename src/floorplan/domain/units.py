"""Formatting and parsing of lengths in the layout's display units.

All lengths are stored in inches. Imperial display uses feet and inches
(``5'-6"``); metric display uses meters with two decimals (``2.54m``).
"""

from __future__ import annotations

import math
import re

from .geometry import round_half_up
from .value_objects import UnitSystem

INCHES_PER_FOOT = 12
INCHES_PER_METER = 39.3701

_FEET_INCHES_RE = re.compile(r"^(-?)(\d+)'[\s-]*(\d+)\"?$")
_FEET_RE = re.compile(r"^(-?)(\d+)'$")
_INCHES_RE = re.compile(r"^(-?)(\d+)\"?$")
_DECIMAL_FEET_RE = re.compile(r"^(-?)(\d+\.?\d*)'$")
_METERS_RE = re.compile(r"^(-?)(\d+\.?\d*)m?$")
_NUMBER_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def format_dimension(inches: float, units: UnitSystem | str) -> str:
    """Format a length in inches for display.

    Args:
        inches: Length in inches (may be negative).
        units: Display unit system.

    Returns:
        A display string such as ``5'-6"``, ``6"``, ``3'`` or ``2.54m``.

    Examples:
        >>> format_dimension(66, UnitSystem.FEET_INCHES)
        '5\\'-6"'
        >>> format_dimension(100, UnitSystem.METERS)
        '2.54m'
    """
    if UnitSystem(units) is UnitSystem.FEET_INCHES:
        total = abs(inches)
        feet = math.floor(total / INCHES_PER_FOOT)
        remaining = int(round_half_up(total % INCHES_PER_FOOT))
        # 11.6" rounds up to a whole foot
        if remaining == INCHES_PER_FOOT:
            feet += 1
            remaining = 0
        sign = "-" if inches < 0 and (feet or remaining) else ""

        if feet == 0:
            return f'{sign}{remaining}"'
        if remaining == 0:
            return f"{sign}{feet}'"
        return f"{sign}{feet}'-{remaining}\""

    meters = inches / INCHES_PER_METER
    return f"{meters:.2f}m"


def _sign(marker: str) -> int:
    return -1 if marker == "-" else 1


def parse_dimension(value: str, units: UnitSystem | str) -> float | None:
    """Parse a display string back into inches.

    Accepts ``5'-6"``, ``5' 6"``, ``5'6"``, ``5'``, ``6"``, ``6`` and decimal
    feet (``5.5'``) in imperial mode, and ``2.5m`` or ``2.5`` in metric mode.
    As a last resort a leading number is read as inches (imperial) or
    meters (metric).

    Returns:
        The length in inches, or None if the text cannot be parsed.
    """
    clean = value.strip()

    if UnitSystem(units) is UnitSystem.FEET_INCHES:
        match = _FEET_INCHES_RE.match(clean)
        if match:
            feet = int(match.group(2))
            inches = int(match.group(3))
            return float(_sign(match.group(1)) * (feet * INCHES_PER_FOOT + inches))

        match = _FEET_RE.match(clean)
        if match:
            return float(_sign(match.group(1)) * int(match.group(2)) * INCHES_PER_FOOT)

        match = _INCHES_RE.match(clean)
        if match:
            return float(_sign(match.group(1)) * int(match.group(2)))

        match = _DECIMAL_FEET_RE.match(clean)
        if match:
            return _sign(match.group(1)) * float(match.group(2)) * INCHES_PER_FOOT
    else:
        match = _METERS_RE.match(clean)
        if match:
            return _sign(match.group(1)) * float(match.group(2)) * INCHES_PER_METER

    match = _NUMBER_RE.match(clean)
    if match:
        number = float(match.group(0))
        if UnitSystem(units) is UnitSystem.FEET_INCHES:
            return number
        return number * INCHES_PER_METER

    return None


def to_display_unit(inches: float, units: UnitSystem | str) -> float:
    """Convert inches to feet (imperial) or meters (metric)."""
    if UnitSystem(units) is UnitSystem.FEET_INCHES:
        return inches / INCHES_PER_FOOT
    return inches / INCHES_PER_METER


def from_display_unit(value: float, units: UnitSystem | str) -> float:
    """Convert feet (imperial) or meters (metric) back to inches."""
    if UnitSystem(units) is UnitSystem.FEET_INCHES:
        return value * INCHES_PER_FOOT
    return value * INCHES_PER_METER


def grid_size_label(grid_size_inches: float, units: UnitSystem | str) -> str:
    """Human label for a grid spacing, e.g. ``1 ft`` or ``50 cm``."""
    if UnitSystem(units) is UnitSystem.FEET_INCHES:
        named = {12: "1 ft", 6: "6 in", 3: "3 in", 1: "1 in"}
        if grid_size_inches in named:
            return named[grid_size_inches]
        return format_dimension(grid_size_inches, units)

    meters = grid_size_inches / INCHES_PER_METER
    if meters == 1:
        return "1 m"
    if meters == 0.5:
        return "50 cm"
    if meters == 0.1:
        return "10 cm"
    return f"{meters * 100:.0f} cm"
