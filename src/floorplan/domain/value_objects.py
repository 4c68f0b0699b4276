"""Value objects for the layout domain."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnitSystem(str, Enum):
    """Measurement display unit for a layout.

    Document coordinates are always inches; the unit system only affects
    how lengths are formatted and parsed.
    """

    FEET_INCHES = "ft-in"
    METERS = "meters"


class PageSize(str, Enum):
    """Page size presets."""

    LETTER = "letter"
    A4 = "a4"
    ARCH_D = "arch-d"
    CUSTOM = "custom"


class EntityType(str, Enum):
    """Discriminator values for the entity variants."""

    WALL = "wall"
    DOOR = "door"
    WINDOW = "window"
    OBJECT = "object"
    TEXT = "text"
    DIMENSION = "dimension"


class ObjectType(str, Enum):
    """Known floor object classifiers.

    Floor objects may also carry custom classifier strings; these values
    are the ones with dedicated rendering.
    """

    DESK = "desk"
    CHAIR = "chair"
    SHELF = "shelf"
    RACK = "rack"
    RECT = "rect"


class SwingDirection(str, Enum):
    """Which way a door swings relative to its host wall."""

    INWARD = "inward"
    OUTWARD = "outward"


class HingeSide(str, Enum):
    """Hinge side of a door."""

    LEFT = "left"
    RIGHT = "right"


class ToolMode(str, Enum):
    """Exclusive interaction mode governing how pointer input is interpreted."""

    SELECT = "select"
    WALL = "wall"
    DOOR = "door"
    WINDOW = "window"
    OBJECT = "object"
    MEASURE = "measure"
    TEXT = "text"


class SnapKind(str, Enum):
    """Feature type a snap candidate was generated from."""

    GRID = "grid"
    ENDPOINT = "endpoint"
    MIDPOINT = "midpoint"
    CENTER = "center"
    EDGE = "edge"


@dataclass(frozen=True)
class Point:
    """2D point in document space (inches).

    Negative coordinates are valid; the page origin is the top-left corner
    and y grows downward, matching screen space.
    """

    x: float
    y: float

    def offset(self, dx: float, dy: float) -> Point:
        """Return a new point translated by (dx, dy)."""
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class EntityStyle:
    """Visual style overrides, interpreted only by renderers and exporters."""

    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = None
    opacity: float | None = None
