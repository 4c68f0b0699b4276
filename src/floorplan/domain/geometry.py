"""Plane geometry helpers used by snapping, attachment and rendering."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from .value_objects import Point


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box."""

    x: float
    y: float
    width: float
    height: float


def round_half_up(value: float) -> float:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def angle_between_points(p1: Point, p2: Point) -> float:
    """Angle of the vector p1 -> p2 in degrees."""
    return math.degrees(math.atan2(p2.y - p1.y, p2.x - p1.x))


def midpoint(p1: Point, p2: Point) -> Point:
    return Point((p1.x + p2.x) / 2, (p1.y + p2.y) / 2)


def snap_to_grid(value: float, grid_size: float) -> float:
    """Snap a scalar to the nearest multiple of ``grid_size``."""
    return round_half_up(value / grid_size) * grid_size


def snap_point_to_grid(point: Point, grid_size: float) -> Point:
    """Snap each axis of a point independently to the grid."""
    return Point(snap_to_grid(point.x, grid_size), snap_to_grid(point.y, grid_size))


def segment_parameter(point: Point, start: Point, end: Point) -> float:
    """Parameter t in [0, 1] of the projection of ``point`` onto a segment."""
    dx = end.x - start.x
    dy = end.y - start.y
    length_squared = dx * dx + dy * dy
    if length_squared == 0:
        return 0.0
    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_squared
    return max(0.0, min(1.0, t))


def closest_point_on_segment(point: Point, start: Point, end: Point) -> Point:
    """Closest point to ``point`` on the segment start -> end."""
    t = segment_parameter(point, start, end)
    return Point(start.x + t * (end.x - start.x), start.y + t * (end.y - start.y))


def rotate_point(point: Point, center: Point, angle_degrees: float) -> Point:
    """Rotate ``point`` around ``center`` by ``angle_degrees``."""
    angle = math.radians(angle_degrees)
    cos = math.cos(angle)
    sin = math.sin(angle)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(center.x + dx * cos - dy * sin, center.y + dx * sin + dy * cos)


def point_in_rect(
    point: Point,
    rect_x: float,
    rect_y: float,
    rect_width: float,
    rect_height: float,
    rotation: float = 0.0,
) -> bool:
    """Check whether a point lies inside a rectangle rotated about its center."""
    if rotation != 0:
        center = Point(rect_x + rect_width / 2, rect_y + rect_height / 2)
        point = rotate_point(point, center, -rotation)
    return (
        rect_x <= point.x <= rect_x + rect_width
        and rect_y <= point.y <= rect_y + rect_height
    )


def rect_corners(
    x: float, y: float, width: float, height: float, rotation: float = 0.0
) -> list[Point]:
    """Corners of a rectangle (clockwise from top-left), rotated about its center."""
    corners = [
        Point(x, y),
        Point(x + width, y),
        Point(x + width, y + height),
        Point(x, y + height),
    ]
    if rotation == 0:
        return corners
    center = Point(x + width / 2, y + height / 2)
    return [rotate_point(c, center, rotation) for c in corners]


def bounding_box(points: Iterable[Point]) -> BoundingBox:
    """Bounding box of a set of points; empty input yields a zero box."""
    pts = list(points)
    if not pts:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    min_x = min(p.x for p in pts)
    min_y = min(p.y for p in pts)
    max_x = max(p.x for p in pts)
    max_y = max(p.y for p in pts)
    return BoundingBox(min_x, min_y, max_x - min_x, max_y - min_y)


def normalize_angle(angle: float) -> float:
    """Normalize an angle to the range [0, 360)."""
    result = angle % 360.0
    return 0.0 if result == 360.0 else result


def snap_angle(angle: float, snap_degrees: float = 45.0) -> float:
    """Snap an angle to the nearest multiple of ``snap_degrees``."""
    return round_half_up(angle / snap_degrees) * snap_degrees
