"""Format-neutral drawing primitives built from a layout.

Every exporter renders the same display list, so SVG, PNG, PDF and DXF
output agree on what is drawn. Coordinates, stroke widths and text sizes
are in document inches with y growing downward; each renderer maps them to
its own units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from floorplan.contracts.dtos import ExportOptions
from floorplan.domain.entities import (
    DimensionLine,
    Door,
    Entity,
    FloorObject,
    Layout,
    TextLabel,
    Wall,
    Window,
)
from floorplan.domain.geometry import distance, midpoint, rect_corners, rotate_point
from floorplan.domain.units import format_dimension
from floorplan.domain.value_objects import HingeSide, Point, SwingDirection

# Layer names (also used verbatim as DXF layers)
LAYER_GRID = "GRID"
LAYER_WALLS = "WALLS"
LAYER_OPENINGS = "OPENINGS"
LAYER_OBJECTS = "OBJECTS"
LAYER_TEXT = "TEXT"
LAYER_DIMENSIONS = "DIMENSIONS"

DEFAULT_STROKE = "#333333"
DEFAULT_FILL = "#ffffff"
GRID_COLOR = "#e0e0e0"
DIMENSION_COLOR = "#666666"
TEXT_COLOR = "#333333"
WINDOW_COLOR = "#60a5fa"

OBJECT_FILLS = {
    "desk": "#d4a574",
    "chair": "#6b7280",
    "shelf": "#a78bfa",
    "rack": "#1e293b",
}

# Sizes below are in device pixels at the reference display scale of
# 4 px/inch and are divided by 4 to get inches.
_REFERENCE_SCALE = 4.0
GRID_LINE_PX = 0.5
DIMENSION_FONT_PX = 10.0
OBJECT_LABEL_FONT_PX = 12.0
DIMENSION_OFFSET_PX = 10.0
WINDOW_TICK_PX = 3.0
SWING_ARC_STEPS = 16


@dataclass(frozen=True)
class Polyline:
    points: tuple[Point, ...]
    stroke: str
    width: float
    layer: str
    dashed: bool = False


@dataclass(frozen=True)
class Polygon:
    """Closed filled outline."""

    points: tuple[Point, ...]
    fill: str
    stroke: str
    width: float
    layer: str


@dataclass(frozen=True)
class Label:
    """Text anchored at ``position``; ``anchor`` is ``start`` or ``middle``."""

    position: Point
    text: str
    size: float
    color: str
    layer: str
    anchor: str = "start"
    rotation: float = 0.0


Primitive = Union[Polyline, Polygon, Label]


@dataclass
class Drawing:
    """A page of primitives in document inches.

    Attributes:
        width: Page width in inches.
        height: Page height in inches.
        scale: Display scale in pixels per inch.
        primitives: Items in paint order (grid first, then entities in
            layering order, then automatic dimensions).
    """

    width: float
    height: float
    scale: float
    primitives: list[Primitive] = field(default_factory=list)

    def on_layer(self, layer: str) -> list[Primitive]:
        return [p for p in self.primitives if p.layer == layer]


def _px(value: float) -> float:
    """Reference-scale pixels to inches."""
    return value / _REFERENCE_SCALE


def _stroke_width(entity: Entity) -> float:
    style = entity.style
    width = style.stroke_width if style is not None and style.stroke_width else 1.0
    return _px(width)


def _stroke(entity: Entity) -> str:
    if entity.style is not None and entity.style.stroke:
        return entity.style.stroke
    return DEFAULT_STROKE


def grid_primitives(layout: Layout) -> list[Primitive]:
    settings = layout.settings
    step = settings.grid_size
    if step <= 0:
        return []
    width, height = settings.page_width, settings.page_height
    lines: list[Primitive] = []
    for i in range(int(width // step) + 1):
        x = i * step
        lines.append(
            Polyline((Point(x, 0), Point(x, height)), GRID_COLOR, _px(GRID_LINE_PX), LAYER_GRID)
        )
    for j in range(int(height // step) + 1):
        y = j * step
        lines.append(
            Polyline((Point(0, y), Point(width, y)), GRID_COLOR, _px(GRID_LINE_PX), LAYER_GRID)
        )
    return lines


def wall_primitives(wall: Wall) -> list[Primitive]:
    points = wall.absolute_points()
    if len(points) < 2:
        return []
    return [Polyline(tuple(points), _stroke(wall), wall.thickness, LAYER_WALLS)]


def door_primitives(door: Door) -> list[Primitive]:
    """Door leaf along the wall plus the open leaf and its swing arc."""
    origin = Point(door.x, door.y)
    w = door.width
    if door.hinge_side == HingeSide.LEFT:
        hinge, jamb, base_angle = origin, Point(door.x + w, door.y), 0.0
        turn = -1.0
    else:
        hinge, jamb, base_angle = Point(door.x + w, door.y), origin, 180.0
        turn = 1.0
    # Inward swings open toward -y (up the page) before rotation.
    if door.swing_direction == SwingDirection.OUTWARD:
        turn = -turn

    def on_arc(angle: float) -> Point:
        rad = math.radians(base_angle + turn * angle)
        return Point(hinge.x + w * math.cos(rad), hinge.y + w * math.sin(rad))

    steps = max(2, int(SWING_ARC_STEPS * door.open_angle / 90.0))
    arc = [on_arc(door.open_angle * i / steps) for i in range(steps + 1)]

    def placed(points: list[Point]) -> tuple[Point, ...]:
        return tuple(rotate_point(p, origin, door.rotation) for p in points)

    stroke, width = _stroke(door), _stroke_width(door)
    return [
        Polyline(placed([hinge, jamb]), stroke, width * 2, LAYER_OPENINGS),
        Polyline(placed([hinge, arc[-1]]), stroke, width, LAYER_OPENINGS),
        Polyline(placed(arc), stroke, width, LAYER_OPENINGS, dashed=True),
    ]


def window_primitives(window: Window) -> list[Primitive]:
    origin = Point(window.x, window.y)
    w = window.width
    tick = _px(WINDOW_TICK_PX)
    stroke, width = _stroke(window), _stroke_width(window)

    def placed(*points: Point) -> tuple[Point, ...]:
        return tuple(rotate_point(p, origin, window.rotation) for p in points)

    items: list[Primitive] = [
        Polyline(placed(origin, Point(window.x + w, window.y)), WINDOW_COLOR, width * 3, LAYER_OPENINGS)
    ]
    for fraction in (0.3, 0.7):
        x = window.x + w * fraction
        items.append(
            Polyline(placed(Point(x, window.y - tick), Point(x, window.y + tick)), stroke, width, LAYER_OPENINGS)
        )
    return items


def object_primitives(obj: FloorObject, include_labels: bool) -> list[Primitive]:
    if obj.style is not None and obj.style.fill:
        fill = obj.style.fill
    else:
        fill = OBJECT_FILLS.get(str(obj.object_type), DEFAULT_FILL)
    corners = rect_corners(obj.x, obj.y, obj.width, obj.height, obj.rotation)
    items: list[Primitive] = [
        Polygon(tuple(corners), fill, _stroke(obj), _stroke_width(obj), LAYER_OBJECTS)
    ]
    if include_labels and obj.label:
        items.append(
            Label(
                obj.center,
                obj.label,
                _px(OBJECT_LABEL_FONT_PX),
                TEXT_COLOR,
                LAYER_OBJECTS,
                anchor="middle",
                rotation=obj.rotation,
            )
        )
    return items


def text_primitives(text: TextLabel, include_labels: bool) -> list[Primitive]:
    if not include_labels:
        return []
    return [
        Label(
            Point(text.x, text.y),
            text.text,
            _px(text.font_size),
            TEXT_COLOR,
            LAYER_TEXT,
            rotation=text.rotation,
        )
    ]


def dimension_primitives(dim: DimensionLine, units: str) -> list[Primitive]:
    length = distance(dim.start, dim.end)
    mid = midpoint(dim.start, dim.end)
    return [
        Polyline((dim.start, dim.end), DIMENSION_COLOR, _px(1.0), LAYER_DIMENSIONS),
        Label(
            Point(mid.x, mid.y - _px(DIMENSION_OFFSET_PX)),
            format_dimension(length, units),
            _px(DIMENSION_FONT_PX),
            DIMENSION_COLOR,
            LAYER_DIMENSIONS,
            anchor="middle",
        ),
    ]


def wall_dimension_labels(wall: Wall, units: str) -> list[Primitive]:
    """Length label above the midpoint of every wall segment."""
    labels: list[Primitive] = []
    for start, end in wall.segments():
        mid = midpoint(start, end)
        labels.append(
            Label(
                Point(mid.x, mid.y - _px(DIMENSION_OFFSET_PX)),
                format_dimension(distance(start, end), units),
                _px(DIMENSION_FONT_PX),
                DIMENSION_COLOR,
                LAYER_DIMENSIONS,
                anchor="middle",
            )
        )
    return labels


def entity_primitives(entity: Entity, layout: Layout, options: ExportOptions) -> list[Primitive]:
    """Primitives for one entity, dispatching over every variant."""
    match entity:
        case Wall():
            return wall_primitives(entity)
        case Door():
            return door_primitives(entity)
        case Window():
            return window_primitives(entity)
        case FloorObject():
            return object_primitives(entity, options.include_labels)
        case TextLabel():
            return text_primitives(entity, options.include_labels)
        case DimensionLine():
            return dimension_primitives(entity, layout.settings.units)
    raise TypeError(f"Unsupported entity variant: {type(entity).__name__}")


def build_drawing(layout: Layout, options: ExportOptions) -> Drawing:
    """Build the display list for ``layout`` under ``options``."""
    settings = layout.settings
    drawing = Drawing(width=settings.page_width, height=settings.page_height, scale=settings.scale)
    if options.include_grid:
        drawing.primitives.extend(grid_primitives(layout))
    for entity in layout.entities:
        drawing.primitives.extend(entity_primitives(entity, layout, options))
    if options.include_dimensions:
        for wall in layout.walls():
            drawing.primitives.extend(wall_dimension_labels(wall, settings.units))
    return drawing


def dash_segments(
    start: Point, end: Point, dash: float, gap: float
) -> list[tuple[Point, Point]]:
    """Split a segment into dash pieces for renderers without dash support."""
    length = distance(start, end)
    if length == 0 or dash <= 0:
        return [(start, end)]
    ux, uy = (end.x - start.x) / length, (end.y - start.y) / length
    pieces: list[tuple[Point, Point]] = []
    offset = 0.0
    while offset < length:
        stop = min(offset + dash, length)
        pieces.append(
            (
                Point(start.x + ux * offset, start.y + uy * offset),
                Point(start.x + ux * stop, start.y + uy * stop),
            )
        )
        offset = stop + gap
    return pieces
