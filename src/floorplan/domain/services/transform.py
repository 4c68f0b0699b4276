"""Coordinate transforms between device (pointer) space and document space.

Device coordinates are pixels relative to the canvas. A document point is
rendered at ``pan + point * display_scale * zoom``, where ``display_scale``
(pixels per inch) is fixed per document and ``pan``/``zoom`` are
interactive view state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from floorplan.domain.value_objects import Point

MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
WHEEL_ZOOM_STEP = 1.1


@dataclass(frozen=True)
class Viewport:
    """Interactive view state: pan offset in device pixels and zoom factor."""

    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    @property
    def pan(self) -> Point:
        return Point(self.pan_x, self.pan_y)

    def with_pan(self, pan: Point) -> Viewport:
        return replace(self, pan_x=pan.x, pan_y=pan.y)


def clamp_zoom(zoom: float) -> float:
    """Clamp a zoom factor to [MIN_ZOOM, MAX_ZOOM]."""
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def _usable(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def to_document(
    device_point: Point, pan: Point, zoom: float, display_scale: float
) -> Point:
    """Map a device-space point into document space (inches).

    Degenerate view parameters (zero or non-finite zoom or scale) leave the
    point unchanged.
    """
    if zoom <= 0 or display_scale <= 0 or not _usable(zoom, display_scale):
        return device_point
    return Point(
        (device_point.x - pan.x) / zoom / display_scale,
        (device_point.y - pan.y) / zoom / display_scale,
    )


def to_device(
    document_point: Point, pan: Point, zoom: float, display_scale: float
) -> Point:
    """Map a document-space point into device space (pixels)."""
    if zoom <= 0 or display_scale <= 0 or not _usable(zoom, display_scale):
        return document_point
    return Point(
        document_point.x * display_scale * zoom + pan.x,
        document_point.y * display_scale * zoom + pan.y,
    )


def zoom_at(viewport: Viewport, pointer: Point, new_zoom: float) -> Viewport:
    """Zoom toward ``pointer`` so the point under it stays put.

    The requested zoom is clamped first; the pan is then recomputed as
    ``pointer - (pointer - old_pan) / old_zoom * new_zoom``. Degenerate
    input returns ``viewport`` unchanged.
    """
    old_zoom = viewport.zoom
    if old_zoom <= 0 or not _usable(old_zoom, new_zoom, pointer.x, pointer.y):
        return viewport

    zoom = clamp_zoom(new_zoom)
    anchor_x = (pointer.x - viewport.pan_x) / old_zoom
    anchor_y = (pointer.y - viewport.pan_y) / old_zoom
    return Viewport(
        pan_x=pointer.x - anchor_x * zoom,
        pan_y=pointer.y - anchor_y * zoom,
        zoom=zoom,
    )


def wheel_zoom(viewport: Viewport, pointer: Point, delta_y: float) -> Viewport:
    """Apply one wheel step: scrolling up zooms in, down zooms out."""
    if delta_y == 0 or not math.isfinite(delta_y):
        return viewport
    if delta_y < 0:
        new_zoom = viewport.zoom * WHEEL_ZOOM_STEP
    else:
        new_zoom = viewport.zoom / WHEEL_ZOOM_STEP
    return zoom_at(viewport, pointer, new_zoom)
