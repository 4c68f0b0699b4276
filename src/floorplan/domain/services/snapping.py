"""Spatial snapping of document-space points.

Candidates are generated from the grid, wall vertices and segment
midpoints, and floor object centers, corners and edge midpoints, depending
on the layout's snap toggles. The nearest candidate within
``SNAP_THRESHOLD`` wins; when none qualifies the point falls back to the
grid (if grid snapping is enabled) or is returned unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass

from floorplan.domain.entities import FloorObject, Layout, Wall
from floorplan.domain.geometry import distance, midpoint, snap_point_to_grid
from floorplan.domain.value_objects import Point, SnapKind

SNAP_THRESHOLD = 12.0  # inches


@dataclass(frozen=True)
class SnapCandidate:
    """A point the input may snap to.

    Attributes:
        point: Candidate location in document coordinates.
        kind: Feature the candidate was derived from.
        distance: Distance from the input point.
    """

    point: Point
    kind: SnapKind
    distance: float


class SnappingService:
    """Computes snapped points for a layout.

    The service is stateless apart from its threshold; the same instance
    serves wall drawing, measurement and object placement.
    """

    def __init__(self, threshold: float = SNAP_THRESHOLD) -> None:
        self.threshold = threshold

    def candidates(self, point: Point, layout: Layout) -> list[SnapCandidate]:
        """Generate every candidate for ``point`` in encounter order.

        Order is grid first, then walls, then floor objects, each in entity
        order. Candidates are not filtered by distance.
        """
        settings = layout.settings
        found: list[SnapCandidate] = []

        def add(candidate_point: Point, kind: SnapKind) -> None:
            found.append(
                SnapCandidate(candidate_point, kind, distance(point, candidate_point))
            )

        if settings.snap_to_grid and settings.grid_size > 0:
            add(snap_point_to_grid(point, settings.grid_size), SnapKind.GRID)

        if settings.snap_to_walls:
            for wall in layout.entities:
                if not isinstance(wall, Wall):
                    continue
                vertices = wall.absolute_points()
                for vertex in vertices:
                    add(vertex, SnapKind.ENDPOINT)
                for start, end in zip(vertices, vertices[1:]):
                    add(midpoint(start, end), SnapKind.MIDPOINT)

        if settings.snap_to_objects:
            for obj in layout.entities:
                if not isinstance(obj, FloorObject):
                    continue
                for candidate_point, kind in _object_features(obj):
                    add(candidate_point, kind)

        return found

    def best_candidate(self, point: Point, layout: Layout) -> SnapCandidate | None:
        """Nearest candidate within the threshold, or None.

        Ties keep the earliest candidate in encounter order.
        """
        best: SnapCandidate | None = None
        for candidate in self.candidates(point, layout):
            if candidate.distance > self.threshold:
                continue
            if best is None or candidate.distance < best.distance:
                best = candidate
        return best

    def snap(self, point: Point, layout: Layout | None) -> Point:
        """Snap ``point`` against ``layout``.

        Args:
            point: Raw document-space point.
            layout: Document providing settings and snap targets. With no
                document the point is returned unchanged.

        Returns:
            The adjusted point.
        """
        if layout is None:
            return point

        best = self.best_candidate(point, layout)
        if best is not None:
            return best.point

        settings = layout.settings
        if settings.snap_to_grid and settings.grid_size > 0:
            return snap_point_to_grid(point, settings.grid_size)
        return point


def _object_features(obj: FloorObject) -> list[tuple[Point, SnapKind]]:
    x, y, w, h = obj.x, obj.y, obj.width, obj.height
    features = [(Point(x + w / 2, y + h / 2), SnapKind.CENTER)]
    corners = [
        Point(x, y),
        Point(x + w, y),
        Point(x, y + h),
        Point(x + w, y + h),
    ]
    edge_midpoints = [
        Point(x + w / 2, y),
        Point(x + w / 2, y + h),
        Point(x, y + h / 2),
        Point(x + w, y + h / 2),
    ]
    features.extend((corner, SnapKind.EDGE) for corner in corners)
    features.extend((mid, SnapKind.EDGE) for mid in edge_midpoints)
    return features


_default_service = SnappingService()


def snap(point: Point, layout: Layout | None) -> Point:
    """Snap a point with the default threshold."""
    return _default_service.snap(point, layout)
