"""Resolving door and window attachment to host walls.

Openings reference their host wall by id plus a normalized position along
a wall segment. The reference is loose: editing or deleting the wall does
not re-anchor the opening. :func:`find_orphaned_openings` reports openings
whose host wall is gone.
"""

from __future__ import annotations

from dataclasses import dataclass

from floorplan.domain.entities import Door, Layout, Wall, Window
from floorplan.domain.geometry import (
    angle_between_points,
    distance,
    segment_parameter,
)
from floorplan.domain.value_objects import Point

ATTACH_THRESHOLD = 24.0  # inches


@dataclass(frozen=True)
class WallAttachment:
    """Where an opening would sit on its nearest wall.

    Attributes:
        wall_id: Host wall identifier.
        segment_index: Index of the segment's first vertex.
        wall_position: Normalized position along the segment, 0 to 1.
        point: Attachment point in document coordinates.
        angle: Segment direction in degrees.
        distance: Distance from the query point to the attachment point.
    """

    wall_id: str
    segment_index: int
    wall_position: float
    point: Point
    angle: float
    distance: float


def find_nearest_wall(
    point: Point, layout: Layout, threshold: float = ATTACH_THRESHOLD
) -> WallAttachment | None:
    """Find the wall segment closest to ``point`` within ``threshold``.

    Walls with fewer than two points have no segments and are skipped.
    Ties keep the first segment in entity order.
    """
    best: WallAttachment | None = None
    for wall in layout.walls():
        for index, (start, end) in enumerate(wall.segments()):
            t = segment_parameter(point, start, end)
            on_segment = Point(
                start.x + t * (end.x - start.x), start.y + t * (end.y - start.y)
            )
            gap = distance(point, on_segment)
            if gap > threshold:
                continue
            if best is None or gap < best.distance:
                best = WallAttachment(
                    wall_id=wall.id,
                    segment_index=index,
                    wall_position=t,
                    point=on_segment,
                    angle=angle_between_points(start, end),
                    distance=gap,
                )
    return best


def resolve_opening_point(opening: Door | Window, layout: Layout) -> Point | None:
    """Document position implied by an opening's wall reference.

    Uses the first segment of the host wall, since the reference does not
    record a segment index. Returns None when the wall is missing or has no
    segments.
    """
    host = layout.find_entity(opening.wall_id)
    if not isinstance(host, Wall):
        return None
    segments = host.segments()
    if not segments:
        return None
    start, end = segments[0]
    t = opening.wall_position
    return Point(start.x + t * (end.x - start.x), start.y + t * (end.y - start.y))


def find_orphaned_openings(layout: Layout) -> list[Door | Window]:
    """Doors and windows whose host wall id no longer names a wall."""
    wall_ids = {wall.id for wall in layout.walls()}
    return [
        entity
        for entity in layout.entities
        if isinstance(entity, (Door, Window)) and entity.wall_id not in wall_ids
    ]
