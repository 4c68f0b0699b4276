"""Domain services: snapping, coordinate transforms and wall attachment."""

from floorplan.domain.services.attachment import (
    ATTACH_THRESHOLD,
    WallAttachment,
    find_nearest_wall,
    find_orphaned_openings,
    resolve_opening_point,
)
from floorplan.domain.services.snapping import (
    SNAP_THRESHOLD,
    SnapCandidate,
    SnappingService,
    snap,
)
from floorplan.domain.services.transform import (
    MAX_ZOOM,
    MIN_ZOOM,
    WHEEL_ZOOM_STEP,
    Viewport,
    clamp_zoom,
    to_device,
    to_document,
    wheel_zoom,
    zoom_at,
)

__all__ = [
    # Attachment
    "ATTACH_THRESHOLD",
    "WallAttachment",
    "find_nearest_wall",
    "find_orphaned_openings",
    "resolve_opening_point",
    # Snapping
    "SNAP_THRESHOLD",
    "SnapCandidate",
    "SnappingService",
    "snap",
    # Transforms
    "MAX_ZOOM",
    "MIN_ZOOM",
    "WHEEL_ZOOM_STEP",
    "Viewport",
    "clamp_zoom",
    "to_device",
    "to_document",
    "wheel_zoom",
    "zoom_at",
]
