"""Domain entities for floorplan layouts.

An ``Entity`` is one of six concrete variants (walls, doors, windows,
floor objects, text labels and dimension lines). Code that branches on the
variant should dispatch over all six classes and raise ``TypeError`` for
anything else; see :func:`entity_type_of`.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, ClassVar, Union

from .value_objects import (
    EntityStyle,
    EntityType,
    HingeSide,
    PageSize,
    Point,
    SwingDirection,
    UnitSystem,
)

CURRENT_SCHEMA_VERSION = 1

DEFAULT_WALL_THICKNESS = 6.0


def new_entity_id() -> str:
    """Generate a fresh, collision-resistant entity identifier."""
    return uuid.uuid4().hex


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def slugify(name: str) -> str:
    """Derive a URL-safe slug from a display name.

    Examples:
        >>> slugify("Main Office")
        'main-office'
        >>> slugify("  Lab #2 (East)  ")
        'lab-2-east'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-")


@dataclass(kw_only=True)
class BaseEntity:
    """Fields shared by every entity variant.

    Attributes:
        id: Stable identifier, unique within a layout.
        x: Horizontal position in inches.
        y: Vertical position in inches.
        rotation: Rotation in degrees.
        label: Optional display label.
        metadata: Free-form string metadata.
        style: Optional visual overrides for rendering.
    """

    entity_type: ClassVar[EntityType]

    id: str = field(default_factory=new_entity_id)
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    label: str | None = None
    metadata: dict[str, str] | None = None
    style: EntityStyle | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("id must not be empty")
        if self.metadata is not None and not all(
            isinstance(k, str) and isinstance(v, str) for k, v in self.metadata.items()
        ):
            raise ValueError("metadata keys and values must be strings")

    @property
    def type(self) -> EntityType:
        """The variant discriminator."""
        return self.entity_type

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Names of all dataclass fields on this variant."""
        return frozenset(f.name for f in fields(cls))


@dataclass(kw_only=True)
class Wall(BaseEntity):
    """Polyline wall; points are relative to the wall's (x, y).

    A wall with fewer than two points has no renderable segments but is
    still a valid entity (for example while it is being drawn).
    """

    entity_type: ClassVar[EntityType] = EntityType.WALL

    points: list[Point] = field(default_factory=list)
    thickness: float = DEFAULT_WALL_THICKNESS

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.thickness <= 0:
            raise ValueError("thickness must be positive")

    def absolute_points(self) -> list[Point]:
        """Vertices translated into document coordinates."""
        return [Point(self.x + p.x, self.y + p.y) for p in self.points]

    def segments(self) -> list[tuple[Point, Point]]:
        """Consecutive vertex pairs in document coordinates."""
        pts = self.absolute_points()
        return list(zip(pts, pts[1:]))


@dataclass(kw_only=True)
class Door(BaseEntity):
    """Door attached to a host wall by id and normalized position."""

    entity_type: ClassVar[EntityType] = EntityType.DOOR

    wall_id: str = ""
    wall_position: float = 0.5
    width: float = 36.0
    swing_direction: SwingDirection = SwingDirection.INWARD
    hinge_side: HingeSide = HingeSide.LEFT
    open_angle: float = 90.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if not 0.0 <= self.wall_position <= 1.0:
            raise ValueError("wall_position must be between 0 and 1")
        if self.width <= 0:
            raise ValueError("width must be positive")
        if not 0.0 <= self.open_angle <= 180.0:
            raise ValueError("open_angle must be between 0 and 180 degrees")


@dataclass(kw_only=True)
class Window(BaseEntity):
    """Window attached to a host wall by id and normalized position."""

    entity_type: ClassVar[EntityType] = EntityType.WINDOW

    wall_id: str = ""
    wall_position: float = 0.5
    width: float = 36.0
    sill_height: float | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not 0.0 <= self.wall_position <= 1.0:
            raise ValueError("wall_position must be between 0 and 1")
        if self.width <= 0:
            raise ValueError("width must be positive")
        if self.sill_height is not None and self.sill_height < 0:
            raise ValueError("sill_height must not be negative")


@dataclass(kw_only=True)
class FloorObject(BaseEntity):
    """Rectangular furniture or equipment footprint.

    ``object_type`` is usually an :class:`ObjectType` value, but custom
    classifier strings are kept as-is.
    """

    entity_type: ClassVar[EntityType] = EntityType.OBJECT

    object_type: str = "rect"
    width: float = 24.0
    height: float = 24.0
    depth: float | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be positive")
        if self.depth is not None and self.depth < 0:
            raise ValueError("depth must not be negative")

    @property
    def center(self) -> Point:
        return Point(self.x + self.width / 2, self.y + self.height / 2)


@dataclass(kw_only=True)
class TextLabel(BaseEntity):
    """Free text placed on the page."""

    entity_type: ClassVar[EntityType] = EntityType.TEXT

    text: str = "Text"
    font_size: float = 14.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.font_size <= 0:
            raise ValueError("font_size must be positive")


@dataclass(kw_only=True)
class DimensionLine(BaseEntity):
    """Annotative dimension line with absolute endpoints.

    The endpoints ignore the entity's (x, y). Dimension lines are never
    snap targets.
    """

    entity_type: ClassVar[EntityType] = EntityType.DIMENSION

    start_x: float = 0.0
    start_y: float = 0.0
    end_x: float = 0.0
    end_y: float = 0.0

    @property
    def start(self) -> Point:
        return Point(self.start_x, self.start_y)

    @property
    def end(self) -> Point:
        return Point(self.end_x, self.end_y)


Entity = Union[Wall, Door, Window, FloorObject, TextLabel, DimensionLine]

ENTITY_CLASSES: dict[EntityType, type[BaseEntity]] = {
    EntityType.WALL: Wall,
    EntityType.DOOR: Door,
    EntityType.WINDOW: Window,
    EntityType.OBJECT: FloorObject,
    EntityType.TEXT: TextLabel,
    EntityType.DIMENSION: DimensionLine,
}


def entity_type_of(entity: Any) -> EntityType:
    """Return the discriminator of an entity, rejecting unknown variants."""
    if isinstance(entity, (Wall, Door, Window, FloorObject, TextLabel, DimensionLine)):
        return entity.entity_type
    raise TypeError(f"Unsupported entity variant: {type(entity).__name__}")


@dataclass
class LayoutSettings:
    """Per-document settings.

    Attributes:
        units: Measurement display unit.
        grid_size: Grid spacing in inches.
        snap_to_grid: Snap to grid intersections.
        snap_to_walls: Snap to wall vertices and segment midpoints.
        snap_to_objects: Snap to floor object centers, corners and edges.
        scale: Display scale in pixels per inch.
        page_size: Page size classifier.
        page_width: Page width in inches.
        page_height: Page height in inches.
    """

    units: UnitSystem = UnitSystem.FEET_INCHES
    grid_size: float = 12.0
    snap_to_grid: bool = True
    snap_to_walls: bool = True
    snap_to_objects: bool = True
    scale: float = 4.0
    page_size: PageSize = PageSize.LETTER
    page_width: float = 11 * 12
    page_height: float = 8.5 * 12


@dataclass
class Layout:
    """The editable document: settings plus an ordered entity list.

    List order is layering order. Entity ids are unique within a layout.
    """

    id: str
    name: str
    slug: str
    created_at: str
    updated_at: str
    settings: LayoutSettings = field(default_factory=LayoutSettings)
    entities: list[Entity] = field(default_factory=list)
    schema_version: int = CURRENT_SCHEMA_VERSION

    def find_entity(self, entity_id: str) -> Entity | None:
        """Return the entity with the given id, or None."""
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None

    def has_entity(self, entity_id: str) -> bool:
        return self.find_entity(entity_id) is not None

    def walls(self) -> list[Wall]:
        return [e for e in self.entities if isinstance(e, Wall)]

    def summary(self) -> LayoutSummary:
        """Build the list-view summary for this layout."""
        return LayoutSummary(
            id=self.id,
            name=self.name,
            slug=self.slug,
            updated_at=self.updated_at,
            entity_count=len(self.entities),
        )


@dataclass(frozen=True)
class LayoutSummary:
    """Compact description of a stored layout for list views."""

    id: str
    name: str
    slug: str
    updated_at: str
    entity_count: int


@dataclass(frozen=True)
class PresetObject:
    """Template used to seed new floor objects. Not part of a document."""

    name: str
    object_type: str
    width: float
    height: float
    depth: float | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Preset dimensions must be positive")


PRESET_CATEGORIES: tuple[str, ...] = ("desks", "chairs", "shelves", "racks", "custom")


@dataclass
class PresetsFile:
    """The preset library, grouped by category."""

    schema_version: int = CURRENT_SCHEMA_VERSION
    presets: dict[str, list[PresetObject]] = field(
        default_factory=lambda: {category: [] for category in PRESET_CATEGORIES}
    )

    def all_presets(self) -> list[PresetObject]:
        """Every preset across all categories, in category order."""
        return [preset for presets in self.presets.values() for preset in presets]

    def find(self, name: str) -> PresetObject | None:
        """Look up a preset by exact name."""
        for preset in self.all_presets():
            if preset.name == name:
                return preset
        return None


def default_presets() -> PresetsFile:
    """The built-in preset library used when none has been saved."""
    return PresetsFile(
        presets={
            "desks": [
                PresetObject("Small Desk (48x24)", "desk", 48, 24),
                PresetObject("Medium Desk (60x30)", "desk", 60, 30),
                PresetObject("Large Desk (72x30)", "desk", 72, 30),
            ],
            "chairs": [
                PresetObject("Office Chair", "chair", 24, 24),
                PresetObject("Task Chair", "chair", 20, 20),
            ],
            "shelves": [
                PresetObject("Small Shelf (36x18)", "shelf", 36, 18),
                PresetObject("Large Shelf (48x18)", "shelf", 48, 18),
                PresetObject("Wide Shelf (72x24)", "shelf", 72, 24),
            ],
            "racks": [
                PresetObject("Server Rack 42U (24x42)", "rack", 24, 42),
                PresetObject("Server Rack 48U (24x48)", "rack", 24, 48),
                PresetObject("Network Rack (24x36)", "rack", 24, 36),
            ],
            "custom": [],
        }
    )


def create_empty_layout(name: str, slug: str | None = None) -> Layout:
    """Create a new, empty layout with default settings."""
    now = utc_timestamp()
    return Layout(
        id=str(uuid.uuid4()),
        name=name,
        slug=slug if slug is not None else slugify(name),
        created_at=now,
        updated_at=now,
        settings=LayoutSettings(),
        entities=[],
    )
