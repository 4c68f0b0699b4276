"""Domain layer for floorplan layouts.

This package contains the document model (entities and settings), value
objects, geometry and unit helpers, and the pure domain services used by
the editor: snapping, coordinate transforms and wall attachment.
"""

from floorplan.domain.entities import (
    CURRENT_SCHEMA_VERSION,
    DEFAULT_WALL_THICKNESS,
    ENTITY_CLASSES,
    PRESET_CATEGORIES,
    BaseEntity,
    DimensionLine,
    Door,
    Entity,
    FloorObject,
    Layout,
    LayoutSettings,
    LayoutSummary,
    PresetObject,
    PresetsFile,
    TextLabel,
    Wall,
    Window,
    create_empty_layout,
    default_presets,
    entity_type_of,
    new_entity_id,
    slugify,
    utc_timestamp,
)
from floorplan.domain.exceptions import (
    DuplicateEntityError,
    ExportError,
    LayoutNotFoundError,
    StorageError,
    UnsupportedFormatError,
)
from floorplan.domain.units import format_dimension, parse_dimension
from floorplan.domain.value_objects import (
    EntityStyle,
    EntityType,
    HingeSide,
    ObjectType,
    PageSize,
    Point,
    SnapKind,
    SwingDirection,
    ToolMode,
    UnitSystem,
)

__all__ = [
    # Entities
    "BaseEntity",
    "DimensionLine",
    "Door",
    "Entity",
    "FloorObject",
    "Layout",
    "LayoutSettings",
    "LayoutSummary",
    "PresetObject",
    "PresetsFile",
    "TextLabel",
    "Wall",
    "Window",
    "CURRENT_SCHEMA_VERSION",
    "DEFAULT_WALL_THICKNESS",
    "ENTITY_CLASSES",
    "PRESET_CATEGORIES",
    "create_empty_layout",
    "default_presets",
    "entity_type_of",
    "new_entity_id",
    "slugify",
    "utc_timestamp",
    # Exceptions
    "DuplicateEntityError",
    "ExportError",
    "LayoutNotFoundError",
    "StorageError",
    "UnsupportedFormatError",
    # Units
    "format_dimension",
    "parse_dimension",
    # Value objects
    "EntityStyle",
    "EntityType",
    "HingeSide",
    "ObjectType",
    "PageSize",
    "Point",
    "SnapKind",
    "SwingDirection",
    "ToolMode",
    "UnitSystem",
]
