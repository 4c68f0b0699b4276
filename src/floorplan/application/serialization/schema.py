"""Pydantic schemas for the stored layout document.

The stored format is plain JSON with camelCase field names
(``schemaVersion``, ``gridSize``, ``wallId``, ``startX``...). Entities are
a discriminated union on ``type``. Unknown keys are ignored so documents
written by newer versions still load.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)
from pydantic.alias_generators import to_camel

from floorplan.domain.value_objects import (
    HingeSide,
    PageSize,
    SwingDirection,
    UnitSystem,
)


class _DocumentModel(BaseModel):
    """Base for stored-document schemas: camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class PointSchema(_DocumentModel):
    x: float
    y: float


class EntityStyleSchema(_DocumentModel):
    fill: str | None = None
    stroke: str | None = None
    stroke_width: float | None = Field(default=None, ge=0)
    opacity: float | None = Field(default=None, ge=0, le=1)


class _EntitySchemaBase(_DocumentModel):
    """Fields common to every entity variant."""

    id: str = Field(min_length=1)
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0
    label: str | None = None
    metadata: dict[str, str] | None = None
    style: EntityStyleSchema | None = None


class WallSchema(_EntitySchemaBase):
    type: Literal["wall"] = "wall"
    points: list[PointSchema] = Field(default_factory=list)
    thickness: float = Field(default=6.0, gt=0)


class DoorSchema(_EntitySchemaBase):
    type: Literal["door"] = "door"
    wall_id: str
    wall_position: float = Field(ge=0, le=1)
    width: float = Field(gt=0)
    swing_direction: SwingDirection = SwingDirection.INWARD
    hinge_side: HingeSide = HingeSide.LEFT
    open_angle: float = Field(default=90.0, ge=0, le=180)


class WindowSchema(_EntitySchemaBase):
    type: Literal["window"] = "window"
    wall_id: str
    wall_position: float = Field(ge=0, le=1)
    width: float = Field(gt=0)
    sill_height: float | None = Field(default=None, ge=0)


class FloorObjectSchema(_EntitySchemaBase):
    type: Literal["object"] = "object"
    object_type: str = "rect"
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    depth: float | None = Field(default=None, ge=0)


class TextLabelSchema(_EntitySchemaBase):
    type: Literal["text"] = "text"
    text: str
    font_size: float = Field(default=14.0, gt=0)


class DimensionLineSchema(_EntitySchemaBase):
    type: Literal["dimension"] = "dimension"
    start_x: float
    start_y: float
    end_x: float
    end_y: float


EntitySchema = Annotated[
    Union[
        WallSchema,
        DoorSchema,
        WindowSchema,
        FloorObjectSchema,
        TextLabelSchema,
        DimensionLineSchema,
    ],
    Field(discriminator="type"),
]


class LayoutSettingsSchema(_DocumentModel):
    units: UnitSystem = UnitSystem.FEET_INCHES
    grid_size: float = Field(default=12.0, gt=0)
    snap_to_grid: bool = True
    snap_to_objects: bool = True
    snap_to_walls: bool = True
    scale: float = Field(default=4.0, gt=0)
    page_size: PageSize = PageSize.LETTER
    page_width: float = Field(default=132.0, gt=0)
    page_height: float = Field(default=102.0, gt=0)


class LayoutSchema(_DocumentModel):
    """A complete stored layout document."""

    schema_version: int = Field(default=1, ge=1)
    id: str = Field(min_length=1)
    name: str
    slug: str = Field(min_length=1, pattern=r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
    created_at: str
    updated_at: str
    settings: LayoutSettingsSchema = Field(default_factory=LayoutSettingsSchema)
    entities: list[EntitySchema] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_entity_ids(self) -> LayoutSchema:
        """Entity ids must be unique within a document."""
        seen: set[str] = set()
        duplicates: list[str] = []
        for entity in self.entities:
            if entity.id in seen:
                duplicates.append(entity.id)
            seen.add(entity.id)
        if duplicates:
            raise ValueError(f"Duplicate entity ids: {', '.join(sorted(set(duplicates)))}")
        return self


class LayoutSummarySchema(_DocumentModel):
    id: str
    name: str
    slug: str
    updated_at: str
    entity_count: int = Field(ge=0)


class PresetObjectSchema(_DocumentModel):
    name: str
    object_type: str
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    depth: float | None = Field(default=None, ge=0)


class PresetsFileSchema(_DocumentModel):
    schema_version: int = Field(default=1, ge=1)
    presets: dict[str, list[PresetObjectSchema]] = Field(default_factory=dict)


class ExportOptionsSchema(_DocumentModel):
    """Export request options as sent by clients."""

    formats: list[Literal["png", "svg", "pdf", "dxf"]] = Field(
        default_factory=lambda: ["svg"], min_length=1
    )
    include_grid: bool = True
    include_dimensions: bool = True
    include_labels: bool = True
    paper_size: PageSize = PageSize.LETTER
    orientation: Literal["portrait", "landscape"] = "landscape"
    scale_label: str = ""
    dpi: int = Field(default=150, gt=0, le=1200)
