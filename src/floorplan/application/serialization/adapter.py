"""Adapter between stored-document schemas and domain dataclasses.

Every conversion dispatches over all six entity variants; an unknown
variant raises ``TypeError`` rather than being dropped silently.
"""

from floorplan.application.serialization.schema import (
    DimensionLineSchema,
    DoorSchema,
    EntitySchema,
    EntityStyleSchema,
    ExportOptionsSchema,
    FloorObjectSchema,
    LayoutSchema,
    LayoutSettingsSchema,
    LayoutSummarySchema,
    PointSchema,
    PresetObjectSchema,
    PresetsFileSchema,
    TextLabelSchema,
    WallSchema,
    WindowSchema,
)
from floorplan.contracts.dtos import ExportOptions
from floorplan.domain.entities import (
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
)
from floorplan.domain.value_objects import EntityStyle, Point


def _style_to_domain(style: EntityStyleSchema | None) -> EntityStyle | None:
    if style is None:
        return None
    return EntityStyle(
        fill=style.fill,
        stroke=style.stroke,
        stroke_width=style.stroke_width,
        opacity=style.opacity,
    )


def _style_to_schema(style: EntityStyle | None) -> EntityStyleSchema | None:
    if style is None:
        return None
    return EntityStyleSchema(
        fill=style.fill,
        stroke=style.stroke,
        stroke_width=style.stroke_width,
        opacity=style.opacity,
    )


def _common_to_domain(schema: EntitySchema) -> dict:
    return {
        "id": schema.id,
        "x": schema.x,
        "y": schema.y,
        "rotation": schema.rotation,
        "label": schema.label,
        "metadata": dict(schema.metadata) if schema.metadata is not None else None,
        "style": _style_to_domain(schema.style),
    }


def _common_to_schema(entity: Entity) -> dict:
    return {
        "id": entity.id,
        "x": entity.x,
        "y": entity.y,
        "rotation": entity.rotation,
        "label": entity.label,
        "metadata": dict(entity.metadata) if entity.metadata is not None else None,
        "style": _style_to_schema(entity.style),
    }


def entity_to_domain(schema: EntitySchema) -> Entity:
    """Convert one validated entity schema into its domain variant."""
    common = _common_to_domain(schema)
    match schema:
        case WallSchema():
            return Wall(
                **common,
                points=[Point(p.x, p.y) for p in schema.points],
                thickness=schema.thickness,
            )
        case DoorSchema():
            return Door(
                **common,
                wall_id=schema.wall_id,
                wall_position=schema.wall_position,
                width=schema.width,
                swing_direction=schema.swing_direction,
                hinge_side=schema.hinge_side,
                open_angle=schema.open_angle,
            )
        case WindowSchema():
            return Window(
                **common,
                wall_id=schema.wall_id,
                wall_position=schema.wall_position,
                width=schema.width,
                sill_height=schema.sill_height,
            )
        case FloorObjectSchema():
            return FloorObject(
                **common,
                object_type=schema.object_type,
                width=schema.width,
                height=schema.height,
                depth=schema.depth,
            )
        case TextLabelSchema():
            return TextLabel(**common, text=schema.text, font_size=schema.font_size)
        case DimensionLineSchema():
            return DimensionLine(
                **common,
                start_x=schema.start_x,
                start_y=schema.start_y,
                end_x=schema.end_x,
                end_y=schema.end_y,
            )
    raise TypeError(f"Unsupported entity schema: {type(schema).__name__}")


def entity_to_schema(entity: Entity) -> EntitySchema:
    """Convert one domain entity into its stored-document schema."""
    common = _common_to_schema(entity)
    match entity:
        case Wall():
            return WallSchema(
                **common,
                points=[PointSchema(x=p.x, y=p.y) for p in entity.points],
                thickness=entity.thickness,
            )
        case Door():
            return DoorSchema(
                **common,
                wall_id=entity.wall_id,
                wall_position=entity.wall_position,
                width=entity.width,
                swing_direction=entity.swing_direction,
                hinge_side=entity.hinge_side,
                open_angle=entity.open_angle,
            )
        case Window():
            return WindowSchema(
                **common,
                wall_id=entity.wall_id,
                wall_position=entity.wall_position,
                width=entity.width,
                sill_height=entity.sill_height,
            )
        case FloorObject():
            return FloorObjectSchema(
                **common,
                object_type=str(entity.object_type),
                width=entity.width,
                height=entity.height,
                depth=entity.depth,
            )
        case TextLabel():
            return TextLabelSchema(**common, text=entity.text, font_size=entity.font_size)
        case DimensionLine():
            return DimensionLineSchema(
                **common,
                start_x=entity.start_x,
                start_y=entity.start_y,
                end_x=entity.end_x,
                end_y=entity.end_y,
            )
    raise TypeError(f"Unsupported entity variant: {type(entity).__name__}")


def settings_to_domain(schema: LayoutSettingsSchema) -> LayoutSettings:
    return LayoutSettings(
        units=schema.units,
        grid_size=schema.grid_size,
        snap_to_grid=schema.snap_to_grid,
        snap_to_walls=schema.snap_to_walls,
        snap_to_objects=schema.snap_to_objects,
        scale=schema.scale,
        page_size=schema.page_size,
        page_width=schema.page_width,
        page_height=schema.page_height,
    )


def settings_to_schema(settings: LayoutSettings) -> LayoutSettingsSchema:
    return LayoutSettingsSchema(
        units=settings.units,
        grid_size=settings.grid_size,
        snap_to_grid=settings.snap_to_grid,
        snap_to_walls=settings.snap_to_walls,
        snap_to_objects=settings.snap_to_objects,
        scale=settings.scale,
        page_size=settings.page_size,
        page_width=settings.page_width,
        page_height=settings.page_height,
    )


def schema_to_layout(schema: LayoutSchema) -> Layout:
    """Convert a validated layout document into a domain :class:`Layout`."""
    return Layout(
        id=schema.id,
        name=schema.name,
        slug=schema.slug,
        created_at=schema.created_at,
        updated_at=schema.updated_at,
        settings=settings_to_domain(schema.settings),
        entities=[entity_to_domain(entity) for entity in schema.entities],
        schema_version=schema.schema_version,
    )


def layout_to_schema(layout: Layout) -> LayoutSchema:
    """Convert a domain :class:`Layout` into its stored-document schema."""
    return LayoutSchema(
        schema_version=layout.schema_version,
        id=layout.id,
        name=layout.name,
        slug=layout.slug,
        created_at=layout.created_at,
        updated_at=layout.updated_at,
        settings=settings_to_schema(layout.settings),
        entities=[entity_to_schema(entity) for entity in layout.entities],
    )


def summary_to_schema(summary: LayoutSummary) -> LayoutSummarySchema:
    return LayoutSummarySchema(
        id=summary.id,
        name=summary.name,
        slug=summary.slug,
        updated_at=summary.updated_at,
        entity_count=summary.entity_count,
    )


def schema_to_presets(schema: PresetsFileSchema) -> PresetsFile:
    return PresetsFile(
        schema_version=schema.schema_version,
        presets={
            category: [
                PresetObject(
                    name=item.name,
                    object_type=item.object_type,
                    width=item.width,
                    height=item.height,
                    depth=item.depth,
                )
                for item in items
            ]
            for category, items in schema.presets.items()
        },
    )


def presets_to_schema(presets: PresetsFile) -> PresetsFileSchema:
    return PresetsFileSchema(
        schema_version=presets.schema_version,
        presets={
            category: [
                PresetObjectSchema(
                    name=item.name,
                    object_type=item.object_type,
                    width=item.width,
                    height=item.height,
                    depth=item.depth,
                )
                for item in items
            ]
            for category, items in presets.presets.items()
        },
    )


def export_options_to_dto(schema: ExportOptionsSchema) -> ExportOptions:
    """Convert client-supplied export options into the service DTO."""
    return ExportOptions(
        formats=list(dict.fromkeys(schema.formats)),
        include_grid=schema.include_grid,
        include_dimensions=schema.include_dimensions,
        include_labels=schema.include_labels,
        paper_size=schema.paper_size,
        orientation=schema.orientation,
        scale_label=schema.scale_label,
        dpi=schema.dpi,
    )
