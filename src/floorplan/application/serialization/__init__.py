"""Stored-document serialization for layouts and presets."""

from floorplan.application.serialization.adapter import (
    entity_to_domain,
    entity_to_schema,
    export_options_to_dto,
    layout_to_schema,
    schema_to_layout,
    summary_to_schema,
)
from floorplan.application.serialization.loader import (
    LayoutFormatError,
    dump_layout,
    dump_presets,
    load_layout,
    load_layout_from_dict,
    load_presets,
    load_presets_from_dict,
)
from floorplan.application.serialization.schema import (
    ExportOptionsSchema,
    LayoutSchema,
    LayoutSettingsSchema,
    LayoutSummarySchema,
    PresetsFileSchema,
)

__all__ = [
    "ExportOptionsSchema",
    "LayoutFormatError",
    "LayoutSchema",
    "LayoutSettingsSchema",
    "LayoutSummarySchema",
    "PresetsFileSchema",
    "dump_layout",
    "dump_presets",
    "entity_to_domain",
    "entity_to_schema",
    "export_options_to_dto",
    "layout_to_schema",
    "load_layout",
    "load_layout_from_dict",
    "load_presets",
    "load_presets_from_dict",
    "schema_to_layout",
    "summary_to_schema",
]
