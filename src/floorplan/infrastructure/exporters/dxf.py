"""DXF format exporter for layouts.

Generates 2D DXF files (R2010 format) for CAD tools. Coordinates are in
inches with the y axis flipped so the drawing reads the same way up as on
screen. Each primitive layer maps to a DXF layer.
"""

from __future__ import annotations

import logging
from io import StringIO
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

import ezdxf
from ezdxf.enums import TextEntityAlignment

from floorplan.infrastructure.exporters.base import ExporterRegistry
from floorplan.infrastructure.exporters.primitives import (
    LAYER_DIMENSIONS,
    LAYER_GRID,
    LAYER_OBJECTS,
    LAYER_OPENINGS,
    LAYER_TEXT,
    LAYER_WALLS,
    Drawing,
    Label,
    Polygon,
    Polyline,
    build_drawing,
)

if TYPE_CHECKING:
    from ezdxf.document import Drawing as DxfDocument
    from ezdxf.layouts import Modelspace

    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout


logger = logging.getLogger(__name__)


# Layer configuration for DXF output (ACI colors)
LAYERS = {
    LAYER_WALLS: {"color": 7, "linetype": "CONTINUOUS"},  # White/black
    LAYER_OPENINGS: {"color": 1, "linetype": "CONTINUOUS"},  # Red
    LAYER_OBJECTS: {"color": 3, "linetype": "CONTINUOUS"},  # Green
    LAYER_TEXT: {"color": 5, "linetype": "CONTINUOUS"},  # Blue
    LAYER_DIMENSIONS: {"color": 8, "linetype": "CONTINUOUS"},  # Gray
    LAYER_GRID: {"color": 9, "linetype": "CONTINUOUS"},  # Light gray
}

DXF_UNITS_INCHES = 1


@ExporterRegistry.register("dxf")
class DxfExporter:
    """Exports layouts to DXF.

    Walls become wide polylines (constant width equal to the wall
    thickness), floor objects closed polylines, labels TEXT entities.

    Attributes:
        format_name: "dxf"
        file_extension: "dxf"
    """

    format_name: ClassVar[str] = "dxf"
    file_extension: ClassVar[str] = "dxf"

    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        doc = self.build_document(build_drawing(layout, options))
        doc.saveas(path)
        logger.info(f"Exported DXF to {path}")

    def export_string(self, layout: Layout, options: ExportOptions) -> str:
        doc = self.build_document(build_drawing(layout, options))
        stream = StringIO()
        doc.write(stream)
        return stream.getvalue()

    def build_document(self, drawing: Drawing) -> DxfDocument:
        doc = self._create_document()
        msp = doc.modelspace()
        flip = drawing.height
        for primitive in drawing.primitives:
            match primitive:
                case Polyline():
                    self._draw_polyline(msp, primitive, flip)
                case Polygon():
                    self._draw_polygon(msp, primitive, flip)
                case Label():
                    self._draw_label(msp, primitive, flip)
        return doc

    def _create_document(self) -> DxfDocument:
        doc = ezdxf.new("R2010")
        doc.header["$INSUNITS"] = DXF_UNITS_INCHES
        self._setup_layers(doc)
        return doc

    def _setup_layers(self, doc: DxfDocument) -> None:
        if "DASHED" not in doc.linetypes:
            doc.linetypes.add(
                "DASHED",
                pattern=[0.5, 0.25, -0.25],
                description="Dashed line",
            )
        for name, props in LAYERS.items():
            doc.layers.add(name, color=int(props["color"]))

    def _draw_polyline(self, msp: Modelspace, line: Polyline, flip: float) -> None:
        attribs: dict[str, object] = {"layer": line.layer}
        if line.dashed:
            attribs["linetype"] = "DASHED"
        if line.layer == LAYER_WALLS:
            attribs["const_width"] = line.width
        msp.add_lwpolyline(
            [(p.x, flip - p.y) for p in line.points],
            dxfattribs=attribs,
        )

    def _draw_polygon(self, msp: Modelspace, shape: Polygon, flip: float) -> None:
        msp.add_lwpolyline(
            [(p.x, flip - p.y) for p in shape.points],
            close=True,
            dxfattribs={"layer": shape.layer},
        )

    def _draw_label(self, msp: Modelspace, label: Label, flip: float) -> None:
        text = msp.add_text(
            label.text,
            height=label.size,
            rotation=-label.rotation,
            dxfattribs={"layer": label.layer},
        )
        align = (
            TextEntityAlignment.MIDDLE_CENTER
            if label.anchor == "middle"
            else TextEntityAlignment.LEFT
        )
        text.set_placement((label.position.x, flip - label.position.y), align=align)
