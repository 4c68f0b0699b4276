"""Exporters for rendering layouts to files.

Importing this package registers the SVG, PNG, PDF and DXF exporters.
"""

from floorplan.domain.exceptions import ExportError, UnsupportedFormatError
from floorplan.infrastructure.exporters.base import (
    Exporter,
    ExporterRegistry,
    ExportService,
)
from floorplan.infrastructure.exporters.dxf import DxfExporter
from floorplan.infrastructure.exporters.pdf import PdfExporter
from floorplan.infrastructure.exporters.png import PngExporter
from floorplan.infrastructure.exporters.primitives import Drawing, build_drawing
from floorplan.infrastructure.exporters.svg import SvgExporter, layout_to_svg

__all__ = [
    "Drawing",
    "DxfExporter",
    "ExportError",
    "ExportService",
    "Exporter",
    "ExporterRegistry",
    "PdfExporter",
    "PngExporter",
    "SvgExporter",
    "UnsupportedFormatError",
    "build_drawing",
    "layout_to_svg",
]
