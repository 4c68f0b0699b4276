"""PDF exporter for layouts using reportlab.

Produces a single page in the requested paper size and orientation. The
layout page is scaled uniformly to fit inside the margins; the scale label,
when given, is printed in the footer.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape, letter, portrait
from reportlab.lib.units import inch
from reportlab.pdfgen import canvas

from floorplan.domain.value_objects import PageSize
from floorplan.infrastructure.exporters.base import ExporterRegistry
from floorplan.infrastructure.exporters.primitives import (
    Drawing,
    Label,
    Polygon,
    Polyline,
    build_drawing,
)

if TYPE_CHECKING:
    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout

logger = logging.getLogger(__name__)

MARGIN = 0.5 * inch
FOOTER_HEIGHT = 0.3 * inch
FONT_NAME = "Helvetica"
FOOTER_FONT_SIZE = 10

PAPER_SIZES: dict[PageSize, tuple[float, float]] = {
    PageSize.LETTER: letter,
    PageSize.A4: A4,
    PageSize.ARCH_D: (24 * inch, 36 * inch),
}


def page_size_for(drawing: Drawing, options: ExportOptions) -> tuple[float, float]:
    """Paper size in points, oriented as requested.

    ``custom`` paper uses the layout page itself plus margins.
    """
    size = PAPER_SIZES.get(PageSize(options.paper_size))
    if size is None:
        size = (
            drawing.width * inch + 2 * MARGIN,
            drawing.height * inch + 2 * MARGIN + FOOTER_HEIGHT,
        )
    if options.orientation == "portrait":
        return portrait(size)
    return landscape(size)


class PdfRenderer:
    """Draws a :class:`Drawing` onto a reportlab canvas."""

    def __init__(self, drawing: Drawing, page_size: tuple[float, float]) -> None:
        self.drawing = drawing
        self.page_width, self.page_height = page_size
        usable_w = self.page_width - 2 * MARGIN
        usable_h = self.page_height - 2 * MARGIN - FOOTER_HEIGHT
        # Points per document inch; never enlarge beyond 1:1.
        self.factor = min(inch, usable_w / drawing.width, usable_h / drawing.height)
        self.origin_x = MARGIN
        self.top = self.page_height - MARGIN

    def _xy(self, x: float, y: float) -> tuple[float, float]:
        return (self.origin_x + x * self.factor, self.top - y * self.factor)

    def render(self, c: canvas.Canvas, scale_label: str = "") -> None:
        for primitive in self.drawing.primitives:
            match primitive:
                case Polyline():
                    self._draw_polyline(c, primitive)
                case Polygon():
                    self._draw_polygon(c, primitive)
                case Label():
                    self._draw_label(c, primitive)

        if scale_label:
            c.setFont(FONT_NAME, FOOTER_FONT_SIZE)
            c.setFillColor(colors.HexColor("#666666"))
            c.drawString(MARGIN, MARGIN / 2, scale_label)

    def _draw_polyline(self, c: canvas.Canvas, line: Polyline) -> None:
        c.saveState()
        c.setStrokeColor(colors.HexColor(line.stroke))
        c.setLineWidth(line.width * self.factor)
        c.setLineCap(2)
        c.setLineJoin(0)
        if line.dashed:
            c.setDash([3, 3])
        path = c.beginPath()
        path.moveTo(*self._xy(line.points[0].x, line.points[0].y))
        for point in line.points[1:]:
            path.lineTo(*self._xy(point.x, point.y))
        c.drawPath(path, stroke=1, fill=0)
        c.restoreState()

    def _draw_polygon(self, c: canvas.Canvas, shape: Polygon) -> None:
        c.saveState()
        c.setFillColor(colors.HexColor(shape.fill))
        c.setStrokeColor(colors.HexColor(shape.stroke))
        c.setLineWidth(shape.width * self.factor)
        path = c.beginPath()
        path.moveTo(*self._xy(shape.points[0].x, shape.points[0].y))
        for point in shape.points[1:]:
            path.lineTo(*self._xy(point.x, point.y))
        path.close()
        c.drawPath(path, stroke=1, fill=1)
        c.restoreState()

    def _draw_label(self, c: canvas.Canvas, label: Label) -> None:
        size = max(1.0, label.size * self.factor)
        x, y = self._xy(label.position.x, label.position.y)
        c.saveState()
        c.translate(x, y)
        if label.rotation:
            c.rotate(-label.rotation)
        c.setFont(FONT_NAME, size)
        c.setFillColor(colors.HexColor(label.color))
        if label.anchor == "middle":
            c.drawCentredString(0, -size / 3, label.text)
        else:
            c.drawString(0, 0, label.text)
        c.restoreState()


@ExporterRegistry.register("pdf")
class PdfExporter:
    """PDF exporter for layouts.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for PDF files.
    """

    format_name: ClassVar[str] = "pdf"
    file_extension: ClassVar[str] = "pdf"

    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        drawing = build_drawing(layout, options)
        page_size = page_size_for(drawing, options)
        c = canvas.Canvas(str(path), pagesize=page_size)
        c.setTitle(layout.name)
        PdfRenderer(drawing, page_size).render(c, options.scale_label)
        c.showPage()
        c.save()
        logger.debug(f"Wrote PDF page {page_size[0]:.0f}x{page_size[1]:.0f}pt to {path}")
