"""PNG exporter for layouts, rasterized with Pillow.

The image is the SVG page size scaled by ``dpi / 96``.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from PIL import Image, ImageDraw, ImageFont

from floorplan.infrastructure.exporters.base import ExporterRegistry
from floorplan.infrastructure.exporters.primitives import (
    Drawing,
    Label,
    Polygon,
    Polyline,
    build_drawing,
    dash_segments,
)

if TYPE_CHECKING:
    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout

logger = logging.getLogger(__name__)

SVG_DPI = 96.0
BACKGROUND_COLOR = "white"


class PngRenderer:
    """Rasterizes a :class:`Drawing` into a Pillow image."""

    def __init__(self, drawing: Drawing, dpi: int) -> None:
        self.drawing = drawing
        self.factor = drawing.scale * dpi / SVG_DPI

    @property
    def size(self) -> tuple[int, int]:
        return (
            max(1, math.ceil(self.drawing.width * self.factor)),
            max(1, math.ceil(self.drawing.height * self.factor)),
        )

    def _xy(self, x: float, y: float) -> tuple[float, float]:
        return (x * self.factor, y * self.factor)

    def _width(self, inches: float) -> int:
        return max(1, round(inches * self.factor))

    def render(self) -> Image.Image:
        img = Image.new("RGB", self.size, BACKGROUND_COLOR)
        draw = ImageDraw.Draw(img, "RGBA")
        for primitive in self.drawing.primitives:
            match primitive:
                case Polyline():
                    self._draw_polyline(draw, primitive)
                case Polygon():
                    draw.polygon(
                        [self._xy(p.x, p.y) for p in primitive.points],
                        fill=primitive.fill,
                        outline=primitive.stroke,
                        width=self._width(primitive.width),
                    )
                case Label():
                    self._draw_label(img, draw, primitive)
        return img

    def _draw_polyline(self, draw: ImageDraw.ImageDraw, line: Polyline) -> None:
        width = self._width(line.width)
        if not line.dashed:
            draw.line([self._xy(p.x, p.y) for p in line.points], fill=line.stroke, width=width, joint="curve")
            return
        dash = 4 / self.drawing.scale
        for start, end in zip(line.points, line.points[1:]):
            for a, b in dash_segments(start, end, dash, dash):
                draw.line([self._xy(a.x, a.y), self._xy(b.x, b.y)], fill=line.stroke, width=width)

    def _draw_label(self, img: Image.Image, draw: ImageDraw.ImageDraw, label: Label) -> None:
        font_size = max(1, round(label.size * self.factor))
        font = ImageFont.load_default(size=font_size)
        x, y = self._xy(label.position.x, label.position.y)
        anchor = "mm" if label.anchor == "middle" else "ls"
        if not label.rotation:
            draw.text((x, y), label.text, fill=label.color, font=font, anchor=anchor)
            return

        # Rotated text is drawn on its own layer and pasted centered on the anchor.
        left, top, right, bottom = draw.textbbox((0, 0), label.text, font=font, anchor=anchor)
        pad = 2
        layer = Image.new("RGBA", (int(right - left) + 2 * pad, int(bottom - top) + 2 * pad), (0, 0, 0, 0))
        ImageDraw.Draw(layer).text((pad - left, pad - top), label.text, fill=label.color, font=font, anchor=anchor)
        rotated = layer.rotate(-label.rotation, expand=True, resample=Image.Resampling.BICUBIC)
        img.paste(rotated, (int(x - rotated.width / 2), int(y - rotated.height / 2)), rotated)


def layout_to_png(layout: Layout, options: ExportOptions) -> Image.Image:
    return PngRenderer(build_drawing(layout, options), options.dpi).render()


@ExporterRegistry.register("png")
class PngExporter:
    """PNG exporter for layouts.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for PNG files.
    """

    format_name: ClassVar[str] = "png"
    file_extension: ClassVar[str] = "png"

    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        img = layout_to_png(layout, options)
        img.save(path, format="PNG", dpi=(options.dpi, options.dpi))
        logger.debug(f"Wrote {img.width}x{img.height} PNG to {path}")
