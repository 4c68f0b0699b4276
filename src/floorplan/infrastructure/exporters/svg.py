"""SVG exporter for layouts.

Renders the shared primitive list at the layout's display scale, so one
document inch is ``settings.scale`` SVG user units.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, ClassVar
from xml.sax.saxutils import escape, quoteattr

from floorplan.infrastructure.exporters.base import ExporterRegistry
from floorplan.infrastructure.exporters.primitives import (
    Drawing,
    Label,
    Polygon,
    Polyline,
    Primitive,
    build_drawing,
)

if TYPE_CHECKING:
    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout

FONT_FAMILY = "Arial, Helvetica, sans-serif"


def _num(value: float) -> str:
    """Compact number formatting for attributes."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


class SvgRenderer:
    """Turns a :class:`Drawing` into SVG markup."""

    def __init__(self, drawing: Drawing) -> None:
        self.drawing = drawing
        self.scale = drawing.scale

    def render(self) -> str:
        width = self.drawing.width * self.scale
        height = self.drawing.height * self.scale
        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {_num(width)} {_num(height)}" '
            f'width="{_num(width)}" height="{_num(height)}">',
            '  <rect width="100%" height="100%" fill="white"/>',
        ]
        parts.extend(self._render_primitive(p) for p in self.drawing.primitives)
        parts.append("</svg>")
        return "\n".join(parts) + "\n"

    def _xy(self, x: float, y: float) -> tuple[str, str]:
        return _num(x * self.scale), _num(y * self.scale)

    def _render_primitive(self, primitive: Primitive) -> str:
        match primitive:
            case Polyline():
                points = " ".join(",".join(self._xy(p.x, p.y)) for p in primitive.points)
                dash = ' stroke-dasharray="4,4"' if primitive.dashed else ""
                return (
                    f'  <polyline class="{primitive.layer.lower()}" points="{points}" fill="none" '
                    f'stroke="{primitive.stroke}" stroke-width="{_num(primitive.width * self.scale)}" '
                    f'stroke-linecap="square" stroke-linejoin="miter"{dash}/>'
                )
            case Polygon():
                points = " ".join(",".join(self._xy(p.x, p.y)) for p in primitive.points)
                return (
                    f'  <polygon class="{primitive.layer.lower()}" points="{points}" '
                    f'fill="{primitive.fill}" stroke="{primitive.stroke}" '
                    f'stroke-width="{_num(primitive.width * self.scale)}"/>'
                )
            case Label():
                x, y = self._xy(primitive.position.x, primitive.position.y)
                anchor = ""
                if primitive.anchor == "middle":
                    anchor = ' text-anchor="middle" dominant-baseline="middle"'
                transform = ""
                if primitive.rotation:
                    transform = f' transform="rotate({_num(primitive.rotation)} {x} {y})"'
                return (
                    f'  <text class="{primitive.layer.lower()}" x="{x}" y="{y}"{anchor} '
                    f'font-size="{_num(primitive.size * self.scale)}" '
                    f"font-family={quoteattr(FONT_FAMILY)} "
                    f'fill="{primitive.color}"{transform}>{escape(primitive.text)}</text>'
                )
        raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")


def layout_to_svg(layout: Layout, options: ExportOptions) -> str:
    """Render ``layout`` as an SVG document string."""
    return SvgRenderer(build_drawing(layout, options)).render()


@ExporterRegistry.register("svg")
class SvgExporter:
    """SVG exporter for layouts.

    Attributes:
        format_name: Identifier for this export format.
        file_extension: File extension for SVG files.
    """

    format_name: ClassVar[str] = "svg"
    file_extension: ClassVar[str] = "svg"

    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        path.write_text(self.export_string(layout, options), encoding="utf-8")

    def export_string(self, layout: Layout, options: ExportOptions) -> str:
        return layout_to_svg(layout, options)
