"""Tests for the drawing primitives, exporters and the export service."""

from __future__ import annotations

from pathlib import Path
from typing import ClassVar

import ezdxf
import pytest
from PIL import Image

from floorplan.contracts import ExportOptions, ExportServiceProtocol
from floorplan.domain import (
    EntityStyle,
    ExportError,
    FloorObject,
    Layout,
    PageSize,
    Point,
    TextLabel,
    UnsupportedFormatError,
)
from floorplan.infrastructure.exporters import (
    DxfExporter,
    ExporterRegistry,
    ExportService,
    PdfExporter,
    PngExporter,
    SvgExporter,
    build_drawing,
    layout_to_svg,
)
from floorplan.infrastructure.exporters.pdf import PAPER_SIZES, page_size_for
from floorplan.infrastructure.exporters.png import PngRenderer
from floorplan.infrastructure.exporters.primitives import (
    LAYER_DIMENSIONS,
    LAYER_GRID,
    LAYER_OBJECTS,
    LAYER_OPENINGS,
    LAYER_TEXT,
    LAYER_WALLS,
    Label,
    Polygon,
    Polyline,
    dash_segments,
)


def _labels(primitives: list) -> list[str]:
    return [p.text for p in primitives if isinstance(p, Label)]


class TestBuildDrawing:
    """The shared display list every exporter draws from."""

    def test_page_geometry(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions())
        assert (drawing.width, drawing.height, drawing.scale) == (132, 102, 4)

    def test_every_variant_is_drawn(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions())
        for layer in (LAYER_WALLS, LAYER_OPENINGS, LAYER_OBJECTS, LAYER_TEXT, LAYER_DIMENSIONS):
            assert drawing.on_layer(layer), layer

    def test_wall_is_one_polyline_with_thickness(self, sample_layout: Layout) -> None:
        (wall,) = build_drawing(sample_layout, ExportOptions()).on_layer(LAYER_WALLS)
        assert isinstance(wall, Polyline)
        assert wall.width == 6
        assert wall.points == (Point(0, 0), Point(120, 0), Point(120, 96))

    def test_door_swing_is_dashed(self, sample_layout: Layout) -> None:
        openings = build_drawing(sample_layout, ExportOptions()).on_layer(LAYER_OPENINGS)
        assert any(isinstance(p, Polyline) and p.dashed for p in openings)

    def test_grid_toggle(self, sample_layout: Layout) -> None:
        with_grid = build_drawing(sample_layout, ExportOptions(include_grid=True))
        without = build_drawing(sample_layout, ExportOptions(include_grid=False))
        # 132/12 + 1 vertical lines and 102//12 + 1 horizontal lines.
        assert len(with_grid.on_layer(LAYER_GRID)) == 12 + 9
        assert without.on_layer(LAYER_GRID) == []

    def test_wall_dimension_labels(self, sample_layout: Layout) -> None:
        options = ExportOptions(include_dimensions=True)
        labels = _labels(build_drawing(sample_layout, options).on_layer(LAYER_DIMENSIONS))
        assert labels == ["5'-6\"", "10'", "8'"]

    def test_dimension_entities_drawn_without_wall_labels(self, sample_layout: Layout) -> None:
        options = ExportOptions(include_dimensions=False)
        labels = _labels(build_drawing(sample_layout, options).on_layer(LAYER_DIMENSIONS))
        assert labels == ["5'-6\""]

    def test_label_toggle(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions(include_labels=False))
        assert drawing.on_layer(LAYER_TEXT) == []
        assert _labels(drawing.on_layer(LAYER_OBJECTS)) == []

        drawing = build_drawing(sample_layout, ExportOptions(include_labels=True))
        assert _labels(drawing.on_layer(LAYER_TEXT)) == ["Reception"]
        assert _labels(drawing.on_layer(LAYER_OBJECTS)) == ["Desk"]

    def test_object_fill_by_type_and_style(self, empty_layout: Layout) -> None:
        empty_layout.entities = [
            FloorObject(id="a", object_type="rack"),
            FloorObject(id="b", object_type="rack", style=EntityStyle(fill="#123456")),
        ]
        polygons = [p for p in build_drawing(empty_layout, ExportOptions()).primitives if isinstance(p, Polygon)]
        assert polygons[0].fill != "#123456"
        assert polygons[1].fill == "#123456"

    def test_dash_segments(self) -> None:
        pieces = dash_segments(Point(0, 0), Point(10, 0), 2, 2)
        assert [(a.x, b.x) for a, b in pieces] == [(0, 2), (4, 6), (8, 10)]
        assert dash_segments(Point(1, 1), Point(1, 1), 2, 2) == [(Point(1, 1), Point(1, 1))]


class TestSvgExporter:
    def test_document_structure(self, sample_layout: Layout) -> None:
        svg = layout_to_svg(sample_layout, ExportOptions())
        assert svg.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert 'viewBox="0 0 528 408"' in svg
        assert 'class="walls"' in svg
        assert "Reception" in svg
        assert svg.rstrip().endswith("</svg>")

    def test_text_is_escaped(self, empty_layout: Layout) -> None:
        empty_layout.entities = [TextLabel(id="t", text="R&D <lab>")]
        svg = layout_to_svg(empty_layout, ExportOptions())
        assert "R&amp;D &lt;lab&gt;" in svg

    def test_export_writes_file(self, sample_layout: Layout, tmp_path: Path) -> None:
        path = tmp_path / "plan.svg"
        SvgExporter().export(sample_layout, ExportOptions(), path)
        assert path.read_text(encoding="utf-8") == SvgExporter().export_string(
            sample_layout, ExportOptions()
        )


class TestPngExporter:
    def test_size_follows_dpi(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions())
        assert PngRenderer(drawing, 96).size == (528, 408)
        assert PngRenderer(drawing, 192).size == (1056, 816)

    def test_export_writes_png(self, sample_layout: Layout, tmp_path: Path) -> None:
        path = tmp_path / "plan.png"
        PngExporter().export(sample_layout, ExportOptions(dpi=96), path)
        with Image.open(path) as img:
            assert img.format == "PNG"
            assert img.size == (528, 408)
            assert any(low < 255 for low, _ in img.convert("RGB").getextrema())


class TestPdfExporter:
    def test_page_size_orientation(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions())
        landscape = page_size_for(drawing, ExportOptions(orientation="landscape"))
        portrait = page_size_for(drawing, ExportOptions(orientation="portrait"))
        assert landscape[0] > landscape[1]
        assert portrait[0] < portrait[1]
        assert sorted(landscape) == sorted(PAPER_SIZES[PageSize.LETTER])

    def test_custom_paper_fits_page(self, sample_layout: Layout) -> None:
        drawing = build_drawing(sample_layout, ExportOptions())
        width, height = page_size_for(drawing, ExportOptions(paper_size=PageSize.CUSTOM))
        assert width > 132 * 72
        assert height > 102 * 72

    def test_export_writes_pdf(self, sample_layout: Layout, tmp_path: Path) -> None:
        path = tmp_path / "plan.pdf"
        PdfExporter().export(sample_layout, ExportOptions(scale_label='1/4" = 1\''), path)
        assert path.read_bytes().startswith(b"%PDF")


class TestDxfExporter:
    def test_layers_and_entities(self, sample_layout: Layout, tmp_path: Path) -> None:
        path = tmp_path / "plan.dxf"
        DxfExporter().export(sample_layout, ExportOptions(include_grid=False), path)

        doc = ezdxf.readfile(path)
        layer_names = {layer.dxf.name for layer in doc.layers}
        assert {"WALLS", "OPENINGS", "OBJECTS", "TEXT", "DIMENSIONS", "GRID"} <= layer_names

        msp = doc.modelspace()
        walls = msp.query('LWPOLYLINE[layer=="WALLS"]')
        assert len(walls) == 1
        texts = [t.dxf.text for t in msp.query("TEXT")]
        assert "Reception" in texts

    def test_y_axis_is_flipped(self, sample_layout: Layout, tmp_path: Path) -> None:
        path = tmp_path / "plan.dxf"
        DxfExporter().export(sample_layout, ExportOptions(include_grid=False), path)
        (wall,) = ezdxf.readfile(path).modelspace().query('LWPOLYLINE[layer=="WALLS"]')
        points = [(x, y) for x, y, *_ in wall.get_points()]
        assert points == [(0, 102), (120, 102), (120, 6)]

    def test_export_string(self, sample_layout: Layout) -> None:
        text = DxfExporter().export_string(sample_layout, ExportOptions())
        assert "WALLS" in text
        assert "EOF" in text


class TestExporterRegistry:
    def setup_method(self) -> None:
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        ExporterRegistry._exporters = self._original_exporters

    def test_builtin_formats(self) -> None:
        assert ExporterRegistry.available_formats() == ["dxf", "pdf", "png", "svg"]
        assert ExporterRegistry.get("svg") is SvgExporter

    def test_unknown_format(self) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ExporterRegistry.get("gif")
        assert exc_info.value.format_name == "gif"
        assert "svg" in exc_info.value.available

    def test_register_and_unregister(self) -> None:
        @ExporterRegistry.register("txt")
        class TextExporter:
            format_name: ClassVar[str] = "txt"
            file_extension: ClassVar[str] = "txt"

            def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
                path.write_text(layout.name, encoding="utf-8")

        assert ExporterRegistry.is_registered("txt")
        ExporterRegistry.unregister("txt")
        assert not ExporterRegistry.is_registered("txt")


class TestExportService:
    def setup_method(self) -> None:
        self._original_exporters = ExporterRegistry._exporters.copy()

    def teardown_method(self) -> None:
        ExporterRegistry._exporters = self._original_exporters

    def test_implements_protocol(self, export_service: ExportService) -> None:
        assert isinstance(export_service, ExportServiceProtocol)

    def test_writes_each_format(
        self, export_service: ExportService, exports_dir: Path, sample_layout: Layout
    ) -> None:
        files = export_service.export_layout(
            sample_layout, ExportOptions(formats=["svg", "png", "svg"], dpi=50)
        )
        assert files == ["main-office.svg", "main-office.png"]
        assert (exports_dir / "main-office" / "main-office.svg").is_file()
        assert export_service.list_exports("main-office") == ["main-office.png", "main-office.svg"]

    def test_unknown_format_writes_nothing(
        self, export_service: ExportService, exports_dir: Path, sample_layout: Layout
    ) -> None:
        with pytest.raises(UnsupportedFormatError):
            export_service.export_layout(sample_layout, ExportOptions(formats=["svg", "gif"]))
        assert not (exports_dir / "main-office").exists()

    def test_exporter_failure_is_wrapped(
        self, export_service: ExportService, sample_layout: Layout
    ) -> None:
        @ExporterRegistry.register("broken")
        class BrokenExporter:
            format_name: ClassVar[str] = "broken"
            file_extension: ClassVar[str] = "bin"

            def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
                raise OSError("device not ready")

        with pytest.raises(ExportError) as exc_info:
            export_service.export_layout(sample_layout, ExportOptions(formats=["broken"]))
        assert exc_info.value.format_name == "broken"

    def test_list_exports_guards_slug(self, export_service: ExportService) -> None:
        assert export_service.list_exports("../etc") == []
        assert export_service.list_exports("never-exported") == []

    def test_invalid_options(self) -> None:
        with pytest.raises(ValueError):
            ExportOptions(dpi=0)
        with pytest.raises(ValueError):
            ExportOptions(orientation="sideways")
