"""Tests for device/document coordinate transforms and zooming."""

import math

import pytest

from floorplan.domain.services.transform import (
    MAX_ZOOM,
    MIN_ZOOM,
    WHEEL_ZOOM_STEP,
    Viewport,
    clamp_zoom,
    to_device,
    to_document,
    wheel_zoom,
    zoom_at,
)
from floorplan.domain.value_objects import Point


class TestToDocument:
    def test_identity_view(self) -> None:
        assert to_document(Point(40, 80), Point(0, 0), 1.0, 4.0) == Point(10, 20)

    def test_pan_and_zoom(self) -> None:
        p = to_document(Point(140, 60), Point(100, 20), 2.0, 4.0)
        assert p == Point(5, 5)

    def test_round_trip_with_to_device(self) -> None:
        pan, zoom, scale = Point(13, -7), 1.7, 4.0
        doc = Point(33.3, -12.5)
        back = to_document(to_device(doc, pan, zoom, scale), pan, zoom, scale)
        assert back.x == pytest.approx(doc.x)
        assert back.y == pytest.approx(doc.y)

    @pytest.mark.parametrize("zoom, scale", [(0, 4), (1, 0), (math.nan, 4), (1, math.inf)])
    def test_degenerate_parameters_leave_point_unchanged(self, zoom: float, scale: float) -> None:
        assert to_document(Point(3, 4), Point(1, 1), zoom, scale) == Point(3, 4)


class TestZoom:
    def test_clamp_zoom(self) -> None:
        assert clamp_zoom(0.01) == MIN_ZOOM
        assert clamp_zoom(50) == MAX_ZOOM
        assert clamp_zoom(2) == 2

    @pytest.mark.parametrize("new_zoom", [0.5, 1.3, 4.0, 9.0])
    def test_zoom_keeps_point_under_cursor(self, new_zoom: float) -> None:
        """The document point under the pointer is invariant across zoom."""
        viewport = Viewport(pan_x=35, pan_y=-20, zoom=1.25)
        pointer = Point(400, 300)
        scale = 4.0
        before = to_document(pointer, viewport.pan, viewport.zoom, scale)

        zoomed = zoom_at(viewport, pointer, new_zoom)
        after = to_document(pointer, zoomed.pan, zoomed.zoom, scale)

        assert zoomed.zoom == clamp_zoom(new_zoom)
        assert after.x == pytest.approx(before.x)
        assert after.y == pytest.approx(before.y)

    def test_zoom_with_degenerate_input_is_noop(self) -> None:
        viewport = Viewport(pan_x=1, pan_y=2, zoom=1)
        assert zoom_at(viewport, Point(math.nan, 0), 2) == viewport
        assert zoom_at(Viewport(zoom=0), Point(0, 0), 2) == Viewport(zoom=0)

    def test_wheel_up_zooms_in(self) -> None:
        zoomed = wheel_zoom(Viewport(), Point(0, 0), -100)
        assert zoomed.zoom == pytest.approx(WHEEL_ZOOM_STEP)

    def test_wheel_down_zooms_out(self) -> None:
        zoomed = wheel_zoom(Viewport(), Point(0, 0), 100)
        assert zoomed.zoom == pytest.approx(1 / WHEEL_ZOOM_STEP)

    def test_wheel_zero_delta_is_noop(self) -> None:
        viewport = Viewport(zoom=2)
        assert wheel_zoom(viewport, Point(10, 10), 0) is viewport

    def test_wheel_stops_at_max_zoom(self) -> None:
        zoomed = wheel_zoom(Viewport(zoom=MAX_ZOOM), Point(5, 5), -1)
        assert zoomed.zoom == MAX_ZOOM
