"""Pytest configuration and shared fixtures for floorplan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from floorplan.application.factory import ServiceFactory
from floorplan.application.session import EditorSession
from floorplan.application.settings import AppSettings
from floorplan.domain import (
    DimensionLine,
    Door,
    FloorObject,
    Layout,
    LayoutSettings,
    Point,
    TextLabel,
    Wall,
    Window,
)
from floorplan.infrastructure import ExportService, FileLayoutRepository


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Documents
# =============================================================================


@pytest.fixture
def empty_layout() -> Layout:
    """An empty layout with default settings (grid 12, all snapping on)."""
    return Layout(
        id="layout-1",
        name="Main Office",
        slug="main-office",
        created_at="2024-01-01T00:00:00.000Z",
        updated_at="2024-01-01T00:00:00.000Z",
        settings=LayoutSettings(),
        entities=[],
    )


@pytest.fixture
def sample_layout(empty_layout: Layout) -> Layout:
    """A layout holding one of every entity variant.

    The wall runs from (0, 0) to (120, 0) to (120, 96).
    """
    empty_layout.entities = [
        Wall(
            id="wall-1",
            points=[Point(0, 0), Point(120, 0), Point(120, 96)],
            thickness=6,
        ),
        Door(id="door-1", x=30, y=0, wall_id="wall-1", wall_position=0.25, width=36),
        Window(
            id="window-1",
            x=90,
            y=0,
            wall_id="wall-1",
            wall_position=0.75,
            width=36,
            sill_height=36,
        ),
        FloorObject(
            id="desk-1",
            x=24,
            y=24,
            object_type="desk",
            width=60,
            height=30,
            label="Desk",
        ),
        TextLabel(id="text-1", x=10, y=80, text="Reception", font_size=14),
        DimensionLine(id="dim-1", start_x=0, start_y=100, end_x=66, end_y=100),
    ]
    return empty_layout


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def layouts_dir(tmp_path: Path) -> Path:
    return tmp_path / "layouts"


@pytest.fixture
def exports_dir(tmp_path: Path) -> Path:
    return tmp_path / "exports"


@pytest.fixture
def repository(layouts_dir: Path) -> FileLayoutRepository:
    return FileLayoutRepository(layouts_dir)


@pytest.fixture
def export_service(exports_dir: Path) -> ExportService:
    return ExportService(exports_dir)


@pytest.fixture
def factory(layouts_dir: Path, exports_dir: Path) -> ServiceFactory:
    """A ServiceFactory rooted in the test's temporary directory."""
    return ServiceFactory(AppSettings(layouts_dir=layouts_dir, exports_dir=exports_dir))


@pytest.fixture
def session(empty_layout: Layout) -> EditorSession:
    """A session editing the empty layout, with no collaborators."""
    return EditorSession(empty_layout)
