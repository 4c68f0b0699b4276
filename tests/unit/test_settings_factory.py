"""Tests for application settings and the service factory."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from floorplan.application import AppSettings, EditorSession, ServiceFactory
from floorplan.application.factory import get_factory, reset_factory, set_factory
from floorplan.infrastructure import FileLayoutRepository
from floorplan.infrastructure.exporters import ExportService


class TestAppSettings:
    def test_defaults(self) -> None:
        settings = AppSettings.from_env(environ={})
        assert settings.layouts_dir == Path("layouts")
        assert settings.exports_dir == Path("exports")
        assert settings.max_history == 100
        assert settings.snap_threshold == 12

    def test_environment_directories(self, tmp_path: Path) -> None:
        settings = AppSettings.from_env(
            environ={"LAYOUTS_DIR": str(tmp_path / "l"), "EXPORTS_DIR": str(tmp_path / "e")}
        )
        assert settings.layouts_dir == tmp_path / "l"
        assert settings.exports_dir == tmp_path / "e"

    def test_overrides_beat_environment(self, tmp_path: Path) -> None:
        settings = AppSettings.from_env(
            environ={"LAYOUTS_DIR": "/from/env"},
            layouts_dir=tmp_path,
            exports_dir=None,
        )
        assert settings.layouts_dir == tmp_path
        assert settings.exports_dir == Path("exports")

    def test_empty_environment_value_ignored(self) -> None:
        settings = AppSettings.from_env(environ={"LAYOUTS_DIR": ""})
        assert settings.layouts_dir == Path("layouts")

    def test_home_is_expanded(self) -> None:
        settings = AppSettings(layouts_dir=Path("~/plans"))
        assert settings.layouts_dir == Path.home() / "plans"

    def test_unknown_fields_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings(layout_dir=Path("typo"))

    def test_limits_validated(self) -> None:
        with pytest.raises(ValidationError):
            AppSettings(max_history=0)
        with pytest.raises(ValidationError):
            AppSettings(snap_threshold=0)


class TestServiceFactory:
    def test_services_are_cached(self, factory: ServiceFactory) -> None:
        repository = factory.get_repository()
        export_service = factory.get_export_service()

        assert isinstance(repository, FileLayoutRepository)
        assert isinstance(export_service, ExportService)
        assert factory.get_repository() is repository
        assert factory.get_export_service() is export_service

    def test_create_session_shares_services(self, factory: ServiceFactory) -> None:
        first = factory.create_session()
        second = factory.create_session()

        assert isinstance(first, EditorSession)
        assert first.repository is second.repository
        assert first.export_service is factory.get_export_service()

    def test_create_session_applies_limits(self, tmp_path: Path) -> None:
        factory = ServiceFactory(
            AppSettings(layouts_dir=tmp_path, max_history=3, snap_threshold=6)
        )
        session = factory.create_session()
        assert session.history.max_entries == 3
        assert session.snapping.threshold == 6


class TestDefaultFactory:
    def teardown_method(self) -> None:
        reset_factory()

    def test_get_factory_is_memoised(self) -> None:
        assert get_factory() is get_factory()

    def test_set_and_reset(self, factory: ServiceFactory) -> None:
        set_factory(factory)
        assert get_factory() is factory

        reset_factory()
        assert get_factory() is not factory
