"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from floorplan.application.settings import AppSettings

if TYPE_CHECKING:
    from floorplan.application.session import EditorSession
    from floorplan.contracts.protocols import (
        ExportServiceProtocol,
        LayoutRepositoryProtocol,
    )
    from floorplan.domain.entities import Layout


@dataclass
class ServiceFactory:
    """Factory for creating service instances from settings.

    Repositories and export services are created lazily and cached, so
    every session built by one factory shares the same storage.

    Example:
        ```python
        factory = ServiceFactory(AppSettings.from_env())
        session = factory.create_session()
        session.load_layout("main-office")
        ```
    """

    settings: AppSettings = field(default_factory=AppSettings.from_env)

    _repository: "LayoutRepositoryProtocol | None" = field(
        default=None, init=False, repr=False
    )
    _export_service: "ExportServiceProtocol | None" = field(
        default=None, init=False, repr=False
    )

    def get_repository(self) -> "LayoutRepositoryProtocol":
        """Get or create the layout repository."""
        if self._repository is None:
            from floorplan.infrastructure.storage import FileLayoutRepository

            self._repository = FileLayoutRepository(self.settings.layouts_dir)
        return self._repository

    def get_export_service(self) -> "ExportServiceProtocol":
        """Get or create the export service."""
        if self._export_service is None:
            from floorplan.infrastructure.exporters import ExportService

            self._export_service = ExportService(self.settings.exports_dir)
        return self._export_service

    def create_session(self, layout: "Layout | None" = None) -> "EditorSession":
        """Create an editor session wired to this factory's services."""
        from floorplan.application.session import EditorSession

        return EditorSession(
            layout=layout,
            repository=self.get_repository(),
            export_service=self.get_export_service(),
            max_history=self.settings.max_history,
            snap_threshold=self.settings.snap_threshold,
        )


_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
