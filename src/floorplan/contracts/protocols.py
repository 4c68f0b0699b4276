"""Service protocols for dependency injection.

The editor session talks to persistence and export only through these
protocols, so hosts can plug in file storage, an HTTP client or an
in-memory fake for tests.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout, LayoutSummary, PresetsFile


@runtime_checkable
class LayoutRepositoryProtocol(Protocol):
    """Storage of layout documents keyed by slug, plus the preset library.

    Example:
        ```python
        class InMemoryRepository:
            def get_layout(self, slug: str) -> Layout:
                ...
        ```
    """

    def list_layouts(self) -> list[LayoutSummary]:
        """Summaries of all stored layouts, newest ``updated_at`` first."""
        ...

    def get_layout(self, slug: str) -> Layout:
        """Return the stored layout.

        Raises:
            LayoutNotFoundError: No layout is stored under ``slug``.
            LayoutFormatError: The stored document is malformed.
        """
        ...

    def save_layout(self, slug: str, layout: Layout, create_backup: bool = False) -> None:
        """Store ``layout`` under ``slug``, stamping ``updated_at``.

        When ``create_backup`` is true the previously stored document, if
        any, is copied aside first.
        """
        ...

    def delete_layout(self, slug: str) -> None:
        """Remove a stored layout.

        Raises:
            LayoutNotFoundError: No layout is stored under ``slug``.
        """
        ...

    def get_presets(self) -> PresetsFile:
        """Return the preset library, initializing defaults when absent."""
        ...

    def save_presets(self, presets: PresetsFile) -> None:
        ...


@runtime_checkable
class ExportServiceProtocol(Protocol):
    """Renders layouts to files."""

    def export_layout(self, layout: Layout, options: ExportOptions) -> list[str]:
        """Render ``layout`` in each requested format.

        Returns:
            Names of the files written.

        Raises:
            UnsupportedFormatError: A requested format has no exporter.
            ExportError: Rendering or writing failed.
        """
        ...

    def list_exports(self, slug: str) -> list[str]:
        """Names of files previously exported for ``slug``."""
        ...


@runtime_checkable
class ExporterProtocol(Protocol):
    """A single output format.

    Attributes:
        format_name: Registry key (e.g., "svg", "dxf").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        """Render ``layout`` into ``path``."""
        ...
