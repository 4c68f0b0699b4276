"""Base exporter framework with Protocol, Registry, and ExportService."""

from __future__ import annotations

import logging
import re
from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

from floorplan.domain.exceptions import ExportError, UnsupportedFormatError

if TYPE_CHECKING:
    from floorplan.contracts.dtos import ExportOptions
    from floorplan.domain.entities import Layout


logger = logging.getLogger(__name__)

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@runtime_checkable
class Exporter(Protocol):
    """Protocol for all exporters.

    Exporters render a layout to one file format. Each exporter defines its
    format name and file extension and implements :meth:`export`.

    Attributes:
        format_name: Registry key for the format (e.g., "svg", "dxf").
        file_extension: File extension without leading dot.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]

    @abstractmethod
    def export(self, layout: Layout, options: ExportOptions, path: Path) -> None:
        """Render ``layout`` to ``path``."""
        ...


class ExporterRegistry:
    """Registry for exporter classes.

    Exporters register themselves with the ``@ExporterRegistry.register``
    decorator when their module is imported.

    Example:
        @ExporterRegistry.register("svg")
        class SvgExporter:
            format_name = "svg"
            file_extension = "svg"
            ...
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> type:
        """Decorator to register an exporter class under ``format_name``."""

        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            if format_name in cls._exporters:
                logger.warning(
                    f"Overwriting existing exporter for format '{format_name}'"
                )
            cls._exporters[format_name] = exporter_class
            logger.debug(f"Registered exporter '{format_name}': {exporter_class.__name__}")
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Get an exporter class by format name.

        Raises:
            UnsupportedFormatError: If no exporter is registered for the format.
        """
        if format_name not in cls._exporters:
            raise UnsupportedFormatError(format_name, cls.available_formats())
        return cls._exporters[format_name]

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters.keys())

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def unregister(cls, format_name: str) -> None:
        """Remove one exporter; mainly useful for testing."""
        cls._exporters.pop(format_name, None)


class ExportService:
    """Writes layouts to ``<root>/<slug>/<slug>.<ext>``.

    Attributes:
        root: Directory that receives one sub-directory per layout.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def export_dir(self, slug: str) -> Path:
        return self.root / slug

    def export_layout(self, layout: Layout, options: ExportOptions) -> list[str]:
        """Render ``layout`` in every requested format.

        All formats are resolved before anything is written, so an unknown
        format leaves no partial output.

        Returns:
            File names written, in request order.

        Raises:
            UnsupportedFormatError: If any format is not registered.
            ExportError: If rendering or writing fails.
        """
        formats = list(dict.fromkeys(options.formats))
        exporters = [ExporterRegistry.get(name)() for name in formats]

        target = self.export_dir(layout.slug)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(f"Cannot create export directory {target}: {e}") from e

        written: list[str] = []
        for exporter in exporters:
            filename = f"{layout.slug}.{exporter.file_extension}"
            path = target / filename
            logger.info(f"Exporting to {exporter.format_name}: {path}")
            try:
                exporter.export(layout, options, path)
            except ExportError:
                raise
            except (OSError, ValueError) as e:
                raise ExportError(
                    f"Failed to export {exporter.format_name}: {e}",
                    format_name=exporter.format_name,
                ) from e
            written.append(filename)
        return written

    def list_exports(self, slug: str) -> list[str]:
        """File names previously exported for ``slug``, sorted."""
        if not _SLUG_RE.match(slug):
            return []
        target = self.export_dir(slug)
        if not target.is_dir():
            return []
        return sorted(p.name for p in target.iterdir() if p.is_file())
