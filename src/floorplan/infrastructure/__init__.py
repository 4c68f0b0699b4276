"""Infrastructure layer - file storage and exporters."""

from floorplan.infrastructure.exporters import ExporterRegistry, ExportService
from floorplan.infrastructure.storage import FileLayoutRepository

__all__ = [
    "ExportService",
    "ExporterRegistry",
    "FileLayoutRepository",
]
