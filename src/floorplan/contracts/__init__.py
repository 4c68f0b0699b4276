"""Contracts module - protocols and shared DTOs for cross-layer communication.

By depending on protocols rather than concrete implementations, the editor
session stays decoupled from storage and rendering.

Example:
    ```python
    from floorplan.contracts import LayoutRepositoryProtocol

    def latest(repository: LayoutRepositoryProtocol) -> str | None:
        layouts = repository.list_layouts()
        return layouts[0].slug if layouts else None
    ```
"""

# DTOs
from .dtos import (
    EXPORT_FORMATS as EXPORT_FORMATS,
    ExportOptions as ExportOptions,
    OperationResult as OperationResult,
)

# Service protocols
from .protocols import (
    ExporterProtocol as ExporterProtocol,
    ExportServiceProtocol as ExportServiceProtocol,
    LayoutRepositoryProtocol as LayoutRepositoryProtocol,
)
