"""Data transfer objects shared across layer boundaries."""

from __future__ import annotations

from dataclasses import dataclass, field

from floorplan.domain.value_objects import PageSize

EXPORT_FORMATS: tuple[str, ...] = ("png", "svg", "pdf", "dxf")


@dataclass
class ExportOptions:
    """Options for rendering a layout to files.

    Attributes:
        formats: Target formats, any of ``png``, ``svg``, ``pdf``, ``dxf``.
        include_grid: Draw the layout grid.
        include_dimensions: Label wall segment lengths.
        include_labels: Draw text labels and object labels.
        paper_size: Page size classifier for paginated output.
        orientation: ``portrait`` or ``landscape`` for paginated output.
        scale_label: Free text printed in the PDF footer, e.g. ``1/4" = 1'``.
        dpi: Raster resolution for PNG output.
    """

    formats: list[str] = field(default_factory=lambda: ["svg"])
    include_grid: bool = True
    include_dimensions: bool = True
    include_labels: bool = True
    paper_size: PageSize = PageSize.LETTER
    orientation: str = "landscape"
    scale_label: str = ""
    dpi: int = 150

    def __post_init__(self) -> None:
        if self.dpi <= 0:
            raise ValueError("dpi must be positive")
        if self.orientation not in ("portrait", "landscape"):
            raise ValueError("orientation must be 'portrait' or 'landscape'")


@dataclass
class OperationResult:
    """Outcome of a session operation that talks to a collaborator.

    Failures never raise into the editor; they are reported here so the
    host can show ``message`` to the user.
    """

    success: bool
    message: str = ""
    files: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, message: str = "", files: list[str] | None = None) -> OperationResult:
        return cls(success=True, message=message, files=files or [])

    @classmethod
    def failed(cls, message: str) -> OperationResult:
        return cls(success=False, message=message)
