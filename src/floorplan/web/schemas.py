"""Pydantic response schemas for the REST API."""

from pydantic import BaseModel, Field

from floorplan.application.serialization import LayoutSummarySchema


class LayoutListSchema(BaseModel):
    """Response for listing stored layouts."""

    layouts: list[LayoutSummarySchema] = Field(
        default_factory=list, description="Layouts, most recently updated first"
    )


class SuccessSchema(BaseModel):
    """Acknowledgement of a write."""

    success: bool = Field(default=True, description="Whether the write succeeded")


class ExportResultSchema(BaseModel):
    """Response for an export request."""

    success: bool = Field(default=True, description="Whether every format was written")
    files: list[str] = Field(default_factory=list, description="Written file names")


class ExportListSchema(BaseModel):
    """Response for listing previous exports of a layout."""

    exports: list[str] = Field(default_factory=list, description="Export file names")
