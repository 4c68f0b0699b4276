"""Export endpoints."""

from fastapi import APIRouter

from floorplan.application.serialization import ExportOptionsSchema, export_options_to_dto
from floorplan.web.dependencies import ExportServiceDep, RepositoryDep
from floorplan.web.schemas import ExportListSchema, ExportResultSchema

router = APIRouter(prefix="/export", tags=["export"])


@router.post("/{slug}", response_model=ExportResultSchema)
async def export_layout(
    slug: str,
    request: ExportOptionsSchema,
    repository: RepositoryDep,
    export_service: ExportServiceDep,
) -> ExportResultSchema:
    """Export a stored layout to the requested formats.

    Args:
        slug: Layout slug.
        request: Formats and drawing options (camelCase keys).
        repository: Injected layout repository.
        export_service: Injected export service.

    Returns:
        Names of the files written under the layout's export directory.
    """
    layout = repository.get_layout(slug)
    files = export_service.export_layout(layout, export_options_to_dto(request))
    return ExportResultSchema(files=files)


@router.get("/{slug}", response_model=ExportListSchema)
async def list_exports(slug: str, export_service: ExportServiceDep) -> ExportListSchema:
    """List files previously exported for a layout."""
    return ExportListSchema(exports=export_service.list_exports(slug))
