"""Layout document and preset library endpoints."""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Query

from floorplan.application.serialization import (
    dump_layout,
    dump_presets,
    load_layout_from_dict,
    load_presets_from_dict,
    summary_to_schema,
)
from floorplan.web.dependencies import RepositoryDep
from floorplan.web.schemas import LayoutListSchema, SuccessSchema

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/layouts", tags=["layouts"])


@router.get("", response_model=LayoutListSchema)
async def list_layouts(repository: RepositoryDep) -> LayoutListSchema:
    """List stored layouts, most recently updated first."""
    summaries = [summary_to_schema(s) for s in repository.list_layouts()]
    return LayoutListSchema(layouts=summaries)


# The presets routes are declared before "/{slug}" so they are not
# captured as a layout named "presets".
@router.get("/presets")
async def get_presets(repository: RepositoryDep) -> dict[str, Any]:
    """Get the object preset library, creating the default one if missing."""
    return dump_presets(repository.get_presets())


@router.post("/presets", response_model=SuccessSchema)
async def save_presets(
    data: Annotated[dict[str, Any], Body()],
    repository: RepositoryDep,
) -> SuccessSchema:
    """Replace the object preset library.

    Raises:
        LayoutFormatError: If the body is not a valid presets document
            (handled by exception handler).
    """
    repository.save_presets(load_presets_from_dict(data))
    return SuccessSchema()


@router.get("/{slug}")
async def get_layout(slug: str, repository: RepositoryDep) -> dict[str, Any]:
    """Get a stored layout document.

    Args:
        slug: Layout slug.
        repository: Injected layout repository.

    Returns:
        The layout in its stored camelCase JSON form.

    Raises:
        LayoutNotFoundError: If no layout has this slug (404).
        LayoutFormatError: If the stored file is malformed (422).
    """
    return dump_layout(repository.get_layout(slug))


@router.post("/{slug}", response_model=SuccessSchema)
async def save_layout(
    slug: str,
    data: Annotated[dict[str, Any], Body()],
    repository: RepositoryDep,
    auto_save: Annotated[bool, Query(alias="autoSave")] = False,
) -> SuccessSchema:
    """Store a layout document under ``slug``.

    When ``autoSave`` is true the previous version is copied into the
    autosave directory first.
    """
    layout = load_layout_from_dict(data)
    repository.save_layout(slug, layout, create_backup=auto_save)
    logger.info(f"Saved layout '{slug}' via API (autoSave={auto_save})")
    return SuccessSchema()


@router.delete("/{slug}", response_model=SuccessSchema)
async def delete_layout(slug: str, repository: RepositoryDep) -> SuccessSchema:
    """Delete a stored layout."""
    repository.delete_layout(slug)
    return SuccessSchema()
