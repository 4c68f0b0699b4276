"""FastAPI dependency injection for floorplan services."""

from typing import Annotated

from fastapi import Depends

from floorplan.application.factory import ServiceFactory, get_factory
from floorplan.contracts import ExportServiceProtocol, LayoutRepositoryProtocol


def get_service_factory() -> ServiceFactory:
    """Get the process-wide ServiceFactory (replaceable via ``set_factory``)."""
    return get_factory()


def get_repository(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> LayoutRepositoryProtocol:
    """Dependency for the layout repository."""
    return factory.get_repository()


def get_export_service(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> ExportServiceProtocol:
    """Dependency for the export service."""
    return factory.get_export_service()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
RepositoryDep = Annotated[LayoutRepositoryProtocol, Depends(get_repository)]
ExportServiceDep = Annotated[ExportServiceProtocol, Depends(get_export_service)]
