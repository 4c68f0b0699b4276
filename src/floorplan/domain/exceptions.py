"""Domain-level exceptions."""


class LayoutNotFoundError(Exception):
    """Raised when a requested layout does not exist."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Layout not found: {slug}")


class DuplicateEntityError(ValueError):
    """Raised when adding an entity whose id is already in the document."""

    def __init__(self, entity_id: str) -> None:
        self.entity_id = entity_id
        super().__init__(f"Entity id already exists in layout: {entity_id}")


class StorageError(Exception):
    """Raised when the layout store cannot be read or written."""

    def __init__(self, message: str, slug: str | None = None) -> None:
        self.message = message
        self.slug = slug
        super().__init__(message)


class ExportError(Exception):
    """Raised when a layout cannot be rendered or written in some format."""

    def __init__(self, message: str, format_name: str | None = None) -> None:
        self.message = message
        self.format_name = format_name
        super().__init__(message)


class UnsupportedFormatError(ExportError):
    """Raised when no exporter is registered for a requested format."""

    def __init__(self, format_name: str, available: list[str]) -> None:
        self.available = available
        super().__init__(
            f"Unknown export format: '{format_name}'. "
            f"Available formats: {', '.join(available) or 'none'}",
            format_name=format_name,
        )
