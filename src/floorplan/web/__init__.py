"""FastAPI REST API for floorplan layouts.

Serves stored layout documents and the preset library, and triggers
exports to image, document and CAD formats.

Usage:
    uvicorn floorplan.web:app --reload
"""

from floorplan.web.app import app, create_app

__all__ = ["app", "create_app"]
