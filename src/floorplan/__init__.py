"""Interactive 2D floorplan layout editing engine."""

__version__ = "0.1.0"
