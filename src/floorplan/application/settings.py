"""Application-level settings.

Document-level settings (grid, units, snapping toggles) live on each
layout; this module covers where documents are stored and session limits.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from floorplan.application.history import MAX_HISTORY
from floorplan.domain.services.snapping import SNAP_THRESHOLD

LAYOUTS_DIR_ENV = "LAYOUTS_DIR"
EXPORTS_DIR_ENV = "EXPORTS_DIR"


class AppSettings(BaseModel):
    """Storage locations and editor limits.

    Attributes:
        layouts_dir: Directory holding ``<slug>.json`` documents and
            ``presets.json``.
        exports_dir: Directory receiving rendered exports.
        max_history: Undo snapshots kept per session.
        snap_threshold: Snap radius in inches.
    """

    model_config = ConfigDict(extra="forbid")

    layouts_dir: Path = Field(default=Path("layouts"))
    exports_dir: Path = Field(default=Path("exports"))
    max_history: int = Field(default=MAX_HISTORY, ge=1)
    snap_threshold: float = Field(default=SNAP_THRESHOLD, gt=0)

    @field_validator("layouts_dir", "exports_dir")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        return v.expanduser()

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> AppSettings:
        """Build settings from ``LAYOUTS_DIR``/``EXPORTS_DIR``.

        Keyword overrides that are not None take precedence over the
        environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        if env.get(LAYOUTS_DIR_ENV):
            values["layouts_dir"] = Path(env[LAYOUTS_DIR_ENV])
        if env.get(EXPORTS_DIR_ENV):
            values["exports_dir"] = Path(env[EXPORTS_DIR_ENV])
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
