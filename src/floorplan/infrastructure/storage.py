"""File-system layout repository.

Layouts are stored as ``<slug>.json`` (camelCase JSON, 2-space indent) in
one directory, alongside ``presets.json``. Backups go to
``.autosave/<slug>-<YYYY-MM-DDTHH-MM>.json``.
"""

from __future__ import annotations

import json
import logging
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from floorplan.application.serialization.loader import (
    LayoutFormatError,
    dump_layout,
    dump_presets,
    load_layout,
    load_presets,
)
from floorplan.domain.entities import (
    Layout,
    LayoutSummary,
    PresetsFile,
    default_presets,
    utc_timestamp,
)
from floorplan.domain.exceptions import LayoutNotFoundError, StorageError

logger = logging.getLogger(__name__)

PRESETS_FILENAME = "presets.json"
AUTOSAVE_DIRNAME = ".autosave"

_SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _parse_timestamp(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class FileLayoutRepository:
    """Stores layouts and presets as JSON files in ``root``.

    Args:
        root: Directory holding the documents. Created on first write.
    """

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    @property
    def autosave_dir(self) -> Path:
        return self.root / AUTOSAVE_DIRNAME

    def _layout_path(self, slug: str) -> Path:
        if not _SLUG_RE.match(slug):
            raise LayoutNotFoundError(slug)
        return self.root / f"{slug}.json"

    def _write_json(self, path: Path, data: Any) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Wrote {path}")

    def list_layouts(self) -> list[LayoutSummary]:
        """Summaries of stored layouts, most recently updated first.

        Files that fail to parse are skipped with a warning.
        """
        if not self.root.is_dir():
            return []

        summaries: list[LayoutSummary] = []
        for path in sorted(self.root.glob("*.json")):
            if path.name == PRESETS_FILENAME:
                continue
            try:
                summaries.append(load_layout(path).summary())
            except LayoutFormatError as e:
                logger.warning(f"Skipping unreadable layout file {path.name}: {e.error_type}")
        summaries.sort(key=lambda s: _parse_timestamp(s.updated_at), reverse=True)
        return summaries

    def exists(self, slug: str) -> bool:
        try:
            return self._layout_path(slug).is_file()
        except LayoutNotFoundError:
            return False

    def get_layout(self, slug: str) -> Layout:
        path = self._layout_path(slug)
        if not path.is_file():
            raise LayoutNotFoundError(slug)
        return load_layout(path)

    def save_layout(self, slug: str, layout: Layout, create_backup: bool = False) -> None:
        """Write ``layout`` to ``<slug>.json``, stamping ``updated_at``.

        The stored document always carries ``slug``. With ``create_backup``
        the previous file, if any, is copied into the autosave directory.
        """
        if not _SLUG_RE.match(slug):
            raise StorageError(f"Invalid layout slug: {slug!r}", slug=slug)
        path = self.root / f"{slug}.json"

        if create_backup and path.is_file():
            stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M")
            backup = self.autosave_dir / f"{slug}-{stamp}.json"
            try:
                self.autosave_dir.mkdir(parents=True, exist_ok=True)
                shutil.copyfile(path, backup)
            except OSError as e:
                raise StorageError(f"Failed to back up {path}: {e}", slug=slug) from e
            logger.debug(f"Backed up '{slug}' to {backup.name}")

        if layout.slug != slug:
            logger.debug(f"Storing layout '{layout.slug}' under slug '{slug}'")
            layout.slug = slug
        layout.updated_at = utc_timestamp()
        self._write_json(path, dump_layout(layout))
        logger.info(f"Saved layout '{slug}' ({len(layout.entities)} entities)")

    def delete_layout(self, slug: str) -> None:
        path = self._layout_path(slug)
        if not path.is_file():
            raise LayoutNotFoundError(slug)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e}", slug=slug) from e
        logger.info(f"Deleted layout '{slug}'")

    def get_presets(self) -> PresetsFile:
        """Load ``presets.json``, writing the built-in library if missing."""
        path = self.root / PRESETS_FILENAME
        if not path.is_file():
            presets = default_presets()
            self.save_presets(presets)
            return presets
        return load_presets(path)

    def save_presets(self, presets: PresetsFile) -> None:
        self._write_json(self.root / PRESETS_FILENAME, dump_presets(presets))

    def list_backups(self, slug: str) -> list[str]:
        """Backup file names for ``slug``, oldest first."""
        if not self.autosave_dir.is_dir():
            return []
        pattern = re.compile(rf"^{re.escape(slug)}-\d{{4}}-\d{{2}}-\d{{2}}T\d{{2}}-\d{{2}}\.json$")
        return sorted(p.name for p in self.autosave_dir.iterdir() if pattern.match(p.name))
