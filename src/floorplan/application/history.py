"""Bounded linear undo/redo history of entity-list snapshots.

Callers push the *pre-mutation* entity list before every change, so the
snapshot at the cursor is always the state one step back. Undo restores
that snapshot and moves the cursor back; redo moves forward again. There
is no redo tree: pushing after an undo discards the redo branch.

The state that was live when the first undo of a run happened is not in
the snapshot list (it was never a pre-mutation state), so it is kept
separately as the redo head.
"""

from __future__ import annotations

import copy
import logging
import time
from dataclasses import dataclass, field

from floorplan.domain.entities import Entity

logger = logging.getLogger(__name__)

MAX_HISTORY = 100


@dataclass(frozen=True)
class HistoryEntry:
    """A deep copy of the entity list plus when it was taken."""

    entities: list[Entity]
    timestamp: float = field(default_factory=time.time)


def _copy_entities(entities: list[Entity]) -> list[Entity]:
    return copy.deepcopy(list(entities))


class HistoryManager:
    """Undo/redo stack for one editing session.

    Attributes:
        max_entries: Maximum number of snapshots retained.
    """

    def __init__(self, max_entries: int = MAX_HISTORY) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: list[HistoryEntry] = []
        self._cursor = -1
        self._head: list[Entity] | None = None

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        """Index of the current snapshot, or -1 before the first reset."""
        return self._cursor

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def reset(self, entities: list[Entity]) -> None:
        """Start over with a single snapshot of ``entities`` at cursor 0."""
        self._entries = [HistoryEntry(_copy_entities(entities))]
        self._cursor = 0
        self._head = None

    def clear(self) -> None:
        """Forget everything (no document loaded)."""
        self._entries = []
        self._cursor = -1
        self._head = None

    def push(self, entities: list[Entity]) -> None:
        """Record the pre-mutation entity list.

        Discards any redo branch, appends a deep copy, moves the cursor to
        the new last entry and evicts the oldest entries beyond the bound.
        """
        del self._entries[self._cursor + 1 :]
        self._head = None
        self._entries.append(HistoryEntry(_copy_entities(entities)))
        self._cursor = len(self._entries) - 1

        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]
            self._cursor -= overflow
            logger.debug(f"History bound reached, evicted {overflow} snapshot(s)")

    def undo(self, current: list[Entity]) -> list[Entity] | None:
        """Step back one change.

        Args:
            current: The live entity list, kept as the redo head when this
                is the first undo since the last push.

        Returns:
            The entity list to apply, or None when there is nothing to undo.
        """
        if self._cursor <= 0:
            return None
        if self._cursor == len(self._entries) - 1:
            self._head = _copy_entities(current)

        restored = _copy_entities(self._entries[self._cursor].entities)
        self._cursor -= 1
        return restored

    def redo(self) -> list[Entity] | None:
        """Step forward one change.

        Returns:
            The entity list to apply, or None when there is nothing to redo.
        """
        if not self.can_redo:
            return None

        self._cursor += 1
        following = self._cursor + 1
        if following < len(self._entries):
            return _copy_entities(self._entries[following].entities)
        if self._head is not None:
            return _copy_entities(self._head)
        return _copy_entities(self._entries[self._cursor].entities)
