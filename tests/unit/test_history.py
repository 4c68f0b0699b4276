"""Tests for the undo/redo history manager."""

import pytest

from floorplan.application.history import MAX_HISTORY, HistoryManager
from floorplan.domain import FloorObject, Point, Wall


def _obj(obj_id: str, x: float = 0.0) -> FloorObject:
    return FloorObject(id=obj_id, x=x, y=0)


class TestHistoryBasics:
    """Cursor movement and boundaries."""

    def test_new_manager_is_empty(self) -> None:
        history = HistoryManager()
        assert len(history) == 0
        assert history.cursor == -1
        assert not history.can_undo
        assert not history.can_redo
        assert history.undo([]) is None
        assert history.redo() is None

    def test_reset_seeds_single_snapshot(self) -> None:
        history = HistoryManager()
        history.reset([_obj("a")])
        assert len(history) == 1
        assert history.cursor == 0
        assert not history.can_undo

    def test_invalid_bound(self) -> None:
        with pytest.raises(ValueError):
            HistoryManager(max_entries=0)

    def test_clear(self) -> None:
        history = HistoryManager()
        history.reset([])
        history.push([])
        history.clear()
        assert len(history) == 0
        assert history.cursor == -1


class TestUndoRedo:
    """Undo and redo of recorded mutations."""

    def test_undo_then_redo_restores_state(self) -> None:
        history = HistoryManager()
        before = [_obj("a")]
        history.reset(before)

        history.push(before)
        after = [_obj("a"), _obj("b")]

        undone = history.undo(after)
        assert undone == before

        redone = history.redo()
        assert redone == after

    def test_multi_step_undo_redo(self) -> None:
        history = HistoryManager()
        states = [[_obj("a", x=float(i))] for i in range(4)]
        history.reset(states[0])
        for i in range(3):
            history.push(states[i])

        current = states[3]
        for expected in reversed(states[:3]):
            current = history.undo(current)
            assert current == expected
        assert not history.can_undo

        for expected in states[1:]:
            current = history.redo()
            assert current == expected
        assert not history.can_redo

    def test_push_after_undo_discards_redo_branch(self) -> None:
        history = HistoryManager()
        history.reset([])
        history.push([])
        history.push([_obj("a")])
        history.undo([_obj("a"), _obj("b")])

        history.push([_obj("a")])

        assert not history.can_redo
        assert history.redo() is None

    def test_snapshots_are_deep_copies(self) -> None:
        """Mutating the live list after push never alters recorded history."""
        history = HistoryManager()
        wall = Wall(id="w", points=[Point(0, 0), Point(10, 0)])
        live = [wall]
        history.reset(live)
        history.push(live)

        wall.points.append(Point(10, 10))
        wall.x = 99

        restored = history.undo(live)
        assert restored is not None
        assert restored[0].x == 0
        assert restored[0].points == [Point(0, 0), Point(10, 0)]
        assert restored[0] is not wall

    def test_restored_lists_do_not_alias_history(self) -> None:
        history = HistoryManager()
        history.reset([])
        history.push([_obj("a")])
        restored = history.undo([_obj("a"), _obj("b")])
        assert restored is not None
        restored[0].x = 500

        again = history.redo()
        history.undo(again)
        assert history.entries[1].entities[0].x == 0


class TestBound:
    """FIFO eviction at the history bound."""

    def test_default_bound(self) -> None:
        assert MAX_HISTORY == 100

    def test_length_never_exceeds_bound(self) -> None:
        history = HistoryManager()
        history.reset([])
        for i in range(150):
            history.push([_obj(f"o{i}")])
        assert len(history) == MAX_HISTORY
        assert history.cursor == MAX_HISTORY - 1

    def test_oldest_entries_evicted_first(self) -> None:
        history = HistoryManager(max_entries=3)
        history.reset([_obj("seed")])
        for name in ("a", "b", "c"):
            history.push([_obj(name)])

        ids = [entry.entities[0].id for entry in history.entries]
        assert ids == ["a", "b", "c"]
