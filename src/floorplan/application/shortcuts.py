"""Keyboard shortcut bindings for the editor."""

from __future__ import annotations

from enum import Enum

from floorplan.application.events import KeyDown
from floorplan.domain.value_objects import ToolMode


class EditorAction(str, Enum):
    """Mode-independent actions bound to keys."""

    START_PAN = "start_pan"
    CANCEL = "cancel"
    FINISH_WALL = "finish_wall"
    DELETE_SELECTION = "delete_selection"
    UNDO = "undo"
    REDO = "redo"
    SAVE = "save"
    TOGGLE_GRID = "toggle_grid"


PAN_KEY = "Space"

TOOL_SHORTCUTS: dict[str, ToolMode] = {
    "KeyV": ToolMode.SELECT,
    "Digit1": ToolMode.SELECT,
    "KeyW": ToolMode.WALL,
    "Digit2": ToolMode.WALL,
    "KeyD": ToolMode.DOOR,
    "Digit3": ToolMode.DOOR,
    "KeyN": ToolMode.WINDOW,
    "Digit4": ToolMode.WINDOW,
    "KeyO": ToolMode.OBJECT,
    "Digit5": ToolMode.OBJECT,
    "KeyM": ToolMode.MEASURE,
    "Digit6": ToolMode.MEASURE,
    "KeyT": ToolMode.TEXT,
    "Digit7": ToolMode.TEXT,
}


def resolve_key(event: KeyDown, is_drawing_wall: bool) -> EditorAction | ToolMode | None:
    """Map a key press to an action or a tool mode.

    Precedence follows the binding table: pan, escape, enter (only while a
    wall is being drawn), delete, undo/redo/save chords, grid toggle, then
    tool keys. Returns None for unbound keys and for all keys while a text
    input has focus.
    """
    if event.text_input_focused:
        return None

    key = event.key
    if key == PAN_KEY:
        return None if event.repeat else EditorAction.START_PAN
    if key == "Escape":
        return EditorAction.CANCEL
    if key in ("Enter", "NumpadEnter") and is_drawing_wall:
        return EditorAction.FINISH_WALL
    if key in ("Delete", "Backspace"):
        return EditorAction.DELETE_SELECTION

    if event.command:
        if key == "KeyZ":
            return EditorAction.REDO if event.shift else EditorAction.UNDO
        if key == "KeyY":
            return EditorAction.REDO
        if key == "KeyS":
            return EditorAction.SAVE
        return None

    if key == "KeyG":
        return EditorAction.TOGGLE_GRID
    return TOOL_SHORTCUTS.get(key)
