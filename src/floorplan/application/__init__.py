"""Application layer - editing session, history and tool state."""

from .events import (
    Click,
    EntityDrag,
    EntityTransform,
    InputEvent,
    KeyDown,
    KeyUp,
    PanDrag,
    PointerDown,
    PointerMove,
    PointerUp,
    Wheel,
)
from .factory import ServiceFactory, get_factory
from .history import MAX_HISTORY, HistoryEntry, HistoryManager
from .session import EditorSession
from .settings import AppSettings
from .tools import ToolState

__all__ = [
    "AppSettings",
    "Click",
    "EditorSession",
    "EntityDrag",
    "EntityTransform",
    "HistoryEntry",
    "HistoryManager",
    "InputEvent",
    "KeyDown",
    "KeyUp",
    "MAX_HISTORY",
    "PanDrag",
    "PointerDown",
    "PointerMove",
    "PointerUp",
    "ServiceFactory",
    "ToolState",
    "Wheel",
    "get_factory",
]
