"""Input events consumed by the editor session.

Events form a closed union (:data:`InputEvent`); only
:meth:`floorplan.application.session.EditorSession.dispatch` interprets
them. Pointer coordinates are device pixels relative to the canvas.
Key names follow DOM ``KeyboardEvent.code`` values (``KeyZ``, ``Digit1``,
``Escape``, ``Space``...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class PointerDown:
    """Pointer pressed. ``target_id`` names the entity under the pointer."""

    x: float
    y: float
    target_id: str | None = None
    modifier: bool = False


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    x: float
    y: float


@dataclass(frozen=True)
class Click:
    """Completed click. ``modifier`` is the add-to-selection key (shift)."""

    x: float
    y: float
    target_id: str | None = None
    modifier: bool = False


@dataclass(frozen=True)
class KeyDown:
    key: str
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    repeat: bool = False
    text_input_focused: bool = False

    @property
    def command(self) -> bool:
        """True when the platform command modifier (ctrl or meta) is held."""
        return self.ctrl or self.meta


@dataclass(frozen=True)
class KeyUp:
    key: str
    text_input_focused: bool = False


@dataclass(frozen=True)
class Wheel:
    """Scroll gesture at (x, y); negative ``delta_y`` zooms in."""

    x: float
    y: float
    delta_y: float


@dataclass(frozen=True)
class PanDrag:
    """Canvas drag finished with the view offset now at (x, y)."""

    x: float
    y: float


@dataclass(frozen=True)
class EntityDrag:
    """An entity was dragged so its origin is now at device point (x, y)."""

    entity_id: str
    x: float
    y: float


@dataclass(frozen=True)
class EntityTransform:
    """A floor object was resized or rotated with a transform handle.

    ``scale_x``/``scale_y`` are multipliers on the current width/height.
    """

    entity_id: str
    x: float
    y: float
    scale_x: float = 1.0
    scale_y: float = 1.0
    rotation: float = 0.0


InputEvent = Union[
    PointerDown,
    PointerMove,
    PointerUp,
    Click,
    KeyDown,
    KeyUp,
    Wheel,
    PanDrag,
    EntityDrag,
    EntityTransform,
]
