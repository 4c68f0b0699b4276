"""Transient tool state for an editing session.

``ToolState`` holds everything about the interaction that is not part of
the document: the active tool mode, the in-progress wall polyline, the
measurement overlay, the armed object preset, the selection and a few view
toggles. Its methods are plain state transitions; none of them raise and
none of them touch the document.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from floorplan.domain.entities import PresetObject
from floorplan.domain.geometry import distance
from floorplan.domain.value_objects import Point, ToolMode


@dataclass
class ToolState:
    """Interaction state owned by one editor session.

    Attributes:
        mode: Active tool mode; exactly one at a time.
        is_drawing_wall: True while a wall polyline is being collected.
        wall_points: Snapped points collected for the wall in progress.
        measure_start: Start of the measurement overlay, if any.
        measure_end: End of the measurement overlay, if any.
        placing_object: Preset armed for repeated placement, if any.
        selected_ids: Selected entity ids in insertion order.
        show_grid: Display-only grid toggle.
        is_panning: True while the pan key is held.
    """

    mode: ToolMode = ToolMode.SELECT
    is_drawing_wall: bool = False
    wall_points: list[Point] = field(default_factory=list)
    measure_start: Point | None = None
    measure_end: Point | None = None
    placing_object: PresetObject | None = None
    selected_ids: list[str] = field(default_factory=list)
    show_grid: bool = True
    is_panning: bool = False

    # -- mode -------------------------------------------------------------

    def set_mode(self, mode: ToolMode) -> None:
        """Switch tool mode, discarding all transient state of the old mode."""
        self.cancel_wall_drawing()
        self.clear_measure()
        self.cancel_placing_object()
        self.mode = ToolMode(mode)
        self.selected_ids = []

    # -- wall drawing -----------------------------------------------------

    def start_wall_drawing(self, point: Point) -> None:
        self.wall_points = [point]
        self.is_drawing_wall = True

    def add_wall_point(self, point: Point) -> None:
        self.wall_points = [*self.wall_points, point]

    def take_wall_points(self) -> list[Point]:
        """Return the collected points and reset the wall buffer."""
        points = self.wall_points
        self.cancel_wall_drawing()
        return points

    def cancel_wall_drawing(self) -> None:
        self.wall_points = []
        self.is_drawing_wall = False

    # -- measurement ------------------------------------------------------

    def start_measure(self, point: Point) -> None:
        self.measure_start = point
        self.measure_end = point

    def update_measure(self, point: Point) -> None:
        if self.measure_start is not None:
            self.measure_end = point

    def clear_measure(self) -> None:
        self.measure_start = None
        self.measure_end = None

    @property
    def measure_length(self) -> float | None:
        """Length of the measurement in inches, or None without one."""
        if self.measure_start is None or self.measure_end is None:
            return None
        return distance(self.measure_start, self.measure_end)

    # -- object placement -------------------------------------------------

    def arm_preset(self, preset: PresetObject) -> None:
        """Arm placement and force object mode without disarming."""
        self.set_mode(ToolMode.OBJECT)
        self.placing_object = preset

    def cancel_placing_object(self) -> None:
        self.placing_object = None

    # -- selection --------------------------------------------------------

    def select(self, entity_id: str, add_to_selection: bool = False) -> None:
        """Replace the selection, or toggle ``entity_id`` when adding."""
        if not add_to_selection:
            self.selected_ids = [entity_id]
        elif entity_id in self.selected_ids:
            self.selected_ids = [i for i in self.selected_ids if i != entity_id]
        else:
            self.selected_ids = [*self.selected_ids, entity_id]

    def select_many(self, entity_ids: list[str]) -> None:
        self.selected_ids = list(dict.fromkeys(entity_ids))

    def deselect(self, entity_ids: list[str] | set[str]) -> None:
        removed = set(entity_ids)
        self.selected_ids = [i for i in self.selected_ids if i not in removed]

    def clear_selection(self) -> None:
        self.selected_ids = []

    def is_selected(self, entity_id: str) -> bool:
        return entity_id in self.selected_ids
