"""The editor session: one document, its history, tools and view.

``EditorSession`` is the single owner of editing state. Hosts feed it
input events through :meth:`EditorSession.dispatch` and call the command
methods (save, export, undo...) directly. Mutations of the document go
through :meth:`add_entity`, :meth:`update_entity` and
:meth:`delete_entities`, which record history and mark the session dirty.

Interaction never raises: events that do not apply in the current state are
ignored and ``dispatch`` returns False. Persistence and export failures are
logged and reported through :class:`OperationResult`.
"""

from __future__ import annotations

import copy
import logging
import uuid
from dataclasses import fields, replace
from typing import Any

from floorplan.application.events import (
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
from floorplan.application.history import MAX_HISTORY, HistoryManager
from floorplan.application.serialization.loader import LayoutFormatError
from floorplan.application.shortcuts import PAN_KEY, EditorAction, resolve_key
from floorplan.application.tools import ToolState
from floorplan.contracts.dtos import ExportOptions, OperationResult
from floorplan.contracts.protocols import (
    ExportServiceProtocol,
    LayoutRepositoryProtocol,
)
from floorplan.domain.entities import (
    DEFAULT_WALL_THICKNESS,
    Door,
    Entity,
    FloorObject,
    Layout,
    LayoutSettings,
    PresetObject,
    PresetsFile,
    TextLabel,
    Wall,
    Window,
    create_empty_layout,
    entity_type_of,
    slugify,
    utc_timestamp,
)
from floorplan.domain.exceptions import (
    DuplicateEntityError,
    ExportError,
    LayoutNotFoundError,
    StorageError,
)
from floorplan.domain.services.attachment import ATTACH_THRESHOLD, find_nearest_wall
from floorplan.domain.services.snapping import SNAP_THRESHOLD, SnappingService
from floorplan.domain.services.transform import (
    Viewport,
    to_document,
    wheel_zoom,
    zoom_at,
)
from floorplan.domain.units import format_dimension
from floorplan.domain.value_objects import Point, ToolMode

logger = logging.getLogger(__name__)

MIN_OBJECT_SIZE = 5.0  # inches
DEFAULT_OPENING_WIDTH = 36.0
DEFAULT_WINDOW_SILL = 36.0

_IMMUTABLE_FIELDS = frozenset({"id", "type", "entity_type"})

# Failures a collaborator is expected to report; anything else is logged
# with a traceback.
_EXPECTED_FAILURES = (
    LayoutNotFoundError,
    LayoutFormatError,
    StorageError,
    ExportError,
    OSError,
)


class EditorSession:
    """Editing state for one document.

    Attributes:
        layout: The open document, or None when idle.
        history: Undo/redo snapshots of the entity list.
        tools: Transient interaction state.
        viewport: Pan offset and zoom.
        snapping: Snapping engine used for pointer input.
        is_dirty: True when the document has unsaved changes.
        repository: Optional layout storage.
        export_service: Optional renderer.
        presets: Preset library, once loaded.
    """

    def __init__(
        self,
        layout: Layout | None = None,
        repository: LayoutRepositoryProtocol | None = None,
        export_service: ExportServiceProtocol | None = None,
        max_history: int = MAX_HISTORY,
        snap_threshold: float = SNAP_THRESHOLD,
    ) -> None:
        self.layout: Layout | None = None
        self.history = HistoryManager(max_history)
        self.tools = ToolState()
        self.viewport = Viewport()
        self.snapping = SnappingService(snap_threshold)
        self.is_dirty = False
        self.repository = repository
        self.export_service = export_service
        self.presets: PresetsFile | None = None
        if layout is not None:
            self.open_layout(layout)

    # -- queries ----------------------------------------------------------

    @property
    def selected_ids(self) -> list[str]:
        return list(self.tools.selected_ids)

    @property
    def can_undo(self) -> bool:
        return self.layout is not None and self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.layout is not None and self.history.can_redo

    def get_entity(self, entity_id: str) -> Entity | None:
        if self.layout is None:
            return None
        return self.layout.find_entity(entity_id)

    def selected_entities(self) -> list[Entity]:
        """Selected entities in selection order, skipping stale ids."""
        if self.layout is None:
            return []
        found = (self.layout.find_entity(i) for i in self.tools.selected_ids)
        return [entity for entity in found if entity is not None]

    @property
    def measure_label(self) -> str | None:
        """Current measurement formatted in the document's units."""
        length = self.tools.measure_length
        if length is None or self.layout is None:
            return None
        return format_dimension(length, self.layout.settings.units)

    # -- document lifecycle -----------------------------------------------

    def open_layout(self, layout: Layout) -> None:
        """Make ``layout`` the current document with fresh history."""
        self._install(layout, dirty=False)

    def new_layout(self, name: str) -> Layout:
        """Start an unsaved, empty document."""
        layout = create_empty_layout(name)
        self._install(layout, dirty=True)
        logger.info(f"Created new layout '{layout.slug}'")
        return layout

    def close_layout(self) -> None:
        self.layout = None
        self.history.clear()
        self.tools.set_mode(self.tools.mode)
        self.is_dirty = False

    def _install(self, layout: Layout, dirty: bool) -> None:
        self.layout = layout
        self.history.reset(layout.entities)
        self.tools.set_mode(self.tools.mode)
        self.is_dirty = dirty

    def load_layout(self, slug: str) -> OperationResult:
        """Replace the current document with the stored one.

        A failed load leaves the current document untouched.
        """
        if self.repository is None:
            return OperationResult.failed("No layout repository configured")
        try:
            layout = self.repository.get_layout(slug)
        except _EXPECTED_FAILURES as e:
            logger.warning(f"Failed to load layout '{slug}': {e}")
            return OperationResult.failed(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error loading layout '{slug}'")
            return OperationResult.failed(f"Failed to load layout: {e}")

        self.open_layout(layout)
        logger.info(f"Loaded layout '{slug}' ({len(layout.entities)} entities)")
        return OperationResult.ok(f"Loaded {layout.name}")

    def save_layout(self, create_backup: bool = False) -> OperationResult:
        """Store the current document under its slug.

        The repository receives a deep copy. The dirty flag is cleared only
        when the save succeeds.
        """
        if self.layout is None:
            return OperationResult.failed("No layout loaded")
        if self.repository is None:
            return OperationResult.failed("No layout repository configured")

        snapshot = copy.deepcopy(self.layout)
        result = self._store(snapshot, create_backup)
        if result.success:
            self.layout.updated_at = snapshot.updated_at
            self.is_dirty = False
        return result

    def save_layout_as(self, name: str) -> OperationResult:
        """Store a copy of the document under a new name and switch to it.

        The copy gets a fresh id, a slug derived from ``name`` and new
        timestamps. History is kept.
        """
        if self.layout is None:
            return OperationResult.failed("No layout loaded")
        if self.repository is None:
            return OperationResult.failed("No layout repository configured")
        name = name.strip()
        slug = slugify(name)
        if not slug:
            return OperationResult.failed(f"Cannot derive a slug from name: {name!r}")

        now = utc_timestamp()
        renamed = replace(
            copy.deepcopy(self.layout),
            id=str(uuid.uuid4()),
            name=name,
            slug=slug,
            created_at=now,
            updated_at=now,
        )
        result = self._store(copy.deepcopy(renamed), create_backup=False)
        if result.success:
            self.layout = renamed
            self.is_dirty = False
        return result

    def _store(self, layout: Layout, create_backup: bool) -> OperationResult:
        assert self.repository is not None
        try:
            self.repository.save_layout(layout.slug, layout, create_backup=create_backup)
        except _EXPECTED_FAILURES as e:
            logger.warning(f"Failed to save layout '{layout.slug}': {e}")
            return OperationResult.failed(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error saving layout '{layout.slug}'")
            return OperationResult.failed(f"Failed to save layout: {e}")

        logger.info(f"Saved layout '{layout.slug}'")
        return OperationResult.ok(f"Saved {layout.name}")

    def export(self, options: ExportOptions | None = None) -> OperationResult:
        """Render the current document through the export service."""
        if self.layout is None:
            return OperationResult.failed("No layout loaded")
        if self.export_service is None:
            return OperationResult.failed("No export service configured")

        options = options or ExportOptions()
        try:
            files = self.export_service.export_layout(copy.deepcopy(self.layout), options)
        except _EXPECTED_FAILURES as e:
            logger.warning(f"Export of '{self.layout.slug}' failed: {e}")
            return OperationResult.failed(str(e))
        except Exception as e:
            logger.exception(f"Unexpected error exporting '{self.layout.slug}'")
            return OperationResult.failed(f"Export failed: {e}")

        logger.info(f"Exported '{self.layout.slug}': {', '.join(files)}")
        return OperationResult.ok(f"Exported {len(files)} file(s)", files=files)

    def load_presets(self) -> OperationResult:
        if self.repository is None:
            return OperationResult.failed("No layout repository configured")
        try:
            self.presets = self.repository.get_presets()
        except _EXPECTED_FAILURES as e:
            logger.warning(f"Failed to load presets: {e}")
            return OperationResult.failed(str(e))
        return OperationResult.ok(f"Loaded {len(self.presets.all_presets())} presets")

    # -- document mutations -----------------------------------------------

    def add_entity(self, entity: Entity) -> bool:
        """Append ``entity`` to the document as one undoable step.

        Returns:
            False when no document is open.

        Raises:
            DuplicateEntityError: An entity with the same id already exists.
            TypeError: ``entity`` is not an entity variant.
        """
        if self.layout is None:
            return False
        entity_type_of(entity)
        if self.layout.has_entity(entity.id):
            raise DuplicateEntityError(entity.id)

        self.history.push(self.layout.entities)
        self.layout.entities = [*self.layout.entities, entity]
        self.is_dirty = True
        return True

    def update_entity(self, entity_id: str, **changes: Any) -> bool:
        """Shallow-merge ``changes`` into one entity as an undoable step.

        Nested values such as ``points`` are replaced, not merged. The
        entity keeps its position in the layering order.

        Returns:
            False when no document is open or the id is unknown.

        Raises:
            ValueError: A field is unknown for the variant or immutable, or
                the merged entity is invalid.
        """
        if self.layout is None:
            return False
        entity = self.layout.find_entity(entity_id)
        if entity is None:
            return False

        immutable = _IMMUTABLE_FIELDS.intersection(changes)
        if immutable:
            raise ValueError(f"Cannot change immutable field(s): {', '.join(sorted(immutable))}")
        unknown = set(changes) - entity.field_names()
        if unknown:
            raise ValueError(
                f"Unknown field(s) for {entity.type.value}: {', '.join(sorted(unknown))}"
            )

        updated = replace(entity, **changes)
        self.history.push(self.layout.entities)
        self.layout.entities = [
            updated if e.id == entity_id else e for e in self.layout.entities
        ]
        self.is_dirty = True
        return True

    def delete_entities(self, entity_ids: list[str] | set[str]) -> int:
        """Remove every entity whose id is listed, as one undoable step.

        The step is recorded and the document marked dirty even when no id
        matches.

        Returns:
            Number of entities removed.
        """
        if self.layout is None:
            return 0
        doomed = set(entity_ids)
        kept = [e for e in self.layout.entities if e.id not in doomed]
        removed = len(self.layout.entities) - len(kept)

        self.history.push(self.layout.entities)
        self.layout.entities = kept
        self.tools.deselect(doomed)
        self.is_dirty = True
        return removed

    def delete_selected(self) -> int:
        if not self.tools.selected_ids:
            return 0
        return self.delete_entities(self.tools.selected_ids)

    def update_settings(self, **changes: Any) -> bool:
        """Shallow-merge document settings. Not recorded in history."""
        if self.layout is None:
            return False
        known = {f.name for f in fields(LayoutSettings)}
        unknown = set(changes) - known
        if unknown:
            raise ValueError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        self.layout.settings = replace(self.layout.settings, **changes)
        self.is_dirty = True
        return True

    # -- history ----------------------------------------------------------

    def undo(self) -> bool:
        if self.layout is None:
            return False
        restored = self.history.undo(self.layout.entities)
        if restored is None:
            return False
        self._apply_entities(restored)
        return True

    def redo(self) -> bool:
        if self.layout is None:
            return False
        restored = self.history.redo()
        if restored is None:
            return False
        self._apply_entities(restored)
        return True

    def _apply_entities(self, entities: list[Entity]) -> None:
        assert self.layout is not None
        self.layout.entities = entities
        live = {e.id for e in entities}
        self.tools.deselect([i for i in self.tools.selected_ids if i not in live])
        self.is_dirty = True

    # -- tools ------------------------------------------------------------

    def set_tool_mode(self, mode: ToolMode) -> None:
        self.tools.set_mode(mode)

    def arm_preset(self, preset: PresetObject) -> None:
        """Arm repeated placement of ``preset`` in object mode."""
        self.tools.arm_preset(preset)

    def cancel_placing_object(self) -> None:
        self.tools.cancel_placing_object()

    def finish_wall_drawing(self) -> Wall | None:
        """Turn the collected points into a wall.

        The buffer is always cleared. Fewer than two points create nothing.
        """
        points = self.tools.take_wall_points()
        if self.layout is None or len(points) < 2:
            return None
        wall = Wall(points=points, thickness=DEFAULT_WALL_THICKNESS)
        self.add_entity(wall)
        return wall

    def cancel_wall_drawing(self) -> None:
        self.tools.cancel_wall_drawing()

    def select_entity(self, entity_id: str, add_to_selection: bool = False) -> None:
        self.tools.select(entity_id, add_to_selection)

    def select_entities(self, entity_ids: list[str]) -> None:
        self.tools.select_many(entity_ids)

    def clear_selection(self) -> None:
        self.tools.clear_selection()

    # -- view -------------------------------------------------------------

    @property
    def display_scale(self) -> float:
        if self.layout is None:
            return LayoutSettings().scale
        return self.layout.settings.scale

    def to_document(self, x: float, y: float) -> Point:
        """Map a device position into document inches."""
        return to_document(Point(x, y), self.viewport.pan, self.viewport.zoom, self.display_scale)

    def snap_device_point(self, x: float, y: float) -> Point:
        """Map a device position into document inches and snap it."""
        return self.snapping.snap(self.to_document(x, y), self.layout)

    def zoom_to(self, zoom: float, pointer: Point | None = None) -> None:
        """Set the zoom, keeping ``pointer`` (default: the origin) fixed."""
        self.viewport = zoom_at(self.viewport, pointer or Point(0.0, 0.0), zoom)

    def reset_view(self) -> None:
        self.viewport = Viewport()

    # -- input ------------------------------------------------------------

    def dispatch(self, event: InputEvent) -> bool:
        """Apply one input event.

        Returns:
            True when the event changed state or triggered a command.
        """
        match event:
            case PointerDown():
                return self._on_pointer_down(event)
            case PointerMove() | PointerUp():
                return self._on_pointer_move(event)
            case Click():
                return self._on_click(event)
            case KeyDown():
                return self._on_key_down(event)
            case KeyUp():
                return self._on_key_up(event)
            case Wheel():
                return self._on_wheel(event)
            case PanDrag():
                return self._on_pan_drag(event)
            case EntityDrag():
                return self._on_entity_drag(event)
            case EntityTransform():
                return self._on_entity_transform(event)
        logger.debug(f"Ignoring unknown event {type(event).__name__}")
        return False

    def _is_background(self, target_id: str | None) -> bool:
        """Whether a pointer target should drive the active tool.

        Walls act as background outside select mode so walls can be chained
        and openings placed on them.
        """
        if target_id is None:
            return True
        target = self.get_entity(target_id)
        if target is None:
            return True
        return self.tools.mode != ToolMode.SELECT and isinstance(target, Wall)

    def _on_pointer_down(self, event: PointerDown) -> bool:
        if self.layout is None or self.tools.is_panning:
            return False
        if not self._is_background(event.target_id):
            return False

        mode = self.tools.mode
        if mode == ToolMode.WALL:
            point = self.snap_device_point(event.x, event.y)
            if self.tools.is_drawing_wall:
                self.tools.add_wall_point(point)
            else:
                self.tools.start_wall_drawing(point)
            return True
        if mode == ToolMode.MEASURE:
            self.tools.start_measure(self.snap_device_point(event.x, event.y))
            return True
        if mode == ToolMode.SELECT:
            self.tools.clear_selection()
            return True
        return False

    def _on_pointer_move(self, event: PointerMove | PointerUp) -> bool:
        if self.layout is None or self.tools.mode != ToolMode.MEASURE:
            return False
        if self.tools.measure_start is None:
            return False
        self.tools.update_measure(self.snap_device_point(event.x, event.y))
        return True

    def _on_click(self, event: Click) -> bool:
        if self.layout is None or self.tools.is_panning:
            return False

        if not self._is_background(event.target_id):
            assert event.target_id is not None
            add = event.modifier if self.tools.mode == ToolMode.SELECT else True
            self.tools.select(event.target_id, add_to_selection=add)
            return True

        match self.tools.mode:
            case ToolMode.OBJECT:
                return self._place_object(event)
            case ToolMode.TEXT:
                point = self.snap_device_point(event.x, event.y)
                return self.add_entity(TextLabel(x=point.x, y=point.y))
            case ToolMode.DOOR | ToolMode.WINDOW:
                return self._place_opening(event)
            case ToolMode.SELECT:
                self.tools.clear_selection()
                return True
        return False

    def _place_object(self, event: Click) -> bool:
        preset = self.tools.placing_object
        if preset is None:
            return False
        point = self.snap_device_point(event.x, event.y)
        return self.add_entity(
            FloorObject(
                x=point.x - preset.width / 2,
                y=point.y - preset.height / 2,
                object_type=preset.object_type,
                width=preset.width,
                height=preset.height,
                depth=preset.depth,
                label=preset.name,
            )
        )

    def _place_opening(self, event: Click) -> bool:
        assert self.layout is not None
        raw = self.to_document(event.x, event.y)
        attachment = find_nearest_wall(raw, self.layout, ATTACH_THRESHOLD)
        if attachment is None:
            return False

        placement = {
            "x": attachment.point.x,
            "y": attachment.point.y,
            "rotation": attachment.angle,
            "wall_id": attachment.wall_id,
            "wall_position": min(1.0, max(0.0, attachment.wall_position)),
            "width": DEFAULT_OPENING_WIDTH,
        }
        opening: Door | Window
        if self.tools.mode == ToolMode.DOOR:
            opening = Door(**placement)
        else:
            opening = Window(**placement, sill_height=DEFAULT_WINDOW_SILL)
        return self.add_entity(opening)

    def _on_key_down(self, event: KeyDown) -> bool:
        action = resolve_key(event, self.tools.is_drawing_wall)
        if action is None:
            return False
        if isinstance(action, ToolMode):
            self.set_tool_mode(action)
            return True

        match action:
            case EditorAction.START_PAN:
                self.tools.is_panning = True
                return True
            case EditorAction.CANCEL:
                self.set_tool_mode(ToolMode.SELECT)
                return True
            case EditorAction.FINISH_WALL:
                self.finish_wall_drawing()
                return True
            case EditorAction.DELETE_SELECTION:
                return self.delete_selected() > 0
            case EditorAction.UNDO:
                return self.undo()
            case EditorAction.REDO:
                return self.redo()
            case EditorAction.SAVE:
                if self.layout is None or self.repository is None:
                    return False
                return self.save_layout().success
            case EditorAction.TOGGLE_GRID:
                self.tools.show_grid = not self.tools.show_grid
                return True
        return False

    def _on_key_up(self, event: KeyUp) -> bool:
        if event.key != PAN_KEY or not self.tools.is_panning:
            return False
        self.tools.is_panning = False
        return True

    def _on_wheel(self, event: Wheel) -> bool:
        zoomed = wheel_zoom(self.viewport, Point(event.x, event.y), event.delta_y)
        if zoomed == self.viewport:
            return False
        self.viewport = zoomed
        return True

    def _on_pan_drag(self, event: PanDrag) -> bool:
        if not self.tools.is_panning:
            return False
        self.viewport = self.viewport.with_pan(Point(event.x, event.y))
        return True

    def _on_entity_drag(self, event: EntityDrag) -> bool:
        if self.tools.mode != ToolMode.SELECT:
            return False
        entity = self.get_entity(event.entity_id)
        if not isinstance(entity, (FloorObject, TextLabel)):
            return False
        point = self.snap_device_point(event.x, event.y)
        return self.update_entity(entity.id, x=point.x, y=point.y)

    def _on_entity_transform(self, event: EntityTransform) -> bool:
        if self.tools.mode != ToolMode.SELECT:
            return False
        entity = self.get_entity(event.entity_id)
        if not isinstance(entity, FloorObject):
            return False
        point = self.to_document(event.x, event.y)
        return self.update_entity(
            entity.id,
            x=point.x,
            y=point.y,
            width=max(MIN_OBJECT_SIZE, entity.width * event.scale_x),
            height=max(MIN_OBJECT_SIZE, entity.height * event.scale_y),
            rotation=event.rotation,
        )
