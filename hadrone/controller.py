"""Framework-neutral state machine for pointer and keyboard grid interactions."""

from __future__ import annotations

import copy
from typing import Callable, Iterable

from hadrone.collision import CollisionStrategy
from hadrone.engine import CompactionType
from hadrone.events import InteractionEvent, InteractionPhase, LayoutEvent
from hadrone.interaction import InteractionSession, InteractionType
from hadrone.items import LayoutItem, ResizeHandle
from hadrone.keyboard import apply_keyboard_cell_nudge, key_to_nudge, normalize_for_columns
from hadrone.styles import GridConfig, VisualDelta, item_style

Point = tuple[float, float]
EventHandler = Callable[[LayoutEvent], None]

DEFAULT_CONTAINER_WIDTH = 1200.0


def start_session(
    item: LayoutItem,
    interaction_type: InteractionType,
    handle: ResizeHandle,
    start_mouse: Point,
    container_width: float,
    config: GridConfig,
    compaction: CompactionType,
    collision: CollisionStrategy,
) -> InteractionSession | None:
    """A session for dragging or resizing ``item``, or None if that is not allowed."""
    allowed = item.can_drag() if interaction_type is InteractionType.DRAG else item.can_resize()
    if not allowed:
        return None
    return InteractionSession(
        id=item.id,
        interaction_type=interaction_type,
        start_mouse=start_mouse,
        start_rect=(item.x, item.y, item.w, item.h),
        handle=handle,
        col_width_px=container_width / config.cols,
        row_height_px=config.row_height,
        margin=config.margin,
        container_padding=config.container_padding,
        compaction=compaction,
        collision=collision,
    )


class GridController:
    """Holds a layout and drives drags, resizes, keyboard nudges and column changes.

    The layout is fitted to the grid and compacted on construction and
    whenever the column count changes outside an interaction.
    """

    def __init__(
        self,
        layout: Iterable[LayoutItem],
        config: GridConfig,
        compaction: CompactionType = CompactionType.GRAVITY,
        collision: CollisionStrategy = CollisionStrategy.PUSH_DOWN,
        on_layout_event: EventHandler | None = None,
        emit_interaction_updates: bool = False,
        keyboard_cell_nudge: bool = False,
        container_width: float = DEFAULT_CONTAINER_WIDTH,
    ) -> None:
        self.config = config
        self.compaction = compaction
        self.collision = collision
        self.on_layout_event = on_layout_event
        self.emit_interaction_updates = emit_interaction_updates
        self.keyboard_cell_nudge = keyboard_cell_nudge
        self.container_width = container_width
        self.active: InteractionSession | None = None
        self.visual_delta: VisualDelta | None = None
        self.layout: list[LayoutItem] = normalize_for_columns(
            list(layout), config.cols, compaction
        )

    def _emit(self, phase: InteractionPhase, session: InteractionSession) -> None:
        if self.on_layout_event is None:
            return
        self.on_layout_event(
            InteractionEvent(
                phase=phase,
                id=session.id,
                interaction=session.interaction_type,
                layout=copy.deepcopy(self.layout),
                compaction=self.compaction,
                collision=self.collision,
            )
        )

    def _find(self, item_id: str) -> LayoutItem | None:
        return next((it for it in self.layout if it.id == item_id), None)

    def _start(
        self,
        item_id: str,
        interaction_type: InteractionType,
        handle: ResizeHandle,
        mouse: Point,
    ) -> InteractionSession | None:
        item = self._find(item_id)
        if item is None:
            return None
        session = start_session(
            item,
            interaction_type,
            handle,
            mouse,
            self.container_width,
            self.config,
            self.compaction,
            self.collision,
        )
        if session is None:
            return None
        self.visual_delta = session.get_visual_delta(mouse)
        self.active = session
        self._emit(InteractionPhase.START, session)
        return session

    def start_drag(self, item_id: str, mouse: Point) -> InteractionSession | None:
        """Begin dragging an item; returns the session, or None if not allowed."""
        return self._start(item_id, InteractionType.DRAG, ResizeHandle.SOUTH_EAST, mouse)

    def start_resize(
        self, item_id: str, handle: ResizeHandle, mouse: Point
    ) -> InteractionSession | None:
        """Begin resizing an item by ``handle``; returns the session, or None."""
        return self._start(item_id, InteractionType.RESIZE, handle, mouse)

    def pointer_move(self, mouse: Point) -> bool:
        """Apply a pointer move to the active session; True if the layout changed."""
        session = self.active
        if session is None:
            return False
        self.visual_delta = session.get_visual_delta(mouse)
        new_layout = copy.deepcopy(self.layout)
        session.update(mouse, new_layout, self.config.cols)
        changed = new_layout != self.layout
        if changed:
            self.layout = new_layout
        if self.emit_interaction_updates:
            self._emit(InteractionPhase.UPDATE, session)
        return changed

    def _end(self, phase: InteractionPhase) -> InteractionSession | None:
        session = self.active
        if session is None:
            return None
        self._emit(phase, session)
        self.active = None
        self.visual_delta = None
        return session

    def pointer_up(self) -> InteractionSession | None:
        """Finish the active interaction; returns the session that ended, if any."""
        return self._end(InteractionPhase.STOP)

    def cancel(self) -> InteractionSession | None:
        """Abandon the active interaction (pointer left or was cancelled)."""
        return self._end(InteractionPhase.CANCEL)

    def key_down(self, item_id: str, key: str) -> bool:
        """Nudge an item one cell for an arrow key; True if the key was handled."""
        if not self.keyboard_cell_nudge or self.active is not None:
            return False
        nudge = key_to_nudge(key)
        if nudge is None:
            return False
        dx, dy = nudge
        self.layout = apply_keyboard_cell_nudge(
            self.layout, self.config.cols, self.compaction, item_id, dx, dy
        )
        return True

    def set_container_width(self, width: float) -> None:
        """Record the measured container width; non-positive widths are ignored."""
        if width > 0:
            self.container_width = width

    def set_cols(self, cols: int) -> None:
        """Change the column count and refit the layout unless interacting."""
        if cols < 1:
            raise ValueError(f"column count must be positive, got {cols}")
        self.config = GridConfig(
            cols=cols,
            row_height=self.config.row_height,
            margin=self.config.margin,
            container_padding=self.config.container_padding,
        )
        if self.active is None:
            self.layout = normalize_for_columns(self.layout, cols, self.compaction)

    def item_styles(self) -> dict[str, str]:
        """Inline style of every item, keyed by id."""
        styles: dict[str, str] = {}
        for item in self.layout:
            is_active = self.active is not None and self.active.id == item.id
            styles[item.id] = item_style(
                item,
                self.config,
                is_active,
                self.active.start_rect if is_active and self.active else None,
                self.visual_delta if is_active else None,
            )
        return styles