"""Drag and resize sessions: pointer tracking and grid snapping."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from hadrone.collision import CollisionStrategy
from hadrone.engine import CompactionType, layout_engine
from hadrone.items import LayoutItem, ResizeHandle

Point = tuple[float, float]
Rect = tuple[float, float, float, float]


class InteractionType(Enum):
    """The kind of user interaction in progress."""

    DRAG = "Drag"
    RESIZE = "Resize"


# How the pointer delta feeds each of (x, y, w, h): x and w follow dx, y and h follow dy.
_DRAG_FACTORS = (1, 1, 0, 0)
_RESIZE_FACTORS = {
    ResizeHandle.EAST: (0, 0, 1, 0),
    ResizeHandle.WEST: (1, 0, -1, 0),
    ResizeHandle.SOUTH: (0, 0, 0, 1),
    ResizeHandle.NORTH: (0, 1, 0, -1),
    ResizeHandle.SOUTH_EAST: (0, 0, 1, 1),
    ResizeHandle.SOUTH_WEST: (1, 0, -1, 1),
    ResizeHandle.NORTH_EAST: (0, 1, 1, -1),
    ResizeHandle.NORTH_WEST: (1, 1, -1, -1),
}


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass
class InteractionSession:
    """State of an active drag or resize: start position and grid metrics."""

    id: str
    interaction_type: InteractionType
    start_mouse: Point
    start_rect: tuple[int, int, int, int]
    handle: ResizeHandle
    col_width_px: float
    row_height_px: float
    margin: tuple[int, int]
    container_padding: tuple[int, int] = (0, 0)
    compaction: CompactionType = CompactionType.GRAVITY
    collision: CollisionStrategy = CollisionStrategy.PUSH_DOWN

    def _factors(self) -> tuple[int, int, int, int]:
        if self.interaction_type is InteractionType.DRAG:
            return _DRAG_FACTORS
        return _RESIZE_FACTORS[self.handle]

    def get_smooth_offset(self, current_mouse: Point) -> Point:
        """Raw pixel displacement since the interaction started."""
        return (
            current_mouse[0] - self.start_mouse[0],
            current_mouse[1] - self.start_mouse[1],
        )

    def update(self, current_mouse: Point, layout: list[LayoutItem], cols: int) -> None:
        """Snap the pointer delta to the grid and apply it to ``layout`` in place."""
        dx, dy = self.get_smooth_offset(current_mouse)
        grid_dx = _round_half_away(dx / self.col_width_px)
        grid_dy = _round_half_away(dy / (self.row_height_px + self.margin[1]))

        engine = layout_engine(self.compaction, self.collision, cols)
        sx, sy, sw, sh = self.start_rect

        if self.interaction_type is InteractionType.DRAG:
            engine.move_element(layout, self.id, sx + grid_dx, sy + grid_dy)
            return

        fx, fy, fw, fh = self._factors()
        engine.resize_element(
            layout,
            self.id,
            sx + fx * grid_dx,
            sy + fy * grid_dy,
            sw + fw * grid_dx,
            sh + fh * grid_dy,
            self.handle,
        )

    def get_visual_rect(self, current_mouse: Point) -> Rect:
        """Continuous pixel rectangle (x, y, w, h) of the active element."""
        dx, dy = self.get_smooth_offset(current_mouse)
        pad_x, pad_y = self.container_padding
        margin_x, margin_y = self.margin
        sx, sy, sw, sh = self.start_rect

        x = sx * self.col_width_px + pad_x
        y = sy * (self.row_height_px + margin_y) + pad_y
        w = sw * self.col_width_px - margin_x
        h = sh * self.row_height_px + (sh - 1.0) * margin_y

        fx, fy, fw, fh = self._factors()
        return (x + fx * dx, y + fy * dy, w + fw * dx, h + fh * dy)

    def get_visual_delta(self, current_mouse: Point) -> Rect:
        """Pointer displacement split into (dx, dy, dw, dh) for rendering."""
        dx, dy = self.get_smooth_offset(current_mouse)
        fx, fy, fw, fh = self._factors()
        return (float(fx * dx), float(fy * dy), float(fw * dx), float(fh * dy))