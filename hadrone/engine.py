"""Compaction strategies and the layout engine that drives moves and resizes."""

from __future__ import annotations

import dataclasses
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from hadrone.collision import CollisionResolver, CollisionStrategy
from hadrone.items import LayoutItem, ResizeHandle, collides


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class CompactionType(Enum):
    """Supported compaction strategies."""

    GRAVITY = "Gravity"
    FREE_PLACEMENT = "FreePlacement"


class Compactor(ABC):
    """Resolves overlaps and settles items into a stable layout."""

    @abstractmethod
    def compact(self, layout: list[LayoutItem], cols: int) -> None:
        """Compact ``layout`` in place."""


def _column_range(item: LayoutItem, cols: int) -> range:
    start = max(item.x, 0)
    end = min(item.x + item.w, cols)
    return range(start, max(start, end))


class RisingTideCompactor(Compactor):
    """Gravity compaction using a per-column waterline, O(N * cols)."""

    def compact(self, layout: list[LayoutItem], cols: int) -> None:
        layout.sort(key=lambda it: (it.y, it.x))
        waterline = [0] * max(cols, 0)

        for item in layout:
            columns = _column_range(item, cols)
            bottom_of = item.y + item.h
            if not item.is_static:
                item.y = max((waterline[c] for c in columns), default=0)
                bottom_of = item.y + item.h
                for c in columns:
                    waterline[c] = bottom_of
            else:
                for c in columns:
                    waterline[c] = max(waterline[c], bottom_of)


class FreePlacementCompactor(Compactor):
    """Keeps requested positions, bumping items down only to clear overlaps."""

    def compact(self, layout: list[LayoutItem], cols: int) -> None:
        layout.sort(key=lambda it: (it.y, it.x))
        processed: list[LayoutItem] = []
        for item in layout:
            while any(collides(item, other) for other in processed):
                item.y += 1
            processed.append(item)


@dataclass
class LayoutEngine:
    """Orchestrates moves, resizes, collision handling and compaction."""

    compactor: Compactor
    collision: CollisionResolver
    cols: int

    @classmethod
    def with_default_collision(cls, compactor: Compactor, cols: int) -> "LayoutEngine":
        """Engine with push-down collision resolution."""
        return cls(compactor, CollisionStrategy.PUSH_DOWN.build(), cols)

    def compact(self, layout: list[LayoutItem]) -> None:
        self.compactor.compact(layout, self.cols)

    def _index_of(self, layout: list[LayoutItem], item_id: str) -> int | None:
        return next((i for i, it in enumerate(layout) if it.id == item_id), None)

    def move_element(self, layout: list[LayoutItem], item_id: str, x: int, y: int) -> None:
        """Move an item to (x, y), then resolve collisions and compact."""
        index = self._index_of(layout, item_id)
        if index is None:
            return
        item = dataclasses.replace(layout[index])
        if not item.can_drag():
            return
        item.x = min(max(x, 0), self.cols - item.w)
        item.y = max(y, 0)
        layout[index] = item
        self.collision.resolve_collisions(layout, item_id)
        self.compact(layout)

    def resize_element(
        self,
        layout: list[LayoutItem],
        item_id: str,
        x: int,
        y: int,
        w: int,
        h: int,
        handle: ResizeHandle | None = None,
    ) -> None:
        """Resize an item within its limits, then resolve collisions and compact."""
        index = self._index_of(layout, item_id)
        if index is None:
            return
        item = dataclasses.replace(layout[index])
        if not item.can_resize():
            return

        final_w, final_h = w, h
        if item.min_w is not None:
            final_w = max(final_w, item.min_w)
        if item.max_w is not None:
            final_w = min(final_w, item.max_w)
        if item.min_h is not None:
            final_h = max(final_h, item.min_h)
        if item.max_h is not None:
            final_h = min(final_h, item.max_h)

        item.x = min(max(x, 0), self.cols - final_w)
        item.y = max(y, 0)
        item.w = max(final_w, 1)
        item.h = max(final_h, 1)

        apply_aspect_and_clamp(item, self.cols, handle)

        layout[index] = item
        self.collision.resolve_collisions(layout, item_id)
        self.compact(layout)


_HEIGHT_LED_HANDLES = {
    ResizeHandle.NORTH,
    ResizeHandle.SOUTH,
    ResizeHandle.NORTH_WEST,
    ResizeHandle.SOUTH_WEST,
}


def _clamp_limits(item: LayoutItem, w: int, h: int) -> tuple[int, int]:
    if item.min_h is not None:
        h = max(h, item.min_h)
    if item.max_h is not None:
        h = min(h, item.max_h)
    if item.min_w is not None:
        w = max(w, item.min_w)
    if item.max_w is not None:
        w = min(w, item.max_w)
    return w, h


def apply_aspect_and_clamp(
    item: LayoutItem, cols: int, handle: ResizeHandle | None = None
) -> LayoutItem:
    """Apply the item's aspect ratio and min/max, then clamp it into ``cols``.

    The item is changed in place and returned.
    """
    w = max(item.w, 1)
    h = max(item.h, 1)

    ratio = item.aspect_ratio
    if ratio is not None and math.isfinite(ratio) and ratio > 0.0:
        prefer_width = handle is None or handle not in _HEIGHT_LED_HANDLES
        for _ in range(6):
            if prefer_width:
                h = _round_half_away(w / ratio)
            else:
                w = _round_half_away(h * ratio)
            w, h = _clamp_limits(item, max(w, 1), max(h, 1))
            if prefer_width:
                w = _round_half_away(h * ratio)
            else:
                h = _round_half_away(w / ratio)
            w = max(w, 1)
            h = max(h, 1)

    item.w = max(min(w, cols), 1)
    item.h = max(h, 1)
    item.x = min(max(item.x, 0), max(cols - item.w, 0))
    item.y = max(item.y, 0)
    return item


def compactor_for(compaction: CompactionType) -> Compactor:
    """The compactor implementing a compaction type."""
    if compaction is CompactionType.GRAVITY:
        return RisingTideCompactor()
    return FreePlacementCompactor()


def layout_engine(
    compaction: CompactionType, collision: CollisionStrategy, cols: int
) -> LayoutEngine:
    """Build an engine from a compaction type and a collision strategy."""
    return LayoutEngine(compactor_for(compaction), collision.build(), cols)