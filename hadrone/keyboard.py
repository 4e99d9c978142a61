"""Keyboard nudging and column-change normalization of layouts."""

from __future__ import annotations

import copy
from typing import Sequence

from hadrone.engine import CompactionType, LayoutEngine, compactor_for
from hadrone.items import LayoutItem

_ARROW_NUDGES = {
    "ArrowLeft": (-1, 0),
    "ArrowRight": (1, 0),
    "ArrowUp": (0, -1),
    "ArrowDown": (0, 1),
}


def key_to_nudge(key: str) -> tuple[int, int] | None:
    """The one-cell (dx, dy) for an arrow key name, or None for other keys."""
    return _ARROW_NUDGES.get(key)


def apply_keyboard_cell_nudge(
    layout: Sequence[LayoutItem],
    cols: int,
    compaction: CompactionType,
    item_id: str,
    dx: int,
    dy: int,
) -> list[LayoutItem]:
    """A new layout with ``item_id`` moved by (dx, dy) cells, then compacted.

    The input is left untouched. Missing or non-draggable items leave the
    layout as it was.
    """
    result = copy.deepcopy(list(layout))
    target = next((it for it in result if it.id == item_id), None)
    if target is None or not target.can_drag():
        return result
    engine = LayoutEngine.with_default_collision(compactor_for(compaction), cols)
    engine.move_element(result, item_id, target.x + dx, target.y + dy)
    return result


def normalize_for_columns(
    layout: Sequence[LayoutItem], cols: int, compaction: CompactionType
) -> list[LayoutItem]:
    """A new layout fitted to ``cols`` columns and compacted.

    Non-static items are narrowed to at most ``cols`` and pulled back inside
    the grid; static items keep their geometry.
    """
    result = copy.deepcopy(list(layout))
    for item in result:
        if not item.is_static:
            item.w = min(item.w, cols)
            item.x = min(max(item.x, 0), cols - item.w)
    LayoutEngine.with_default_collision(compactor_for(compaction), cols).compact(result)
    return result