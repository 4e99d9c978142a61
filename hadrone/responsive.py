"""Breakpoint selection and proportional scaling across column counts."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from hadrone.items import LayoutItem


@dataclass
class BreakpointSpec:
    """One responsive breakpoint: applies from ``min_width_px`` upward."""

    name: str
    min_width_px: int
    cols: int


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def select_breakpoint(
    breakpoints: Iterable[BreakpointSpec], container_width_px: int
) -> BreakpointSpec | None:
    """The applicable breakpoint with the largest minimum width, if any.

    On equal minimum widths the later breakpoint wins.
    """
    best: BreakpointSpec | None = None
    for bp in breakpoints:
        if container_width_px >= bp.min_width_px and (
            best is None or bp.min_width_px >= best.min_width_px
        ):
            best = bp
    return best


def _copy_item(item: LayoutItem) -> LayoutItem:
    return dataclasses.replace(item, resize_handles=set(item.resize_handles))


def scale_layout_cols(
    items: Sequence[LayoutItem], from_cols: int, to_cols: int
) -> list[LayoutItem]:
    """Copies of ``items`` with ``x`` and ``w`` scaled to a new column count.

    ``y`` and ``h`` are left unchanged; compact afterwards if needed.
    """
    if from_cols < 1 or to_cols < 1 or from_cols == to_cols:
        return [_copy_item(it) for it in items]
    ratio = to_cols / from_cols
    scaled = []
    for it in items:
        new = _copy_item(it)
        new.w = max(_round_half_away(it.w * ratio), 1)
        new.x = min(max(_round_half_away(it.x * ratio), 0), max(to_cols - new.w, 0))
        scaled.append(new)
    return scaled