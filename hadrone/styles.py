"""Inline CSS for the grid container, its items and their resize handles."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from hadrone.items import LayoutItem, ResizeHandle

GridRect = tuple[int, int, int, int]
VisualDelta = tuple[float, float, float, float]

_MIN_CONTAINER_HEIGHT = 500.0

_VISIBLE_HANDLES = (ResizeHandle.SOUTH_EAST, ResizeHandle.SOUTH, ResizeHandle.EAST)

_HANDLE_STYLES = {
    ResizeHandle.SOUTH_EAST: (
        "bottom: -8px; right: -8px; cursor: nwse-resize; width: 40px; height: 40px; "
        "display: flex; align-items: flex-end; justify-content: flex-end; padding: 12px;"
    ),
    ResizeHandle.SOUTH: (
        "bottom: -8px; left: 10px; right: 30px; height: 16px; cursor: ns-resize; "
        "display: flex; justify-content: center; align-items: center;"
    ),
    ResizeHandle.EAST: (
        "top: 10px; bottom: 30px; right: -8px; width: 16px; cursor: ew-resize; "
        "display: flex; align-items: center; justify-content: center;"
    ),
}


def _f32(value: float) -> float:
    """Round a float to single precision."""
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _fmt(value: float | int) -> str:
    """Shortest decimal text of a number, single precision, never in exponent form."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    single = _f32(float(value))
    if math.isnan(single):
        return "NaN"
    if math.isinf(single):
        return "inf" if single > 0 else "-inf"
    text = repr(single)
    for precision in range(1, 10):
        candidate = f"{single:.{precision}g}"
        if _f32(float(candidate)) == single:
            text = candidate
            break
    return format(Decimal(text), "f")


@dataclass(frozen=True)
class GridConfig:
    """Grid metrics shared by the container and its items."""

    cols: int
    row_height: float
    margin: tuple[int, int]
    container_padding: tuple[int, int] = (0, 0)


def total_height(
    layout: Iterable[LayoutItem], row_height: float, margin: tuple[int, int]
) -> float:
    """Container height in pixels for ``layout``; never less than 500."""
    max_y = max((item.y + item.h for item in layout), default=0)
    row_pitch = _f32(_f32(row_height) + margin[1])
    return max(_f32(max_y * row_pitch), _MIN_CONTAINER_HEIGHT)


def container_style(layout: Iterable[LayoutItem], config: GridConfig) -> str:
    """Inline style of the grid container, including its CSS custom properties."""
    height = total_height(layout, config.row_height, config.margin)
    pad_x, pad_y = config.container_padding
    margin_x, margin_y = config.margin
    return (
        f"position: relative; width: 100%; height: {_fmt(height)}px; contain: layout; "
        f"touch-action: none; user-select: none; box-sizing: border-box; "
        f"padding-left: {pad_x}px; padding-top: {pad_y}px; "
        f"--grid-cols: {config.cols}; --row-height: {_fmt(config.row_height)}px; "
        f"--margin-x: {margin_x}px; --margin-y: {margin_y}px;"
    )


def _span_height(rows: int, row_height: float, margin_y: int) -> float:
    body = _f32(rows * row_height)
    gaps = _f32(_f32(rows - 1.0) * margin_y)
    return _f32(body + gaps)


def item_style(
    item: LayoutItem,
    config: GridConfig,
    is_active: bool = False,
    start_rect: GridRect | None = None,
    visual_delta: VisualDelta | None = None,
) -> str:
    """Inline style that positions ``item`` absolutely inside the container.

    While an interaction is under way (both ``start_rect`` and
    ``visual_delta`` given) the item follows the pointer from its start
    rectangle; otherwise it sits at its grid position.
    """
    col_pct = _f32(100.0 / _f32(float(config.cols)))
    row_height = _f32(config.row_height)
    row_pitch = _f32(row_height + config.margin[1])
    margin_x, margin_y = config.margin

    if visual_delta is not None and start_rect is not None:
        dx, dy, dw, dh = (_f32(v) for v in visual_delta)
        sx, sy, sw, sh = start_rect
        left = f"calc({_fmt(_f32(sx * col_pct))}% + {_fmt(dx)}px)"
        top = f"{_fmt(_f32(_f32(sy * row_pitch) + dy))}px"
        width = f"calc({_fmt(_f32(sw * col_pct))}% - {margin_x}px + {_fmt(dw)}px)"
        height = f"{_fmt(_f32(_span_height(sh, row_height, margin_y) + dh))}px"
    else:
        left = f"{_fmt(_f32(item.x * col_pct))}%"
        top = f"{_fmt(_f32(item.y * row_pitch))}px"
        width = f"calc({_fmt(_f32(item.w * col_pct))}% - {margin_x}px)"
        height = f"{_fmt(_span_height(item.h, row_height, margin_y))}px"

    if is_active:
        transform = "scale(1.025) translate3d(0, 0, 0)"
        z_index = 100
    else:
        transform = "scale(1.0) translate3d(0, 0, 0)"
        z_index = 0

    return (
        f"position: absolute; left: {left}; top: {top}; width: {width}; "
        f"height: {height}; z-index: {z_index}; pointer-events: auto; "
        f"transform: {transform}; transition: transform 0.15s ease-out; "
        f"touch-action: none; user-select: none;"
    )


def visible_resize_handles(item: LayoutItem) -> list[ResizeHandle]:
    """Handles to render for ``item``: its south-east, south and east ones, if resizable."""
    if not item.can_resize():
        return []
    return [handle for handle in _VISIBLE_HANDLES if handle in item.resize_handles]


def resize_handle_style(handle: ResizeHandle) -> str:
    """Placement style of a rendered handle; empty for handles that are not rendered."""
    return _HANDLE_STYLES.get(handle, "")