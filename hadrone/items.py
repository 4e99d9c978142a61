"""Grid items, resize handles and overlap detection."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Mapping


class ResizeHandle(Enum):
    """A handle on an item's edge or corner used for resizing."""

    NORTH = "North"
    SOUTH = "South"
    EAST = "East"
    WEST = "West"
    NORTH_EAST = "NorthEast"
    NORTH_WEST = "NorthWest"
    SOUTH_EAST = "SouthEast"
    SOUTH_WEST = "SouthWest"


_ARIA_LABELS = {
    ResizeHandle.NORTH: "Resize top edge",
    ResizeHandle.SOUTH: "Resize bottom edge",
    ResizeHandle.EAST: "Resize right edge",
    ResizeHandle.WEST: "Resize left edge",
    ResizeHandle.NORTH_EAST: "Resize top-right corner",
    ResizeHandle.NORTH_WEST: "Resize top-left corner",
    ResizeHandle.SOUTH_EAST: "Resize bottom-right corner",
    ResizeHandle.SOUTH_WEST: "Resize bottom-left corner",
}


def resize_handle_aria_label(handle: ResizeHandle) -> str:
    """Human-readable label for assistive technology."""
    return _ARIA_LABELS[handle]


def _default_handles() -> set[ResizeHandle]:
    return {ResizeHandle.SOUTH_EAST}


@dataclass
class LayoutItem:
    """A single item within the grid layout, in grid units."""

    id: str = ""
    x: int = 0
    y: int = 0
    w: int = 1
    h: int = 1
    min_w: int | None = None
    max_w: int | None = None
    min_h: int | None = None
    max_h: int | None = None
    aspect_ratio: float | None = None
    is_static: bool = False
    is_draggable: bool = True
    is_resizable: bool = True
    resize_handles: set[ResizeHandle] = field(default_factory=_default_handles)

    def can_drag(self) -> bool:
        """Whether user-driven dragging is allowed."""
        return not self.is_static and self.is_draggable

    def can_resize(self) -> bool:
        """Whether user-driven resizing is allowed."""
        return not self.is_static and self.is_resizable

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-friendly representation."""
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "w": self.w,
            "h": self.h,
            "min_w": self.min_w,
            "max_w": self.max_w,
            "min_h": self.min_h,
            "max_h": self.max_h,
            "aspect_ratio": self.aspect_ratio,
            "is_static": self.is_static,
            "is_draggable": self.is_draggable,
            "is_resizable": self.is_resizable,
            "resize_handles": sorted(h.value for h in self.resize_handles),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutItem":
        """Build an item from a mapping; missing keys take their defaults."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        if "resize_handles" in kwargs:
            kwargs["resize_handles"] = {ResizeHandle(h) for h in kwargs["resize_handles"]}
        return cls(**kwargs)


def collides(a: LayoutItem, b: LayoutItem) -> bool:
    """Whether two distinct items overlap."""
    if a.id == b.id:
        return False
    return not (
        a.x + a.w <= b.x
        or a.x >= b.x + b.w
        or a.y + a.h <= b.y
        or a.y >= b.y + b.h
    )