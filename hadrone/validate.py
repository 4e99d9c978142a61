"""Validation and automatic repair of persisted or imported layouts."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, Sequence

from hadrone.items import LayoutItem, collides


class LayoutIssue:
    """A problem found by :func:`validate_layout`."""


@dataclass(frozen=True)
class DuplicateId(LayoutIssue):
    id: str


@dataclass(frozen=True)
class NonPositiveSize(LayoutIssue):
    id: str
    w: int
    h: int


@dataclass(frozen=True)
class OutOfHorizontalBounds(LayoutIssue):
    id: str
    x: int
    w: int
    cols: int


@dataclass(frozen=True)
class MinMaxWidth(LayoutIssue):
    id: str
    w: int
    min_w: int | None
    max_w: int | None


@dataclass(frozen=True)
class MinMaxHeight(LayoutIssue):
    id: str
    h: int
    min_h: int | None
    max_h: int | None


@dataclass(frozen=True)
class Overlap(LayoutIssue):
    a: str
    b: str


class LayoutValidationError(ValueError):
    """Raised when a layout has one or more issues."""

    def __init__(self, issues: Iterable[LayoutIssue]) -> None:
        self.issues = list(issues)
        super().__init__(f"layout has {len(self.issues)} issue(s)")


def _item_issues(item: LayoutItem, cols: int) -> list[LayoutIssue]:
    issues: list[LayoutIssue] = []
    if item.w < 1 or item.h < 1:
        issues.append(NonPositiveSize(item.id, item.w, item.h))
    if item.x < 0 or item.x + item.w > cols:
        issues.append(OutOfHorizontalBounds(item.id, item.x, item.w, cols))
    width = MinMaxWidth(item.id, item.w, item.min_w, item.max_w)
    if item.min_w is not None and item.w < item.min_w:
        issues.append(width)
    if item.max_w is not None and item.w > item.max_w:
        issues.append(width)
    height = MinMaxHeight(item.id, item.h, item.min_h, item.max_h)
    if item.min_h is not None and item.h < item.min_h:
        issues.append(height)
    if item.max_h is not None and item.h > item.max_h:
        issues.append(height)
    return issues


def validate_layout(layout: Sequence[LayoutItem], cols: int) -> None:
    """Check ``layout`` without changing it.

    Raises :class:`LayoutValidationError` listing every issue found.
    """
    issues: list[LayoutIssue] = []
    seen: set[str] = set()
    for item in layout:
        if item.id in seen:
            issues.append(DuplicateId(item.id))
        seen.add(item.id)
        issues.extend(_item_issues(item, cols))

    issues.extend(Overlap(a.id, b.id) for a, b in combinations(layout, 2) if collides(a, b))

    if issues:
        raise LayoutValidationError(issues)


def repair_layout(layout: Iterable[LayoutItem], cols: int) -> None:
    """Clamp items into the grid and their limits; suffix repeated ids, in place."""
    seen: dict[str, int] = {}
    for item in layout:
        base = item.id
        count = seen.get(base, 0)
        if count > 0:
            item.id = f"{base}-{count}"
        seen[base] = count + 1

        item.w = max(item.w, 1)
        item.h = max(item.h, 1)
        item.x = max(item.x, 0)
        if item.w > cols:
            item.w = cols
        item.x = min(item.x, max(cols - item.w, 0))

        if item.min_w is not None:
            item.w = max(item.w, item.min_w)
        if item.max_w is not None:
            item.w = min(item.w, item.max_w)
        if item.min_h is not None:
            item.h = max(item.h, item.min_h)
        if item.max_h is not None:
            item.h = min(item.h, item.max_h)

        item.w = min(item.w, cols)
        item.x = min(item.x, max(cols - item.w, 0))