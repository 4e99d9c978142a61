"""Pluggable collision resolution after an item is moved or resized."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from enum import Enum

from hadrone.items import LayoutItem, collides


class CollisionResolver(ABC):
    """Resolves overlaps after the focused item has been placed."""

    @abstractmethod
    def resolve_collisions(self, layout: list[LayoutItem], moved_id: str) -> None:
        """Adjust ``layout`` in place around the item ``moved_id``."""


class PushDownResolver(CollisionResolver):
    """Pushes overlapping non-static items below the moved item, recursively."""

    def resolve_collisions(self, layout: list[LayoutItem], moved_id: str) -> None:
        moved = next((it for it in layout if it.id == moved_id), None)
        if moved is None:
            return
        moved = copy.copy(moved)

        to_move = [it.id for it in layout if it.id != moved_id and collides(moved, it)]
        for other_id in to_move:
            target = next((it for it in layout if it.id == other_id), None)
            if target is None or target.is_static:
                continue
            target.y = moved.y + moved.h
            self.resolve_collisions(layout, target.id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, PushDownResolver)

    def __hash__(self) -> int:
        return hash(PushDownResolver)


class NoopCollisionResolver(CollisionResolver):
    """Leaves overlaps in place until the next compaction."""

    def resolve_collisions(self, layout: list[LayoutItem], moved_id: str) -> None:
        return None

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoopCollisionResolver)

    def __hash__(self) -> int:
        return hash(NoopCollisionResolver)


class CollisionStrategy(Enum):
    """Built-in collision strategies."""

    PUSH_DOWN = "PushDown"
    NONE = "None"

    def build(self) -> CollisionResolver:
        """Create the resolver for this strategy."""
        if self is CollisionStrategy.PUSH_DOWN:
            return PushDownResolver()
        return NoopCollisionResolver()