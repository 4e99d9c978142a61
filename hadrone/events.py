"""Structured layout lifecycle events."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from hadrone.collision import CollisionStrategy
from hadrone.engine import CompactionType
from hadrone.interaction import InteractionType
from hadrone.items import LayoutItem


class InteractionPhase(Enum):
    """Phase of a drag or resize interaction."""

    START = "Start"
    UPDATE = "Update"
    STOP = "Stop"
    CANCEL = "Cancel"


class LayoutEvent(ABC):
    """An event emitted for undo stacks, analytics and custom constraints."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        """Externally tagged, JSON-friendly representation."""


@dataclass
class InteractionEvent(LayoutEvent):
    """A step of a drag or resize, with the layout after that step."""

    phase: InteractionPhase
    id: str
    interaction: InteractionType
    layout: list[LayoutItem] = field(default_factory=list)
    compaction: CompactionType = CompactionType.GRAVITY
    collision: CollisionStrategy = CollisionStrategy.PUSH_DOWN

    def to_dict(self) -> dict[str, Any]:
        return {
            "Interaction": {
                "phase": self.phase.value,
                "id": self.id,
                "interaction": self.interaction.value,
                "layout": [item.to_dict() for item in self.layout],
                "compaction": self.compaction.value,
                "collision": self.collision.value,
            }
        }


@dataclass
class ConfigChangedEvent(LayoutEvent):
    """Column count or compaction changed outside an interaction."""

    cols: int
    compaction: CompactionType = CompactionType.GRAVITY

    def to_dict(self) -> dict[str, Any]:
        return {
            "ConfigChanged": {
                "cols": self.cols,
                "compaction": self.compaction.value,
            }
        }