"""Layout persistence, breakpoint configuration and debounced auto-save."""

from __future__ import annotations

import asyncio
import contextlib
import copy
import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Mapping, Sequence

from hadrone.items import LayoutItem


@dataclass
class LayoutSnapshot:
    """A versioned, persistable copy of a layout and its column count."""

    version: int
    items: list[LayoutItem] = field(default_factory=list)
    cols: int = 12

    def to_dict(self) -> dict[str, Any]:
        """Plain, JSON-friendly representation."""
        return {
            "version": self.version,
            "items": [item.to_dict() for item in self.items],
            "cols": self.cols,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LayoutSnapshot":
        """Build a snapshot from a mapping holding ``version``, ``items`` and ``cols``.

        Raises ``ValueError`` when the mapping does not describe a snapshot.
        """
        try:
            version = data["version"]
            items = data["items"]
            cols = data["cols"]
        except (KeyError, TypeError) as exc:
            raise ValueError(f"not a layout snapshot: {exc}") from exc
        if not isinstance(version, int) or version < 0:
            raise ValueError(f"invalid snapshot version: {version!r}")
        if not isinstance(cols, int):
            raise ValueError(f"invalid column count: {cols!r}")
        if not isinstance(items, list):
            raise ValueError("snapshot items must be a list")
        try:
            parsed = [LayoutItem.from_dict(item) for item in items]
        except (TypeError, AttributeError, ValueError) as exc:
            raise ValueError(f"invalid layout item: {exc}") from exc
        return cls(version=version, items=parsed, cols=cols)


class LayoutStorage(ABC):
    """A place to save and load layout snapshots by key."""

    @abstractmethod
    def save(self, key: str, layout: LayoutSnapshot) -> None:
        """Store ``layout`` under ``key``."""

    @abstractmethod
    def load(self, key: str) -> LayoutSnapshot | None:
        """The snapshot stored under ``key``, or None if there is none."""


class FileStorage(LayoutStorage):
    """Stores each snapshot as ``<key>.json`` in a directory."""

    def __init__(self, base_path: str | PathLike[str]) -> None:
        self.base_path = Path(base_path)
        with contextlib.suppress(OSError):
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.base_path / f"{key}.json"

    def save(self, key: str, layout: LayoutSnapshot) -> None:
        data = json.dumps(layout.to_dict(), indent=2)
        self._path(key).write_text(data, encoding="utf-8")

    def load(self, key: str) -> LayoutSnapshot | None:
        """Read a snapshot; raises ``ValueError`` if the file holds invalid data."""
        path = self._path(key)
        if not path.exists():
            return None
        text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid layout data in {path}: {exc}") from exc
        return LayoutSnapshot.from_dict(data)


class MemoryStorage(LayoutStorage):
    """In-process storage keyed by ``<prefix>:<key>``; holds serialized copies."""

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self._entries: dict[str, str] = {}

    def _storage_key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    def save(self, key: str, layout: LayoutSnapshot) -> None:
        self._entries[self._storage_key(key)] = json.dumps(layout.to_dict())

    def load(self, key: str) -> LayoutSnapshot | None:
        data = self._entries.get(self._storage_key(key))
        if data is None:
            return None
        return LayoutSnapshot.from_dict(json.loads(data))


@dataclass
class BreakpointConfig:
    """Grid settings that apply from ``min_width`` pixels upward."""

    name: str = "lg"
    cols: int = 12
    min_width: int = 1200
    margin: tuple[int, int] = (10, 10)
    row_height: float = 100.0


def select_breakpoint_config(
    breakpoints: Sequence[BreakpointConfig], width: int
) -> BreakpointConfig:
    """The applicable configuration with the largest ``min_width``.

    Falls back to the first configuration when none applies; on equal minimum
    widths the later one wins. Raises ``ValueError`` for an empty sequence.
    """
    if not breakpoints:
        raise ValueError("no breakpoints given")
    best = breakpoints[0]
    for bp in breakpoints:
        if width >= bp.min_width and bp.min_width >= best.min_width:
            best = bp
    return best


async def debounce_save(
    storage: LayoutStorage,
    key: str,
    layout: Sequence[LayoutItem],
    cols: int,
    ms: int,
) -> None:
    """Wait ``ms`` milliseconds, then save a version 1 snapshot; failures are ignored."""
    await asyncio.sleep(ms / 1000)
    snapshot = LayoutSnapshot(version=1, items=copy.deepcopy(list(layout)), cols=cols)
    with contextlib.suppress(OSError, ValueError):
        storage.save(key, snapshot)