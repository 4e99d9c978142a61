"""Headless grid layout engine: compaction, collisions, interactions, validation, styles and storage."""

__version__ = "0.1.1"

__all__ = [
    "collision",
    "controller",
    "engine",
    "events",
    "interaction",
    "items",
    "keyboard",
    "responsive",
    "storage",
    "styles",
    "validate",
]