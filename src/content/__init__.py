"""
Game content for the adventure console.

Starter adventure and the location commands that explore and edit it.
"""

from __future__ import annotations

from src.content.starter_world import (
    STARTER_ADVENTURE_ID,
    LocationCommands,
    StarterWorldResult,
    create_starter_world,
)

__all__ = [
    "STARTER_ADVENTURE_ID",
    "LocationCommands",
    "StarterWorldResult",
    "create_starter_world",
]
