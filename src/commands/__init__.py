"""
Command sets for the adventure console.

Built-in commands ship with every engine; game content adds its own.
"""

from __future__ import annotations

from src.commands.builtin import BuiltinCommands

__all__ = [
    "BuiltinCommands",
]
