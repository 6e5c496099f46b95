"""
Command Registry

Owns every command descriptor for one engine instance, indexed by primary
name and by alias. Names and aliases are stored lowercase; multi-word
names keep their single internal spaces.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import replace

from src.engine.models import CommandDescriptor, GameMode

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """Lowercase a command phrase and collapse its internal whitespace."""
    return " ".join(name.lower().split())


class CommandRegistry:
    """
    Name and alias tables for registered commands.

    Iteration order is registration order. A later registration that reuses
    an alias takes the alias over from the earlier command.
    """

    def __init__(self, max_words: int = 3) -> None:
        self._max_words = max_words
        self._commands: dict[str, CommandDescriptor] = {}
        self._aliases: dict[str, str] = {}  # alias -> command name

    def register(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        """Register a command and index its aliases. Returns the stored descriptor."""
        name = normalize_name(descriptor.name)
        if not name:
            raise ValueError("Command name cannot be empty")
        if not callable(descriptor.handler):
            raise ValueError(f"Handler for '{name}' is not callable")

        aliases = tuple(normalize_name(alias) for alias in descriptor.aliases if alias.strip())
        stored = replace(descriptor, name=name, aliases=aliases)

        if len(name.split(" ")) > self._max_words:
            logger.warning(
                "Command '%s' has more than %d words and can never be resolved",
                name,
                self._max_words,
            )

        if name in self._commands:
            logger.warning(f"Command '{name}' registered twice; replacing previous definition")
        self._commands[name] = stored

        for alias in aliases:
            previous = self._aliases.get(alias)
            if previous is not None and previous != name:
                logger.warning(
                    "Alias '%s' already maps to '%s'; remapping to '%s'", alias, previous, name
                )
            self._aliases[alias] = name

        logger.debug(f"Registered command: {name}")
        return stored

    def get(self, name: str) -> CommandDescriptor | None:
        """Get a command by primary name or alias."""
        key = normalize_name(name)

        if key in self._commands:
            return self._commands[key]

        if key in self._aliases:
            return self._commands.get(self._aliases[key])

        return None

    def lookup(self, phrase: str) -> str | None:
        """
        Resolve a phrase to a primary command name.

        Primary names take precedence over aliases.
        """
        key = normalize_name(phrase)
        if key in self._commands:
            return key
        return self._aliases.get(key)

    def has_command(self, name: str) -> bool:
        return normalize_name(name) in self._commands

    def has_alias(self, alias: str) -> bool:
        return normalize_name(alias) in self._aliases

    def alias_target(self, alias: str) -> str | None:
        return self._aliases.get(normalize_name(alias))

    def commands(self) -> list[CommandDescriptor]:
        """Get all registered commands in registration order."""
        return list(self._commands.values())

    def aliases(self) -> dict[str, str]:
        """Get a copy of the alias table (alias -> command name)."""
        return dict(self._aliases)

    def available(self, mode: GameMode) -> list[CommandDescriptor]:
        """Get commands a session in `mode` may run."""
        return [cmd for cmd in self._commands.values() if cmd.mode.allows(mode)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_command(name)

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)
