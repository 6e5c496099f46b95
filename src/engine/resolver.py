"""
Command Resolver

Turns a raw line into a ParsedCommand. The longest run of leading tokens
(up to `max_words`) that names a registered command or alias wins; at each
length primary names are tried before aliases.
"""

from __future__ import annotations

from collections.abc import Iterator

from src.engine.models import ParsedCommand
from src.engine.registry import CommandRegistry
from src.engine.tokenizer import tokenize

EMPTY_COMMAND_ERROR = "Empty command"


class CommandResolver:
    """Resolves tokenized input against a command registry."""

    def __init__(self, registry: CommandRegistry, max_words: int = 3) -> None:
        self._registry = registry
        self._max_words = max_words

    def iter_matches(self, tokens: list[str]) -> Iterator[tuple[str, int]]:
        """
        Yield every leading token run that names a command, longest first.

        Each item is (primary command name, number of tokens consumed).
        """
        limit = min(self._max_words, len(tokens))

        for word_count in range(limit, 0, -1):
            phrase = " ".join(tokens[:word_count]).lower()
            name = self._registry.lookup(phrase)
            if name is not None:
                yield name, word_count

    def match_prefix(self, tokens: list[str]) -> tuple[str, int] | None:
        """Find the longest leading token run naming a command."""
        return next(self.iter_matches(tokens), None)

    def parse(self, line: str) -> ParsedCommand:
        """Parse a raw line into a structured command."""
        if not line.strip():
            return ParsedCommand(error=EMPTY_COMMAND_ERROR)

        tokens = tokenize(line)
        if not tokens:
            # Only quote characters, e.g. '""'
            return ParsedCommand(error="Invalid command format")

        match = self.match_prefix(tokens)
        if match is not None:
            name, word_count = match
            return ParsedCommand(command=name, args=tokens[word_count:], is_valid=True)

        # Fall back to the first token for error reporting
        typed = tokens[0].lower()
        args = tokens[1:]
        resolved = self._registry.alias_target(typed) or typed

        if not self._registry.has_command(resolved):
            return ParsedCommand(
                command=typed,
                args=args,
                error=f"Unknown command: {typed}",
            )

        return ParsedCommand(command=resolved, args=args, is_valid=True)
