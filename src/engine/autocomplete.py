"""
Autocomplete Engine

Completes the token under the cursor. While the command name is still being
typed, candidates are registered names (and aliases) eligible for the session
mode. Once a command is identified, only the first argument of the
identifier-taking commands is completed, from an external identifier source,
and only in admin mode with an adventure open for editing.
"""

from __future__ import annotations

from src.db.interfaces import IdentifierSource
from src.engine.models import AutocompleteResult, GameMode, SessionContext
from src.engine.registry import CommandRegistry
from src.engine.resolver import CommandResolver
from src.engine.tokenizer import tokenize

# Argument position (1-based) that holds the identifier
IDENTIFIER_ARG_INDEX = 1


class AutocompleteEngine:
    """Context-sensitive completion over a command registry."""

    def __init__(
        self,
        registry: CommandRegistry,
        resolver: CommandResolver,
        identifier_commands: tuple[str, ...] | list[str] = (),
        identifier_source: IdentifierSource | None = None,
    ) -> None:
        self._registry = registry
        self._resolver = resolver
        self._identifier_commands = frozenset(name.lower() for name in identifier_commands)
        self.identifier_source = identifier_source

    def complete(self, line: str, cursor: int, context: SessionContext) -> AutocompleteResult:
        """Get completion candidates for the text before `cursor`."""
        before_cursor = line[: max(cursor, 0)]
        tokens = tokenize(before_cursor)

        if not tokens:
            return AutocompleteResult()

        is_partial = not before_cursor[-1].isspace()

        matched: tuple[str, int] | None = None

        # A trailing space means the command words are finished
        if not is_partial:
            matched = self._resolver.match_prefix(tokens)

        # "edit location entr": the last token may be an identifier argument
        if matched is None and is_partial and len(tokens) > 1:
            matched = next(
                (
                    match
                    for match in self._resolver.iter_matches(tokens[:-1])
                    if match[0] in self._identifier_commands
                ),
                None,
            )

        if matched is None:
            return self._complete_command_name(" ".join(tokens), context.mode)

        command_name, word_count = matched
        return self._complete_argument(
            command_name, word_count, tokens, is_partial, context
        )

    def command_candidates(self, partial: str, mode: GameMode) -> tuple[list[str], list[str]]:
        """
        Get (primary names, aliases) matching a partial command, each sorted.

        Completed words of a multi-word partial must match exactly; the last
        word matches by prefix. Hyphenated aliases ("edit-title") match a
        spaced partial ("edit t") only when their command is also a candidate.
        """
        lowered = partial.lower()
        words = lowered.split(" ")
        last_word = words[-1]
        complete_words = words[:-1]

        command_names: list[str] = []
        for cmd in self._registry.available(mode):
            if not complete_words:
                matches = cmd.name.startswith(lowered)
            else:
                cmd_words = cmd.name.split(" ")
                matches = (
                    len(cmd_words) > len(complete_words)
                    and cmd_words[: len(complete_words)] == complete_words
                    and cmd_words[len(complete_words)].startswith(last_word)
                )
            if matches:
                command_names.append(cmd.name)

        hyphenated = lowered.replace(" ", "-")
        alias_names: list[str] = []
        for alias, name in self._registry.aliases().items():
            cmd = self._registry.get(name)
            if cmd is None or not cmd.mode.allows(mode) or alias in command_names:
                continue
            if alias.startswith(lowered):
                alias_names.append(alias)
            elif alias.startswith(hyphenated) and name in command_names:
                alias_names.append(alias)

        return sorted(command_names), sorted(alias_names)

    def _complete_command_name(self, partial: str, mode: GameMode) -> AutocompleteResult:
        command_names, alias_names = self.command_candidates(partial, mode)
        suggestions = command_names + alias_names

        # Aliases never make a completion ambiguous
        if len(command_names) == 1:
            return AutocompleteResult(suggestions=suggestions, completion_text=command_names[0])

        return AutocompleteResult(suggestions=suggestions)

    def _complete_argument(
        self,
        command_name: str,
        word_count: int,
        tokens: list[str],
        is_partial: bool,
        context: SessionContext,
    ) -> AutocompleteResult:
        if command_name not in self._identifier_commands:
            return AutocompleteResult()

        if context.mode is not GameMode.ADMIN or context.editing_adventure is None:
            return AutocompleteResult()

        if self.identifier_source is None:
            return AutocompleteResult()

        arg_index = len(tokens) - word_count
        if not is_partial:
            arg_index += 1  # starting a new argument

        if arg_index != IDENTIFIER_ARG_INDEX:
            return AutocompleteResult()

        partial_input = tokens[-1].lower() if is_partial else ""
        matches = [
            identifier
            for identifier in self.identifier_source.list_identifiers()
            if identifier.lower().startswith(partial_input)
        ]

        if len(matches) == 1:
            return AutocompleteResult(suggestions=matches, completion_text=matches[0])

        return AutocompleteResult(suggestions=matches)
