"""
Built-in session commands.

Registered by every CommandEngine. They only touch engine and session
state: help, screen clearing, history, leaving the game or admin mode,
and asking for elevation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.engine.models import (
    CLEAR_SCREEN,
    EXIT_ADMIN_MODE,
    EXIT_GAME,
    PROMPT_CONFIRMATION,
    PROMPT_PASSWORD,
    CommandDescriptor,
    CommandMode,
    CommandResult,
    ErrorCode,
    GameMode,
    PendingConfirmation,
    SessionContext,
)

if TYPE_CHECKING:
    from src.engine.console import CommandEngine

EXIT_PROMPT = "Are you sure you want to exit?"
SEARCH_FLAGS = frozenset({"-s", "--search"})


class BuiltinCommands:
    """Handlers for the commands every engine provides."""

    def __init__(self, engine: CommandEngine) -> None:
        self.engine = engine

    def descriptors(self) -> list[CommandDescriptor]:
        """Get descriptors for all built-in commands."""
        return [
            CommandDescriptor(
                name="help",
                aliases=("?", "h"),
                description="Display help information",
                syntax="help [command] | help -s <term>",
                examples=("help", "help move", "help -s location"),
                handler=self._cmd_help,
            ),
            CommandDescriptor(
                name="clear",
                aliases=("cls",),
                description="Clear the terminal screen",
                syntax="clear",
                examples=("clear",),
                handler=self._cmd_clear,
            ),
            CommandDescriptor(
                name="history",
                description="Display command history",
                syntax="history",
                examples=("history",),
                handler=self._cmd_history,
            ),
            CommandDescriptor(
                name="exit",
                aliases=("quit", "q"),
                description="Exit the game or admin mode",
                syntax="exit",
                examples=("exit",),
                handler=self._cmd_exit,
            ),
            CommandDescriptor(
                name="sudo",
                mode=CommandMode.PLAYER,
                description="Enter administration mode",
                syntax="sudo",
                examples=("sudo",),
                handler=self._cmd_sudo,
            ),
        ]

    def _cmd_help(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle help command."""
        help_system = self.engine.help

        if not args:
            return CommandResult.ok(*help_system.command_list(context.mode))

        if args[0] in SEARCH_FLAGS:
            return self._search_help(args[1:], context)

        topic = " ".join(args).lower()
        page = help_system.command_help(topic, context.mode)
        if page is None:
            return CommandResult.fail(
                ErrorCode.COMMAND_NOT_FOUND,
                f'No help available for "{topic}"',
                self.engine.suggestions.message(topic),
            )

        return CommandResult.ok(*help_system.format_page(page))

    def _search_help(self, terms: list[str], context: SessionContext) -> CommandResult:
        """Handle "help -s <term>": list commands mentioning the term."""
        if not terms:
            return CommandResult.fail(
                ErrorCode.MISSING_ARGUMENT,
                "Search term required",
                "Usage: help -s <term>",
            )

        query = " ".join(terms)
        matches = self.engine.help.search(query, context.mode)
        if not matches:
            return CommandResult.ok(f'No commands match "{query}".')

        width = max(len(cmd.name) for cmd in matches)
        lines = [f'Commands matching "{query}":', ""]
        lines.extend(f"  {cmd.name.ljust(width + 2)}{cmd.description}" for cmd in matches)
        return CommandResult.ok(*lines)

    def _cmd_clear(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle clear command."""
        return CommandResult.ok(CLEAR_SCREEN)

    def _cmd_history(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle history command."""
        entries = self.engine.history.entries()
        if not entries:
            return CommandResult.ok("No commands in history.")

        lines = ["Command History:", ""]
        lines.extend(f"{index}. {line}" for index, line in enumerate(entries, start=1))
        return CommandResult.ok(*lines)

    def _cmd_exit(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle exit command - leaves admin mode, or asks before quitting."""
        if context.mode is GameMode.ADMIN:
            context.mode = GameMode.PLAYER
            context.is_authenticated = False
            context.editing_adventure = None
            return CommandResult.ok(EXIT_ADMIN_MODE)

        context.pending_confirmation = PendingConfirmation(
            prompt=EXIT_PROMPT,
            action=lambda _context: CommandResult.ok(EXIT_GAME),
        )
        return CommandResult.ok(PROMPT_CONFIRMATION, EXIT_PROMPT)

    def _cmd_sudo(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle sudo command - the front end prompts for the password."""
        if self.engine.authenticator is None:
            return CommandResult.fail(
                ErrorCode.NO_AUTH_MANAGER,
                "Authentication system not initialized",
                "Please restart the application",
            )
        return CommandResult.ok(PROMPT_PASSWORD)
