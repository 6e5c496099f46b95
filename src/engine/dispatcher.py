"""
Execution Dispatcher

Runs a resolved command against the session context. Parse failures, unknown
commands and mode mismatches are reported before any handler runs; anything a
handler raises is caught here and returned as an EXECUTION_ERROR result.
"""

from __future__ import annotations

import inspect
import logging

from src.engine.models import (
    CommandDescriptor,
    CommandMode,
    CommandResult,
    ErrorCode,
    GameMode,
    ParsedCommand,
    SessionContext,
)
from src.engine.registry import CommandRegistry
from src.engine.suggest import SuggestionEngine

logger = logging.getLogger(__name__)


class ExecutionDispatcher:
    """Dispatches parsed commands to their handlers."""

    def __init__(self, registry: CommandRegistry, suggestions: SuggestionEngine) -> None:
        self._registry = registry
        self._suggestions = suggestions

    async def execute(self, parsed: ParsedCommand, context: SessionContext) -> CommandResult:
        """Execute a parsed command and return its result."""
        if not parsed.is_valid:
            return CommandResult.fail(
                ErrorCode.INVALID_COMMAND,
                parsed.error or "Invalid command",
                self._suggestions.message(parsed.command),
            )

        command = self._registry.get(parsed.command)
        if command is None:
            return CommandResult.fail(
                ErrorCode.COMMAND_NOT_FOUND,
                f"Command not found: {parsed.command}",
                self._suggestions.message(parsed.command),
            )

        denial = self._check_eligibility(command, context)
        if denial is not None:
            return denial

        try:
            result = command.handler(parsed.args, context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Error executing command {command.name}: {e}")
            return CommandResult.fail(
                ErrorCode.EXECUTION_ERROR,
                str(e) or "Command execution failed",
                f'Try "help {command.name}" for usage information',
            )

        if not isinstance(result, CommandResult):
            logger.error(f"Command {command.name} returned {type(result).__name__}")
            return CommandResult.fail(
                ErrorCode.EXECUTION_ERROR,
                "Command execution failed",
                f'Try "help {command.name}" for usage information',
            )

        return result

    def _check_eligibility(
        self, command: CommandDescriptor, context: SessionContext
    ) -> CommandResult | None:
        """
        Check that the session may run the command.

        Returns a failure result if not, None if eligible.
        """
        if not command.mode.allows(context.mode):
            if context.mode is GameMode.PLAYER:
                suggestion = 'Use "sudo" to enter admin mode'
            else:
                suggestion = 'Use "exit" to return to player mode'
            return CommandResult.fail(
                ErrorCode.COMMAND_NOT_AVAILABLE,
                f'Command "{command.name}" is not available in {context.mode.value} mode',
                suggestion,
            )

        if command.mode is CommandMode.ADMIN and not context.is_authenticated:
            return CommandResult.fail(
                ErrorCode.NOT_AUTHENTICATED,
                f'Command "{command.name}" requires an authenticated admin session',
                'Use "exit" and then "sudo" to authenticate',
            )

        return None
