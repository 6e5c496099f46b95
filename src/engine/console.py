"""
Command Engine for the adventure console.

One CommandEngine serves one input stream. It owns a fresh registry and one
instance of each component:
- Resolver (raw line -> ParsedCommand)
- Suggestion engine (did-you-mean)
- Autocomplete engine (tab completion)
- History navigator (arrow-key recall)
- Dispatcher (mode checks and handler invocation)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable

from src.db.interfaces import Authenticator, IdentifierSource
from src.engine.autocomplete import AutocompleteEngine
from src.engine.dispatcher import ExecutionDispatcher
from src.engine.help import HelpSystem
from src.engine.history import HistoryNavigator, RecallDirection
from src.engine.models import (
    ENTER_ADMIN_MODE,
    AutocompleteResult,
    CommandDescriptor,
    CommandResult,
    EngineConfig,
    ErrorCode,
    GameMode,
    ParsedCommand,
    SessionContext,
)
from src.engine.registry import CommandRegistry
from src.engine.resolver import CommandResolver
from src.engine.suggest import SuggestionEngine

logger = logging.getLogger(__name__)

CONFIRM_ANSWERS = frozenset({"y", "yes"})


class CommandEngine:
    """
    Turns text input into command results.

    Commands are registered at construction: the built-ins first, then any
    descriptors passed in. Collaborators that build their commands later
    (e.g. after loading content) use `register` during start-up.
    """

    def __init__(
        self,
        commands: Iterable[CommandDescriptor] = (),
        *,
        config: EngineConfig | None = None,
        identifier_source: IdentifierSource | None = None,
        authenticator: Authenticator | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.authenticator = authenticator

        self.registry = CommandRegistry(max_words=self.config.max_command_words)
        self.resolver = CommandResolver(self.registry, max_words=self.config.max_command_words)
        self.suggestions = SuggestionEngine(
            self.registry,
            limit=self.config.max_suggestions,
            threshold=self.config.suggestion_threshold,
            prefix_score=self.config.prefix_score,
        )
        self.autocomplete = AutocompleteEngine(
            self.registry,
            self.resolver,
            identifier_commands=self.config.identifier_commands,
            identifier_source=identifier_source,
        )
        self.history = HistoryNavigator(capacity=self.config.history_size)
        self.dispatcher = ExecutionDispatcher(self.registry, self.suggestions)
        self.help = HelpSystem(self.registry)

        self._register_builtin_commands()
        for descriptor in commands:
            self.register(descriptor)

    def _register_builtin_commands(self) -> None:
        """Register the commands every engine provides."""
        # Imported here: the built-ins need the engine type
        from src.commands.builtin import BuiltinCommands

        for descriptor in BuiltinCommands(self).descriptors():
            self.register(descriptor)

    def register(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        """Register a command with this engine."""
        return self.registry.register(descriptor)

    # --- Resolution ---

    def parse(self, line: str) -> ParsedCommand:
        """Parse a raw line into a structured command."""
        return self.resolver.parse(line)

    def suggest(self, text: str) -> list[str]:
        """Suggest commands close to mistyped input."""
        return self.suggestions.suggest(text)

    def available_commands(self, mode: GameMode) -> list[CommandDescriptor]:
        """Get the commands a session in `mode` may run."""
        return self.registry.available(mode)

    # --- Line editing ---

    def complete(self, line: str, cursor: int, context: SessionContext) -> AutocompleteResult:
        """Get completion candidates for the text before `cursor`."""
        return self.autocomplete.complete(line, cursor, context)

    def recall(self, direction: RecallDirection | str) -> str | None:
        """Recall an older or newer history entry."""
        return self.history.recall(direction)

    # --- Execution ---

    async def execute(self, parsed: ParsedCommand, context: SessionContext) -> CommandResult:
        """Execute an already parsed command."""
        return await self.dispatcher.execute(parsed, context)

    async def submit(self, line: str, context: SessionContext) -> CommandResult:
        """
        Handle a submitted input line.

        If the session is waiting for a confirmation, the line answers it and
        is not recorded. Otherwise the line is recorded, parsed and executed.
        """
        if context.pending_confirmation is not None:
            return await self._answer_confirmation(line, context)

        self.history.append(line)
        return await self.execute(self.parse(line), context)

    async def _answer_confirmation(self, answer: str, context: SessionContext) -> CommandResult:
        pending = context.pending_confirmation
        context.pending_confirmation = None

        if pending is None or answer.strip().lower() not in CONFIRM_ANSWERS:
            return CommandResult.ok("Cancelled.")

        try:
            result = pending.action(context)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Confirmed action failed: {e}")
            return CommandResult.fail(
                ErrorCode.EXECUTION_ERROR,
                str(e) or "Command execution failed",
            )

        return result

    async def authenticate(self, password: str, context: SessionContext) -> CommandResult:
        """Check an admin password and elevate the session on success."""
        if self.authenticator is None:
            return CommandResult.fail(
                ErrorCode.NO_AUTH_MANAGER,
                "Authentication system not initialized",
                "Please restart the application",
            )

        if not await self.authenticator.authenticate(password):
            logger.warning("Admin authentication failed")
            return CommandResult.fail(
                ErrorCode.AUTH_FAILED,
                "Authentication failed",
                "Incorrect password. Please try again.",
            )

        context.is_authenticated = True
        context.mode = GameMode.ADMIN
        logger.info("Session elevated to admin mode")
        return CommandResult.ok(ENTER_ADMIN_MODE)
