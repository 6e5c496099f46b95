"""
Engine Data Models for the adventure console.

Defines the core data structures for command resolution:
- CommandDescriptor: A registered command and its handler
- ParsedCommand: Resolver output for one input line
- CommandResult: Uniform success/failure result from a handler
- SessionContext: Mutable session state passed into every handler
- AutocompleteResult: Candidates for a partially typed line
"""

from __future__ import annotations

import os
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field


class GameMode(str, Enum):
    """Interaction mode of a session."""

    PLAYER = "player"
    ADMIN = "admin"


class CommandMode(str, Enum):
    """Which session modes may run a command."""

    PLAYER = "player"
    ADMIN = "admin"
    BOTH = "both"

    def allows(self, mode: GameMode) -> bool:
        """Check whether a session in `mode` may run the command."""
        return self is CommandMode.BOTH or self.value == mode.value


class ErrorCode(str, Enum):
    """Failure codes carried by CommandResult.error."""

    INVALID_COMMAND = "INVALID_COMMAND"
    COMMAND_NOT_FOUND = "COMMAND_NOT_FOUND"
    COMMAND_NOT_AVAILABLE = "COMMAND_NOT_AVAILABLE"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    MISSING_ARGUMENT = "MISSING_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    NO_ACTIVE_CONTEXT = "NO_ACTIVE_CONTEXT"
    AUTH_FAILED = "AUTH_FAILED"
    NO_AUTH_MANAGER = "NO_AUTH_MANAGER"


# Output markers understood by front ends
CLEAR_SCREEN = "CLEAR_SCREEN"
PROMPT_PASSWORD = "PROMPT_PASSWORD"
PROMPT_CONFIRMATION = "PROMPT_CONFIRMATION"
ENTER_ADMIN_MODE = "ENTER_ADMIN_MODE"
EXIT_ADMIN_MODE = "EXIT_ADMIN_MODE"
EXIT_GAME = "EXIT_GAME"

OUTPUT_MARKERS = frozenset(
    {
        CLEAR_SCREEN,
        PROMPT_PASSWORD,
        PROMPT_CONFIRMATION,
        ENTER_ADMIN_MODE,
        EXIT_ADMIN_MODE,
        EXIT_GAME,
    }
)


class ErrorInfo(BaseModel):
    """Details of a failed command."""

    code: ErrorCode
    message: str
    suggestion: str | None = Field(default=None, description="One-line corrective hint")


class CommandResult(BaseModel):
    """Uniform result returned by every command handler."""

    success: bool
    output: list[str] = Field(default_factory=list)
    error: ErrorInfo | None = None

    @classmethod
    def ok(cls, *lines: str) -> CommandResult:
        """Build a successful result from output lines."""
        return cls(success=True, output=list(lines))

    @classmethod
    def fail(
        cls,
        code: ErrorCode,
        message: str,
        suggestion: str | None = None,
    ) -> CommandResult:
        """Build a failed result."""
        return cls(
            success=False,
            error=ErrorInfo(code=code, message=message, suggestion=suggestion),
        )


class ParsedCommand(BaseModel):
    """Resolver output for a single input line."""

    command: str = Field(default="", description="Resolved name, or the typed name if invalid")
    args: list[str] = Field(default_factory=list)
    is_valid: bool = False
    error: str | None = None


class AutocompleteResult(BaseModel):
    """Completion candidates for a partially typed line."""

    suggestions: list[str] = Field(default_factory=list)
    completion_text: str | None = Field(
        default=None, description="Set only when candidates collapse to one"
    )


@dataclass
class PendingConfirmation:
    """A destructive operation waiting for a yes/no answer."""

    prompt: str
    action: Callable[[SessionContext], CommandResult | Awaitable[CommandResult]]


@dataclass
class SessionContext:
    """Mutable state of the current session, passed into every handler."""

    mode: GameMode = GameMode.PLAYER
    is_authenticated: bool = False
    pending_confirmation: PendingConfirmation | None = None
    """Set by handlers that need a second step before acting."""
    current_location: str | None = None
    """Identifier of the active location. Owned by the game, not the engine."""
    editing_adventure: str | None = None
    """Adventure open for editing in admin mode, if any."""

    @property
    def is_admin(self) -> bool:
        return self.mode is GameMode.ADMIN


CommandHandler = Callable[
    [list[str], SessionContext], CommandResult | Awaitable[CommandResult]
]


@dataclass(frozen=True)
class CommandDescriptor:
    """A registered command."""

    name: str
    handler: CommandHandler
    aliases: tuple[str, ...] = ()
    mode: CommandMode = CommandMode.BOTH
    description: str = ""
    syntax: str = ""
    examples: tuple[str, ...] = ()
    see_also: tuple[str, ...] = ()


class EngineConfig(BaseModel):
    """Engine configuration."""

    # History
    history_size: int = Field(default=50, ge=1)

    # Resolution
    max_command_words: int = Field(default=3, ge=1)

    # Suggestions
    max_suggestions: int = Field(default=3, ge=1)
    suggestion_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    prefix_score: float = Field(default=0.9, ge=0.0, le=1.0)

    # Autocomplete
    identifier_commands: tuple[str, ...] = (
        "edit location",
        "remove connection",
        "delete location",
    )

    @classmethod
    def from_env(cls) -> EngineConfig:
        """Load configuration, overriding defaults from the environment."""
        overrides: dict[str, object] = {}

        if os.getenv("ADVENTURE_HISTORY_SIZE"):
            overrides["history_size"] = int(os.getenv("ADVENTURE_HISTORY_SIZE", "50"))

        if os.getenv("ADVENTURE_MAX_SUGGESTIONS"):
            overrides["max_suggestions"] = int(os.getenv("ADVENTURE_MAX_SUGGESTIONS", "3"))

        if os.getenv("ADVENTURE_SUGGESTION_THRESHOLD"):
            overrides["suggestion_threshold"] = float(
                os.getenv("ADVENTURE_SUGGESTION_THRESHOLD", "0.5")
            )

        return cls(**overrides)
