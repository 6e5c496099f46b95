"""
Command Engine for the adventure console.

The engine turns raw text into commands:
- Tokenizing (quote-aware splitting)
- Resolution (longest multi-word name or alias match)
- Suggestions (edit-distance "did you mean")
- Autocomplete (command names and location identifiers)
- History (bounded log with arrow-key recall)
- Dispatch (mode checks and uniform results)
"""

from __future__ import annotations

from src.engine.autocomplete import AutocompleteEngine
from src.engine.console import CommandEngine
from src.engine.dispatcher import ExecutionDispatcher
from src.engine.help import HelpExample, HelpPage, HelpSystem
from src.engine.history import AT_REST, HistoryNavigator, RecallDirection
from src.engine.models import (
    AutocompleteResult,
    CommandDescriptor,
    CommandHandler,
    CommandMode,
    CommandResult,
    EngineConfig,
    ErrorCode,
    ErrorInfo,
    GameMode,
    ParsedCommand,
    PendingConfirmation,
    SessionContext,
)
from src.engine.registry import CommandRegistry
from src.engine.resolver import CommandResolver
from src.engine.suggest import SuggestionEngine, levenshtein_distance, similarity
from src.engine.tokenizer import tokenize

__all__ = [
    # Main engine
    "CommandEngine",
    # Components
    "AutocompleteEngine",
    "CommandRegistry",
    "CommandResolver",
    "ExecutionDispatcher",
    "HistoryNavigator",
    "SuggestionEngine",
    "tokenize",
    "levenshtein_distance",
    "similarity",
    "AT_REST",
    "RecallDirection",
    # Help
    "HelpExample",
    "HelpPage",
    "HelpSystem",
    # Models
    "AutocompleteResult",
    "CommandDescriptor",
    "CommandHandler",
    "CommandMode",
    "CommandResult",
    "EngineConfig",
    "ErrorCode",
    "ErrorInfo",
    "GameMode",
    "ParsedCommand",
    "PendingConfirmation",
    "SessionContext",
]
