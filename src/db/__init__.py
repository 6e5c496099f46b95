"""
Collaborator layer for the adventure console.

Provides interfaces and implementations for:
- IdentifierSource: location IDs of the adventure open for editing
- Authenticator: admin password checks for sudo

Implementations:
- InMemory*: For testing and the demo REPL (no external services)
"""

from __future__ import annotations

from src.db.interfaces import Authenticator, IdentifierSource
from src.db.memory import InMemoryAuthenticator, InMemoryLocationCatalog

__all__ = [
    # Protocol interfaces
    "Authenticator",
    "IdentifierSource",
    # In-memory implementations
    "InMemoryAuthenticator",
    "InMemoryLocationCatalog",
]
