"""
Collaborator interface definitions for the adventure console.

Uses Protocol classes to define the narrow contracts the command engine
consumes. Implementations can talk to a real data store or auth service, or
use the in-memory versions for testing.
"""

from __future__ import annotations

from typing import Protocol


class IdentifierSource(Protocol):
    """
    Source of location identifiers for argument completion.

    Identifiers belong to the adventure currently open for editing.
    """

    def list_identifiers(self) -> list[str]:
        """Get all valid identifiers, in display order."""
        ...


class Authenticator(Protocol):
    """Checks the admin password when a session asks for elevation."""

    async def authenticate(self, password: str) -> bool:
        """Return True if the password grants admin access."""
        ...
