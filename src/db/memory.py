"""
In-memory implementations of collaborator interfaces.

These implementations keep everything in dictionaries, making tests fast
and isolated from real storage and authentication services.
"""

from __future__ import annotations

import logging
import secrets
from copy import deepcopy

from src.models.adventure import Adventure

logger = logging.getLogger(__name__)


class InMemoryLocationCatalog:
    """
    In-memory adventure store implementing IdentifierSource.

    Holds any number of adventures; at most one is open for editing.
    Adventures are returned live, so edits to them are stored directly.
    """

    def __init__(self) -> None:
        self._adventures: dict[str, Adventure] = {}
        self._active_id: str | None = None

    def save_adventure(self, adventure: Adventure) -> None:
        """Insert or update an adventure."""
        self._adventures[adventure.id] = deepcopy(adventure)

    def get_adventure(self, adventure_id: str) -> Adventure | None:
        """Get an adventure by ID."""
        return self._adventures.get(adventure_id)

    def list_adventures(self) -> list[Adventure]:
        return list(self._adventures.values())

    def select(self, adventure_id: str) -> Adventure:
        """Open an adventure for editing."""
        if adventure_id not in self._adventures:
            raise ValueError(f"Adventure '{adventure_id}' does not exist")
        self._active_id = adventure_id
        return self._adventures[adventure_id]

    def deselect(self) -> None:
        self._active_id = None

    @property
    def active(self) -> Adventure | None:
        """The adventure open for editing, if any."""
        if self._active_id is None:
            return None
        return self._adventures.get(self._active_id)

    def list_identifiers(self) -> list[str]:
        """Get the location IDs of the active adventure."""
        adventure = self.active
        if adventure is None:
            return []
        return list(adventure.locations.keys())


class InMemoryAuthenticator:
    """Authenticator that compares against a single configured password."""

    def __init__(self, password: str | None) -> None:
        self._password = password

    async def authenticate(self, password: str) -> bool:
        """Return True if `password` matches the configured one."""
        if not self._password:
            logger.warning("Admin password is not configured; refusing elevation")
            return False
        return secrets.compare_digest(password.encode(), self._password.encode())
