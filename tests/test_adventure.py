"""
Tests for adventure models and the in-memory collaborators.
"""

from __future__ import annotations

import pytest

from src.db import InMemoryAuthenticator, InMemoryLocationCatalog
from src.models import Adventure, Location


def _make_adventure() -> Adventure:
    adventure = Adventure(id="crypt", title="The Crypt")
    adventure.add_location(Location(id="gate", name="Gate"))
    adventure.add_location(Location(id="hall", name="Hall"))
    adventure.add_location(Location(id="tomb", name="Tomb"))
    adventure.connect("gate", "North", "hall")
    adventure.connect("hall", "south", "gate")
    adventure.connect("hall", "down", "tomb")
    adventure.connect("tomb", "up", "hall")
    return adventure


class TestAdventure:
    """Tests for the Adventure model."""

    def test_first_location_is_start(self):
        """The first location added should become the start."""
        adventure = _make_adventure()
        assert adventure.start_location == "gate"

    def test_connect_lowercases_direction(self):
        """Exit directions should be stored lowercase."""
        adventure = _make_adventure()
        assert adventure.locations["gate"].exits == {"north": "hall"}

    def test_connect_requires_both_locations(self):
        """Connecting to or from a missing location should raise ValueError."""
        adventure = _make_adventure()
        with pytest.raises(ValueError):
            adventure.connect("gate", "east", "moon")
        with pytest.raises(ValueError):
            adventure.connect("moon", "west", "gate")

    def test_remove_location_drops_inbound_exits(self):
        """Removing a location should drop exits that lead to it."""
        adventure = _make_adventure()
        removed = adventure.remove_location("tomb")

        assert removed.id == "tomb"
        assert "tomb" not in adventure.locations
        assert adventure.locations["hall"].exits == {"south": "gate"}

    def test_remove_start_location_moves_start(self):
        """Removing the start should move it to another location."""
        adventure = _make_adventure()
        adventure.remove_location("gate")
        assert adventure.start_location == "hall"

    def test_remove_last_location(self):
        """Removing the only location should clear the start."""
        adventure = Adventure(id="tiny", title="Tiny")
        adventure.add_location(Location(id="room", name="Room"))
        adventure.remove_location("room")
        assert adventure.start_location is None

    def test_remove_unknown_location(self):
        """Removing a missing location should raise ValueError."""
        with pytest.raises(ValueError):
            _make_adventure().remove_location("moon")


class TestInMemoryLocationCatalog:
    """Tests for the in-memory catalog."""

    def test_save_copies(self):
        """The catalog should store a copy of the saved adventure."""
        catalog = InMemoryLocationCatalog()
        adventure = _make_adventure()
        catalog.save_adventure(adventure)

        adventure.remove_location("tomb")

        assert "tomb" in catalog.get_adventure("crypt").locations

    def test_select_and_identifiers(self):
        """Selecting an adventure should expose its location IDs."""
        catalog = InMemoryLocationCatalog()
        catalog.save_adventure(_make_adventure())

        assert catalog.list_identifiers() == []
        catalog.select("crypt")
        assert catalog.active.id == "crypt"
        assert catalog.list_identifiers() == ["gate", "hall", "tomb"]

    def test_select_unknown(self):
        """Selecting a missing adventure should raise ValueError."""
        with pytest.raises(ValueError):
            InMemoryLocationCatalog().select("moon")

    def test_deselect(self):
        """Deselecting should clear the active adventure and its IDs."""
        catalog = InMemoryLocationCatalog()
        catalog.save_adventure(_make_adventure())
        catalog.select("crypt")
        catalog.deselect()
        assert catalog.active is None
        assert catalog.list_identifiers() == []

    def test_list_adventures(self):
        """list_adventures should return adventures in save order."""
        catalog = InMemoryLocationCatalog()
        catalog.save_adventure(_make_adventure())
        catalog.save_adventure(Adventure(id="keep", title="The Keep"))
        assert [adventure.id for adventure in catalog.list_adventures()] == ["crypt", "keep"]


class TestInMemoryAuthenticator:
    """Tests for the password authenticator."""

    @pytest.mark.asyncio
    async def test_matching_password(self):
        """The configured password should authenticate."""
        assert await InMemoryAuthenticator("secret").authenticate("secret")

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        """A different password should be rejected."""
        assert not await InMemoryAuthenticator("secret").authenticate("Secret")

    @pytest.mark.asyncio
    async def test_no_password_configured(self):
        """Without a configured password every attempt should fail."""
        assert not await InMemoryAuthenticator(None).authenticate("")
        assert not await InMemoryAuthenticator("").authenticate("")
