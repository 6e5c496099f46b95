"""
Tests for the starter world content and location commands.
"""

from __future__ import annotations

import pytest

from src.content import (
    STARTER_ADVENTURE_ID,
    LocationCommands,
    StarterWorldResult,
    create_starter_world,
)
from src.db import InMemoryAuthenticator
from src.engine import CommandEngine, ErrorCode, GameMode, SessionContext
from src.engine.models import PROMPT_CONFIRMATION


@pytest.fixture
def world() -> StarterWorldResult:
    """Create the starter world."""
    return create_starter_world()


@pytest.fixture
def engine(world: StarterWorldResult) -> CommandEngine:
    """Create an engine with the location commands."""
    return CommandEngine(
        LocationCommands(world.catalog, world.adventure_id).descriptors(),
        identifier_source=world.catalog,
        authenticator=InMemoryAuthenticator("secret"),
    )


@pytest.fixture
def player(world: StarterWorldResult) -> SessionContext:
    """A player standing at the starting location."""
    return SessionContext(current_location=world.starting_location_id)


@pytest.fixture
def editor(world: StarterWorldResult) -> SessionContext:
    """An authenticated admin with the starter adventure open."""
    world.catalog.select(world.adventure_id)
    return SessionContext(
        mode=GameMode.ADMIN,
        is_authenticated=True,
        current_location=world.starting_location_id,
        editing_adventure=world.adventure_id,
    )


class TestStarterWorld:
    """Tests for starter world creation."""

    def test_create_starter_world_returns_result(self, world: StarterWorldResult):
        """create_starter_world should return a complete result."""
        assert world.adventure_id == STARTER_ADVENTURE_ID
        assert world.starting_location_id == "tavern"
        assert world.catalog.get_adventure(world.adventure_id) is not None

    def test_creates_multiple_locations(self, world: StarterWorldResult):
        """Should create multiple connected locations."""
        adventure = world.catalog.get_adventure(world.adventure_id)

        assert list(adventure.locations) == [
            "tavern",
            "market",
            "alley",
            "forest-path",
            "crypt-entrance",
        ]
        assert adventure.start_location == "tavern"

    def test_exits_lead_somewhere(self, world: StarterWorldResult):
        """Every exit should point at an existing location."""
        adventure = world.catalog.get_adventure(world.adventure_id)

        for location in adventure.locations.values():
            for target in location.exits.values():
                assert target in adventure.locations

    def test_no_adventure_open_initially(self, world: StarterWorldResult):
        """Nothing is open for editing until selected."""
        assert world.catalog.active is None
        assert world.catalog.list_identifiers() == []


class TestPlayCommands:
    """Tests for look and move."""

    @pytest.mark.asyncio
    async def test_look(self, engine: CommandEngine, player: SessionContext):
        """Look should describe the current location and its exits."""
        result = await engine.submit("look", player)

        assert result.output[0] == "The Rusty Dragon Inn"
        assert result.output[1] == "=" * len("The Rusty Dragon Inn")
        assert result.output[-1] == "Exits: north"

    @pytest.mark.asyncio
    async def test_move(self, engine: CommandEngine, player: SessionContext):
        """Move should follow an exit and describe the destination."""
        result = await engine.submit("go north", player)

        assert result.success
        assert player.current_location == "market"
        assert result.output[0] == "Sandpoint Market Square"

    @pytest.mark.asyncio
    async def test_move_is_case_insensitive(self, engine: CommandEngine, player: SessionContext):
        """Directions should match regardless of case."""
        await engine.submit("MOVE NORTH", player)
        assert player.current_location == "market"

    @pytest.mark.asyncio
    async def test_move_without_direction(self, engine: CommandEngine, player: SessionContext):
        """Move without a direction should fail with usage."""
        result = await engine.submit("move", player)

        assert result.error.code == ErrorCode.MISSING_ARGUMENT
        assert player.current_location == "tavern"

    @pytest.mark.asyncio
    async def test_move_blocked(self, engine: CommandEngine, player: SessionContext):
        """Move in a direction without an exit should not move the player."""
        result = await engine.submit("move west", player)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "You can't go west from here."
        assert result.error.suggestion == "Exits: north"
        assert player.current_location == "tavern"

    @pytest.mark.asyncio
    async def test_look_nowhere(self, engine: CommandEngine):
        """Look from an unknown location should not fail."""
        result = await engine.submit("look", SessionContext(current_location="void"))
        assert result.success
        assert result.output == ["You're nowhere. Something is wrong."]


class TestAdventureSelection:
    """Tests for select adventure and deselect adventure."""

    @pytest.mark.asyncio
    async def test_select(self, engine: CommandEngine, world: StarterWorldResult):
        """Selecting should open the adventure for editing."""
        context = SessionContext(mode=GameMode.ADMIN, is_authenticated=True)
        result = await engine.submit(f"select adventure {world.adventure_id}", context)

        assert result.output == ['Editing "The Sandpoint Crypt" (sandpoint).']
        assert context.editing_adventure == world.adventure_id
        assert world.catalog.active.id == world.adventure_id

    @pytest.mark.asyncio
    async def test_select_without_id(self, engine: CommandEngine, editor: SessionContext):
        """Select without an ID lists the available adventures."""
        result = await engine.submit("select adventure", editor)

        assert result.error.code == ErrorCode.MISSING_ARGUMENT
        assert result.error.suggestion == f"Available adventures: {STARTER_ADVENTURE_ID}"

    @pytest.mark.asyncio
    async def test_select_unknown(self, engine: CommandEngine, editor: SessionContext):
        """Selecting a missing adventure should fail."""
        result = await engine.submit("select adventure atlantis", editor)
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_deselect(
        self, engine: CommandEngine, editor: SessionContext, world: StarterWorldResult
    ):
        """Deselecting should close the adventure."""
        result = await engine.submit("deselect adventure", editor)

        assert result.output == ["Adventure closed."]
        assert editor.editing_adventure is None
        assert world.catalog.active is None

    @pytest.mark.asyncio
    async def test_deselect_when_nothing_open(self, engine: CommandEngine):
        """Deselecting with nothing open should report it."""
        context = SessionContext(mode=GameMode.ADMIN, is_authenticated=True)
        result = await engine.submit("deselect adventure", context)
        assert result.error.code == ErrorCode.NO_ACTIVE_CONTEXT


class TestEditingCommands:
    """Tests for the admin location commands."""

    @pytest.mark.asyncio
    async def test_show_locations(self, engine: CommandEngine, editor: SessionContext):
        """Show locations should list every location and mark the start."""
        result = await engine.submit("show locations", editor)

        assert result.output[0] == "Locations in The Sandpoint Crypt:"
        assert any("tavern" in line and "(start)" in line for line in result.output)
        assert len(result.output) == 2 + 5

    @pytest.mark.asyncio
    async def test_edit_location(self, engine: CommandEngine, editor: SessionContext):
        """Edit location should show the location's details."""
        result = await engine.submit("edit location market", editor)

        assert result.output[0] == "ID: market"
        assert "  east -> alley" in result.output

    @pytest.mark.asyncio
    async def test_edit_location_without_id(self, engine: CommandEngine, editor: SessionContext):
        """Edit location without an ID should fail with usage."""
        result = await engine.submit("edit location", editor)
        assert result.error.code == ErrorCode.MISSING_ARGUMENT

    @pytest.mark.asyncio
    async def test_edit_unknown_location(self, engine: CommandEngine, editor: SessionContext):
        """Edit location with a bad ID should fail."""
        result = await engine.submit("edit location moon", editor)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert result.error.message == "Location not found: moon"

    @pytest.mark.asyncio
    async def test_editing_requires_open_adventure(self, engine: CommandEngine):
        """Editing commands need an adventure to be selected."""
        context = SessionContext(mode=GameMode.ADMIN, is_authenticated=True)
        result = await engine.submit("edit location tavern", context)

        assert result.error.code == ErrorCode.NO_ACTIVE_CONTEXT
        assert result.error.message == "No adventure selected"

    @pytest.mark.asyncio
    async def test_remove_connection(
        self, engine: CommandEngine, editor: SessionContext, world: StarterWorldResult
    ):
        """Remove connection should drop one exit."""
        result = await engine.submit("remove connection market east", editor)

        assert result.output == ["Removed connection market --east--> alley."]
        market = world.catalog.get_adventure(world.adventure_id).locations["market"]
        assert "east" not in market.exits

    @pytest.mark.asyncio
    async def test_remove_missing_connection(self, engine: CommandEngine, editor: SessionContext):
        """Removing an exit that does not exist should fail."""
        result = await engine.submit("remove connection tavern west", editor)
        assert result.error.code == ErrorCode.NOT_FOUND

    @pytest.mark.asyncio
    async def test_remove_connection_needs_direction(
        self, engine: CommandEngine, editor: SessionContext
    ):
        """Remove connection takes a location and a direction."""
        result = await engine.submit("remove connection market", editor)
        assert result.error.code == ErrorCode.MISSING_ARGUMENT


class TestDeleteLocation:
    """Tests for delete location and its confirmation."""

    @pytest.mark.asyncio
    async def test_asks_first(
        self, engine: CommandEngine, editor: SessionContext, world: StarterWorldResult
    ):
        """Delete should only ask for confirmation."""
        result = await engine.submit("delete location alley", editor)

        assert result.output[0] == PROMPT_CONFIRMATION
        assert editor.pending_confirmation is not None
        assert "alley" in world.catalog.get_adventure(world.adventure_id).locations

    @pytest.mark.asyncio
    async def test_confirmed(
        self, engine: CommandEngine, editor: SessionContext, world: StarterWorldResult
    ):
        """Confirming should delete the location and exits into it."""
        await engine.submit("del-location alley", editor)
        result = await engine.submit("yes", editor)

        adventure = world.catalog.get_adventure(world.adventure_id)
        assert result.output == ['Deleted location "Shadow Alley" (alley).']
        assert "alley" not in adventure.locations
        assert "east" not in adventure.locations["market"].exits
        assert "alley" not in world.catalog.list_identifiers()

    @pytest.mark.asyncio
    async def test_cancelled(
        self, engine: CommandEngine, editor: SessionContext, world: StarterWorldResult
    ):
        """Declining should leave the location alone."""
        await engine.submit("delete location alley", editor)
        result = await engine.submit("n", editor)

        assert result.output == ["Cancelled."]
        assert "alley" in world.catalog.get_adventure(world.adventure_id).locations

    @pytest.mark.asyncio
    async def test_unknown_location(self, engine: CommandEngine, editor: SessionContext):
        """Deleting a missing location fails without asking."""
        result = await engine.submit("delete location moon", editor)

        assert result.error.code == ErrorCode.NOT_FOUND
        assert editor.pending_confirmation is None
