"""
Starter World for the adventure console.

Provides a pre-built adventure so the console has something to explore and
edit, plus the location commands that work on it.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.db.memory import InMemoryLocationCatalog
from src.engine.models import (
    PROMPT_CONFIRMATION,
    CommandDescriptor,
    CommandMode,
    CommandResult,
    ErrorCode,
    PendingConfirmation,
    SessionContext,
)
from src.models.adventure import Adventure, Location

STARTER_ADVENTURE_ID = "sandpoint"


@dataclass
class StarterWorldResult:
    """Result of creating the starter world."""

    catalog: InMemoryLocationCatalog
    adventure_id: str
    starting_location_id: str


def create_starter_world() -> StarterWorldResult:
    """
    Create the starter adventure.

    Returns a catalog holding one adventure with:
    - A cozy tavern as the starting location
    - Connected locations (market, alley, forest path, crypt entrance)
    """
    adventure = Adventure(
        id=STARTER_ADVENTURE_ID,
        title="The Sandpoint Crypt",
        description="A realm of mystery, magic, and adventure.",
    )

    adventure.add_location(
        Location(
            id="tavern",
            name="The Rusty Dragon Inn",
            description=(
                "A warm and inviting tavern with a roaring fireplace at its heart. "
                "The smell of roasted meat and fresh bread mingles with pipe smoke."
            ),
        )
    )
    adventure.add_location(
        Location(
            id="market",
            name="Sandpoint Market Square",
            description=(
                "A bustling marketplace filled with colorful stalls and merchants "
                "hawking their wares."
            ),
        )
    )
    adventure.add_location(
        Location(
            id="alley",
            name="Shadow Alley",
            description=(
                "A narrow, dimly lit passage between buildings. The shadows seem "
                "to move on their own."
            ),
        )
    )
    adventure.add_location(
        Location(
            id="forest-path",
            name="Tickwood Forest Path",
            description=(
                "A winding trail through ancient trees. Dappled sunlight filters "
                "through the canopy."
            ),
        )
    )
    adventure.add_location(
        Location(
            id="crypt-entrance",
            name="Crypt Entrance",
            description="Moss-covered stairs descend into darkness beneath a broken arch.",
        )
    )

    adventure.connect("tavern", "north", "market")
    adventure.connect("market", "south", "tavern")
    adventure.connect("market", "east", "alley")
    adventure.connect("alley", "west", "market")
    adventure.connect("market", "north", "forest-path")
    adventure.connect("forest-path", "south", "market")
    adventure.connect("forest-path", "down", "crypt-entrance")
    adventure.connect("crypt-entrance", "up", "forest-path")

    catalog = InMemoryLocationCatalog()
    catalog.save_adventure(adventure)

    return StarterWorldResult(
        catalog=catalog,
        adventure_id=adventure.id,
        starting_location_id="tavern",
    )


def _describe(location: Location) -> list[str]:
    lines = [location.name, "=" * len(location.name), ""]
    if location.description:
        lines.append(location.description)
        lines.append("")
    if location.exits:
        lines.append(f"Exits: {', '.join(location.exits)}")
    else:
        lines.append("There are no obvious exits.")
    return lines


class LocationCommands:
    """
    Commands for exploring and editing adventure locations.

    Play commands use the adventure being played; admin commands use the
    adventure open for editing.
    """

    def __init__(self, catalog: InMemoryLocationCatalog, adventure_id: str) -> None:
        self.catalog = catalog
        self.adventure_id = adventure_id

    def descriptors(self) -> list[CommandDescriptor]:
        """Get descriptors for all location commands."""
        return [
            CommandDescriptor(
                name="look",
                aliases=("l",),
                description="Look around the current location",
                syntax="look",
                examples=("look", "l"),
                see_also=("move",),
                handler=self._cmd_look,
            ),
            CommandDescriptor(
                name="move",
                aliases=("go",),
                mode=CommandMode.PLAYER,
                description="Move in a direction",
                syntax="move <direction>",
                examples=("move north", "go south"),
                see_also=("look",),
                handler=self._cmd_move,
            ),
            CommandDescriptor(
                name="select adventure",
                aliases=("select-adventure",),
                mode=CommandMode.ADMIN,
                description="Open an adventure for editing",
                syntax="select adventure <adventure-id>",
                examples=(f"select adventure {STARTER_ADVENTURE_ID}",),
                handler=self._cmd_select_adventure,
            ),
            CommandDescriptor(
                name="deselect adventure",
                aliases=("deselect-adventure",),
                mode=CommandMode.ADMIN,
                description="Close the adventure being edited",
                syntax="deselect adventure",
                examples=("deselect adventure",),
                handler=self._cmd_deselect_adventure,
            ),
            CommandDescriptor(
                name="show locations",
                aliases=("show-locations",),
                mode=CommandMode.ADMIN,
                description="List locations of the adventure being edited",
                syntax="show locations",
                examples=("show locations",),
                handler=self._cmd_show_locations,
            ),
            CommandDescriptor(
                name="edit location",
                aliases=("edit-location",),
                mode=CommandMode.ADMIN,
                description="Show a location of the adventure being edited",
                syntax="edit location <location-id>",
                examples=("edit location tavern",),
                see_also=("show locations",),
                handler=self._cmd_edit_location,
            ),
            CommandDescriptor(
                name="remove connection",
                aliases=("remove-connection",),
                mode=CommandMode.ADMIN,
                description="Remove an exit from a location",
                syntax="remove connection <location-id> <direction>",
                examples=("remove connection market east",),
                handler=self._cmd_remove_connection,
            ),
            CommandDescriptor(
                name="delete location",
                aliases=("del-location", "delete-location"),
                mode=CommandMode.ADMIN,
                description="Delete a location from the adventure being edited",
                syntax="delete location <location-id>",
                examples=("delete location alley",),
                handler=self._cmd_delete_location,
            ),
        ]

    # --- Play ---

    def _play_adventure(self) -> Adventure:
        adventure = self.catalog.get_adventure(self.adventure_id)
        if adventure is None:
            raise ValueError(f"Adventure '{self.adventure_id}' does not exist")
        return adventure

    def _cmd_look(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle look command."""
        adventure = self._play_adventure()
        location = adventure.locations.get(context.current_location or "")
        if location is None:
            return CommandResult.ok("You're nowhere. Something is wrong.")
        return CommandResult.ok(*_describe(location))

    def _cmd_move(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle move command."""
        if not args:
            return CommandResult.fail(
                ErrorCode.MISSING_ARGUMENT,
                "Direction required",
                "Usage: move <direction>",
            )

        adventure = self._play_adventure()
        location = adventure.locations.get(context.current_location or "")
        if location is None:
            return CommandResult.ok("You're nowhere. Something is wrong.")

        direction = args[0].lower()
        destination = adventure.locations.get(location.exits.get(direction, ""))
        if destination is None:
            exits = ", ".join(location.exits) or "none"
            return CommandResult.fail(
                ErrorCode.NOT_FOUND,
                f"You can't go {direction} from here.",
                f"Exits: {exits}",
            )

        context.current_location = destination.id
        return CommandResult.ok(*_describe(destination))

    # --- Editing ---

    def _editing(self, context: SessionContext) -> Adventure | None:
        adventure = self.catalog.active
        if adventure is None or adventure.id != context.editing_adventure:
            return None
        return adventure

    @staticmethod
    def _no_adventure() -> CommandResult:
        return CommandResult.fail(
            ErrorCode.NO_ACTIVE_CONTEXT,
            "No adventure selected",
            'Use "select adventure <id>" to select an adventure for editing.',
        )

    @staticmethod
    def _missing_location(command: str) -> CommandResult:
        return CommandResult.fail(
            ErrorCode.MISSING_ARGUMENT,
            "Location ID required",
            f'Usage: {command} <location-id>. Use "show locations" to see available locations.',
        )

    @staticmethod
    def _unknown_location(location_id: str) -> CommandResult:
        return CommandResult.fail(
            ErrorCode.NOT_FOUND,
            f"Location not found: {location_id}",
            'Use "show locations" to see available locations.',
        )

    def _cmd_select_adventure(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle select adventure command."""
        if not args:
            ids = ", ".join(adventure.id for adventure in self.catalog.list_adventures())
            return CommandResult.fail(
                ErrorCode.MISSING_ARGUMENT,
                "Adventure ID required",
                f"Available adventures: {ids or 'none'}",
            )

        if self.catalog.get_adventure(args[0]) is None:
            return CommandResult.fail(
                ErrorCode.NOT_FOUND,
                f"Adventure not found: {args[0]}",
            )

        adventure = self.catalog.select(args[0])
        context.editing_adventure = adventure.id
        return CommandResult.ok(f'Editing "{adventure.title}" ({adventure.id}).')

    def _cmd_deselect_adventure(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle deselect adventure command."""
        if context.editing_adventure is None:
            return self._no_adventure()
        self.catalog.deselect()
        context.editing_adventure = None
        return CommandResult.ok("Adventure closed.")

    def _cmd_show_locations(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle show locations command."""
        adventure = self._editing(context)
        if adventure is None:
            return self._no_adventure()

        if not adventure.locations:
            return CommandResult.ok("No locations yet.")

        width = max(len(location_id) for location_id in adventure.locations)
        lines = [f"Locations in {adventure.title}:", ""]
        for location in adventure.locations.values():
            marker = " (start)" if location.id == adventure.start_location else ""
            lines.append(f"  {location.id.ljust(width + 2)}{location.name}{marker}")
        return CommandResult.ok(*lines)

    def _cmd_edit_location(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle edit location command."""
        if not args:
            return self._missing_location("edit location")

        adventure = self._editing(context)
        if adventure is None:
            return self._no_adventure()

        location = adventure.locations.get(args[0])
        if location is None:
            return self._unknown_location(args[0])

        lines = [f"ID: {location.id}", *_describe(location)]
        for direction, target in location.exits.items():
            lines.append(f"  {direction} -> {target}")
        return CommandResult.ok(*lines)

    def _cmd_remove_connection(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle remove connection command."""
        if len(args) < 2:
            return CommandResult.fail(
                ErrorCode.MISSING_ARGUMENT,
                "Location ID and direction required",
                "Usage: remove connection <location-id> <direction>",
            )

        adventure = self._editing(context)
        if adventure is None:
            return self._no_adventure()

        location = adventure.locations.get(args[0])
        if location is None:
            return self._unknown_location(args[0])

        direction = args[1].lower()
        if direction not in location.exits:
            return CommandResult.fail(
                ErrorCode.NOT_FOUND,
                f"No exit {direction} from {location.id}",
                f"Exits: {', '.join(location.exits) or 'none'}",
            )

        target = location.exits.pop(direction)
        return CommandResult.ok(f"Removed connection {location.id} --{direction}--> {target}.")

    def _cmd_delete_location(self, args: list[str], context: SessionContext) -> CommandResult:
        """Handle delete location command - asks for confirmation first."""
        if not args:
            return self._missing_location("delete location")

        adventure = self._editing(context)
        if adventure is None:
            return self._no_adventure()

        location_id = args[0]
        location = adventure.locations.get(location_id)
        if location is None:
            return self._unknown_location(location_id)

        def delete(_context: SessionContext) -> CommandResult:
            current = self.catalog.get_adventure(adventure.id)
            if current is None or location_id not in current.locations:
                return self._unknown_location(location_id)
            current.remove_location(location_id)
            return CommandResult.ok(f'Deleted location "{location.name}" ({location_id}).')

        prompt = (
            f'Delete location "{location.name}" ({location_id})? '
            "This will also remove all connections to this location."
        )
        context.pending_confirmation = PendingConfirmation(prompt=prompt, action=delete)
        return CommandResult.ok(PROMPT_CONFIRMATION, prompt)
