"""
Adventure content models.

The minimum the console needs to browse and edit an adventure's locations.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Location(BaseModel):
    """A place in an adventure."""

    id: str = Field(description="Stable identifier, e.g. 'entrance'")
    name: str
    description: str = ""
    exits: dict[str, str] = Field(
        default_factory=dict, description="Direction -> destination location id"
    )


class Adventure(BaseModel):
    """A set of connected locations."""

    id: str
    title: str
    description: str = ""
    start_location: str | None = None
    locations: dict[str, Location] = Field(default_factory=dict)

    def add_location(self, location: Location) -> None:
        """Insert or replace a location."""
        self.locations[location.id] = location
        if self.start_location is None:
            self.start_location = location.id

    def connect(self, from_id: str, direction: str, to_id: str) -> None:
        """Add a one-way exit between two existing locations."""
        if from_id not in self.locations:
            raise ValueError(f"Location '{from_id}' does not exist")
        if to_id not in self.locations:
            raise ValueError(f"Location '{to_id}' does not exist")
        self.locations[from_id].exits[direction.lower()] = to_id

    def remove_location(self, location_id: str) -> Location:
        """Delete a location and every exit leading to it."""
        if location_id not in self.locations:
            raise ValueError(f"Location '{location_id}' does not exist")

        removed = self.locations.pop(location_id)
        for location in self.locations.values():
            location.exits = {
                direction: target
                for direction, target in location.exits.items()
                if target != location_id
            }
        if self.start_location == location_id:
            self.start_location = next(iter(self.locations), None)
        return removed
