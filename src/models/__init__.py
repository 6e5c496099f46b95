"""
Content Models for the adventure console.

Adventures and their locations, as browsed and edited from the console.
"""

from src.models.adventure import Adventure, Location

__all__ = [
    "Adventure",
    "Location",
]
