"""Terminal front end for the adventure console."""
