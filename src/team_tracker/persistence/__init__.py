"""Table-level queries used inside a unit of work."""

from . import assignments, locations, teams, visits

__all__ = ["assignments", "locations", "teams", "visits"]
