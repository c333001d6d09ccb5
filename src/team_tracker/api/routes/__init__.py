"""Route group exports."""

from . import assignments, health, locations, statistics, teams, visits

__all__ = ["assignments", "health", "locations", "statistics", "teams", "visits"]
