"""Tracker services. Each public function is one unit of work."""

from . import assignments, locations, statistics, teams, visits

__all__ = ["assignments", "locations", "statistics", "teams", "visits"]
