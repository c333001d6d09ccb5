"""Statistics aggregator."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

from ..config import settings
from ..db.models import utcnow
from ..db.session import unit_of_work
from ..models.domain import Statistics
from ..persistence.assignments import team_ids_with_open_assignments
from ..persistence.locations import count_locations, count_preached_locations
from ..persistence.teams import count_teams, team_ids_with_visits_since
from ..persistence.visits import count_visits


def progress_percent(preached: int, total: int) -> int:
    """Whole-number share of preached locations; halves round up, an empty catalog is 0%."""
    if total <= 0:
        return 0
    return int(math.floor(preached * 100 / total + 0.5))


def compute_statistics(now: datetime | None = None) -> Statistics:
    moment = now or utcnow()
    since = moment - timedelta(hours=settings.active_window_hours)

    with unit_of_work() as session:
        total_locations = count_locations(session)
        preached_locations = count_preached_locations(session)
        total_teams = count_teams(session)
        open_team_ids = team_ids_with_open_assignments(session)
        recent_team_ids = team_ids_with_visits_since(session, since)
        total_visits = count_visits(session)

    return Statistics(
        total_locations=total_locations,
        preached_locations=preached_locations,
        active_teams=len(open_team_ids | recent_team_ids),
        total_teams=total_teams,
        teams_with_open_assignments=len(open_team_ids),
        total_visits=total_visits,
        progress_percent=progress_percent(preached_locations, total_locations),
    )
