from datetime import timedelta

import pytest

from team_tracker.db.models import utcnow
from team_tracker.services.assignments import assign_locations
from team_tracker.services.statistics import compute_statistics, progress_percent
from team_tracker.services.teams import create_team
from team_tracker.services.visits import record_visit


@pytest.mark.parametrize(
    "preached, total, expected",
    [(0, 0, 0), (0, 3, 0), (1, 3, 33), (2, 3, 67), (1, 8, 13), (3, 3, 100)],
)
def test_progress_percent_rounds_half_up(preached: int, total: int, expected: int) -> None:
    assert progress_percent(preached, total) == expected


def test_statistics_on_empty_database(database) -> None:
    stats = compute_statistics()

    assert stats.total_locations == 0
    assert stats.preached_locations == 0
    assert stats.active_teams == 0
    assert stats.total_visits == 0
    assert stats.progress_percent == 0


def test_active_teams_count_open_assignments_and_recent_visits(locations) -> None:
    alpha = create_team("Alpha", "Jo")
    bravo = create_team("Bravo", "Sam")
    create_team("Charlie", "Lee")

    assign_locations(alpha.id, [locations["A"]])
    record_visit(bravo.id, locations["B"])

    stats = compute_statistics()
    assert stats.total_teams == 3
    assert stats.teams_with_open_assignments == 1
    assert stats.active_teams == 2
    assert stats.total_visits == 1
    assert (stats.preached_locations, stats.progress_percent) == (1, 33)

    # once the visit falls outside the activity window only the open assignment counts
    later = compute_statistics(now=utcnow() + timedelta(days=3))
    assert later.active_teams == 1


def test_team_with_both_signals_is_counted_once(locations) -> None:
    alpha = create_team("Alpha", "Jo")
    assign_locations(alpha.id, [locations["A"], locations["B"]])
    record_visit(alpha.id, locations["A"])

    stats = compute_statistics()
    assert stats.active_teams == 1
    assert stats.teams_with_open_assignments == 1
