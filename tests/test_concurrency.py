from concurrent.futures import ThreadPoolExecutor

import pytest

from team_tracker.config import settings
from team_tracker.db import session as db_session
from team_tracker.errors import StorageTimeout
from team_tracker.services.assignments import (
    assign_locations,
    list_team_assignments,
    set_assignment_completion,
)
from team_tracker.services.locations import get_location, list_location_visits
from team_tracker.services.teams import create_team
from team_tracker.services.visits import record_visit, visit_history


def test_check_in_and_completion_update_from_different_teams(locations) -> None:
    alpha = create_team("Alpha", "Jo")
    bravo = create_team("Bravo", "Sam")
    assign_locations(alpha.id, [locations["B"]])
    [bravo_assignment] = assign_locations(bravo.id, [locations["C"]])

    with ThreadPoolExecutor(max_workers=2) as pool:
        visit_future = pool.submit(record_visit, alpha.id, locations["B"])
        completion_future = pool.submit(set_assignment_completion, bravo.id, bravo_assignment.id, True)
        visit = visit_future.result()
        completion = completion_future.result()

    [alpha_assignment] = list_team_assignments(alpha.id)
    assert alpha_assignment.is_completed is True
    assert alpha_assignment.completed_date == visit.visit_date
    assert completion.is_completed is True
    assert get_location(locations["B"]).is_preached is True
    assert get_location(locations["C"]).is_preached is False


def test_many_check_ins_at_one_location_are_all_recorded(locations) -> None:
    teams = [create_team(f"Team {index}", "Lead") for index in range(4)]
    for team in teams:
        assign_locations(team.id, [locations["A"]])

    jobs = [team.id for team in teams for _ in range(3)]
    with ThreadPoolExecutor(max_workers=6) as pool:
        results = list(pool.map(lambda team_id: record_visit(team_id, locations["A"]), jobs))

    assert len({visit.id for visit in results}) == len(jobs)
    assert len(list_location_visits(locations["A"])) == len(jobs)
    assert len(visit_history()) == len(jobs)

    location_a = get_location(locations["A"])
    assert location_a.is_preached is True
    assert location_a.last_visited_at == max(visit.visit_date for visit in results)
    for team in teams:
        assert all(a.is_completed for a in list_team_assignments(team.id))


def test_write_waits_are_bounded(locations, monkeypatch: pytest.MonkeyPatch) -> None:
    alpha = create_team("Alpha", "Jo")
    monkeypatch.setattr(settings, "lock_timeout_seconds", 0.1)

    assert db_session._write_gate.acquire(timeout=1)
    try:
        with pytest.raises(StorageTimeout):
            record_visit(alpha.id, locations["A"])
    finally:
        db_session._write_gate.release()

    assert visit_history() == []
    record_visit(alpha.id, locations["A"])
    assert len(visit_history()) == 1
