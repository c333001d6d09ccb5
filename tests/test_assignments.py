from datetime import timedelta

import pytest

from team_tracker.db.models import AssignmentRow, utcnow
from team_tracker.db.session import unit_of_work
from team_tracker.errors import Conflict, InvalidArgument, NotFound
from team_tracker.services.assignments import (
    assign_locations,
    list_planned_visits,
    list_team_assignments,
    plan_visits,
    set_assignment_completion,
)
from team_tracker.services.locations import list_available_locations
from team_tracker.services.teams import create_team


@pytest.fixture
def alpha(locations):
    return create_team("Alpha", "Jo")


def _open_pairs(team_id: int) -> list[int]:
    return sorted(a.location_id for a in list_team_assignments(team_id) if not a.is_completed)


def test_assign_twice_with_overlap_creates_no_duplicates(alpha, locations) -> None:
    first = assign_locations(alpha.id, [locations["A"], locations["B"]])
    second = assign_locations(alpha.id, [locations["B"], locations["C"]])

    assert [a.location_name for a in first] == ["A", "B"]
    assert [a.location_name for a in second] == ["C"]
    assert _open_pairs(alpha.id) == sorted(locations.values())


def test_assign_ignores_repeated_ids_in_one_request(alpha, locations) -> None:
    created = assign_locations(alpha.id, [locations["A"], locations["A"], locations["A"]])

    assert len(created) == 1
    assert len(list_team_assignments(alpha.id)) == 1


def test_list_for_team_is_oldest_first(alpha, locations) -> None:
    assign_locations(alpha.id, [locations["C"]])
    assign_locations(alpha.id, [locations["A"]])

    assert [a.location_name for a in list_team_assignments(alpha.id)] == ["C", "A"]


def test_assign_validates_team_and_locations(alpha, locations) -> None:
    with pytest.raises(NotFound):
        assign_locations(alpha.id + 1, [locations["A"]])

    with pytest.raises(NotFound, match="999"):
        assign_locations(alpha.id, [locations["A"], 999])
    assert list_team_assignments(alpha.id) == []

    with pytest.raises(InvalidArgument):
        assign_locations(alpha.id, [])


def test_set_completion_toggles_and_stamps_date(alpha, locations) -> None:
    [assignment] = assign_locations(alpha.id, [locations["A"]])
    assert assignment.is_completed is False
    assert assignment.completed_date is None

    completed = set_assignment_completion(alpha.id, assignment.id, True)
    assert completed.is_completed is True
    assert completed.completed_date is not None

    # setting the same state again keeps the original stamp
    again = set_assignment_completion(alpha.id, assignment.id, True)
    assert again.completed_date == completed.completed_date

    reopened = set_assignment_completion(alpha.id, assignment.id, False)
    assert reopened.is_completed is False
    assert reopened.completed_date is None


def test_set_completion_requires_matching_team(alpha, locations) -> None:
    bravo = create_team("Bravo", "Sam")
    [assignment] = assign_locations(alpha.id, [locations["A"]])

    with pytest.raises(NotFound):
        set_assignment_completion(bravo.id, assignment.id, True)
    with pytest.raises(NotFound):
        set_assignment_completion(alpha.id, assignment.id + 50, True)


def test_assignment_completed_today_is_not_reopened_by_assign(alpha, locations) -> None:
    [assignment] = assign_locations(alpha.id, [locations["A"]])
    set_assignment_completion(alpha.id, assignment.id, True)

    assert assign_locations(alpha.id, [locations["A"]]) == []
    assert len(list_team_assignments(alpha.id)) == 1


def test_assignment_completed_earlier_gets_a_fresh_open_row(alpha, locations) -> None:
    [old] = assign_locations(alpha.id, [locations["A"]])
    with unit_of_work(write=True) as session:
        row = session.get(AssignmentRow, old.id)
        row.is_completed = True
        row.completed_date = utcnow() - timedelta(days=2)

    [fresh] = assign_locations(alpha.id, [locations["A"]])
    assert fresh.id != old.id
    assert _open_pairs(alpha.id) == [locations["A"]]

    # reopening the old one would make two open rows for the same pair
    with pytest.raises(Conflict):
        set_assignment_completion(alpha.id, old.id, False)


def test_available_locations_exclude_open_assignments_of_the_team(alpha, locations) -> None:
    bravo = create_team("Bravo", "Sam")
    [assignment] = assign_locations(alpha.id, [locations["A"]])

    assert [l.name for l in list_available_locations(alpha.id)] == ["B", "C"]
    assert [l.name for l in list_available_locations(bravo.id)] == ["A", "B", "C"]
    assert [l.name for l in list_available_locations()] == ["B", "C"]

    set_assignment_completion(alpha.id, assignment.id, True)
    assert [l.name for l in list_available_locations(alpha.id)] == ["A", "B", "C"]

    with pytest.raises(NotFound):
        list_available_locations(alpha.id + 100)


def test_plan_visits_for_a_date(alpha, locations) -> None:
    bravo = create_team("Bravo", "Sam")
    work_day = utcnow().date() + timedelta(days=1)

    planned = plan_visits(alpha.id, [locations["B"], locations["A"]], work_day)
    assert sorted(p.location_name for p in planned) == ["A", "B"]
    assert all(p.status == "planned" for p in planned)

    assert plan_visits(alpha.id, [locations["A"]], work_day) == []

    with pytest.raises(Conflict):
        plan_visits(bravo.id, [locations["C"], locations["A"]], work_day)
    assert list_planned_visits(bravo.id, today=utcnow().date()) == []

    # another day is free
    assert len(plan_visits(bravo.id, [locations["A"]], work_day + timedelta(days=1))) == 1

    upcoming = list_planned_visits(alpha.id, today=utcnow().date())
    assert [p.location_name for p in upcoming] == ["A", "B"]
    assert list_planned_visits(alpha.id, today=work_day + timedelta(days=1)) == []
