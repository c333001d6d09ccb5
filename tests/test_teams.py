import pytest

from team_tracker.errors import Conflict, InvalidArgument, NotFound
from team_tracker.services.assignments import (
    assign_locations,
    list_team_assignments,
    set_assignment_completion,
)
from team_tracker.services.teams import (
    check_team_delete,
    create_team,
    delete_team,
    get_team,
    list_teams,
    update_team,
)
from team_tracker.services.visits import record_visit, visit_history


def test_create_team_trims_fields_and_lists_in_creation_order(database) -> None:
    alpha = create_team("  Alpha ", " Jo ")
    bravo = create_team("Bravo", "Sam")

    assert (alpha.name, alpha.leader) == ("Alpha", "Jo")
    assert alpha.current_location_id is None
    assert [team.id for team in list_teams()] == [alpha.id, bravo.id]


@pytest.mark.parametrize("name, leader", [("", "Jo"), ("   ", "Jo"), ("Alpha", ""), ("Alpha", " \t")])
def test_create_team_requires_name_and_leader(database, name: str, leader: str) -> None:
    with pytest.raises(InvalidArgument):
        create_team(name, leader)
    assert list_teams() == []


def test_update_team(database) -> None:
    team = create_team("Alpha", "Jo")

    updated = update_team(team.id, "Alpha North", "Kim")

    assert (updated.name, updated.leader) == ("Alpha North", "Kim")
    assert get_team(team.id).name == "Alpha North"

    with pytest.raises(NotFound):
        update_team(team.id + 100, "Ghost", "Nobody")
    with pytest.raises(InvalidArgument):
        update_team(team.id, "", "Kim")


def test_delete_team_with_open_assignments_is_rejected(locations) -> None:
    team = create_team("Alpha", "Jo")
    assign_locations(team.id, [locations["A"]])

    check = check_team_delete(team.id)
    assert (check.can_delete, check.open_assignments) == (False, 1)

    with pytest.raises(Conflict):
        delete_team(team.id)

    assert [t.id for t in list_teams()] == [team.id]
    assert len(list_team_assignments(team.id)) == 1


def test_delete_team_cascades_closed_assignments_and_keeps_visits(locations) -> None:
    team = create_team("Alpha", "Jo")
    assign_locations(team.id, [locations["A"]])
    record_visit(team.id, locations["A"], notes="door closed")

    assert check_team_delete(team.id).can_delete is True
    delete_team(team.id)

    assert list_teams() == []
    with pytest.raises(NotFound):
        list_team_assignments(team.id)
    with pytest.raises(NotFound):
        delete_team(team.id)

    history = visit_history()
    assert len(history) == 1
    assert history[0].team_name == f"Team #{team.id} (deleted)"
    assert history[0].location_name == "A"


def test_current_location_prefers_latest_open_assignment_then_latest_visit(locations) -> None:
    team = create_team("Alpha", "Jo")
    assign_locations(team.id, [locations["A"]])
    [assignment_b] = assign_locations(team.id, [locations["B"]])

    assert get_team(team.id).current_location_id == locations["B"]

    set_assignment_completion(team.id, assignment_b.id, True)
    assert get_team(team.id).current_location_id == locations["A"]

    record_visit(team.id, locations["A"])
    record_visit(team.id, locations["C"])
    # no open assignments left: fall back to the most recent visit
    assert get_team(team.id).current_location_id == locations["C"]
    assert list_teams()[0].current_location_id == locations["C"]
