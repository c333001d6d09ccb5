"""Visit ledger: check-ins and their side effects."""

from __future__ import annotations

import logging

from ..db.models import utcnow
from ..db.session import unit_of_work
from ..models.domain import Visit, VisitHistoryEntry
from ..persistence.assignments import find_open_assignment, mark_completed
from ..persistence.locations import refresh_location_status, require_location_row
from ..persistence.teams import require_team_row
from ..persistence.visits import append_visit, list_history, to_visit

logger = logging.getLogger(__name__)


def record_visit(
    team_id: int,
    location_id: int,
    notes: str | None = None,
    is_preached: bool = True,
) -> Visit:
    """Append a check-in and apply its effects in one transaction.

    The visit is appended, the team's open assignment for the location (if
    any) is completed at the visit's timestamp, and the location's derived
    ``is_preached``/``last_visited_at`` are recomputed from the ledger. Either
    all three happen or none do.
    """
    clean_notes = (notes or "").strip() or None

    with unit_of_work(write=True) as session:
        require_team_row(session, team_id)
        location = require_location_row(session, location_id, for_update=True)

        visit = append_visit(
            session,
            team_id=team_id,
            location_id=location_id,
            visit_date=utcnow(),
            is_preached=is_preached,
            notes=clean_notes,
        )

        assignment = find_open_assignment(session, team_id, location_id)
        if assignment is not None:
            mark_completed(assignment, visit.visit_date)

        refresh_location_status(session, location)
        session.flush()
        result = to_visit(visit)
        completed_assignment = assignment.id if assignment is not None else None

    logger.info(
        "Recorded visit %s: team %s at location %s (preached=%s, completed assignment=%s)",
        result.id,
        team_id,
        location_id,
        result.is_preached,
        completed_assignment,
    )
    return result


def visit_history() -> list[VisitHistoryEntry]:
    """All visits, newest first, labelled with current team and location names."""
    with unit_of_work() as session:
        return list_history(session)
