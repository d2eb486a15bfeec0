# blueprints/transfer/services.py
from __future__ import annotations
import logging
from typing import Any, Dict

from sqlalchemy import delete
from sqlalchemy.orm import Session

from blueprints.planner.services import get_dashboard_data, unit_of_work
from models import Assignment, Challenge, Client, Person, Project
from .schemas import Snapshot

log = logging.getLogger(__name__)

# children before parents
_WIPE_ORDER = (Assignment, Challenge, Project, Client, Person)

def export_state(session: Session) -> Dict[str, Any]:
    return get_dashboard_data(session)

def import_state(session: Session, snapshot: Snapshot | Dict[str, Any]) -> Dict[str, int]:
    """Replace the whole store with ``snapshot``.

    Rows keep their ids and assignment quantities are taken as they are;
    the workload engine is not run. Any failure leaves the previous data
    untouched.
    """
    data = snapshot if isinstance(snapshot, Snapshot) else Snapshot.model_validate(snapshot)
    with unit_of_work(session):
        for model in _WIPE_ORDER:
            session.execute(delete(model).execution_options(synchronize_session=False))
        # wiped rows may still sit in the identity map under the ids we are about to reuse
        session.expunge_all()

        session.add_all(Person(**p.model_dump()) for p in data.people)
        session.add_all(Client(**c.model_dump()) for c in data.clients)
        session.flush()
        session.add_all(Project(**p.model_dump()) for p in data.projects)
        session.flush()
        session.add_all(Challenge(**ch.model_dump()) for ch in data.challenges)
        session.flush()
        session.add_all(Assignment(**a.model_dump()) for a in data.assignments)
        session.flush()

    counts = {
        "people": len(data.people),
        "clients": len(data.clients),
        "projects": len(data.projects),
        "challenges": len(data.challenges),
        "assignments": len(data.assignments),
    }
    log.info("store replaced from snapshot: %s", counts)
    return counts
