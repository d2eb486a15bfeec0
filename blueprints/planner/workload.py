# blueprints/planner/workload.py
"""
Workload redistribution.

Every person's assignments split 100% of their capacity. The split is an
integer apportionment: ``divmod(100, n)`` gives the base share and the
remainder, and the remainder points go one each to the earliest-created
assignments (lowest id first). The result is deterministic and always sums
to exactly 100.
"""
from __future__ import annotations
import logging
from typing import Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from models import Assignment

log = logging.getLogger(__name__)

FULL_CAPACITY = 100

def apportion(count: int, total: int = FULL_CAPACITY) -> List[int]:
    """Split ``total`` into ``count`` integers differing by at most one, larger ones first."""
    if count <= 0:
        return []
    base, remainder = divmod(total, count)
    return [base + 1 if i < remainder else base for i in range(count)]

def assignments_for(session: Session, person_id: int) -> List[Assignment]:
    stmt = (select(Assignment)
            .where(Assignment.person_id == person_id)
            .order_by(Assignment.id.asc()))
    return list(session.scalars(stmt))

def recompute_person(session: Session, person_id: int) -> None:
    """Rewrite the quantities of ``person_id``'s assignments.

    Runs inside the caller's transaction and only flushes; the caller's
    unit of work commits or rolls back all rows together.
    """
    rows = assignments_for(session, person_id)
    if not rows:
        log.debug("recompute person=%s: no assignments", person_id)
        return
    shares = apportion(len(rows))
    for row, share in zip(rows, shares):
        row.quantity = share
    session.flush()
    log.debug("recompute person=%s: %s", person_id, shares)

def recompute_people(session: Session, person_ids: Iterable[int | None]) -> None:
    for pid in sorted({p for p in person_ids if p is not None}):
        recompute_person(session, pid)
