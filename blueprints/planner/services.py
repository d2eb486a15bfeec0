# blueprints/planner/services.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Type

from pydantic import BaseModel
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import STATIC_LISTS, Assignment, Challenge, Client, Person, Project
from .errors import RowNotFound, from_integrity_error
from .schemas import (
    AssignmentIn, AssignmentOut,
    ChallengeIn, ChallengeOut,
    ClientIn, ClientOut,
    PersonIn, PersonOut,
    ProjectIn, ProjectOut,
)
from .workload import recompute_people, recompute_person

log = logging.getLogger(__name__)

# ----------------------- Unit of work -----------------------
@contextmanager
def unit_of_work(session: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or nothing.

    Integrity failures from the database are re-raised as PlannerError
    subclasses so callers never see driver exceptions.
    """
    try:
        yield session
        session.commit()
    except IntegrityError as ex:
        session.rollback()
        err = from_integrity_error(ex)
        log.warning("mutation rejected: %s", err.code)
        raise err from ex
    except Exception:
        session.rollback()
        raise

# ----------------------- Generic CRUD -----------------------
def _create(session: Session, model: Type, data: BaseModel):
    with unit_of_work(session):
        row = model(**data.model_dump())
        session.add(row)
        session.flush()
        row_id = row.id
    log.info("%s created id=%s", model.__tablename__, row_id)
    return row

def _update(session: Session, model: Type, id: int, data: BaseModel):
    with unit_of_work(session):
        row = session.get(model, id)
        if row is None:
            raise RowNotFound(model.__tablename__, id)
        for field, value in data.model_dump().items():
            setattr(row, field, value)
        session.flush()
    log.info("%s updated id=%s", model.__tablename__, id)
    return row

def _people_losing_assignments(session: Session, *conditions) -> List[int]:
    stmt = select(Assignment.person_id).where(or_(*conditions)).distinct()
    return list(session.scalars(stmt))

def _delete(session: Session, model: Type, id: int, *assignment_conditions) -> None:
    """Delete one row; the database cascades to dependants.

    ``assignment_conditions`` select the assignments the cascade will
    remove, so their people can be recomputed in the same transaction.
    """
    with unit_of_work(session):
        row = session.get(model, id)
        if row is None:
            log.info("%s delete id=%s: already absent", model.__tablename__, id)
            return
        affected = _people_losing_assignments(session, *assignment_conditions) if assignment_conditions else []
        session.delete(row)
        session.flush()
        recompute_people(session, affected)
    log.info("%s deleted id=%s recomputed=%s", model.__tablename__, id, affected)

# ----------------------- Read -----------------------
def _dump(schema: Type[BaseModel], rows) -> List[Dict[str, Any]]:
    return [schema.model_validate(r).model_dump(mode="json") for r in rows]

def get_dashboard_data(session: Session) -> Dict[str, Any]:
    """All five collections in their listing order plus the static enumerations."""
    return {
        "people": _dump(PersonOut, session.scalars(
            select(Person).order_by(Person.last_name.asc(), Person.first_name.asc(), Person.id.asc()))),
        "clients": _dump(ClientOut, session.scalars(
            select(Client).order_by(Client.name.asc(), Client.id.asc()))),
        "projects": _dump(ProjectOut, session.scalars(
            select(Project).order_by(Project.name.asc(), Project.id.asc()))),
        "challenges": _dump(ChallengeOut, session.scalars(
            select(Challenge).order_by(Challenge.title.asc(), Challenge.id.asc()))),
        "assignments": _dump(AssignmentOut, session.scalars(
            select(Assignment).order_by(Assignment.id.asc()))),
        "static_lists": {k: list(v) for k, v in STATIC_LISTS.items()},
    }

# ----------------------- People -----------------------
def create_person(session: Session, data: PersonIn) -> Person:
    return _create(session, Person, data)

def update_person(session: Session, id: int, data: PersonIn) -> Person:
    return _update(session, Person, id, data)

def delete_person(session: Session, id: int) -> None:
    # only this person's own assignments go away; nobody else's share changes
    _delete(session, Person, id)

# ----------------------- Clients -----------------------
def create_client(session: Session, data: ClientIn) -> Client:
    return _create(session, Client, data)

def update_client(session: Session, id: int, data: ClientIn) -> Client:
    return _update(session, Client, id, data)

def delete_client(session: Session, id: int) -> None:
    client_projects = select(Project.id).where(Project.client_id == id)
    client_challenges = select(Challenge.id).where(Challenge.project_id.in_(client_projects))
    _delete(session, Client, id,
            Assignment.project_id.in_(client_projects),
            Assignment.challenge_id.in_(client_challenges))

# ----------------------- Projects -----------------------
def create_project(session: Session, data: ProjectIn) -> Project:
    return _create(session, Project, data)

def update_project(session: Session, id: int, data: ProjectIn) -> Project:
    return _update(session, Project, id, data)

def delete_project(session: Session, id: int) -> None:
    project_challenges = select(Challenge.id).where(Challenge.project_id == id)
    _delete(session, Project, id,
            Assignment.project_id == id,
            Assignment.challenge_id.in_(project_challenges))

# ----------------------- Challenges -----------------------
def create_challenge(session: Session, data: ChallengeIn) -> Challenge:
    return _create(session, Challenge, data)

def update_challenge(session: Session, id: int, data: ChallengeIn) -> Challenge:
    return _update(session, Challenge, id, data)

def delete_challenge(session: Session, id: int) -> None:
    _delete(session, Challenge, id, Assignment.challenge_id == id)

# ----------------------- Assignments -----------------------
def create_assignment(session: Session, data: AssignmentIn) -> Assignment:
    with unit_of_work(session):
        row = Assignment(**data.model_dump())
        session.add(row)
        session.flush()  # FK and challenge uniqueness are checked here
        row_id = row.id
        recompute_person(session, data.person_id)
    log.info("assignment created id=%s person=%s", row_id, data.person_id)
    return row

def update_assignment(session: Session, id: int, data: AssignmentIn) -> Assignment:
    with unit_of_work(session):
        row = session.get(Assignment, id)
        if row is None:
            raise RowNotFound("assignments", id)
        previous_person_id = row.person_id
        for field, value in data.model_dump().items():
            setattr(row, field, value)
        session.flush()
        recompute_person(session, data.person_id)
        if previous_person_id != data.person_id:
            recompute_person(session, previous_person_id)
    log.info("assignment updated id=%s person=%s (was %s)", id, data.person_id, previous_person_id)
    return row

def delete_assignment(session: Session, id: int) -> None:
    with unit_of_work(session):
        row = session.get(Assignment, id)
        if row is None:
            log.info("assignments delete id=%s: already absent", id)
            return
        person_id = row.person_id
        session.delete(row)
        session.flush()
        recompute_person(session, person_id)
    log.info("assignment deleted id=%s person=%s", id, person_id)
