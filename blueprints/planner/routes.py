from __future__ import annotations
import logging
from typing import Any

from flask import abort, jsonify, request, url_for
from pydantic import ValidationError

from . import bp
from . import services as svc
from .errors import PlannerError
from .schemas import (
    AssignmentIn, AssignmentOut,
    ChallengeIn, ChallengeOut,
    ClientIn, ClientOut,
    PersonIn, PersonOut,
    ProjectIn, ProjectOut,
)
from extensions import db
from models import Assignment, Challenge, Client, Person, Project

log = logging.getLogger(__name__)

# ----------------------- Helpers -----------------------
def ok(data: Any, status: int = 200):
    return jsonify(data), status

def created(location: str, data: Any):
    resp = jsonify(data)
    resp.status_code = 201
    resp.headers["Location"] = location
    return resp

def no_content():
    return "", 204

def _payload() -> dict:
    return request.get_json(silent=True) or {}

def _pydantic_errors_safe(ve: ValidationError):
    errs = ve.errors(include_url=False)
    for e in errs:
        if "ctx" in e and isinstance(e["ctx"], dict):
            e["ctx"] = {k: str(v) for k, v in e["ctx"].items()}
    return errs

@bp.app_errorhandler(PlannerError)
def handle_planner_error(err: PlannerError):
    log.warning("request failed: %s %s", err.code, err.message)
    return jsonify(err.to_dict()), err.http_status

@bp.app_errorhandler(ValidationError)
def handle_validation_error(ve: ValidationError):
    return jsonify({"error": "validation_error", "detail": _pydantic_errors_safe(ve)}), 422

# ----------------------- Dashboard -----------------------
@bp.get("/state")
def api_state():
    return ok(svc.get_dashboard_data(db.session))

# ---- People ----
@bp.post("/people")
def api_people_create():
    parsed = PersonIn.model_validate(_payload())
    p = svc.create_person(db.session, parsed)
    out = PersonOut.model_validate(p).model_dump(mode="json")
    return created(url_for("planner.api_people_get", id=out["id"]), out)

@bp.get("/people/<int:id>")
def api_people_get(id: int):
    p = db.session.get(Person, id) or abort(404)
    return ok(PersonOut.model_validate(p).model_dump(mode="json"))

@bp.put("/people/<int:id>")
def api_people_update(id: int):
    parsed = PersonIn.model_validate(_payload())
    p = svc.update_person(db.session, id, parsed)
    return ok(PersonOut.model_validate(p).model_dump(mode="json"))

@bp.delete("/people/<int:id>")
def api_people_delete(id: int):
    svc.delete_person(db.session, id)
    return no_content()

# ---- Clients ----
@bp.post("/clients")
def api_clients_create():
    parsed = ClientIn.model_validate(_payload())
    c = svc.create_client(db.session, parsed)
    out = ClientOut.model_validate(c).model_dump(mode="json")
    return created(url_for("planner.api_clients_get", id=out["id"]), out)

@bp.get("/clients/<int:id>")
def api_clients_get(id: int):
    c = db.session.get(Client, id) or abort(404)
    return ok(ClientOut.model_validate(c).model_dump(mode="json"))

@bp.put("/clients/<int:id>")
def api_clients_update(id: int):
    parsed = ClientIn.model_validate(_payload())
    c = svc.update_client(db.session, id, parsed)
    return ok(ClientOut.model_validate(c).model_dump(mode="json"))

@bp.delete("/clients/<int:id>")
def api_clients_delete(id: int):
    svc.delete_client(db.session, id)
    return no_content()

# ---- Projects ----
@bp.post("/projects")
def api_projects_create():
    parsed = ProjectIn.model_validate(_payload())
    p = svc.create_project(db.session, parsed)
    out = ProjectOut.model_validate(p).model_dump(mode="json")
    return created(url_for("planner.api_projects_get", id=out["id"]), out)

@bp.get("/projects/<int:id>")
def api_projects_get(id: int):
    p = db.session.get(Project, id) or abort(404)
    return ok(ProjectOut.model_validate(p).model_dump(mode="json"))

@bp.put("/projects/<int:id>")
def api_projects_update(id: int):
    parsed = ProjectIn.model_validate(_payload())
    p = svc.update_project(db.session, id, parsed)
    return ok(ProjectOut.model_validate(p).model_dump(mode="json"))

@bp.delete("/projects/<int:id>")
def api_projects_delete(id: int):
    svc.delete_project(db.session, id)
    return no_content()

# ---- Challenges ----
@bp.post("/challenges")
def api_challenges_create():
    parsed = ChallengeIn.model_validate(_payload())
    ch = svc.create_challenge(db.session, parsed)
    out = ChallengeOut.model_validate(ch).model_dump(mode="json")
    return created(url_for("planner.api_challenges_get", id=out["id"]), out)

@bp.get("/challenges/<int:id>")
def api_challenges_get(id: int):
    ch = db.session.get(Challenge, id) or abort(404)
    return ok(ChallengeOut.model_validate(ch).model_dump(mode="json"))

@bp.put("/challenges/<int:id>")
def api_challenges_update(id: int):
    parsed = ChallengeIn.model_validate(_payload())
    ch = svc.update_challenge(db.session, id, parsed)
    return ok(ChallengeOut.model_validate(ch).model_dump(mode="json"))

@bp.delete("/challenges/<int:id>")
def api_challenges_delete(id: int):
    svc.delete_challenge(db.session, id)
    return no_content()

# ---- Assignments ----
@bp.post("/assignments")
def api_assignments_create():
    parsed = AssignmentIn.model_validate(_payload())
    a = svc.create_assignment(db.session, parsed)
    out = AssignmentOut.model_validate(a).model_dump(mode="json")
    return created(url_for("planner.api_assignments_get", id=out["id"]), out)

@bp.get("/assignments/<int:id>")
def api_assignments_get(id: int):
    a = db.session.get(Assignment, id) or abort(404)
    return ok(AssignmentOut.model_validate(a).model_dump(mode="json"))

@bp.put("/assignments/<int:id>")
def api_assignments_update(id: int):
    parsed = AssignmentIn.model_validate(_payload())
    a = svc.update_assignment(db.session, id, parsed)
    return ok(AssignmentOut.model_validate(a).model_dump(mode="json"))

@bp.delete("/assignments/<int:id>")
def api_assignments_delete(id: int):
    svc.delete_assignment(db.session, id)
    return no_content()
