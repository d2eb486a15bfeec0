from __future__ import annotations
from io import BytesIO
import json

import pytest

from app import create_app
from extensions import db
from models import Assignment, Client, Person
from blueprints.planner import services as svc
from blueprints.planner.errors import ReferenceNotFound
from blueprints.planner.schemas import AssignmentIn, ClientIn
from blueprints.transfer.services import export_state, import_state

SNAPSHOT = {
    "people": [
        {"id": 3, "first_name": "Ada", "last_name": "Lovelace", "trade": "BE-DEV", "level": "SENIOR"},
        {"id": 9, "first_name": "Grace", "last_name": "Hopper", "trade": "TPM", "level": "DIRECTOR"},
    ],
    "clients": [{"id": 5, "name": "Acme", "location": "Berlin", "since": "2019", "priority": "Prio 1"}],
    "projects": [{"id": 7, "client_id": 5, "name": "Shop", "start_date": "2025-01-06",
                  "end_date": None, "budget_eur": 1500.5}],
    "challenges": [
        {"id": 11, "project_id": 7, "title": "Checkout", "description": "Pay"},
        {"id": 12, "project_id": 7, "title": "Search", "description": "Find"},
    ],
    # quantities deliberately not an even split; import must keep them
    "assignments": [
        {"id": 21, "project_id": 7, "challenge_id": 11, "person_id": 3, "is_owner": 1, "is_leader": 0, "quantity": 70},
        {"id": 22, "project_id": 7, "challenge_id": 12, "person_id": 3, "is_owner": 0, "is_leader": 1, "quantity": 30},
    ],
    "staticLists": {"priorities": ["ignored"]},
}

@pytest.fixture()
def app_ctx():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()

def test_import_keeps_ids_and_quantities(app_ctx):
    counts = import_state(db.session, SNAPSHOT)
    assert counts == {"people": 2, "clients": 1, "projects": 1, "challenges": 2, "assignments": 2}

    a = db.session.get(Assignment, 21)
    assert (a.person_id, a.quantity, a.is_owner, a.is_leader) == (3, 70, True, False)
    assert db.session.get(Assignment, 22).quantity == 30
    assert db.session.get(Person, 9).last_name == "Hopper"

def test_round_trip_is_identical(app_ctx):
    import_state(db.session, SNAPSHOT)
    first = export_state(db.session)
    import_state(db.session, first)
    assert export_state(db.session) == first

def test_import_replaces_everything(app_ctx):
    import_state(db.session, SNAPSHOT)
    import_state(db.session, {"clients": [{"id": 1, "name": "Other", "location": "Paris",
                                           "since": "2024", "priority": "Prio 4"}]})
    state = export_state(db.session)
    assert [c["name"] for c in state["clients"]] == ["Other"]
    assert state["people"] == state["projects"] == state["challenges"] == state["assignments"] == []

def test_broken_snapshot_rolls_back(app_ctx):
    import_state(db.session, SNAPSHOT)
    before = export_state(db.session)
    broken = json.loads(json.dumps(SNAPSHOT))
    broken["assignments"][0]["challenge_id"] = 999
    with pytest.raises(ReferenceNotFound):
        import_state(db.session, broken)
    assert export_state(db.session) == before

def test_mutations_after_import_continue_ids(app_ctx):
    import_state(db.session, SNAPSHOT)
    # Grace takes over Search; Ada keeps Checkout alone
    svc.update_assignment(db.session, 22, AssignmentIn(project_id=7, challenge_id=12, person_id=9))
    assert db.session.get(Assignment, 21).quantity == 100
    assert db.session.get(Assignment, 22).quantity == 100
    new_client = svc.create_client(db.session, ClientIn(name="New", location="Rome", since="2026", priority="Prio 2"))
    assert new_client.id > 5
    assert Client.query.count() == 2

# ---------- HTTP ----------
@pytest.fixture()
def client(app_ctx):
    with app_ctx.test_client() as c:
        yield c

def test_export_endpoint_is_attachment(client):
    import_state(db.session, SNAPSHOT)
    r = client.get("/api/export")
    assert r.status_code == 200
    assert "resource-planner-export.json" in r.headers["Content-Disposition"]
    body = json.loads(r.data)
    assert [a["quantity"] for a in body["assignments"]] == [70, 30]
    assert body["static_lists"]["priorities"][0] == "Prio 1"

def test_import_endpoint_json_body(client):
    r = client.post("/api/import", json=SNAPSHOT)
    assert r.status_code == 204
    state = client.get("/api/state").get_json()
    assert [p["id"] for p in state["people"]] == [9, 3]  # ordered by last name

def test_import_endpoint_file_upload(client):
    data = json.dumps(SNAPSHOT).encode("utf-8")
    r = client.post("/api/import", data={"file": (BytesIO(data), "resource-planner-export.json")},
                    content_type="multipart/form-data")
    assert r.status_code == 204
    assert len(client.get("/api/state").get_json()["challenges"]) == 2

def test_import_endpoint_rejects_bad_payloads(client):
    r = client.post("/api/import", data={"file": (BytesIO(b"{not json"), "x.json")},
                    content_type="multipart/form-data")
    assert r.status_code == 400
    r = client.post("/api/import", json={"people": [{"id": 1, "first_name": "A"}]})
    assert r.status_code == 422

@pytest.mark.parametrize("kwargs", [
    {"data": "{not json", "content_type": "application/json"},
    {"data": json.dumps(SNAPSHOT), "content_type": "text/plain"},
    {"json": []},
    {"json": None},
])
def test_import_endpoint_bad_body_keeps_store(client, kwargs):
    import_state(db.session, SNAPSHOT)
    before = export_state(db.session)
    r = client.post("/api/import", **kwargs)
    assert r.status_code == 400
    assert r.get_json() == {"error": "invalid_json", "code": "BAD_REQUEST"}
    assert export_state(db.session) == before

def test_import_file_holding_a_list_keeps_store(client):
    import_state(db.session, SNAPSHOT)
    r = client.post("/api/import", data={"file": (BytesIO(b"[]"), "x.json")},
                    content_type="multipart/form-data")
    assert r.status_code == 400
    assert Person.query.count() == 2
