from __future__ import annotations
import pytest
from app import create_app
from extensions import db

@pytest.fixture()
def client():
    app = create_app("test")
    with app.app_context():
        db.create_all()
        with app.test_client() as c:
            yield c
        db.session.remove()
        db.drop_all()

def _seed_board(client):
    r = client.post("/api/clients", json={"name": "Acme", "location": "Berlin", "since": "2019", "priority": "Prio 2"})
    assert r.status_code == 201
    client_id = r.get_json()["id"]
    r = client.post("/api/projects", json={"client_id": client_id, "name": "Shop", "start_date": "2025-01-06",
                                           "end_date": "", "budget_eur": 12000})
    assert r.status_code == 201
    project_id = r.get_json()["id"]
    challenge_ids = []
    for title in ("Checkout", "Search", "Login"):
        r = client.post("/api/challenges", json={"project_id": project_id, "title": title, "description": "x"})
        assert r.status_code == 201
        challenge_ids.append(r.get_json()["id"])
    r = client.post("/api/people", json={"first_name": "Ada", "last_name": "Lovelace", "trade": "FE-DEV", "level": "C-LEVEL"})
    assert r.status_code == 201
    person_id = r.get_json()["id"]
    return client_id, project_id, challenge_ids, person_id

def test_person_crud(client):
    r = client.post("/api/people", json={"first_name": "Grace", "last_name": "Hopper", "trade": "TPM", "level": "DIRECTOR"})
    assert r.status_code == 201
    body = r.get_json()
    assert body["trade"] == "TPM"
    assert r.headers["Location"].endswith(f"/api/people/{body['id']}")

    r = client.get(f"/api/people/{body['id']}")
    assert r.status_code == 200
    assert r.get_json()["last_name"] == "Hopper"

    r = client.put(f"/api/people/{body['id']}", json={"first_name": "Grace", "last_name": "Hopper", "trade": "PM", "level": "C-LEVEL"})
    assert r.status_code == 200
    assert r.get_json()["level"] == "C-LEVEL"

    r = client.delete(f"/api/people/{body['id']}")
    assert r.status_code == 204
    assert client.get(f"/api/people/{body['id']}").status_code == 404

def test_invalid_enum_is_validation_error(client):
    r = client.post("/api/people", json={"first_name": "A", "last_name": "B", "trade": "WIZARD", "level": "JUNIOR"})
    assert r.status_code == 422
    assert r.get_json()["error"] == "validation_error"

def test_project_end_before_start_rejected(client):
    client.post("/api/clients", json={"name": "Acme", "location": "x", "since": "2020", "priority": "Prio 1"})
    r = client.post("/api/projects", json={"client_id": 1, "name": "P", "start_date": "2025-05-01",
                                           "end_date": "2025-04-01", "budget_eur": 0})
    assert r.status_code == 422

def test_open_ended_project(client):
    _, project_id, _, _ = _seed_board(client)
    r = client.get(f"/api/projects/{project_id}")
    assert r.get_json()["end_date"] is None
    assert r.get_json()["start_date"] == "2025-01-06"

def test_assignment_quantities_over_http(client):
    _, project_id, challenge_ids, person_id = _seed_board(client)
    ids = []
    for ch in challenge_ids:
        r = client.post("/api/assignments", json={"project_id": project_id, "challenge_id": ch,
                                                  "person_id": person_id, "is_owner": True, "quantity": 5})
        assert r.status_code == 201
        ids.append(r.get_json()["id"])
    # caller-supplied quantity is ignored
    assert r.get_json()["quantity"] == 33

    state = client.get("/api/state").get_json()
    assert [a["quantity"] for a in state["assignments"]] == [34, 33, 33]

    r = client.delete(f"/api/assignments/{ids[0]}")
    assert r.status_code == 204
    state = client.get("/api/state").get_json()
    assert [a["quantity"] for a in state["assignments"]] == [50, 50]

def test_duplicate_challenge_conflict(client):
    _, project_id, challenge_ids, person_id = _seed_board(client)
    body = {"project_id": project_id, "challenge_id": challenge_ids[0], "person_id": person_id}
    assert client.post("/api/assignments", json=body).status_code == 201
    r = client.post("/api/assignments", json=body)
    assert r.status_code == 409
    assert r.get_json()["code"] == "UNIQUE_CONSTRAINT"
    assert len(client.get("/api/state").get_json()["assignments"]) == 1

def test_unknown_reference_is_client_error(client):
    _, project_id, challenge_ids, _ = _seed_board(client)
    r = client.post("/api/assignments", json={"project_id": project_id, "challenge_id": challenge_ids[0], "person_id": 404})
    assert r.status_code == 400
    assert r.get_json()["code"] == "REFERENCE_NOT_FOUND"

def test_update_missing_row_is_404(client):
    r = client.put("/api/clients/77", json={"name": "Acme", "location": "x", "since": "2020", "priority": "Prio 1"})
    assert r.status_code == 404
    assert r.get_json()["code"] == "NOT_FOUND"

def test_delete_missing_row_is_204(client):
    assert client.delete("/api/assignments/77").status_code == 204
    assert client.delete("/api/clients/77").status_code == 204

def test_delete_client_cascades(client):
    client_id, project_id, challenge_ids, person_id = _seed_board(client)
    client.post("/api/assignments", json={"project_id": project_id, "challenge_id": challenge_ids[0], "person_id": person_id})
    assert client.delete(f"/api/clients/{client_id}").status_code == 204
    state = client.get("/api/state").get_json()
    assert state["clients"] == state["projects"] == state["challenges"] == state["assignments"] == []
    assert len(state["people"]) == 1

def test_state_shape(client):
    _seed_board(client)
    state = client.get("/api/state").get_json()
    assert set(state) == {"people", "clients", "projects", "challenges", "assignments", "static_lists"}
    assert [c["title"] for c in state["challenges"]] == ["Checkout", "Login", "Search"]
    assert state["clients"][0]["priority"] == "Prio 2"
