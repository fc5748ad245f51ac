import pytest
from fastapi.testclient import TestClient

from database.db import get_db
from main import app


@pytest.fixture
def client(seeded, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"


def test_generate_and_fetch(client):
    res = client.post("/v1/results", json={"grading_id": 1, "class_id": 1})
    assert res.status_code == 200
    assert "X-Latency-Ms" in res.headers

    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert [d["class_position"] for d in data] == ["1st", "2nd", "2nd", "4th"]
    assert data[0]["student_name"] == "Student1 Doe"
    assert data[0]["class_name"] == "JSS 1A"
    assert data[0]["grading_title"] == "Mid-Term 2025"
    assert data[0]["formmaster_remark"] is None

    res = client.get("/v1/results", params={"grading_id": 1, "class_id": 1})
    assert res.status_code == 200
    assert [d["position"] for d in res.json()["data"]] == [1, 2, 2, 4]


def test_generate_all_classes(client):
    res = client.post("/v1/results", json={"grading_id": 1})
    assert res.status_code == 200
    assert {d["class_id"] for d in res.json()["data"]} == {1, 2}


def test_fetch_by_student(client):
    client.post("/v1/results", json={"grading_id": 1})
    res = client.get("/v1/results", params={"student_id": 8})
    data = res.json()["data"]
    assert len(data) == 1
    assert data[0]["average_score"] == 0
    assert data[0]["class_position"] == "4th"


def test_missing_grading_id_returns_400(client):
    res = client.post("/v1/results", json={"class_id": 1})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("payload", [
    {"grading_id": 999},
    {"grading_id": 1, "class_id": 999},
    {"grading_id": 1, "class_id": 3},
])
def test_not_found_returns_404(client, payload):
    res = client.post("/v1/results", json=payload)
    assert res.status_code == 404
    body = res.json()
    assert body["error"]["code"] == "NOT_FOUND"
    assert "generated_at" in body


def test_bulk_delete(client):
    data = client.post("/v1/results", json={"grading_id": 1, "class_id": 2}).json()["data"]
    ids = [d["id"] for d in data[:3]]

    res = client.delete("/v1/results", params={"ids": ids})
    assert res.status_code == 200
    assert res.json()["data"]["deleted"] == 3

    remaining = client.get("/v1/results", params={"grading_id": 1}).json()["data"]
    assert len(remaining) == 1


def test_bulk_delete_without_ids_returns_400(client):
    res = client.delete("/v1/results")
    assert res.status_code == 400


def test_routes_declare_success_envelope(client):
    schemas = client.get("/openapi.json").json()["components"]["schemas"]
    envelopes = [name for name in schemas if name.startswith("SuccessEnvelope")]
    assert any("ReportCard" in name for name in envelopes)
    assert any("DeleteResult" in name for name in envelopes)

    res = client.delete("/v1/results", params={"ids": [999]})
    assert res.json() == {"success": True, "data": {"deleted": 0}, "message": "Deleted 0 report cards"}
