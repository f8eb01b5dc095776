# tests/api/v1/test_qr_readers.py

from fastapi.testclient import TestClient


def test_reader_lifecycle(test_client_db: TestClient):
    client = test_client_db
    response = client.post(
        "/api/v1/ag-sessions", json={"name": "Chamada", "type": "avulsa"}
    )
    session_id = response.json()["id"]

    response = client.post("/api/v1/qr-readers", json={"name": "Porta 1", "session_id": session_id})
    assert response.status_code == 201
    created = response.json()
    assert len(created["token"]) == 16

    response = client.get(f"/api/v1/qr-readers/by-token/{created['token']}")
    assert response.status_code == 200
    assert response.json()["session_id"] == session_id

    response = client.post(
        f"/api/v1/qr-readers/by-token/{created['token']}/scan",
        json={"participant_id": "user_9", "participant_type": "user", "participant_name": "Rafa"},
    )
    assert response.status_code == 200
    assert response.json()["session_id"] == session_id

    response = client.get(f"/api/v1/ag-sessions/{session_id}")
    assert response.json()["stats"]["present"] == 1

    response = client.get("/api/v1/qr-readers", params={"session_id": session_id})
    assert [r["id"] for r in response.json()] == [created["id"]]

    response = client.delete(f"/api/v1/qr-readers/{created['id']}")
    assert response.status_code == 204

    response = client.get(f"/api/v1/qr-readers/by-token/{created['token']}")
    assert response.status_code == 404


def test_reader_for_unknown_session(test_client_db: TestClient):
    response = test_client_db.post(
        "/api/v1/qr-readers", json={"name": "Porta 1", "session_id": "agses_missing"}
    )

    assert response.status_code == 404


def test_unbound_reader_rejects_individual_badge(test_client_db: TestClient):
    client = test_client_db
    token = client.post("/api/v1/qr-readers", json={"name": "Entrada"}).json()["token"]

    response = client.post(
        f"/api/v1/qr-readers/by-token/{token}/scan",
        json={"participant_id": "reg_1", "participant_type": "individual", "participant_name": "Joana"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"field": "participant_type"}


def test_clear_readers(test_client_db: TestClient):
    client = test_client_db
    client.post("/api/v1/qr-readers", json={"name": "Entrada"})
    client.post("/api/v1/qr-readers", json={"name": "Saída"})

    response = client.delete("/api/v1/qr-readers")

    assert response.json() == {"removed": 2}
    assert client.get("/api/v1/qr-readers").json() == []
