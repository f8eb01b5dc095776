# tests/api/v1/test_ag_flow_e2e.py

from fastapi.testclient import TestClient

from ag_service.services.report_service import XLSX_MEDIA_TYPE

ROSTER = [
    {"type": "eb", "participant_id": "eb_1", "name": "Beatriz Lima", "role": "Presidente"},
    {"type": "cr", "participant_id": "cr_1", "name": "Carlos Dias", "role": "CR Sul"},
    {"type": "comite", "participant_id": "cl_1", "name": "IFMSA UFMG", "status": "Pleno"},
]


def _create_assembly(client: TestClient) -> str:
    response = client.post(
        "/api/v1/assemblies",
        json={
            "name": "AG Brasília 2026",
            "type": "AG",
            "location": "Brasília, DF",
            "start_date": "2026-11-20T09:00:00Z",
            "end_date": "2026-11-22T18:00:00Z",
        },
    )
    assert response.status_code == 201
    body = response.json()
    assert body["payment_required"] is True
    assert body["status"] == "active"
    return body["id"]


def test_registration_to_attendance_report(test_client_db: TestClient):
    client = test_client_db
    assembly_id = _create_assembly(client)

    response = client.post(f"/api/v1/assemblies/{assembly_id}/participants", json=ROSTER)
    assert response.status_code == 201
    assert response.json() == {"inserted": 3}

    response = client.post(f"/api/v1/assemblies/{assembly_id}/modalities/defaults")
    assert response.status_code == 200
    modalities = response.json()
    assert [m["order"] for m in modalities] == [1, 2, 3]

    # --- Register and approve ---
    response = client.post(
        f"/api/v1/assemblies/{assembly_id}/registrations",
        json={"participant_name": "Ana Souza", "modality_id": modalities[1]["id"]},
    )
    assert response.status_code == 201
    registration = response.json()
    assert registration["status"] == "pending"

    response = client.get(f"/api/v1/assemblies/{assembly_id}/registrations/me")
    assert response.json()["registration_id"] == registration["id"]

    response = client.post(f"/api/v1/registrations/{registration['id']}/approve", json={})
    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    assert response.json()["reviewed_by"] == "user_123"

    # --- Sessions ---
    response = client.post(
        "/api/v1/ag-sessions",
        json={"name": "Plenária 1", "type": "plenaria", "assembly_id": assembly_id},
    )
    assert response.status_code == 201
    plenaria_id = response.json()["id"]

    response = client.get(f"/api/v1/ag-sessions/{plenaria_id}/attendance")
    organized = response.json()
    assert len(organized["ebs"]) == 1
    assert len(organized["comites"]) == 1
    assert organized["participantes"] == []

    response = client.post(
        f"/api/v1/ag-sessions/{plenaria_id}/attendance",
        json={
            "participant_id": "cl_1",
            "participant_type": "comite",
            "participant_name": "IFMSA UFMG",
            "attendance": "present",
        },
    )
    assert response.status_code == 200

    response = client.post(
        "/api/v1/ag-sessions",
        json={"name": "Sessão 1", "type": "sessao", "assembly_id": assembly_id},
    )
    sessao_id = response.json()["id"]

    response = client.post(
        f"/api/v1/ag-sessions/{sessao_id}/check-in",
        json={"participant_id": registration["id"]},
    )
    assert response.json()["success"] is True

    response = client.get(f"/api/v1/ag-sessions/{sessao_id}")
    stats = response.json()["stats"]
    assert stats["total"] == 1
    assert stats["present"] == 1

    response = client.get(f"/api/v1/assemblies/{assembly_id}/attendance/user_123")
    user_stats = response.json()
    assert user_stats["total_sessions"] == 1
    assert user_stats["attended_sessions"] == 1
    assert user_stats["attendance_percentage"] == 100.0

    response = client.get(f"/api/v1/ag-sessions/{sessao_id}/enriched")
    record = response.json()["records"][0]
    assert record["registration"]["registration_id"] == registration["id"]

    # --- Reports ---
    response = client.get(f"/api/v1/ag-sessions/{sessao_id}/report")
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert 'filename="relatorio-presenca-sessao-Sess_o_1-' in response.headers["content-disposition"]
    assert response.content[:2] == b"PK"

    response = client.get(f"/api/v1/ag-sessions/{plenaria_id}/report")
    assert response.status_code == 200
    assert "relatorio-presenca-ag-Plen_ria_1-" in response.headers["content-disposition"]

    response = client.get(f"/api/v1/assemblies/{assembly_id}/report")
    assert response.status_code == 200
    assert "relatorio_AG_Bras_lia_2026_" in response.headers["content-disposition"]

    # --- Archive and delete ---
    response = client.request(
        "DELETE",
        f"/api/v1/assemblies/{assembly_id}",
        json={"confirmation_text": "AG Brasília 2026"},
    )
    assert response.status_code == 409

    response = client.post(f"/api/v1/assemblies/{assembly_id}/archive")
    assert response.json()["registration_open"] is False

    response = client.request(
        "DELETE",
        f"/api/v1/assemblies/{assembly_id}",
        json={"confirmation_text": "AG Brasília 2026"},
    )
    assert response.status_code == 200
    summary = response.json()
    assert summary["registrations"] == 1
    assert summary["participants"] == 3
    assert summary["modalities"] == 3
    assert summary["sessions"] == 2
    assert summary["attendance_records"] == 4

    response = client.get(f"/api/v1/assemblies/{assembly_id}")
    assert response.status_code == 404


def test_registration_closed_by_config(test_client_db: TestClient):
    client = test_client_db
    assembly_id = _create_assembly(client)

    response = client.get("/api/v1/ag-config")
    assert response.status_code == 404

    response = client.put("/api/v1/ag-config/registration", json={"enabled": False})
    assert response.status_code == 200
    assert response.json()["registration_enabled"] is False
    assert response.json()["auto_approval"] is False

    response = client.post(
        f"/api/v1/assemblies/{assembly_id}/registrations", json={"participant_name": "Ana Souza"}
    )
    assert response.status_code == 409
    assert response.json()["error"]["message"] == "Registrations are currently disabled globally"


def test_roll_call_report(test_client_db: TestClient):
    client = test_client_db
    response = client.post(
        "/api/v1/roll-call/bulk",
        json=[
            {"type": "eb", "member_id": "eb_1", "name": "Beatriz Lima"},
            {"type": "comite", "member_id": "cl_1", "name": "IFMSA UFMG", "status": "Pleno"},
        ],
    )
    assert response.status_code == 201
    assert response.json() == {"inserted": 2}

    response = client.post(
        "/api/v1/roll-call",
        json={"type": "eb", "member_id": "eb_1", "name": "Beatriz Lima", "attendance": "present"},
    )
    assert response.json()["attendance"] == "present"

    response = client.get("/api/v1/roll-call/report")
    assert response.status_code == 200
    assert response.headers["content-type"] == XLSX_MEDIA_TYPE
    assert 'filename="relatorio-presenca-ag-' in response.headers["content-disposition"]

    response = client.post("/api/v1/roll-call/reset")
    assert response.json() == {"affected": 2}
