# tests/api/v1/test_registrations.py

from fastapi.testclient import TestClient
from unittest.mock import MagicMock
from datetime import datetime, timezone

from ag_service.core.exceptions import (
    ConflictError,
    InvalidTransitionError,
    RegistrationClosedError,
)
from ag_service.schemas.registration import BulkResult, Registration as RegistrationSchema


def apply_mocks(monkeypatch):
    registration_service_mock = MagicMock()
    monkeypatch.setattr(
        "ag_service.api.v1.endpoints.registrations.registration_service",
        registration_service_mock,
    )
    return registration_service_mock


def _registration(**overrides):
    data = {
        "id": "reg_1",
        "assembly_id": "asm_1",
        "participant_type": "individual",
        "participant_id": "user_123",
        "participant_name": "Ana Souza",
        "status": "pending",
        "registered_at": datetime.now(timezone.utc),
        "registered_by": "user_123",
        "is_payment_exempt": False,
    }
    data.update(overrides)
    return RegistrationSchema(**data)


def test_register_success(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.register.return_value = _registration()

    response = test_client.post(
        "/api/v1/assemblies/asm_1/registrations",
        json={"participant_name": "Ana Souza", "email": "ana@ifmsabrazil.org"},
    )

    assert response.status_code == 201
    assert response.json()["status"] == "pending"
    kwargs = registration_service_mock.register.call_args.kwargs
    assert kwargs["user_id"] == "user_123"
    assert kwargs["form"].email == "ana@ifmsabrazil.org"


def test_register_requires_name(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)

    response = test_client.post("/api/v1/assemblies/asm_1/registrations", json={})

    assert response.status_code == 422


def test_register_closed(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.register.side_effect = RegistrationClosedError(
        "Registration deadline has passed"
    )

    response = test_client.post(
        "/api/v1/assemblies/asm_1/registrations", json={"participant_name": "Ana Souza"}
    )

    assert response.status_code == 409
    assert response.json()["error"] == {
        "category": "registration_closed_error",
        "message": "Registration deadline has passed",
        "details": {},
    }


def test_register_duplicate(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.register.side_effect = ConflictError(
        "User is already registered for this assembly"
    )

    response = test_client.post(
        "/api/v1/assemblies/asm_1/registrations", json={"participant_name": "Ana Souza"}
    )

    assert response.status_code == 409
    assert response.json()["error"]["category"] == "conflict_error"


def test_list_pending_only(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.get_pending.return_value = [_registration()]

    response = test_client.get("/api/v1/assemblies/asm_1/registrations?pending_only=true")

    assert response.status_code == 200
    assert len(response.json()) == 1
    registration_service_mock.get_by_assembly.assert_not_called()


def test_list_by_status(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.get_by_assembly.return_value = []

    response = test_client.get("/api/v1/assemblies/asm_1/registrations?status=approved")

    assert response.status_code == 200
    assert registration_service_mock.get_by_assembly.call_args.kwargs["status"] == "approved"


def test_approve(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.approve.return_value = _registration(
        status="approved", reviewed_by="user_123"
    )

    response = test_client.post("/api/v1/registrations/reg_1/approve", json={"notes": "ok"})

    assert response.status_code == 200
    assert response.json()["status"] == "approved"
    kwargs = registration_service_mock.approve.call_args.kwargs
    assert kwargs["registration_id"] == "reg_1"
    assert kwargs["reviewed_by"] == "user_123"
    assert kwargs["notes"] == "ok"


def test_approve_cancelled_registration(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.approve.side_effect = InvalidTransitionError(
        "cancelled", "approved", message="Cannot approve a cancelled registration"
    )

    response = test_client.post("/api/v1/registrations/reg_1/approve", json={})

    assert response.status_code == 409
    assert response.json()["error"]["details"] == {"current": "cancelled", "target": "approved"}


def test_bulk_approve(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.bulk_approve.return_value = BulkResult(
        updated=["reg_1"], skipped=["reg_2"]
    )

    response = test_client.post(
        "/api/v1/registrations/bulk-approve", json={"registration_ids": ["reg_1", "reg_2"]}
    )

    assert response.status_code == 200
    assert response.json() == {"updated": ["reg_1"], "skipped": ["reg_2"]}


def test_bulk_approve_requires_ids(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)

    response = test_client.post("/api/v1/registrations/bulk-approve", json={"registration_ids": []})

    assert response.status_code == 422


def test_bulk_delete(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)
    registration_service_mock.bulk_delete.return_value = 2

    response = test_client.post(
        "/api/v1/registrations/bulk-delete", json={"registration_ids": ["reg_1", "reg_2"]}
    )

    assert response.status_code == 200
    assert response.json() == {"deleted": 2}


def test_delete_registration(monkeypatch, test_client: TestClient):
    registration_service_mock = apply_mocks(monkeypatch)

    response = test_client.delete("/api/v1/registrations/reg_1")

    assert response.status_code == 204
    registration_service_mock.delete_registration.assert_called_once()
