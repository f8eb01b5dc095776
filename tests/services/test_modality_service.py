# tests/services/test_modality_service.py

import pytest

from ag_service.core.exceptions import ConflictError, NotFoundError
from ag_service.schemas.modality import ModalityCreate, ModalityUpdate
from ag_service.services import modality_service, registration_service
from tests.utils.assembly import create_modality, create_random_assembly
from tests.utils.registration import create_registration


def test_orders_are_never_reused_after_delete(db):
    assembly = create_random_assembly(db)
    first = create_modality(db, assembly.id, name="Participante")
    second = create_modality(db, assembly.id, name="Estudante")
    second_order = second.order
    modality_service.delete_modality(db, modality_id=second.id)

    third = create_modality(db, assembly.id, name="Convidado")

    assert first.order == 1
    assert second_order == 2
    assert third.order == 3


def test_create_modality_for_unknown_assembly(db):
    with pytest.raises(NotFoundError):
        modality_service.create_modality(
            db,
            assembly_id="asm_missing",
            obj_in=ModalityCreate(name="Participante", price=0),
            created_by="admin_1",
        )


def test_update_modality_ignores_null_for_required_fields(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id, max_participants=10)

    updated = modality_service.update_modality(
        db,
        modality_id=modality.id,
        obj_in=ModalityUpdate(name=None, price=20000, max_participants=None),
    )

    assert updated.name == "Participante"
    assert updated.price == 20000
    # Clearing the cap makes the modality unlimited
    assert updated.max_participants is None


def test_delete_modality_with_registrations_conflicts(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id)
    create_registration(db, assembly.id, modality_id=modality.id, status="cancelled")

    with pytest.raises(ConflictError) as exc_info:
        modality_service.delete_modality(db, modality_id=modality.id)
    assert exc_info.value.message == "Cannot delete modality with existing registrations"


def test_stats_count_only_active_registrations(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id, max_participants=10)
    for i in range(9):
        create_registration(db, assembly.id, participant_id=f"user_{i}", modality_id=modality.id)
    create_registration(db, assembly.id, participant_id="user_r", modality_id=modality.id, status="rejected")
    create_registration(db, assembly.id, participant_id="user_c", modality_id=modality.id, status="cancelled")

    stats = modality_service.get_modality_stats(db, modality_id=modality.id)

    assert stats.total == 11
    assert stats.active == 9
    assert stats.is_full is False
    assert stats.is_near_full is True
    assert stats.available_spots == 1
    assert stats.by_status == {"pending": 9, "rejected": 1, "cancelled": 1}


def test_stats_of_unlimited_modality(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id)
    create_registration(db, assembly.id, modality_id=modality.id)

    stats = modality_service.get_modality_stats(db, modality_id=modality.id)

    assert stats.is_full is False
    assert stats.is_near_full is False
    assert stats.available_spots is None


def test_can_accept_registration_reasons(db):
    assembly = create_random_assembly(db)
    unlimited = create_modality(db, assembly.id, name="AGE online")
    capped = create_modality(db, assembly.id, name="Convidado", max_participants=2)

    assert modality_service.can_accept_registration(db, modality_id="mod_missing").reason == (
        "Modality not found"
    )
    assert modality_service.can_accept_registration(db, modality_id=unlimited.id).reason == (
        "Unlimited capacity"
    )

    availability = modality_service.can_accept_registration(db, modality_id=capped.id)
    assert availability.can_accept is True
    assert availability.reason == "2 spot(s) available"
    assert availability.available_spots == 2

    create_registration(db, assembly.id, participant_id="user_1", modality_id=capped.id)
    occupant = create_registration(db, assembly.id, participant_id="user_2", modality_id=capped.id)
    full = modality_service.can_accept_registration(db, modality_id=capped.id)
    assert full.can_accept is False
    assert full.reason == "Modality is full"
    assert full.available_spots == 0

    # Leaving one occupant out of the count frees their spot
    excluding = modality_service.can_accept_registration(
        db, modality_id=capped.id, exclude_registration_id=occupant.id
    )
    assert excluding.can_accept is True
    assert excluding.available_spots == 1

    modality_service.update_modality(
        db, modality_id=unlimited.id, obj_in=ModalityUpdate(is_active=False)
    )
    inactive = modality_service.can_accept_registration(db, modality_id=unlimited.id)
    assert inactive.can_accept is False
    assert inactive.reason == "Modality is inactive"


def test_initialize_default_modalities_for_ag(db):
    assembly = create_random_assembly(db, type="AG")

    created = modality_service.initialize_default_modalities(
        db, assembly_id=assembly.id, created_by="admin_1"
    )

    assert [(m.name, m.price, m.max_participants) for m in created] == [
        ("Participante", 15000, 100),
        ("Estudante", 10000, 50),
        ("Convidado", 0, 20),
    ]
    assert [m.order for m in created] == [1, 2, 3]

    again = modality_service.initialize_default_modalities(
        db, assembly_id=assembly.id, created_by="admin_1"
    )
    assert [m.id for m in again] == [m.id for m in created]


def test_initialize_default_modalities_for_age(db):
    assembly = create_random_assembly(db, type="AGE")

    created = modality_service.initialize_default_modalities(
        db, assembly_id=assembly.id, created_by="admin_1"
    )

    assert len(created) == 1
    assert created[0].name == "AGE online"
    assert created[0].price == 0
    assert created[0].max_participants is None


def test_rejecting_a_registration_frees_its_spot(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id, name="Convidado", max_participants=2)
    first = create_registration(db, assembly.id, participant_id="user_1", modality_id=modality.id)
    second = create_registration(db, assembly.id, participant_id="user_2", modality_id=modality.id)
    registration_service.approve(db, registration_id=first.id, reviewed_by="admin_1")
    registration_service.approve(db, registration_id=second.id, reviewed_by="admin_1")

    full = modality_service.can_accept_registration(db, modality_id=modality.id)
    assert full.can_accept is False
    assert full.reason == "Modality is full"

    registration_service.reject(db, registration_id=second.id, reviewed_by="admin_1")

    freed = modality_service.can_accept_registration(db, modality_id=modality.id)
    assert freed.can_accept is True
    assert freed.available_spots == 1


def test_cancelled_registrations_do_not_count_towards_capacity(db):
    assembly = create_random_assembly(db)
    modality = create_modality(db, assembly.id, max_participants=1)
    create_registration(db, assembly.id, modality_id=modality.id, status="cancelled")

    availability = modality_service.can_accept_registration(db, modality_id=modality.id)

    assert availability.can_accept is True
    assert availability.available_spots == 1
