# tests/crud/test_attendance_crud.py

import pytest
from unittest.mock import MagicMock
from sqlalchemy.exc import IntegrityError

from ag_service import crud
from ag_service.crud.crud_attendance import CRUDAttendance
from ag_service.utils.time import utcnow


def _defaults(name="Joana Prado", attendance="present"):
    now = utcnow()
    return {
        "participant_name": name,
        "attendance": attendance,
        "marked_at": now,
        "marked_by": "admin_1",
        "last_updated": now,
        "last_updated_by": "admin_1",
    }


def test_find_or_create_inserts_then_returns_existing(db):
    session = crud.ag_session.create_active(db, name="Chamada", type="avulsa", created_by="admin_1")

    first, created = crud.attendance.find_or_create(
        db,
        session_id=session.id,
        participant_id="user_1",
        participant_type="user",
        defaults=_defaults(),
    )
    second, created_again = crud.attendance.find_or_create(
        db,
        session_id=session.id,
        participant_id="user_1",
        participant_type="user",
        defaults=_defaults(attendance="absent"),
    )

    assert created is True
    assert created_again is False
    assert second.id == first.id
    assert second.attendance == "present"
    assert len(crud.attendance.get_by_session(db, session_id=session.id)) == 1


def test_find_or_create_separates_participant_types(db):
    session = crud.ag_session.create_active(db, name="Chamada", type="avulsa", created_by="admin_1")
    for participant_type in ("user", "individual"):
        crud.attendance.find_or_create(
            db,
            session_id=session.id,
            participant_id="p_1",
            participant_type=participant_type,
            defaults=_defaults(),
        )
    assert len(crud.attendance.get_by_session(db, session_id=session.id)) == 2


def test_find_or_create_without_type_match_reuses_any_row(db):
    session = crud.ag_session.create_active(db, name="Chamada", type="avulsa", created_by="admin_1")
    row, _ = crud.attendance.find_or_create(
        db,
        session_id=session.id,
        participant_id="p_1",
        participant_type="individual",
        defaults=_defaults(attendance="excluded"),
    )
    found, created = crud.attendance.find_or_create(
        db,
        session_id=session.id,
        participant_id="p_1",
        participant_type="user",
        defaults=_defaults(),
        match_type=False,
    )
    assert created is False
    assert found.id == row.id


def test_find_or_create_recovers_from_concurrent_insert():
    attendance_crud = CRUDAttendance()
    winner = MagicMock(id="att_winner")
    attendance_crud.find = MagicMock(side_effect=[None, winner])
    db_session = MagicMock()
    db_session.commit.side_effect = IntegrityError("INSERT", {}, Exception("duplicate key"))

    row, created = attendance_crud.find_or_create(
        db_session,
        session_id="agses_1",
        participant_id="user_1",
        participant_type="user",
        defaults=_defaults(),
    )

    assert row is winner
    assert created is False
    db_session.rollback.assert_called_once()
    db_session.refresh.assert_not_called()


def test_find_or_create_reraises_when_no_winner_exists():
    attendance_crud = CRUDAttendance()
    attendance_crud.find = MagicMock(return_value=None)
    db_session = MagicMock()
    db_session.commit.side_effect = IntegrityError("INSERT", {}, Exception("fk violation"))

    with pytest.raises(IntegrityError):
        attendance_crud.find_or_create(
            db_session,
            session_id="agses_1",
            participant_id="user_1",
            participant_type="user",
            defaults=_defaults(),
        )
    db_session.rollback.assert_called_once()


def test_remove_by_session_only_touches_that_session(db):
    keep = crud.ag_session.create_active(db, name="A", type="avulsa", created_by="admin_1")
    drop = crud.ag_session.create_active(db, name="B", type="avulsa", created_by="admin_1")
    for session in (keep, drop):
        crud.attendance.find_or_create(
            db,
            session_id=session.id,
            participant_id="user_1",
            participant_type="user",
            defaults=_defaults(),
        )

    removed = crud.attendance.remove_by_session(db, session_id=drop.id)

    assert removed == 1
    assert len(crud.attendance.get_by_session(db, session_id=keep.id)) == 1
    assert crud.attendance.get_by_session(db, session_id=drop.id) == []
