# tests/services/test_roll_call_service.py

from ag_service.schemas.roll_call import RollCallEntryIn
from ag_service.services import roll_call_service


def _entries():
    return [
        RollCallEntryIn(type="eb", member_id="eb_1", name="Beatriz Lima", role="Presidente"),
        RollCallEntryIn(type="cr", member_id="cr_1", name="Carlos Dias", role="CR Sul"),
        RollCallEntryIn(type="comite", member_id="cl_1", name="IFMSA UFMG", status="Pleno"),
        RollCallEntryIn(type="comite", member_id="cl_2", name="IFMSA UFBA", status="pleno"),
    ]


def test_bulk_insert_and_list(db):
    inserted = roll_call_service.bulk_insert(db, entries=_entries(), updated_by="admin_1")

    assert inserted == 4
    assert len(roll_call_service.list_entries(db)) == 4
    committees = roll_call_service.list_entries(db, type="comite")
    assert [e.member_id for e in committees] == ["cl_2", "cl_1"]
    assert {e.attendance for e in committees} == {"not-counting"}


def test_upsert_entry_patches_existing_member(db):
    roll_call_service.bulk_insert(db, entries=_entries(), updated_by="admin_1")

    entry = roll_call_service.upsert_entry(
        db,
        entry=RollCallEntryIn(type="eb", member_id="eb_1", name="Outro Nome", attendance="present"),
        updated_by="admin_2",
    )

    assert entry.attendance == "present"
    assert entry.name == "Beatriz Lima"
    assert entry.last_updated_by == "admin_2"
    assert len(roll_call_service.list_entries(db)) == 4


def test_upsert_entry_adds_unknown_member(db):
    entry = roll_call_service.upsert_entry(
        db,
        entry=RollCallEntryIn(type="cr", member_id="cr_9", name="Nova CR", attendance="absent"),
        updated_by="admin_1",
    )

    assert entry.id.startswith("call_")
    assert entry.attendance == "absent"


def test_reset_keeps_entries(db):
    roll_call_service.bulk_insert(db, entries=_entries(), updated_by="admin_1")
    roll_call_service.upsert_entry(
        db,
        entry=RollCallEntryIn(type="eb", member_id="eb_1", name="Beatriz Lima", attendance="present"),
        updated_by="admin_1",
    )

    affected = roll_call_service.reset_attendance(db, updated_by="admin_1")

    assert affected == 4
    entries = roll_call_service.list_entries(db)
    assert {e.attendance for e in entries} == {"not-counting"}


def test_clear_all(db):
    roll_call_service.bulk_insert(db, entries=_entries(), updated_by="admin_1")

    assert roll_call_service.clear_all(db, cleared_by="admin_1") == 4
    assert roll_call_service.list_entries(db) == []


def test_build_avulsa_report_input_buckets_by_standing(db):
    roll_call_service.bulk_insert(db, entries=_entries(), updated_by="admin_1")

    report = roll_call_service.build_avulsa_report_input(db)

    assert [r.participant_id for r in report.ebs] == ["eb_1"]
    assert [r.participant_id for r in report.crs] == ["cr_1"]
    assert [r.participant_id for r in report.comites_plenos] == ["cl_1"]
    # Standing must match exactly
    assert [r.participant_id for r in report.comites_nao_plenos] == ["cl_2"]
