# tests/test_constants.py

import pytest

from ag_service.constants import (
    AttendanceState,
    CommitteeStatus,
    ParticipantType,
    RegistrationStatus,
    can_transition,
)


@pytest.mark.parametrize("status", RegistrationStatus.all_values())
def test_nothing_leaves_cancelled(status):
    assert can_transition("cancelled", status) is False


@pytest.mark.parametrize("current", ["pending", "pending_review", "approved", "rejected"])
@pytest.mark.parametrize("target", RegistrationStatus.all_values())
def test_open_statuses_can_move_anywhere(current, target):
    assert can_transition(current, target) is True


def test_unknown_status_cannot_transition():
    assert can_transition("archived", "approved") is False
    assert RegistrationStatus.is_valid("archived") is False


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Pleno", CommitteeStatus.PLENO),
        ("Não-pleno", CommitteeStatus.NAO_PLENO),
        ("pleno", CommitteeStatus.NAO_PLENO),
        ("Pleno ", CommitteeStatus.NAO_PLENO),
        (None, CommitteeStatus.NAO_PLENO),
        ("", CommitteeStatus.NAO_PLENO),
    ],
)
def test_committee_status_is_exact_match(value, expected):
    assert CommitteeStatus.normalize(value) == expected


def test_attendance_states():
    assert AttendanceState.all_values() == ["present", "absent", "excluded", "not-counting"]
    assert ParticipantType.roster_types() == ["eb", "cr", "comite"]
