# ag_service/constants/registration.py
"""
Registration status values and the transitions allowed between them.
"""
from enum import Enum


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    PENDING_REVIEW = "pending_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"

    @classmethod
    def all_values(cls) -> list[str]:
        return [s.value for s in cls]

    @classmethod
    def is_valid(cls, status: str) -> bool:
        return status in cls.all_values()


# Registrations in these states do not hold a spot.
ACTIVE_EXCLUDED_STATUSES = frozenset(
    {RegistrationStatus.REJECTED.value, RegistrationStatus.CANCELLED.value}
)

# States an admin still has to look at.
REVIEW_QUEUE_STATUSES = frozenset(
    {RegistrationStatus.PENDING.value, RegistrationStatus.PENDING_REVIEW.value}
)

# Cancelled is terminal. Every other state may be moved anywhere (including
# onto itself, for re-reviews) so admins can correct mistakes.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    status: frozenset(RegistrationStatus.all_values())
    for status in RegistrationStatus.all_values()
    if status != RegistrationStatus.CANCELLED.value
}
ALLOWED_TRANSITIONS[RegistrationStatus.CANCELLED.value] = frozenset()


def can_transition(current: str, target: str) -> bool:
    """Whether a registration may move from ``current`` to ``target``."""
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())
