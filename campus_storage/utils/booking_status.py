# ================================
# BOOKING LIFECYCLE (utils/booking_status.py)
# ================================

from typing import Dict, FrozenSet, Tuple

from campus_storage.core.exceptions import InvalidStatusTransitionError
from campus_storage.models.enums import BookingStatus

PENDING = BookingStatus.PENDING.value
CONFIRMED = BookingStatus.CONFIRMED.value
CANCELLED = BookingStatus.CANCELLED.value
COMPLETED = BookingStatus.COMPLETED.value

# Valid status transitions
VALID_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    PENDING: (CONFIRMED, CANCELLED),
    CONFIRMED: (CANCELLED, COMPLETED),
    CANCELLED: (),  # terminal
    COMPLETED: (),  # terminal
}

# Who may trigger each transition
TRANSITION_ROLES: Dict[Tuple[str, str], FrozenSet[str]] = {
    (PENDING, CONFIRMED): frozenset({"host"}),
    (PENDING, CANCELLED): frozenset({"host", "renter"}),
    (CONFIRMED, CANCELLED): frozenset({"host", "renter"}),
    (CONFIRMED, COMPLETED): frozenset({"host"}),
}


def is_cancellable(status: str) -> bool:
    return status in (PENDING, CONFIRMED)


def is_active(status: str) -> bool:
    return status == CONFIRMED


def is_editable(status: str) -> bool:
    return status == PENDING


def can_transition(current: str, target: str) -> bool:
    return target in VALID_TRANSITIONS.get(current, ())


def ensure_transition(current: str, target: str) -> None:
    """Raise unless current -> target is a permitted transition"""
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)


def roles_allowed(current: str, target: str) -> FrozenSet[str]:
    return TRANSITION_ROLES.get((current, target), frozenset())
