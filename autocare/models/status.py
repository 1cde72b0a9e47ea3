"""Appointment status values and the transition table used by updates."""

from __future__ import annotations

import enum


class AppointmentStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


STATUS_VALUES = tuple(s.value for s in AppointmentStatus)

TERMINAL_STATUSES = frozenset({AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value})

# Transitions reachable through a generic update or cancel. In Progress is
# entered only through worker acceptance.
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    AppointmentStatus.PENDING.value: frozenset({
        AppointmentStatus.CONFIRMED.value, AppointmentStatus.CANCELLED.value,
    }),
    AppointmentStatus.CONFIRMED.value: frozenset({
        AppointmentStatus.PENDING.value, AppointmentStatus.CANCELLED.value,
    }),
    AppointmentStatus.IN_PROGRESS.value: frozenset({
        AppointmentStatus.COMPLETED.value, AppointmentStatus.CANCELLED.value,
    }),
    AppointmentStatus.COMPLETED.value: frozenset(),
    AppointmentStatus.CANCELLED.value: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    current, target = AppointmentStatus(current).value, AppointmentStatus(target).value
    if current == target:
        return True
    return target in ALLOWED_TRANSITIONS[current]
