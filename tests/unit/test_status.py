import pytest

from autocare.models import AppointmentStatus
from autocare.models.status import ALLOWED_TRANSITIONS, TERMINAL_STATUSES, can_transition


def test_terminal_statuses_have_no_exits():
    for status in TERMINAL_STATUSES:
        assert ALLOWED_TRANSITIONS[status] == frozenset()


@pytest.mark.parametrize("current,target", [
    ("Pending", "Confirmed"),
    ("Pending", "Cancelled"),
    ("Confirmed", "Pending"),
    ("Confirmed", "Cancelled"),
    ("In Progress", "Completed"),
    ("In Progress", "Cancelled"),
])
def test_allowed_transitions(current, target):
    assert can_transition(current, target)


@pytest.mark.parametrize("current,target", [
    ("Completed", "Pending"),
    ("Cancelled", "Confirmed"),
    ("Pending", "Completed"),
    ("Confirmed", "Completed"),
    ("In Progress", "Confirmed"),
])
def test_rejected_transitions(current, target):
    assert not can_transition(current, target)


def test_same_status_is_a_noop():
    assert can_transition("Completed", "Completed")


def test_enum_members_are_accepted():
    assert can_transition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


def test_unknown_status_raises():
    with pytest.raises(ValueError):
        can_transition("Archived", "Pending")
