"""Appointment lifecycle, worker assignment and service acceptance.

Every operation runs its checks and writes on the caller's session and
commits once. The two slot indexes on ``appointments`` back up the
application-level conflict checks: a concurrent request that slips past a
check fails at commit and is reported as a conflict.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from autocare import validators
from autocare.db import crud
from autocare.models import Appointment, AppointmentStatus, Worker
from autocare.models.status import TERMINAL_STATUSES, can_transition
from autocare.services.auth import AuthContext
from autocare.services.errors import (
    ConflictError, ForbiddenError, InvalidStateError, NotFoundError, ValidationError,
)

logger = logging.getLogger(__name__)

REQUIRED_BOOKING_FIELDS = (
    "make", "model", "year", "car_number_plate", "mileage",
    "service_type", "appointment_date", "appointment_time",
)

PLATE_CONFLICT = "An appointment for this vehicle already exists at the selected date and time"
WORKER_CONFLICT = "Worker already has an appointment at the selected date and time"

# Fields only an admin may patch through a generic update.
ADMIN_ONLY_FIELDS = ("status", "checklist", "additional_issues")


def _conflict_message(error: IntegrityError) -> str:
    """Name the slot rule a failed commit broke: sqlite reports the columns, postgres the index."""
    detail = str(error.orig)
    if "uq_appointment_worker_slot" in detail or "appointments.worker_id" in detail:
        return WORKER_CONFLICT
    return PLATE_CONFLICT


async def _commit(db: AsyncSession) -> None:
    """Commit, turning a slot-index violation into a ConflictError."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.warning("Commit rejected by unique index: %s", e.orig)
        raise ConflictError(_conflict_message(e)) from e


def _is_owner(appointment: Appointment, auth: AuthContext) -> bool:
    return appointment.user_id == auth.user_id


def _is_assigned_worker(appointment: Appointment, auth: AuthContext) -> bool:
    return auth.worker_id is not None and appointment.worker_id == auth.worker_id


def _require_owner_or_admin(appointment: Appointment, auth: AuthContext) -> None:
    if not (auth.is_admin or _is_owner(appointment, auth)):
        raise ForbiddenError("You do not have permission to modify this appointment")


async def _load(db: AsyncSession, appointment_id: str) -> Appointment:
    appointment = await crud.get_appointment(db, appointment_id)
    if not appointment:
        raise NotFoundError("Appointment not found")
    return appointment


def _clear_worker(appointment: Appointment) -> None:
    appointment.worker = None
    appointment.is_accepted_by_worker = False


# ── Lifecycle ─────────────────────────────────────────────

async def create_appointment(db: AsyncSession, auth: AuthContext, data: dict[str, Any]) -> Appointment:
    """Book a new appointment for the requesting user."""
    missing = [f for f in REQUIRED_BOOKING_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    service_type = await crud.get_service_type(db, str(data["service_type"]))
    if not service_type:
        raise ValidationError("Invalid service type reference")

    user = await crud.get_user(db, auth.user_id)
    if not user or not user.is_active:
        raise NotFoundError("User not found")

    try:
        on = validators.ensure_not_past(validators.parse_appointment_date(data["appointment_date"]))
        at = validators.normalize_time(data["appointment_time"])
        plate = validators.normalize_plate(data["car_number_plate"])
        year = validators.validate_year(data["year"])
        mileage = validators.validate_mileage(data["mileage"])
    except ValueError as e:
        raise ValidationError(str(e)) from e

    if await crud.find_plate_booking(db, plate, on, at):
        logger.warning("Double booking rejected for %s on %s %s", plate, on, at)
        raise ConflictError(PLATE_CONFLICT)

    appointment = Appointment(
        make=str(data["make"]).strip(),
        model=str(data["model"]).strip(),
        year=year,
        car_number_plate=plate,
        mileage=mileage,
        service_type=service_type,
        appointment_date=on,
        appointment_time=at,
        notes=data.get("notes") or "",
        user=user.display_name,
        owner=user,
        worker=None,
        status=AppointmentStatus.CONFIRMED.value,
        is_accepted_by_worker=False,
        checklist={},
        additional_issues="",
    )
    db.add(appointment)
    await _commit(db)
    logger.info("Appointment %s booked for %s on %s %s", appointment.id, plate, on, at)
    return appointment


async def list_appointments(db: AsyncSession) -> list[Appointment]:
    return await crud.list_appointments(db)


async def list_my_appointments(db: AsyncSession, auth: AuthContext) -> list[Appointment]:
    return await crud.list_appointments_for_user(db, auth.user_id)


async def get_appointment(db: AsyncSession, auth: AuthContext, appointment_id: str) -> Appointment:
    """Fetch one appointment; only its owner or its assigned worker may see it."""
    appointment = await _load(db, appointment_id)
    if not (_is_owner(appointment, auth) or _is_assigned_worker(appointment, auth)):
        raise ForbiddenError("You do not have permission to view this appointment")
    return appointment


async def update_appointment(
    db: AsyncSession, auth: AuthContext, appointment_id: str, patch: dict[str, Any],
) -> Appointment:
    """Partial update. Fields left out (or null) keep their current value."""
    appointment = await _load(db, appointment_id)
    _require_owner_or_admin(appointment, auth)

    patch = {k: v for k, v in patch.items() if v is not None}
    if not auth.is_admin and any(f in patch for f in ADMIN_ONLY_FIELDS):
        raise ForbiddenError("Only an administrator can change status or service results")

    changes: dict[str, Any] = {}
    try:
        if "appointment_date" in patch:
            changes["appointment_date"] = validators.ensure_not_past(
                validators.parse_appointment_date(patch["appointment_date"])
            )
        if "appointment_time" in patch:
            changes["appointment_time"] = validators.normalize_time(patch["appointment_time"])
        if "car_number_plate" in patch:
            changes["car_number_plate"] = validators.normalize_plate(patch["car_number_plate"])
        if "year" in patch:
            changes["year"] = validators.validate_year(patch["year"])
        if "mileage" in patch:
            changes["mileage"] = validators.validate_mileage(patch["mileage"])
        if "status" in patch:
            changes["status"] = AppointmentStatus(patch["status"]).value
    except ValueError as e:
        raise ValidationError(str(e)) from e

    for field in ("make", "model", "notes", "additional_issues"):
        if field in patch:
            changes[field] = str(patch[field]).strip() if field in ("make", "model") else patch[field]
    if "checklist" in patch:
        if not isinstance(patch["checklist"], dict):
            raise ValidationError("Checklist must be a mapping of item names to booleans")
        changes["checklist"] = {str(k): bool(v) for k, v in patch["checklist"].items()}

    service_type = None
    if "service_type" in patch:
        service_type = await crud.get_service_type(db, str(patch["service_type"]))
        if not service_type:
            raise ValidationError("Invalid service type reference")

    new_status = changes.get("status", appointment.status)
    if new_status != appointment.status:
        if new_status == AppointmentStatus.IN_PROGRESS.value:
            raise InvalidStateError("An appointment moves to In Progress only when its worker accepts it")
        if not can_transition(appointment.status, new_status):
            raise InvalidStateError(f"Cannot change status from {appointment.status} to {new_status}")

    on = changes.get("appointment_date", appointment.appointment_date)
    at = changes.get("appointment_time", appointment.appointment_time)
    plate = changes.get("car_number_plate", appointment.car_number_plate)
    slot_changed = (on, at, plate) != (
        appointment.appointment_date, appointment.appointment_time, appointment.car_number_plate,
    )
    if slot_changed and new_status != AppointmentStatus.CANCELLED.value:
        if await crud.find_plate_booking(db, plate, on, at, exclude_id=appointment.id):
            raise ConflictError(PLATE_CONFLICT)
        if appointment.worker_id and await crud.find_worker_booking(
            db, appointment.worker_id, on, at, exclude_id=appointment.id,
        ):
            raise ConflictError(WORKER_CONFLICT)

    for field, value in changes.items():
        setattr(appointment, field, value)
    if service_type is not None:
        appointment.service_type = service_type
        changes["service_type"] = service_type.id
    if new_status == AppointmentStatus.CANCELLED.value:
        _clear_worker(appointment)

    await _commit(db)
    logger.info("Appointment %s updated (%s)", appointment.id, ", ".join(sorted(changes)) or "no changes")
    return appointment


async def delete_appointment(db: AsyncSession, auth: AuthContext, appointment_id: str) -> None:
    appointment = await _load(db, appointment_id)
    _require_owner_or_admin(appointment, auth)

    # Drop it from the worker's in-memory task list as well as from the table.
    if appointment.worker is not None:
        appointment.worker.appointments.remove(appointment)
    await db.delete(appointment)
    await db.commit()
    logger.info("Appointment %s deleted", appointment_id)


async def cancel_appointment(db: AsyncSession, auth: AuthContext, appointment_id: str) -> Appointment:
    """Cancel a booking and release its worker."""
    appointment = await _load(db, appointment_id)
    _require_owner_or_admin(appointment, auth)

    if appointment.status in TERMINAL_STATUSES:
        raise InvalidStateError(f"Cannot cancel an appointment that is {appointment.status}")

    appointment.status = AppointmentStatus.CANCELLED.value
    _clear_worker(appointment)
    await db.commit()
    logger.info("Appointment %s cancelled", appointment.id)
    return appointment


# ── Worker assignment ─────────────────────────────────────

async def resolve_worker(
    db: AsyncSession, worker_id: str | None = None, worker_name: str | None = None,
) -> Worker:
    """Find exactly one worker by id, or by case-insensitive full name."""
    if worker_id:
        worker = await crud.get_worker(db, worker_id)
        if not worker:
            raise NotFoundError("Worker not found")
        return worker

    if not worker_name or not worker_name.strip():
        raise ValidationError("A worker id or worker name is required")

    matches = await crud.find_workers_by_name(db, worker_name, exact=True)
    if not matches:
        raise NotFoundError(f'Worker with name "{worker_name}" not found.')
    if len(matches) > 1:
        raise ConflictError(
            f'More than one worker is named "{worker_name}"; assign by worker id',
            data=[{"id": w.id, "fullName": w.full_name, "email": w.email} for w in matches],
        )
    return matches[0]


async def assign_worker(
    db: AsyncSession, appointment_id: str,
    worker_id: str | None = None, worker_name: str | None = None,
) -> Appointment:
    worker = await resolve_worker(db, worker_id, worker_name)
    appointment = await _load(db, appointment_id)

    if appointment.status in TERMINAL_STATUSES:
        raise InvalidStateError(f"Cannot assign a worker to an appointment that is {appointment.status}")

    clash = await crud.find_worker_booking(
        db, worker.id, appointment.appointment_date, appointment.appointment_time,
        exclude_id=appointment.id,
    )
    if clash:
        logger.warning(
            "Worker %s already booked on %s %s (appointment %s)",
            worker.id, appointment.appointment_date, appointment.appointment_time, clash.id,
        )
        raise ConflictError(WORKER_CONFLICT)

    appointment.worker = worker
    appointment.status = AppointmentStatus.CONFIRMED.value
    appointment.is_accepted_by_worker = False
    await _commit(db)
    logger.info("Worker %s assigned to appointment %s", worker.id, appointment.id)
    return appointment


async def unassign_worker(db: AsyncSession, appointment_id: str) -> Appointment:
    appointment = await _load(db, appointment_id)
    if appointment.worker_id is None:
        raise InvalidStateError("No worker assigned to this appointment.")
    if appointment.status in TERMINAL_STATUSES:
        raise InvalidStateError(f"Cannot unassign the worker of an appointment that is {appointment.status}")

    worker_id = appointment.worker_id
    _clear_worker(appointment)
    appointment.status = AppointmentStatus.CONFIRMED.value
    await db.commit()
    logger.info("Worker %s unassigned from appointment %s", worker_id, appointment.id)
    return appointment


async def worker_schedule(db: AsyncSession, auth: AuthContext) -> list[Appointment]:
    """The requesting worker's assigned appointments, earliest first."""
    if not auth.worker_id:
        raise ForbiddenError("Only workers have a schedule")
    return await crud.list_appointments_for_worker(db, auth.worker_id)


# ── Service acceptance ────────────────────────────────────

async def _load_for_assigned_worker(db: AsyncSession, auth: AuthContext, appointment_id: str) -> Appointment:
    appointment = await _load(db, appointment_id)
    if appointment.worker_id is None:
        raise InvalidStateError("No worker assigned to this appointment.")
    if not _is_assigned_worker(appointment, auth):
        raise ForbiddenError("Only the assigned worker can act on this appointment")
    return appointment


async def accept_service(db: AsyncSession, auth: AuthContext, appointment_id: str) -> Appointment:
    appointment = await _load_for_assigned_worker(db, auth, appointment_id)
    if appointment.status not in (AppointmentStatus.PENDING.value, AppointmentStatus.CONFIRMED.value):
        raise InvalidStateError(f"Cannot accept an appointment that is {appointment.status}")

    appointment.is_accepted_by_worker = True
    appointment.status = AppointmentStatus.IN_PROGRESS.value
    await db.commit()
    logger.info("Worker %s accepted appointment %s", auth.worker_id, appointment.id)
    return appointment


async def complete_service(
    db: AsyncSession, auth: AuthContext, appointment_id: str,
    checklist: dict[str, bool] | None = None, additional_issues: str | None = None,
) -> Appointment:
    """Record the service checklist and close an accepted appointment."""
    appointment = await _load_for_assigned_worker(db, auth, appointment_id)
    if appointment.status != AppointmentStatus.IN_PROGRESS.value:
        raise InvalidStateError("Only an appointment in progress can be completed")

    if checklist is not None:
        appointment.checklist = {str(k): bool(v) for k, v in checklist.items()}
    if additional_issues is not None:
        appointment.additional_issues = additional_issues
    appointment.status = AppointmentStatus.COMPLETED.value
    await db.commit()
    logger.info("Worker %s completed appointment %s", auth.worker_id, appointment.id)
    return appointment
