"""Service-type catalog and worker administration."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from autocare import validators
from autocare.db import crud
from autocare.models import ServiceType, Worker
from autocare.services.auth import ROLE_WORKER, hash_password
from autocare.services.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

REQUIRED_WORKER_FIELDS = (
    "full_name", "email", "phone_number", "address",
    "primary_specialization", "hire_date", "hourly_rate",
)


# ── Service types ─────────────────────────────────────────

def _estimated_time(value: Any) -> int:
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Estimated time must be a valid positive integer") from None
    if minutes < 0:
        raise ValidationError("Estimated time must be a valid positive integer")
    return minutes


def _features(value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(f, str) for f in value):
        raise ValidationError("Features must be an array of strings")
    return value


async def create_service_type(db: AsyncSession, data: dict[str, Any]) -> ServiceType:
    name = (data.get("name") or "").strip()
    if not name or data.get("estimated_time") in (None, ""):
        raise ValidationError("Service name and estimated time are required")

    st = await crud.create_service_type(
        db,
        name=name,
        estimated_time=_estimated_time(data["estimated_time"]),
        description=(data.get("description") or "").strip(),
        features=_features(data["features"]) if data.get("features") is not None else [],
    )
    logger.info("Service type %s created (%s)", st.id, st.name)
    return st


async def get_service_type(db: AsyncSession, service_type_id: str) -> ServiceType:
    st = await crud.get_service_type(db, service_type_id)
    if not st:
        raise NotFoundError("Service type not found")
    return st


async def update_service_type(db: AsyncSession, service_type_id: str, data: dict[str, Any]) -> ServiceType:
    st = await get_service_type(db, service_type_id)

    updates: dict[str, Any] = {}
    if data.get("name") is not None:
        name = str(data["name"]).strip()
        if not name:
            raise ValidationError("Service name cannot be empty")
        updates["name"] = name
    if data.get("description") is not None:
        updates["description"] = data["description"]
    if data.get("features") is not None:
        updates["features"] = _features(data["features"])
    if data.get("estimated_time") is not None:
        updates["estimated_time"] = _estimated_time(data["estimated_time"])

    if updates:
        st = await crud.update_service_type(db, st, **updates)
    return st


async def delete_service_type(db: AsyncSession, service_type_id: str) -> None:
    st = await get_service_type(db, service_type_id)
    in_use = await crud.count_appointments_for_service_type(db, st.id)
    if in_use:
        raise ConflictError(f"Service type is used by {in_use} appointment(s)")
    await crud.delete_service_type(db, st)
    logger.info("Service type %s deleted", service_type_id)


# ── Workers ───────────────────────────────────────────────

def _worker_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Validate and normalise the worker attributes present in ``data``."""
    fields: dict[str, Any] = {}
    try:
        for key in ("full_name", "email", "phone_number", "address", "primary_specialization"):
            if data.get(key) is not None:
                fields[key] = str(data[key]).strip()
        if data.get("additional_notes") is not None:
            fields["additional_notes"] = str(data["additional_notes"]).strip()
        if data.get("hire_date") is not None:
            fields["hire_date"] = validators.parse_date(data["hire_date"], "hire date")
        if data.get("hourly_rate") is not None:
            rate = float(data["hourly_rate"])
            if rate < 0:
                raise ValueError("Hourly rate cannot be negative")
            fields["hourly_rate"] = rate
        for key in ("skills", "certifications"):
            if data.get(key) is not None:
                fields[key] = validators.parse_string_list(data[key])
        if data.get("weekly_availability") is not None:
            fields["weekly_availability"] = validators.normalize_weekdays(data["weekly_availability"])
    except (TypeError, ValueError) as e:
        raise ValidationError(str(e)) from e
    if "email" in fields:
        fields["email"] = fields["email"].lower()
    return fields


async def create_worker(db: AsyncSession, data: dict[str, Any]) -> Worker:
    """Register a worker. A ``password`` also creates the worker's login account."""
    missing = [f for f in REQUIRED_WORKER_FIELDS if data.get(f) in (None, "")]
    if missing:
        raise ValidationError("All required fields must be provided")

    fields = _worker_fields(data)
    if await crud.get_worker_by_email(db, fields["email"]):
        raise ConflictError("Email is already in use by another worker")

    worker = Worker(**fields)
    if data.get("password"):
        if await crud.get_user_by_email(db, fields["email"]):
            raise ConflictError("Email is already registered to an account")
        first, _, last = fields["full_name"].partition(" ")
        user = await crud.create_user(
            db, first_name=first, last_name=last, email=fields["email"],
            password_hash=hash_password(data["password"]), role=ROLE_WORKER,
            mobile=fields["phone_number"], commit=False,
        )
        worker.user_id = user.id

    worker.appointments = []
    db.add(worker)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Email is already in use by another worker") from e
    logger.info("Worker %s created (%s)", worker.id, worker.full_name)
    return worker


async def list_workers(db: AsyncSession) -> list[Worker]:
    return await crud.list_workers(db)


async def lookup_workers(db: AsyncSession, name: str) -> list[Worker]:
    """All workers whose name contains ``name``, for disambiguation before assignment."""
    if not name or not name.strip():
        raise ValidationError("A name to search for is required")
    return await crud.find_workers_by_name(db, name)


async def get_worker(db: AsyncSession, worker_id: str) -> Worker:
    worker = await crud.get_worker(db, worker_id)
    if not worker:
        raise NotFoundError("Worker not found")
    return worker


async def update_worker(db: AsyncSession, worker_id: str, data: dict[str, Any]) -> Worker:
    """Partial update. Workload and status are derived and cannot be set."""
    worker = await get_worker(db, worker_id)
    fields = _worker_fields(data)
    for key in ("full_name", "email", "phone_number", "address", "primary_specialization"):
        if key in fields and not fields[key]:
            raise ValidationError(f"{key} cannot be empty")

    if "email" in fields and fields["email"] != worker.email:
        existing = await crud.get_worker_by_email(db, fields["email"])
        if existing and existing.id != worker.id:
            raise ConflictError("Email is already in use by another worker")

    for key, value in fields.items():
        setattr(worker, key, value)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Email is already in use by another worker") from e
    logger.info("Worker %s updated (%s)", worker.id, ", ".join(sorted(fields)) or "no changes")
    return worker


async def delete_worker(db: AsyncSession, worker_id: str) -> None:
    """Delete a worker and detach it from its appointments.

    Detached appointments keep their status and acceptance flag; accepted
    ones are logged so they can be reviewed.
    """
    worker = await get_worker(db, worker_id)
    orphaned = [a.id for a in worker.tasks if a.is_accepted_by_worker]
    if orphaned:
        logger.warning(
            "Worker %s deleted while holding accepted appointments: %s",
            worker_id, ", ".join(orphaned),
        )

    for appointment in list(worker.appointments):
        appointment.worker = None
    await db.delete(worker)
    await db.commit()
    logger.info("Worker %s deleted", worker_id)
