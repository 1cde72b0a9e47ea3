"""CRUD operations for the entity store."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.models import Appointment, AppointmentStatus, ServiceType, User, Worker


# ── ServiceType ───────────────────────────────────────────

async def create_service_type(
    db: AsyncSession, name: str, estimated_time: int,
    description: str = "", features: list | None = None,
) -> ServiceType:
    st = ServiceType(
        name=name, estimated_time=estimated_time,
        description=description, features=features or [],
    )
    db.add(st)
    await db.commit()
    await db.refresh(st)
    return st


async def get_service_type(db: AsyncSession, service_type_id: str) -> ServiceType | None:
    return await db.get(ServiceType, service_type_id)


async def list_service_types(db: AsyncSession) -> list[ServiceType]:
    result = await db.execute(select(ServiceType).order_by(ServiceType.name))
    return list(result.scalars().all())


async def update_service_type(db: AsyncSession, st: ServiceType, **kwargs) -> ServiceType:
    for k, v in kwargs.items():
        if v is not None:
            setattr(st, k, v)
    await db.commit()
    await db.refresh(st)
    return st


async def count_appointments_for_service_type(db: AsyncSession, service_type_id: str) -> int:
    result = await db.execute(
        select(func.count(Appointment.id)).where(Appointment.service_type_id == service_type_id)
    )
    return result.scalar_one()


async def delete_service_type(db: AsyncSession, st: ServiceType) -> None:
    await db.delete(st)
    await db.commit()


# ── User ──────────────────────────────────────────────────

async def get_user(db: AsyncSession, user_id: str) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    return result.scalars().first()


async def create_user(
    db: AsyncSession, first_name: str, last_name: str, email: str,
    password_hash: str, role: str = "customer", commit: bool = True, **extra,
) -> User:
    user = User(
        first_name=first_name, last_name=last_name, email=email.strip().lower(),
        password_hash=password_hash, role=role, **extra,
    )
    db.add(user)
    if commit:
        await db.commit()
        await db.refresh(user)
    else:
        await db.flush()
    return user


# ── Worker ────────────────────────────────────────────────

async def get_worker(db: AsyncSession, worker_id: str) -> Worker | None:
    return await db.get(Worker, worker_id)


async def get_worker_by_email(db: AsyncSession, email: str) -> Worker | None:
    result = await db.execute(select(Worker).where(Worker.email == email.strip().lower()))
    return result.scalars().first()


async def list_workers(db: AsyncSession) -> list[Worker]:
    result = await db.execute(select(Worker).order_by(Worker.created_at.desc()))
    return list(result.scalars().all())


async def find_workers_by_name(db: AsyncSession, name: str, exact: bool = False) -> list[Worker]:
    """Case-insensitive name search; ``exact`` matches the whole name."""
    needle = name.strip().lower()
    lowered = func.lower(Worker.full_name)
    clause = lowered == needle if exact else lowered.contains(needle, autoescape=True)
    result = await db.execute(select(Worker).where(clause).order_by(Worker.full_name))
    return list(result.scalars().all())


async def get_worker_for_user(db: AsyncSession, user_id: str) -> Worker | None:
    result = await db.execute(select(Worker).where(Worker.user_id == user_id))
    return result.scalars().first()


# ── Appointment ───────────────────────────────────────────

async def get_appointment(db: AsyncSession, appointment_id: str) -> Appointment | None:
    return await db.get(Appointment, appointment_id)


async def list_appointments(db: AsyncSession) -> list[Appointment]:
    result = await db.execute(
        select(Appointment).order_by(
            Appointment.appointment_date.desc(), Appointment.appointment_time.desc(),
        )
    )
    return list(result.scalars().all())


async def list_appointments_for_user(db: AsyncSession, user_id: str) -> list[Appointment]:
    result = await db.execute(
        select(Appointment)
        .where(Appointment.user_id == user_id)
        .order_by(Appointment.appointment_date.desc(), Appointment.appointment_time.desc())
    )
    return list(result.scalars().all())


async def list_appointments_for_worker(db: AsyncSession, worker_id: str) -> list[Appointment]:
    result = await db.execute(
        select(Appointment)
        .where(Appointment.worker_id == worker_id)
        .order_by(Appointment.appointment_date, Appointment.appointment_time)
    )
    return list(result.scalars().all())


async def find_plate_booking(
    db: AsyncSession, plate: str, on: date, at: str, exclude_id: str | None = None,
) -> Appointment | None:
    """Existing live booking of the same car in the same slot."""
    stmt = select(Appointment).where(
        Appointment.car_number_plate == plate,
        Appointment.status != AppointmentStatus.CANCELLED.value,
        Appointment.appointment_date == on,
        Appointment.appointment_time == at,
    )
    if exclude_id:
        stmt = stmt.where(Appointment.id != exclude_id)
    result = await db.execute(stmt)
    return result.scalars().first()


async def find_worker_booking(
    db: AsyncSession, worker_id: str, on: date, at: str, exclude_id: str | None = None,
) -> Appointment | None:
    """Another appointment already held by the worker in the same slot."""
    stmt = select(Appointment).where(
        Appointment.worker_id == worker_id,
        Appointment.appointment_date == on,
        Appointment.appointment_time == at,
    )
    if exclude_id:
        stmt = stmt.where(Appointment.id != exclude_id)
    result = await db.execute(stmt)
    return result.scalars().first()
