"""Appointment API: booking lifecycle, worker assignment and service acceptance."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.db.engine import get_db
from autocare.dependencies import require_auth, require_role
from autocare.schemas import (
    AppointmentCreate, AppointmentRead, AppointmentUpdate,
    AssignWorkerRequest, CompleteServiceRequest, dump, envelope,
)
from autocare.services import scheduling
from autocare.services.auth import AuthContext, ROLE_ADMIN

router = APIRouter(prefix="/api/appointments", tags=["appointments"])


@router.post("", status_code=201)
async def create_appointment(
    body: AppointmentCreate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.create_appointment(db, auth, body.model_dump())
    return envelope("Appointment created successfully", dump(AppointmentRead, appointment))


@router.get("")
async def list_appointments(
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    appointments = await scheduling.list_appointments(db)
    return envelope(data=dump(AppointmentRead, appointments))


@router.get("/mine")
async def list_my_appointments(
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointments = await scheduling.list_my_appointments(db, auth)
    return envelope(data=dump(AppointmentRead, appointments))


@router.get("/{appointment_id}")
async def get_appointment(
    appointment_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.get_appointment(db, auth, appointment_id)
    return envelope(data=dump(AppointmentRead, appointment))


@router.put("/{appointment_id}")
async def update_appointment(
    appointment_id: str,
    body: AppointmentUpdate,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.update_appointment(
        db, auth, appointment_id, body.model_dump(exclude_unset=True),
    )
    return envelope("Appointment updated successfully", dump(AppointmentRead, appointment))


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    await scheduling.delete_appointment(db, auth, appointment_id)
    return envelope("Appointment deleted successfully")


@router.put("/{appointment_id}/cancel")
async def cancel_appointment(
    appointment_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.cancel_appointment(db, auth, appointment_id)
    return envelope("Appointment cancelled", dump(AppointmentRead, appointment))


@router.put("/{appointment_id}/assign-worker")
async def assign_worker(
    appointment_id: str,
    body: AssignWorkerRequest,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.assign_worker(
        db, appointment_id, worker_id=body.worker_id, worker_name=body.worker_name,
    )
    return envelope("Worker assigned successfully", dump(AppointmentRead, appointment))


@router.put("/{appointment_id}/unassign-worker")
async def unassign_worker(
    appointment_id: str,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.unassign_worker(db, appointment_id)
    return envelope("Worker unassigned successfully", dump(AppointmentRead, appointment))


@router.put("/{appointment_id}/accept-service")
async def accept_service(
    appointment_id: str,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.accept_service(db, auth, appointment_id)
    return envelope("Service accepted successfully", dump(AppointmentRead, appointment))


@router.put("/{appointment_id}/complete-service")
async def complete_service(
    appointment_id: str,
    body: CompleteServiceRequest,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    appointment = await scheduling.complete_service(
        db, auth, appointment_id,
        checklist=body.checklist, additional_issues=body.additional_issues,
    )
    return envelope("Service completed", dump(AppointmentRead, appointment))
