"""Worker management API: admin CRUD, name lookup and a worker's own schedule."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.db.engine import get_db
from autocare.dependencies import require_role
from autocare.schemas import AppointmentRead, WorkerCreate, WorkerRead, WorkerUpdate, dump, envelope
from autocare.services import scheduling, staff
from autocare.services.auth import AuthContext, ROLE_ADMIN, ROLE_WORKER

router = APIRouter(prefix="/api/workers", tags=["workers"])


@router.get("")
async def list_workers(
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    workers = await staff.list_workers(db)
    return envelope(data=dump(WorkerRead, workers))


@router.post("", status_code=201)
async def create_worker(
    body: WorkerCreate,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    worker = await staff.create_worker(db, body.model_dump())
    return envelope("Worker added successfully", dump(WorkerRead, worker))


@router.get("/lookup")
async def lookup_workers(
    name: str = Query(""),
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    workers = await staff.lookup_workers(db, name)
    return envelope(data=[{"id": w.id, "fullName": w.full_name, "email": w.email} for w in workers])


@router.get("/schedule")
async def my_schedule(
    auth: AuthContext = Depends(require_role(ROLE_WORKER)),
    db: AsyncSession = Depends(get_db),
):
    appointments = await scheduling.worker_schedule(db, auth)
    return envelope(data=dump(AppointmentRead, appointments))


@router.get("/{worker_id}")
async def get_worker(
    worker_id: str,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    worker = await staff.get_worker(db, worker_id)
    return envelope(data=dump(WorkerRead, worker))


@router.put("/{worker_id}")
async def update_worker(
    worker_id: str,
    body: WorkerUpdate,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    worker = await staff.update_worker(db, worker_id, body.model_dump(exclude_unset=True))
    return envelope("Worker updated successfully", dump(WorkerRead, worker))


@router.delete("/{worker_id}")
async def delete_worker(
    worker_id: str,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    await staff.delete_worker(db, worker_id)
    return envelope("Worker deleted successfully")
