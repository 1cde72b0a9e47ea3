"""Service type catalog API: public reads, admin writes."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autocare.db import crud
from autocare.db.engine import get_db
from autocare.dependencies import require_role
from autocare.schemas import ServiceTypeCreate, ServiceTypeRead, ServiceTypeUpdate, dump, envelope
from autocare.services import staff
from autocare.services.auth import AuthContext, ROLE_ADMIN

router = APIRouter(prefix="/api/service-types", tags=["service-types"])


@router.get("")
async def list_service_types(db: AsyncSession = Depends(get_db)):
    service_types = await crud.list_service_types(db)
    return envelope(data=dump(ServiceTypeRead, service_types))


@router.get("/{service_type_id}")
async def get_service_type(service_type_id: str, db: AsyncSession = Depends(get_db)):
    st = await staff.get_service_type(db, service_type_id)
    return envelope(data=dump(ServiceTypeRead, st))


@router.post("", status_code=201)
async def create_service_type(
    body: ServiceTypeCreate,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    st = await staff.create_service_type(db, body.model_dump())
    return envelope("Service type created", dump(ServiceTypeRead, st))


@router.put("/{service_type_id}")
async def update_service_type(
    service_type_id: str,
    body: ServiceTypeUpdate,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    st = await staff.update_service_type(db, service_type_id, body.model_dump(exclude_unset=True))
    return envelope("Service type updated", dump(ServiceTypeRead, st))


@router.delete("/{service_type_id}")
async def delete_service_type(
    service_type_id: str,
    auth: AuthContext = Depends(require_role(ROLE_ADMIN)),
    db: AsyncSession = Depends(get_db),
):
    await staff.delete_service_type(db, service_type_id)
    return envelope("Service type deleted")
