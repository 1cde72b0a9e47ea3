from __future__ import annotations

from datetime import datetime

from autocare.schemas.common import CamelModel


class ServiceTypeCreate(CamelModel):
    name: str | None = None
    description: str | None = None
    features: list[str] | None = None
    estimated_time: int | None = None


class ServiceTypeUpdate(ServiceTypeCreate):
    pass


class ServiceTypeSummary(CamelModel):
    id: str
    name: str
    estimated_time: int


class ServiceTypeRead(CamelModel):
    id: str
    name: str
    description: str = ""
    features: list[str] = []
    estimated_time: int
    created_at: datetime
