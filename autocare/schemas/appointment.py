from __future__ import annotations

from datetime import date, datetime

from autocare.schemas.common import CamelModel
from autocare.schemas.service_type import ServiceTypeSummary


class AppointmentCreate(CamelModel):
    make: str | None = None
    model: str | None = None
    year: int | None = None
    car_number_plate: str | None = None
    mileage: int | None = None
    service_type: str | None = None  # ServiceType id
    appointment_date: str | None = None  # YYYY-MM-DD or ISO datetime
    appointment_time: str | None = None  # HH:MM
    notes: str | None = None


class AppointmentUpdate(AppointmentCreate):
    status: str | None = None
    checklist: dict[str, bool] | None = None
    additional_issues: str | None = None


class AssignWorkerRequest(CamelModel):
    worker_id: str | None = None
    worker_name: str | None = None


class CompleteServiceRequest(CamelModel):
    checklist: dict[str, bool] = {}
    additional_issues: str = ""


class WorkerSummary(CamelModel):
    id: str
    full_name: str
    email: str


class AppointmentRead(CamelModel):
    id: str
    make: str
    model: str
    year: int
    car_number_plate: str
    mileage: int
    service_type_id: str
    service_type: ServiceTypeSummary | None = None
    appointment_date: date
    appointment_time: str
    notes: str = ""
    user: str
    user_id: str
    worker_id: str | None = None
    worker: WorkerSummary | None = None
    status: str
    is_accepted_by_worker: bool
    checklist: dict[str, bool] = {}
    additional_issues: str = ""
    created_at: datetime
