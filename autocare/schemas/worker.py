from __future__ import annotations

from datetime import date, datetime

from autocare.schemas.common import CamelModel


class WorkerCreate(CamelModel):
    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None
    primary_specialization: str | None = None
    skills: list[str] | str | None = None
    certifications: list[str] | str | None = None
    hire_date: str | None = None
    weekly_availability: list[str] | str | None = None
    hourly_rate: float | None = None
    additional_notes: str | None = None
    password: str | None = None  # creates the worker's login when given


class WorkerUpdate(CamelModel):
    full_name: str | None = None
    email: str | None = None
    phone_number: str | None = None
    address: str | None = None
    primary_specialization: str | None = None
    skills: list[str] | str | None = None
    certifications: list[str] | str | None = None
    hire_date: str | None = None
    weekly_availability: list[str] | str | None = None
    hourly_rate: float | None = None
    additional_notes: str | None = None


class TaskSummary(CamelModel):
    id: str
    make: str
    model: str
    car_number_plate: str
    service_type_id: str
    appointment_date: date
    appointment_time: str
    status: str
    is_accepted_by_worker: bool


class WorkerRead(CamelModel):
    id: str
    full_name: str
    email: str
    phone_number: str
    address: str
    primary_specialization: str
    skills: list[str] = []
    certifications: list[str] = []
    hire_date: date
    weekly_availability: list[str] = []
    hourly_rate: float
    additional_notes: str = ""
    user_id: str | None = None
    workload: int
    status: str  # available | busy
    tasks: list[TaskSummary] = []
    created_at: datetime
