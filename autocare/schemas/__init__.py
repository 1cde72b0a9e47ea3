"""Pydantic request/response schemas."""

from autocare.schemas.common import CamelModel, dump, envelope
from autocare.schemas.service_type import ServiceTypeCreate, ServiceTypeUpdate, ServiceTypeRead, ServiceTypeSummary
from autocare.schemas.appointment import (
    AppointmentCreate, AppointmentUpdate, AppointmentRead,
    AssignWorkerRequest, CompleteServiceRequest, WorkerSummary,
)
from autocare.schemas.worker import WorkerCreate, WorkerUpdate, WorkerRead, TaskSummary
from autocare.schemas.user import RegisterRequest, LoginRequest, UserRead

__all__ = [
    "CamelModel", "dump", "envelope",
    "ServiceTypeCreate", "ServiceTypeUpdate", "ServiceTypeRead", "ServiceTypeSummary",
    "AppointmentCreate", "AppointmentUpdate", "AppointmentRead",
    "AssignWorkerRequest", "CompleteServiceRequest", "WorkerSummary",
    "WorkerCreate", "WorkerUpdate", "WorkerRead", "TaskSummary",
    "RegisterRequest", "LoginRequest", "UserRead",
]
