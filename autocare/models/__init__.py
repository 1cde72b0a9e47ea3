"""SQLAlchemy ORM models."""

from autocare.models.base import Base
from autocare.models.status import AppointmentStatus
from autocare.models.service_type import ServiceType
from autocare.models.user import User, UserSession
from autocare.models.worker import Worker
from autocare.models.appointment import Appointment

__all__ = [
    "Base", "AppointmentStatus",
    "ServiceType", "User", "UserSession", "Worker", "Appointment",
]
