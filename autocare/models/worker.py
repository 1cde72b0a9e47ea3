"""Worker model — technicians assigned to appointments.

Workload and availability status are derived from the worker's open task
list (assigned appointments not yet completed or cancelled) rather than stored.
"""

from __future__ import annotations

from datetime import date

from sqlalchemy import String, Float, Date, JSON, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from autocare.models.base import Base, ULIDMixin
from autocare.models.status import TERMINAL_STATUSES

WORKER_AVAILABLE = "available"
WORKER_BUSY = "busy"


class Worker(Base, ULIDMixin):
    __tablename__ = "workers"

    full_name: Mapped[str] = mapped_column(String(200), index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    phone_number: Mapped[str] = mapped_column(String(50))
    address: Mapped[str] = mapped_column(String(500))
    primary_specialization: Mapped[str] = mapped_column(String(200))
    skills: Mapped[list] = mapped_column(JSON, default=list)
    certifications: Mapped[list] = mapped_column(JSON, default=list)
    hire_date: Mapped[date] = mapped_column(Date)
    weekly_availability: Mapped[list] = mapped_column(JSON, default=list)
    hourly_rate: Mapped[float] = mapped_column(Float)
    additional_notes: Mapped[str] = mapped_column(Text, default="")
    user_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, unique=True,
    )

    appointments = relationship(
        "Appointment", back_populates="worker", lazy="selectin",
        order_by="Appointment.appointment_date",
    )

    @validates("email")
    def _normalize_email(self, key, value: str) -> str:
        return value.strip().lower()

    @validates("hourly_rate")
    def _validate_hourly_rate(self, key, value):
        if value is None or float(value) < 0:
            raise ValueError("hourly_rate must be a non-negative number")
        return float(value)

    @property
    def tasks(self) -> list:
        """Assigned appointments that are not yet completed or cancelled."""
        return [a for a in self.appointments if a.status not in TERMINAL_STATUSES]

    @property
    def workload(self) -> int:
        return len(self.tasks)

    @property
    def status(self) -> str:
        return WORKER_BUSY if self.tasks else WORKER_AVAILABLE
