"""Appointment model — a scheduled service visit for one vehicle."""

from __future__ import annotations

from datetime import date

from sqlalchemy import String, Integer, Date, Boolean, JSON, Text, ForeignKey, Index, text
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from autocare.models.base import Base, ULIDMixin
from autocare.models.status import AppointmentStatus, STATUS_VALUES
from autocare import validators


class Appointment(Base, ULIDMixin):
    __tablename__ = "appointments"
    __table_args__ = (
        # One live booking per car per slot; cancelled bookings free the slot.
        Index(
            "uq_appointment_plate_slot",
            "car_number_plate", "appointment_date", "appointment_time",
            unique=True,
            sqlite_where=text("status != 'Cancelled'"),
            postgresql_where=text("status != 'Cancelled'"),
        ),
        # One booking per worker per slot, only once a worker is assigned.
        Index(
            "uq_appointment_worker_slot",
            "worker_id", "appointment_date", "appointment_time",
            unique=True,
            sqlite_where=text("worker_id IS NOT NULL"),
            postgresql_where=text("worker_id IS NOT NULL"),
        ),
    )

    make: Mapped[str] = mapped_column(String(100))
    model: Mapped[str] = mapped_column(String(100))
    year: Mapped[int] = mapped_column(Integer)
    car_number_plate: Mapped[str] = mapped_column(String(20), index=True)
    mileage: Mapped[int] = mapped_column(Integer)
    service_type_id: Mapped[str] = mapped_column(String(26), ForeignKey("service_types.id"))
    appointment_date: Mapped[date] = mapped_column(Date, index=True)
    appointment_time: Mapped[str] = mapped_column(String(5))  # HH:MM
    notes: Mapped[str] = mapped_column(Text, default="")
    user: Mapped[str] = mapped_column(String(255))  # owner display name at booking time
    user_id: Mapped[str] = mapped_column(String(26), ForeignKey("users.id"), index=True)
    worker_id: Mapped[str | None] = mapped_column(
        String(26), ForeignKey("workers.id", ondelete="SET NULL"), nullable=True, default=None,
    )
    status: Mapped[str] = mapped_column(String(20), default=AppointmentStatus.CONFIRMED.value)
    is_accepted_by_worker: Mapped[bool] = mapped_column(Boolean, default=False)
    checklist: Mapped[dict] = mapped_column(JSON, default=dict)
    additional_issues: Mapped[str] = mapped_column(Text, default="")

    service_type = relationship("ServiceType", lazy="selectin")
    owner = relationship("User", lazy="selectin")
    worker = relationship("Worker", back_populates="appointments", lazy="selectin")

    @validates("year")
    def _validate_year(self, key, value):
        return validators.validate_year(value)

    @validates("mileage")
    def _validate_mileage(self, key, value):
        return validators.validate_mileage(value)

    @validates("car_number_plate")
    def _validate_plate(self, key, value):
        return validators.normalize_plate(value)

    @validates("appointment_time")
    def _validate_time(self, key, value):
        return validators.normalize_time(value)

    @validates("status")
    def _validate_status(self, key, value):
        value = value.value if isinstance(value, AppointmentStatus) else value
        if value not in STATUS_VALUES:
            raise ValueError(f"Invalid status '{value}'")
        return value

    def __repr__(self):
        return f"<Appointment {self.car_number_plate} {self.appointment_date} {self.appointment_time} ({self.status})>"
