"""Service type model — catalog entry referenced by appointments."""

from __future__ import annotations

from sqlalchemy import String, Integer, JSON, Text
from sqlalchemy.orm import Mapped, mapped_column, validates

from autocare.models.base import Base, ULIDMixin


class ServiceType(Base, ULIDMixin):
    __tablename__ = "service_types"

    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    features: Mapped[list] = mapped_column(JSON, default=list)
    estimated_time: Mapped[int] = mapped_column(Integer)  # minutes

    @validates("estimated_time")
    def _validate_estimated_time(self, key, value):
        if value is None or int(value) < 0:
            raise ValueError("estimated_time must be a non-negative integer")
        return int(value)
