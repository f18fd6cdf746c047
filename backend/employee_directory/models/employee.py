"""Employee ORM — one row per employee record.

Invariants:
    - pk is an internal UUID, never exposed over the API
    - employee_id is the business identifier: non-nullable, unique (uq_employees_employee_id)
    - name, email, position, department, gender, date_of_joining are non-nullable
    - created_at / updated_at maintained by the ORM on every write

Design Decisions:
    - Attachments stored inline as text (data URLs), no blob store
    - date_of_joining is a calendar date; range filters compare dates, not instants
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Date, DateTime, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from employee_directory.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Employee(Base):
    __tablename__ = "employees"

    pk: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    employee_id: Mapped[str] = mapped_column(String(64), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    department: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    gender: Mapped[str] = mapped_column(String(40), nullable=False)
    date_of_joining: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    photo: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    __table_args__ = (
        UniqueConstraint("employee_id", name="uq_employees_employee_id"),
    )

    def __repr__(self) -> str:
        return f"<Employee {self.employee_id!r} {self.name!r}>"
