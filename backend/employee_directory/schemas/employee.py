"""Employee Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Wire format is camelCase (dateOfJoining, resumeName, createdAt, updatedAt)
    - EmployeeCreate: id and the six required fields are present and non-blank after strip
    - EmployeeUpdate: every field optional, but a supplied required field may not be blank or null
    - EmployeeUpdate has no id field: the business key cannot be re-keyed through update
    - dateOfJoining accepts YYYY-MM-DD or an ISO datetime (date part kept)

Design Decisions:
    - alias_generator=to_camel with populate_by_name: Python side stays snake_case
    - Unknown keys are ignored (clients echo back display-only fields)
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from employee_directory.models.employee import Employee

REQUIRED_TEXT_FIELDS = ("name", "email", "position", "department", "gender")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _strip_required(v: str | None, field_name: str) -> str:
    if v is None:
        raise ValueError(f"{field_name} cannot be null")
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v


def _date_part(v: object) -> object:
    # "2024-01-15T00:00:00.000Z" -> "2024-01-15"
    if isinstance(v, str) and len(v) > 10 and v[10] in "T ":
        return v[:10]
    return v


class EmployeeCreate(_CamelModel):
    """Full record for POST /add."""
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1, max_length=200)
    email: str = Field(min_length=1, max_length=320)
    position: str = Field(min_length=1, max_length=200)
    department: str = Field(min_length=1, max_length=120)
    gender: str = Field(min_length=1, max_length=40)
    date_of_joining: date
    photo: str | None = None
    resume: str | None = None
    resume_name: str | None = Field(None, max_length=255)

    @field_validator("id", *REQUIRED_TEXT_FIELDS)
    @classmethod
    def strip_required(cls, v: str, info) -> str:
        return _strip_required(v, info.field_name)

    @field_validator("date_of_joining", mode="before")
    @classmethod
    def take_date_part(cls, v: object) -> object:
        return _date_part(v)


class EmployeeUpdate(_CamelModel):
    """Partial record for POST /update/{id}. Only supplied fields are merged."""
    name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, min_length=1, max_length=320)
    position: str | None = Field(None, min_length=1, max_length=200)
    department: str | None = Field(None, min_length=1, max_length=120)
    gender: str | None = Field(None, min_length=1, max_length=40)
    date_of_joining: date | None = None
    photo: str | None = None
    resume: str | None = None
    resume_name: str | None = Field(None, max_length=255)

    # Validators only run on supplied values, so None here means an explicit null
    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def strip_required(cls, v: str | None, info) -> str:
        return _strip_required(v, info.field_name)

    @field_validator("date_of_joining", mode="before")
    @classmethod
    def take_date_part(cls, v: object) -> object:
        if v is None:
            raise ValueError("date_of_joining cannot be null")
        return _date_part(v)

    def changes(self) -> dict:
        """Supplied fields only, keyed by ORM attribute name."""
        return self.model_dump(exclude_unset=True)


class EmployeeResponse(_CamelModel):
    """Public record. The internal storage key is never exposed."""
    id: str
    name: str
    email: str
    position: str
    department: str
    gender: str
    date_of_joining: date
    photo: str | None = None
    resume: str | None = None
    resume_name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, employee: Employee) -> "EmployeeResponse":
        return cls(
            id=employee.employee_id,
            name=employee.name,
            email=employee.email,
            position=employee.position,
            department=employee.department,
            gender=employee.gender,
            date_of_joining=employee.date_of_joining,
            photo=employee.photo,
            resume=employee.resume,
            resume_name=employee.resume_name,
            created_at=employee.created_at,
            updated_at=employee.updated_at,
        )


class MessageResponse(BaseModel):
    """Plain acknowledgment for mutations."""
    message: str
