"""Employee Routes — list, add, update and delete employee records.

Invariants:
    - Query and body input is validated by Pydantic before reaching the handler
    - Filter parameters never fail the request; invalid dates are dropped
    - Mutations answer with {"message": ...}; failures go through the global error handlers
    - DELETE answers success even when no record matched
    - Id path parameters use the :path converter so ids containing "/" stay addressable
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.core.employee_filters import build_employee_filter
from employee_directory.infrastructure.database import get_db
from employee_directory.schemas.employee import (
    EmployeeCreate,
    EmployeeResponse,
    EmployeeUpdate,
    MessageResponse,
)
from employee_directory.services import employee_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/employees", tags=["employees"])


@router.get("", response_model=list[EmployeeResponse])
@router.get("/", response_model=list[EmployeeResponse], include_in_schema=False)
async def list_employees(
    department: str | None = Query(None),
    gender: str | None = Query(None),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
):
    """List employees matching the optional filters."""
    criteria = build_employee_filter(department, gender, start_date, end_date)
    if (start_date or end_date) and not criteria.has_date_range:
        logger.debug(f"Date range dropped: startDate={start_date!r} endDate={end_date!r}")
    employees = await employee_store.list_employees(db, criteria)
    return [EmployeeResponse.from_model(e) for e in employees]


@router.post("/add", response_model=MessageResponse)
async def add_employee(
    body: EmployeeCreate, db: AsyncSession = Depends(get_db),
):
    await employee_store.add_employee(db, body)
    return MessageResponse(message="Employee added successfully!")


@router.post("/update/{employee_id:path}", response_model=MessageResponse)
async def update_employee(
    employee_id: str, body: EmployeeUpdate, db: AsyncSession = Depends(get_db),
):
    await employee_store.update_employee(db, employee_id, body)
    return MessageResponse(message="Employee updated successfully!")


@router.delete("/{employee_id:path}", response_model=MessageResponse)
async def delete_employee(
    employee_id: str, db: AsyncSession = Depends(get_db),
):
    await employee_store.delete_employee(db, employee_id)
    return MessageResponse(message="Employee deleted successfully.")
