"""Employee Store — list/add/update/delete against the employees table.

Invariants:
    - Lookups for update/delete go through the business id, never the storage key
    - add: an existing id raises DuplicateIdentifierError and leaves the stored record untouched
    - update: a missing id raises ResourceNotFoundError and creates nothing
    - update: only supplied fields are overwritten (shallow merge)
    - delete: succeeds whether or not a row matched
    - list: store-native order, no sorting applied here

Design Decisions:
    - Filter parsing lives in core/employee_filters.py; this module only translates it to SQL
    - Duplicate check before insert plus IntegrityError fallback for concurrent inserts
"""

import logging

from sqlalchemy import Select, delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from employee_directory.core.employee_filters import EmployeeFilter, describe_filter
from employee_directory.core.errors import (
    DuplicateIdentifierError,
    ErrorContext,
    RecordValidationError,
    ResourceNotFoundError,
)
from employee_directory.models.employee import Employee
from employee_directory.schemas.employee import EmployeeCreate, EmployeeUpdate

logger = logging.getLogger(__name__)


def apply_filter(query: Select, criteria: EmployeeFilter) -> Select:
    """Translate a normalised filter into WHERE clauses."""
    if criteria.department:
        query = query.where(Employee.department == criteria.department)
    if criteria.gender:
        query = query.where(Employee.gender == criteria.gender)
    if criteria.has_date_range:
        query = query.where(
            Employee.date_of_joining >= criteria.joined_from,
            Employee.date_of_joining <= criteria.joined_to,
        )
    return query


async def list_employees(
    db: AsyncSession, criteria: EmployeeFilter,
) -> list[Employee]:
    result = await db.execute(apply_filter(select(Employee), criteria))
    employees = list(result.scalars().all())
    logger.info(
        "Listed employees",
        extra={"record_count": len(employees), "filters": describe_filter(criteria)},
    )
    return employees


async def get_employee(db: AsyncSession, employee_id: str) -> Employee | None:
    result = await db.execute(
        select(Employee).where(Employee.employee_id == employee_id),
    )
    return result.scalar_one_or_none()


async def add_employee(db: AsyncSession, body: EmployeeCreate) -> Employee:
    if await get_employee(db, body.id) is not None:
        raise DuplicateIdentifierError(body.id)

    employee = Employee(employee_id=body.id, **body.model_dump(exclude={"id"}))
    db.add(employee)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        if await get_employee(db, body.id) is not None:
            raise DuplicateIdentifierError(body.id)
        logger.error(f"Insert rejected by store constraint: {e}")
        raise RecordValidationError(
            "Record violates a store constraint", field="unknown",
            context=ErrorContext(employee_id=body.id, operation="create"),
        )

    logger.info("Employee added", extra={"employee_id": body.id})
    return employee


async def update_employee(
    db: AsyncSession, employee_id: str, body: EmployeeUpdate,
) -> Employee:
    employee = await get_employee(db, employee_id)
    if employee is None:
        raise ResourceNotFoundError(
            "Employee", employee_id, ErrorContext(operation="update"),
        )

    changes = body.changes()
    for attr, value in changes.items():
        setattr(employee, attr, value)
    await db.commit()

    logger.info(
        f"Employee updated ({len(changes)} field(s))",
        extra={"employee_id": employee_id},
    )
    return employee


async def delete_employee(db: AsyncSession, employee_id: str) -> bool:
    """Delete by business id. Returns whether a row was removed."""
    result = await db.execute(
        delete(Employee).where(Employee.employee_id == employee_id),
    )
    await db.commit()
    deleted = result.rowcount > 0
    if deleted:
        logger.info("Employee deleted", extra={"employee_id": employee_id})
    else:
        logger.info(
            "Delete matched no employee", extra={"employee_id": employee_id},
        )
    return deleted
