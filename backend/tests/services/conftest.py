"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched so readiness probes hit the test engine
    - directory_client talks to the real app in-process through ASGITransport
"""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from employee_directory.db.base import Base
from employee_directory.infrastructure.database import get_db, DatabaseSessionManager
from employee_directory.infrastructure.directory_client import DirectoryClient
from employee_directory.models.employee import Employee
import employee_directory.infrastructure.database as db_module
from employee_directory.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def directory_client(client):
    """DirectoryClient wired to the same in-process app as `client`."""
    dc = DirectoryClient(
        "http://test/api/employees", transport=ASGITransport(app=app),
    )
    yield dc
    await dc.aclose()


def make_employee(employee_id: str, **overrides) -> Employee:
    values = {
        "employee_id": employee_id,
        "name": f"Employee {employee_id}",
        "email": f"{employee_id.lower()}@example.com",
        "position": "Engineer",
        "department": "Developer",
        "gender": "Female",
        "date_of_joining": date(2024, 1, 15),
    }
    values.update(overrides)
    return Employee(**values)


@pytest.fixture
async def seed_employees(test_db):
    """Five employees spread across departments, genders and join dates."""
    employees = [
        make_employee("E001", name="Amy Adams", department="HR", gender="Female",
                      date_of_joining=date(2023, 1, 10)),
        make_employee("E002", name="Bob Brown", department="HR", gender="Male",
                      date_of_joining=date(2023, 6, 1)),
        make_employee("E003", name="Cara Diaz", department="Design", gender="Female",
                      date_of_joining=date(2024, 3, 15)),
        make_employee("E004", name="Dan Evans", department="Developer", gender="Male",
                      date_of_joining=date(2024, 12, 31)),
        make_employee("E005", name="Eve Fox", department="Developer", gender="Other",
                      date_of_joining=date(2025, 2, 20)),
    ]
    test_db.add_all(employees)
    await test_db.commit()
    return employees
