"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so Base.metadata is complete before create_all / alembic
"""

from employee_directory.models.employee import Employee  # noqa: F401
