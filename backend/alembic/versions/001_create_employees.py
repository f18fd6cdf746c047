"""Create employees table.

Revision ID: 001_create_employees
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_create_employees"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "employees",
        sa.Column("pk", UUID(as_uuid=True), primary_key=True),
        sa.Column("employee_id", sa.String(64), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("position", sa.String(200), nullable=False),
        sa.Column("department", sa.String(120), nullable=False),
        sa.Column("gender", sa.String(40), nullable=False),
        sa.Column("date_of_joining", sa.Date, nullable=False),
        sa.Column("photo", sa.Text, nullable=True),
        sa.Column("resume", sa.Text, nullable=True),
        sa.Column("resume_name", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("employee_id", name="uq_employees_employee_id"),
    )
    op.create_index("ix_employees_department", "employees", ["department"])
    op.create_index("ix_employees_date_of_joining", "employees", ["date_of_joining"])


def downgrade() -> None:
    op.drop_index("ix_employees_date_of_joining", table_name="employees")
    op.drop_index("ix_employees_department", table_name="employees")
    op.drop_table("employees")
