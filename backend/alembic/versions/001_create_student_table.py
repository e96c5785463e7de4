"""Create student table

Revision ID: 001
Revises: None
Create Date: 2025-03-02 00:00:00.000000+00:00

What:  Creates the student table (name from STUDENT_TABLE, default
       `student_management`) with a non-unique index on semail.

Rollback: downgrade() drops the table (all student data is lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

from student_api.config import settings

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE = settings.student_table
EMAIL_INDEX = f"idx_{TABLE}_semail"


def upgrade() -> None:
    op.create_table(
        TABLE,
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("sname", sa.Text(), nullable=False, comment="Student name"),
        sa.Column(
            "semail",
            sa.Text(),
            nullable=False,
            comment="Student email, expected to be unique",
        ),
        sa.Column(
            "spassword",
            sa.Text(),
            nullable=False,
            comment="Student password (cleartext)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Not unique: duplicate emails are rejected by the API, not the database
    op.create_index(EMAIL_INDEX, TABLE, ["semail"])


def downgrade() -> None:
    op.drop_index(EMAIL_INDEX, table_name=TABLE)
    op.drop_table(TABLE)
