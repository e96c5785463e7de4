"""
Student Records API - Student SQLAlchemy Model
================================================

What:  ORM model for the student table (default name `student_management`).
Who:   Queried by StudentStore; read by Alembic for migrations.

Table Design:
    - id: integer primary key assigned by the database
    - sname / semail / spassword: column names used by existing clients
    - semail is indexed but NOT unique at the database level; uniqueness is
      checked by StudentService before insert
    - spassword is stored in cleartext
"""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from student_api.config import settings
from student_api.database import Base


class Student(Base):
    """
    One student record.

    Lifecycle:
        1. Inserted by POST /register
        2. Read by POST /login and GET /students/search/{id}
        3. Changed in place by PUT /students/update/{id}
        4. Removed by DELETE /students/delete/{id} (hard delete)
    """

    __tablename__ = settings.student_table

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    sname: Mapped[str] = mapped_column(Text, nullable=False, comment="Student name")

    semail: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Student email, expected to be unique",
    )

    spassword: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Student password (cleartext)",
    )

    __table_args__ = (
        Index(f"idx_{settings.student_table}_semail", "semail"),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sname": self.sname,
            "semail": self.semail,
            "spassword": self.spassword,
        }

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, semail='{self.semail}')>"
