"""
Student Records API - Student Store (External Table Access)
=============================================================

What:  The four operations the API needs against the student table:
       select, insert, update and delete, each filtered by column equality.
How:   Thin wrapper over an AsyncSession. Every SQLAlchemy failure is
       converted into DatabaseError carrying the driver message.
Who:   Created per request by `get_student_store`; used by StudentService.

Query shapes:
    select_one(semail=..., spassword=...)
        → SELECT * FROM student_management WHERE semail = :a AND spassword = :b LIMIT 1
    update({"id": 7}, {"sname": "New"})
        → UPDATE student_management SET sname = :n WHERE id = :id
    delete(id=7)
        → DELETE FROM student_management WHERE id = :id
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from student_api.database import get_db_session
from student_api.exceptions import DatabaseError
from student_api.models.student import Student

logger = logging.getLogger(__name__)


class StudentStore:
    """
    Equality-filtered access to the student table through one session.

    Filters are keyword arguments naming Student columns; all of them must
    match. The store does not commit; get_db_session does that at the end
    of the request.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def select_one(self, **filters: Any) -> Optional[Student]:
        """
        Return the first row matching every filter, or None.

        populate_existing refreshes rows already loaded in this session, so a
        read after update() sees the new values.
        """
        query = (
            select(Student)
            .filter_by(**filters)
            .order_by(Student.id)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._wrap("select", e, filters)

    async def insert(self, **values: Any) -> Student:
        """Insert one row and return it with its server-assigned id."""
        student = Student(**values)
        try:
            self.session.add(student)
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("insert", e, {"semail": values.get("semail")})
        logger.info("Student record created: id=%s", student.id)
        return student

    async def update(
        self, filters: Dict[str, Any], values: Dict[str, Any]
    ) -> Optional[Student]:
        """
        Apply `values` to every row matching `filters`, then return the first
        matching row (None when nothing matches afterwards).

        An empty `values` dict skips the UPDATE and only re-reads the row.
        """
        if values:
            statement = update(Student).filter_by(**filters).values(**values)
            try:
                await self.session.execute(statement)
                await self.session.flush()
            except SQLAlchemyError as e:
                raise self._wrap("update", e, filters)
            logger.info("Student record updated: %s fields=%s", filters, sorted(values))

        # Filter on the primary key only; the update may have changed other filter columns
        lookup = {"id": filters["id"]} if "id" in filters else {**filters, **values}
        return await self.select_one(**lookup)

    async def delete(self, **filters: Any) -> int:
        """Delete every row matching the filters; returns the number removed."""
        try:
            result = await self.session.execute(delete(Student).filter_by(**filters))
            await self.session.flush()
        except SQLAlchemyError as e:
            raise self._wrap("delete", e, filters)
        logger.info("Student records deleted: %s count=%d", filters, result.rowcount)
        return result.rowcount

    @staticmethod
    def _wrap(operation: str, error: SQLAlchemyError, filters: Dict[str, Any]) -> DatabaseError:
        # Passwords never reach the log context
        safe = {k: v for k, v in filters.items() if k != "spassword"}
        logger.error("Store %s failed on %s: %s", operation, safe, str(error))
        original = getattr(error, "orig", None)
        return DatabaseError(
            message=str(original or error),
            context={"operation": operation, "error_type": type(error).__name__},
        )


async def get_student_store(db: AsyncSession = Depends(get_db_session)) -> StudentStore:
    """FastAPI dependency: a StudentStore bound to the request's session."""
    return StudentStore(db)
