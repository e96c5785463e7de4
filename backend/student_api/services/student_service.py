"""
Student Records API - Student Service (Business Rules)
========================================================

What:  Required-field checks, duplicate-email check and credential matching
       for the five student operations.
How:   Each method issues one or two StudentStore calls and raises an
       application exception for every failure outcome.
Who:   Called by the auth and students route handlers.

Credential model:
    Passwords are stored and compared in cleartext. A credential check is an
    equality filter on the store query; there is no hashing, rate limiting
    or lockout. Update and delete re-check the record's current email and
    password instead of using a session.

Races:
    The duplicate-email check and the credential check are separate reads
    from the write that follows them. Concurrent requests can interleave
    between the two.
"""

import logging
from typing import Optional

from student_api.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from student_api.models.student import Student
from student_api.services.student_store import StudentStore

logger = logging.getLogger(__name__)

CURRENT_CREDENTIALS_REQUIRED = "Current email and password are required for authentication"
STUDENT_NOT_FOUND = "Student not found"

# Bounds of the `id` column (PostgreSQL INTEGER). Ids outside them cannot
# match a row and are never sent to the driver.
MIN_STUDENT_ID = -(2**31)
MAX_STUDENT_ID = 2**31 - 1


def id_in_range(student_id: int) -> bool:
    return MIN_STUDENT_ID <= student_id <= MAX_STUDENT_ID


class StudentService:
    """
    Stateless business logic for student records.

    Every method receives the store to use, so one instance serves all
    requests.
    """

    async def authenticate(
        self,
        store: StudentStore,
        semail: Optional[str],
        spassword: Optional[str],
    ) -> Student:
        """
        Log a student in by exact email and password match.

        Raises:
            ValidationError: email or password missing (→ 400)
            AuthenticationError: no record has both values (→ 401)
        """
        if not semail or not spassword:
            raise ValidationError("Email and password are required")

        student = await store.select_one(semail=semail, spassword=spassword)
        if student is None:
            logger.info("Login rejected for %s", semail)
            raise AuthenticationError("Invalid credentials")
        return student

    async def register(
        self,
        store: StudentStore,
        sname: Optional[str],
        semail: Optional[str],
        spassword: Optional[str],
    ) -> Student:
        """
        Create a new student record.

        Raises:
            ValidationError: a field is missing, or the email is already
                registered (→ 400)
            DatabaseError: the insert failed (→ 500)
        """
        if not sname or not semail or not spassword:
            raise ValidationError("Name, email and password are required")

        existing = await store.select_one(semail=semail)
        if existing is not None:
            raise ValidationError("Student already exists with this email", field="semail")

        return await store.insert(sname=sname, semail=semail, spassword=spassword)

    async def get_student(self, store: StudentStore, student_id: Optional[int]) -> Student:
        """
        Raises:
            ValidationError: no id given (→ 400)
            NotFoundError: no record with that id (→ 404)
        """
        # Unreachable through the routes, whose path always carries an id.
        if student_id is None:
            raise ValidationError("Student ID is required", field="id")
        if not id_in_range(student_id):
            raise NotFoundError(STUDENT_NOT_FOUND, resource="student", resource_id=str(student_id))

        student = await store.select_one(id=student_id)
        if student is None:
            raise NotFoundError(STUDENT_NOT_FOUND, resource="student", resource_id=str(student_id))
        return student

    async def update_student(
        self,
        store: StudentStore,
        student_id: int,
        current_email: Optional[str],
        current_password: Optional[str],
        sname: Optional[str] = None,
        semail: Optional[str] = None,
        spassword: Optional[str] = None,
    ) -> Student:
        """
        Change the fields supplied, after re-checking the current credentials.

        Only non-empty new values are written; email uniqueness is not
        re-checked here.

        Raises:
            ValidationError: current email or password missing (→ 400)
            PermissionDeniedError: current credentials do not match the
                record at `student_id` (→ 403)
            NotFoundError: the record vanished before it could be re-read (→ 404)
        """
        await self._verify_owner(store, student_id, current_email, current_password)

        changes = {
            field: value
            for field, value in (("sname", sname), ("semail", semail), ("spassword", spassword))
            if value
        }
        student = await store.update({"id": student_id}, changes)
        if student is None:
            raise NotFoundError(STUDENT_NOT_FOUND, resource="student", resource_id=str(student_id))
        return student

    async def delete_student(
        self,
        store: StudentStore,
        student_id: int,
        current_email: Optional[str],
        current_password: Optional[str],
    ) -> None:
        """
        Remove a record after re-checking its current credentials.

        Raises:
            ValidationError: current email or password missing (→ 400)
            PermissionDeniedError: credentials do not match (→ 403)
        """
        await self._verify_owner(store, student_id, current_email, current_password)
        await store.delete(id=student_id)

    async def _verify_owner(
        self,
        store: StudentStore,
        student_id: int,
        current_email: Optional[str],
        current_password: Optional[str],
    ) -> Student:
        if not current_email or not current_password:
            raise ValidationError(CURRENT_CREDENTIALS_REQUIRED)
        if not id_in_range(student_id):
            logger.info("Credential check failed for out-of-range id %s", student_id)
            raise PermissionDeniedError()

        student = await store.select_one(
            id=student_id, semail=current_email, spassword=current_password
        )
        if student is None:
            logger.info("Credential check failed for student %s", student_id)
            raise PermissionDeniedError()
        return student


student_service = StudentService()
