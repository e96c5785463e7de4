"""
Student Records API - Student Service Unit Tests
==================================================

What:  StudentService rules against a mocked StudentStore (no database).

What we test:
    ✅ Required-field checks for every operation (empty strings count as missing)
    ✅ Login: exact match succeeds, mismatch raises AuthenticationError
    ✅ Register: duplicate email rejected before insert
    ✅ Update/delete: credential re-check, partial change set, not-found after update
    ✅ Ids outside the INTEGER column range never reach the store
"""

import pytest

from student_api.exceptions import (
    AuthenticationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from student_api.services.student_service import StudentService


class TestAuthenticate:
    """Tests for login by email and password."""

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_matching_credentials_return_student(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student(id=7)

        student = await self.service.authenticate(mock_store, "ada@example.com", "engine")

        assert student.id == 7
        mock_store.select_one.assert_awaited_once_with(
            semail="ada@example.com", spassword="engine"
        )

    @pytest.mark.asyncio
    async def test_no_match_raises_authentication_error(self, mock_store):
        with pytest.raises(AuthenticationError) as exc_info:
            await self.service.authenticate(mock_store, "ada@example.com", "wrong")

        assert exc_info.value.message == "Invalid credentials"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("semail,spassword", [(None, "pw"), ("a@b.c", None), ("", "pw"), ("a@b.c", "")])
    async def test_missing_fields_raise_validation_error(self, mock_store, semail, spassword):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.authenticate(mock_store, semail, spassword)

        assert exc_info.value.message == "Email and password are required"
        mock_store.select_one.assert_not_awaited()


class TestRegister:
    """Tests for creating student records."""

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_new_email_is_inserted(self, mock_store, make_student):
        created = make_student(id=3, sname="Grace", semail="grace@example.com", spassword="cobol")
        mock_store.insert.return_value = created

        student = await self.service.register(mock_store, "Grace", "grace@example.com", "cobol")

        assert student is created
        mock_store.select_one.assert_awaited_once_with(semail="grace@example.com")
        mock_store.insert.assert_awaited_once_with(
            sname="Grace", semail="grace@example.com", spassword="cobol"
        )

    @pytest.mark.asyncio
    async def test_existing_email_is_rejected(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student()

        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(mock_store, "Ada", "ada@example.com", "other")

        assert exc_info.value.message == "Student already exists with this email"
        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_name_is_rejected(self, mock_store):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register(mock_store, "", "ada@example.com", "engine")

        assert exc_info.value.message == "Name, email and password are required"
        mock_store.select_one.assert_not_awaited()


class TestGetStudent:
    """Tests for lookup by id."""

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_found(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student(id=5)

        student = await self.service.get_student(mock_store, 5)

        assert student.id == 5
        mock_store.select_one.assert_awaited_once_with(id=5)

    @pytest.mark.asyncio
    async def test_not_found(self, mock_store):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_student(mock_store, 404)

        assert exc_info.value.message == "Student not found"

    @pytest.mark.asyncio
    async def test_missing_id(self, mock_store):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.get_student(mock_store, None)

        assert exc_info.value.message == "Student ID is required"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("student_id", [2**31, -(2**31) - 1, 2**70])
    async def test_id_outside_column_range_is_not_found(self, mock_store, student_id):
        with pytest.raises(NotFoundError):
            await self.service.get_student(mock_store, student_id)

        mock_store.select_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_largest_column_id_is_looked_up(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student(id=2**31 - 1)

        await self.service.get_student(mock_store, 2**31 - 1)

        mock_store.select_one.assert_awaited_once_with(id=2**31 - 1)


class TestUpdateStudent:
    """Tests for credential-checked updates."""

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_missing_current_credentials(self, mock_store):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_student(mock_store, 1, None, "engine", sname="New")

        assert "Current email and password are required" in exc_info.value.message
        mock_store.select_one.assert_not_awaited()
        mock_store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_credentials_are_denied(self, mock_store):
        mock_store.select_one.return_value = None

        with pytest.raises(PermissionDeniedError):
            await self.service.update_student(
                mock_store, 1, "ada@example.com", "wrong", sname="New"
            )

        mock_store.select_one.assert_awaited_once_with(
            id=1, semail="ada@example.com", spassword="wrong"
        )
        mock_store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_id_outside_column_range_is_denied(self, mock_store):
        with pytest.raises(PermissionDeniedError):
            await self.service.update_student(
                mock_store, 2**70, "ada@example.com", "engine", sname="New"
            )

        mock_store.select_one.assert_not_awaited()
        mock_store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_supplied_fields_are_written(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student()
        mock_store.update.return_value = make_student(sname="Countess")

        student = await self.service.update_student(
            mock_store, 1, "ada@example.com", "engine", sname="Countess", semail="", spassword=None
        )

        assert student.sname == "Countess"
        mock_store.update.assert_awaited_once_with({"id": 1}, {"sname": "Countess"})

    @pytest.mark.asyncio
    async def test_record_gone_after_update_is_not_found(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student()
        mock_store.update.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_student(
                mock_store, 1, "ada@example.com", "engine", spassword="new-secret"
            )


class TestDeleteStudent:
    """Tests for credential-checked deletes."""

    def setup_method(self):
        self.service = StudentService()

    @pytest.mark.asyncio
    async def test_correct_credentials_delete(self, mock_store, make_student):
        mock_store.select_one.return_value = make_student(id=9)

        await self.service.delete_student(mock_store, 9, "ada@example.com", "engine")

        mock_store.delete.assert_awaited_once_with(id=9)

    @pytest.mark.asyncio
    async def test_wrong_credentials_are_denied(self, mock_store):
        with pytest.raises(PermissionDeniedError) as exc_info:
            await self.service.delete_student(mock_store, 9, "ada@example.com", "nope")

        assert exc_info.value.message == "Authentication failed. Please provide correct credentials."
        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_password(self, mock_store):
        with pytest.raises(ValidationError):
            await self.service.delete_student(mock_store, 9, "ada@example.com", "")

        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_id_outside_column_range_is_denied(self, mock_store):
        with pytest.raises(PermissionDeniedError):
            await self.service.delete_student(mock_store, -(2**31) - 1, "ada@example.com", "engine")

        mock_store.select_one.assert_not_awaited()
        mock_store.delete.assert_not_awaited()
