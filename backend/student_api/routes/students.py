"""
Student Records API - Student Record Routes
=============================================

What:  Lookup, update and delete of a single record by id.

    GET    /students/search/{id}
    PUT    /students/update/{id}   body: new fields + currentEmail/currentPassword
    DELETE /students/delete/{id}   body: currentEmail/currentPassword

Update and delete re-check the record's current credentials on every call.
A non-integer id is rejected as malformed input (400).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends

from student_api.schemas.student import (
    CurrentCredentials,
    ErrorResponse,
    MessageResponse,
    StudentMutationResponse,
    StudentRecord,
    UpdateRequest,
)
from student_api.services.student_service import student_service
from student_api.services.student_store import StudentStore, get_student_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])


@router.get(
    "/search/{student_id}",
    response_model=StudentRecord,
    responses={
        400: {"description": "Malformed id", "model": ErrorResponse},
        404: {"description": "Student not found", "model": ErrorResponse},
    },
    summary="Look up a student by id",
)
async def search_student(
    student_id: int,
    store: StudentStore = Depends(get_student_store),
) -> StudentRecord:
    student = await student_service.get_student(store, student_id)
    return StudentRecord.model_validate(student)


@router.put(
    "/update/{student_id}",
    response_model=StudentMutationResponse,
    responses={
        400: {"description": "Current credentials missing", "model": ErrorResponse},
        403: {"description": "Current credentials do not match", "model": ErrorResponse},
        404: {"description": "Student not found", "model": ErrorResponse},
    },
    summary="Update a student's name, email or password",
)
async def update_student(
    student_id: int,
    payload: UpdateRequest,
    store: StudentStore = Depends(get_student_store),
) -> StudentMutationResponse:
    """Only the new fields present in the body are written."""
    student = await student_service.update_student(
        store,
        student_id,
        current_email=payload.currentEmail,
        current_password=payload.currentPassword,
        sname=payload.sname,
        semail=payload.semail,
        spassword=payload.spassword,
    )
    return StudentMutationResponse(
        message="Student updated successfully",
        student=StudentRecord.model_validate(student),
    )


@router.delete(
    "/delete/{student_id}",
    response_model=MessageResponse,
    responses={
        400: {"description": "Current credentials missing", "model": ErrorResponse},
        403: {"description": "Current credentials do not match", "model": ErrorResponse},
    },
    summary="Delete a student",
)
async def delete_student(
    student_id: int,
    payload: Optional[CurrentCredentials] = Body(default=None),
    store: StudentStore = Depends(get_student_store),
) -> MessageResponse:
    credentials = payload or CurrentCredentials()
    await student_service.delete_student(
        store,
        student_id,
        current_email=credentials.currentEmail,
        current_password=credentials.currentPassword,
    )
    return MessageResponse(message="Student deleted successfully")
