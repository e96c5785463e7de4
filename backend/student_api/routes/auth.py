"""
Student Records API - Login & Registration Routes
===================================================

What:  POST /login and POST /register.
How:   Parse the JSON body, delegate to StudentService, shape the response.
       Failures are raised as application exceptions and rendered by the
       global handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends

from student_api.schemas.student import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    StudentIdentity,
    StudentMutationResponse,
    StudentRecord,
)
from student_api.services.student_service import student_service
from student_api.services.student_store import StudentStore, get_student_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Credentials do not match", "model": ErrorResponse},
    },
    summary="Log a student in",
)
async def login(
    payload: LoginRequest,
    store: StudentStore = Depends(get_student_store),
) -> LoginResponse:
    """Exact email and password match; returns the student's id, name and email."""
    student = await student_service.authenticate(
        store, semail=payload.semail, spassword=payload.spassword
    )
    return LoginResponse(
        message="Login successful",
        student=StudentIdentity(id=student.id, name=student.sname, email=student.semail),
    )


@router.post(
    "/register",
    status_code=201,
    response_model=StudentMutationResponse,
    responses={
        400: {"description": "Missing field or email already registered", "model": ErrorResponse},
    },
    summary="Register a new student",
)
async def register(
    payload: RegisterRequest,
    store: StudentStore = Depends(get_student_store),
) -> StudentMutationResponse:
    student = await student_service.register(
        store,
        sname=payload.sname,
        semail=payload.semail,
        spassword=payload.spassword,
    )
    return StudentMutationResponse(
        message="Student added successfully",
        student=StudentRecord.model_validate(student),
    )
