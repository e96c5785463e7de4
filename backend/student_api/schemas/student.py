"""
Student Records API - Pydantic Request/Response Schemas
=========================================================

What:  The API contract between clients and the backend.
How:   FastAPI parses request bodies into the request models and serializes
       the response models; both feed the generated OpenAPI docs.

Request fields are all optional at the schema level. Presence checks belong
to StudentService so that a missing field is reported as a 400 with the
service's own message (empty strings count as missing).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class LoginRequest(BaseModel):
    """Body of POST /login."""
    semail: Optional[str] = Field(default=None, description="Student email")
    spassword: Optional[str] = Field(default=None, description="Student password")


class RegisterRequest(BaseModel):
    """Body of POST /register."""
    sname: Optional[str] = Field(default=None, description="Student name")
    semail: Optional[str] = Field(default=None, description="Student email (must be unused)")
    spassword: Optional[str] = Field(default=None, description="Student password")


class CurrentCredentials(BaseModel):
    """
    Credentials of the record being changed.

    Body of DELETE /students/delete/{id}; base of the update body.
    """
    currentEmail: Optional[str] = Field(default=None, description="Email currently stored")
    currentPassword: Optional[str] = Field(default=None, description="Password currently stored")


class UpdateRequest(CurrentCredentials):
    """
    Body of PUT /students/update/{id}.

    Only the new fields that are present and non-empty are applied.
    """
    sname: Optional[str] = Field(default=None, description="New name")
    semail: Optional[str] = Field(default=None, description="New email")
    spassword: Optional[str] = Field(default=None, description="New password")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class StudentRecord(BaseModel):
    """A stored row, returned by register, lookup and update."""
    id: int
    sname: str
    semail: str
    spassword: str

    model_config = ConfigDict(from_attributes=True)


class StudentIdentity(BaseModel):
    """The public identity returned on successful login."""
    id: int
    name: str
    email: str


class LoginResponse(BaseModel):
    message: str = "Login successful"
    student: StudentIdentity


class StudentMutationResponse(BaseModel):
    """Response of register (201) and update (200)."""
    message: str
    student: StudentRecord


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Error format shared by every endpoint.

    Example:
        {"error": "Invalid credentials", "request_id": "a1b2c3d4"}
    """
    error: str = Field(description="Human-readable error message")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
