"""
Domain-specific HTTP exceptions.

Every error carries a preset status code and a stable, user-safe detail so
call sites never choose either. Authentication failures share generic
messages; reference failures say which reference was wrong.
"""
from enum import Enum
from typing import Iterable

from fastapi import HTTPException, status


class AuthenticationError(HTTPException):
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AuthorizationError(HTTPException):
    def __init__(self, detail: str = "Not enough permissions"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
        )


# Authentication

class InvalidCredentials(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Invalid role, email or password")


class AccountInactive(AuthorizationError):
    def __init__(self) -> None:
        super().__init__(
            "Your account is currently inactive. Kindly reach out to the admin for support."
        )


class MissingToken(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Not authorized, no token")


class InvalidToken(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Not authorized, token failed")


class TokenExpired(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Token has expired")


class PrincipalNotFound(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("User not found")


class AccessDenied(AuthorizationError):
    def __init__(self) -> None:
        super().__init__("You do not have permission to perform this action")


class IncorrectPassword(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect",
        )


class TooManyRequests(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please try again later.",
        )


# Referential integrity

class ReferenceFailure(str, Enum):
    INVALID_PATIENT = "InvalidPatient"
    INVALID_DEPARTMENT = "InvalidDepartment"
    INVALID_DOCTOR = "InvalidDoctor"

    @property
    def field(self) -> str:
        return _FAILURE_FIELDS[self]

    @property
    def message(self) -> str:
        return _FAILURE_MESSAGES[self]


_FAILURE_FIELDS = {
    ReferenceFailure.INVALID_PATIENT: "patient_id",
    ReferenceFailure.INVALID_DEPARTMENT: "department_id",
    ReferenceFailure.INVALID_DOCTOR: "doctor_id",
}

_FAILURE_MESSAGES = {
    ReferenceFailure.INVALID_PATIENT: "Invalid patient ID",
    ReferenceFailure.INVALID_DEPARTMENT: "Invalid department ID",
    ReferenceFailure.INVALID_DOCTOR: "Invalid doctor ID or user is not a doctor",
}


class InvalidReferences(HTTPException):
    """Raised with every offending reference, not just the first."""

    def __init__(self, failures: Iterable[ReferenceFailure]) -> None:
        self.failures = list(failures)
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=[
                {"field": f.field, "error": f.value, "message": f.message}
                for f in self.failures
            ],
        )


class ReferenceConflict(HTTPException):
    """A write was rejected because a referenced record changed underneath it."""

    def __init__(self, detail: str = "A referenced record was modified or removed; retry the request") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class DepartmentInUse(ReferenceConflict):
    def __init__(self) -> None:
        super().__init__("Department is still assigned to staff or appointments")


# Not found / conflict

class NotFound(HTTPException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class AppointmentNotFound(NotFound):
    def __init__(self) -> None:
        super().__init__("Appointment not found")


class PatientNotFound(NotFound):
    def __init__(self) -> None:
        super().__init__("Patient not found")


class DepartmentNotFound(NotFound):
    def __init__(self) -> None:
        super().__init__("Department not found")


class DoctorNotFound(NotFound):
    def __init__(self) -> None:
        super().__init__("Doctor not found")


class UserNotFound(NotFound):
    def __init__(self) -> None:
        super().__init__("User not found")


class EmailAlreadyRegistered(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )


class DepartmentAlreadyExists(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="Department already exists",
        )


class DuplicateRecord(HTTPException):
    """A unique column already holds the submitted value."""

    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail="A record with the same unique value already exists",
        )


# Storage

class StorageUnavailable(HTTPException):
    def __init__(self) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred",
        )
