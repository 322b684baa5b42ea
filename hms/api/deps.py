from fastapi import Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import sessionmaker
from typing import Optional

from ..core.config import settings
from ..core.database import get_redis, get_session_factory
from ..core.exceptions import TooManyRequests
from ..core.security import TokenCodec, UserRole, get_token_codec, security
from ..repositories.sql import (
    SQLAlchemyAppointmentRepository, SQLAlchemyDepartmentRepository,
    SQLAlchemyPatientRepository, SQLAlchemyUserRepository
)
from ..schemas.auth import Principal
from ..services.appointment_service import AppointmentService
from ..services.auth_service import AuthService
from ..services.authorization import Authorizer, require_role as check_role
from ..services.department_service import DepartmentService
from ..services.patient_service import PatientService
from ..services.referential_validator import ReferentialValidator
from ..services.user_service import UserService


# Repositories
def get_user_repository(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(session_factory)


def get_patient_repository(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SQLAlchemyPatientRepository:
    return SQLAlchemyPatientRepository(session_factory)


def get_department_repository(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SQLAlchemyDepartmentRepository:
    return SQLAlchemyDepartmentRepository(session_factory)


def get_appointment_repository(
    session_factory: sessionmaker = Depends(get_session_factory),
) -> SQLAlchemyAppointmentRepository:
    return SQLAlchemyAppointmentRepository(session_factory)


# Services
def get_auth_service(
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
    tokens: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(users, tokens)


def get_authorizer(
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
    tokens: TokenCodec = Depends(get_token_codec),
) -> Authorizer:
    return Authorizer(users, tokens)


def get_appointment_service(
    appointments: SQLAlchemyAppointmentRepository = Depends(get_appointment_repository),
    patients: SQLAlchemyPatientRepository = Depends(get_patient_repository),
    departments: SQLAlchemyDepartmentRepository = Depends(get_department_repository),
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
) -> AppointmentService:
    return AppointmentService(appointments, ReferentialValidator(patients, departments, users))


def get_user_service(
    users: SQLAlchemyUserRepository = Depends(get_user_repository),
    departments: SQLAlchemyDepartmentRepository = Depends(get_department_repository),
) -> UserService:
    return UserService(users, departments)


def get_patient_service(
    patients: SQLAlchemyPatientRepository = Depends(get_patient_repository),
) -> PatientService:
    return PatientService(patients)


def get_department_service(
    departments: SQLAlchemyDepartmentRepository = Depends(get_department_repository),
) -> DepartmentService:
    return DepartmentService(departments)


# Authentication
async def get_current_principal(
    request: Request,
    authorizer: Authorizer = Depends(get_authorizer),
    _: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """Resolve the principal behind the request's bearer token."""
    return await authorizer.authenticate(request.headers.get("Authorization"))


# Role-based access control dependencies
def require_role(*allowed_roles: UserRole):
    """Create a dependency that requires one of the given roles."""
    async def role_checker(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        return check_role(principal, allowed_roles)

    return role_checker


get_admin_user = require_role(UserRole.ADMIN)
get_clinical_user = require_role(UserRole.ADMIN, UserRole.DOCTOR)


# Rate limiting dependency
async def rate_limit_check(
    request: Request,
    redis_client=Depends(get_redis),
) -> None:
    """Cap login attempts per client address within a fixed window."""
    client_ip = request.client.host if request.client else "unknown"
    key = f"rate_limit:login:{client_ip}"

    attempts = await run_in_threadpool(redis_client.incr, key)
    if attempts == 1:
        await run_in_threadpool(redis_client.expire, key, settings.LOGIN_RATE_WINDOW_SECONDS)
    if attempts > settings.LOGIN_RATE_LIMIT:
        raise TooManyRequests()
