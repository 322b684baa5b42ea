"""
Staff account management.

Accounts are only ever created through admin-only operations, and each
operation fixes the role itself; there is no self-service signup.
"""
from typing import Any, Dict, List, Optional
import logging

from ..core.exceptions import (
    DoctorNotFound, EmailAlreadyRegistered, InvalidReferences, ReferenceFailure, UserNotFound
)
from ..core.security import UserRole, UserStatus, get_password_hash, normalize
from ..models import User
from ..repositories.base import DepartmentRepository, UserRepository
from ..schemas.user import DoctorUpdate, StaffCreate

logger = logging.getLogger(__name__)

DEFAULT_PASSWORDS = {
    UserRole.DOCTOR: "doctor@123",
    UserRole.NURSE: "nurse@123",
}


class UserService:
    def __init__(self, users: UserRepository, departments: DepartmentRepository):
        self.users = users
        self.departments = departments

    async def _check_department(self, department_id: Optional[int]) -> None:
        if department_id is not None and await self.departments.get(department_id) is None:
            raise InvalidReferences([ReferenceFailure.INVALID_DEPARTMENT])

    async def _create_staff(self, data: StaffCreate, role: UserRole) -> User:
        email = normalize(data.email)
        if await self.users.find_by_email(email) is not None:
            raise EmailAlreadyRegistered()
        await self._check_department(data.department_id)

        fields = data.model_dump(exclude={"password"})
        fields.update(
            email=email,
            role=role,
            password_hash=get_password_hash(data.password or DEFAULT_PASSWORDS[role]),
        )
        user = await self.users.add(fields)
        logger.info(f"Created {role.value} account {user.id}")
        return user

    async def create_doctor(self, data: StaffCreate) -> User:
        return await self._create_staff(data, UserRole.DOCTOR)

    async def create_nurse(self, data: StaffCreate) -> User:
        return await self._create_staff(data, UserRole.NURSE)

    async def list_doctors(self) -> List[User]:
        return await self.users.list_by_role(UserRole.DOCTOR)

    async def update_doctor(self, doctor_id: int, data: DoctorUpdate) -> User:
        doctor = await self.users.get(doctor_id)
        if doctor is None or doctor.role != UserRole.DOCTOR:
            raise DoctorNotFound()

        fields: Dict[str, Any] = data.model_dump(exclude_unset=True, exclude_none=True)
        if "password" in fields:
            fields["password_hash"] = get_password_hash(fields.pop("password"))
        if "email" in fields:
            fields["email"] = normalize(fields["email"])
            existing = await self.users.find_by_email(fields["email"])
            if existing is not None and existing.id != doctor_id:
                raise EmailAlreadyRegistered()
        await self._check_department(fields.get("department_id"))

        return await self.users.update(doctor_id, fields)

    async def set_status(self, user_id: int, status: UserStatus) -> User:
        user = await self.users.update(user_id, {"status": status})
        if user is None:
            raise UserNotFound()
        logger.info(f"User {user_id} set to {status.value}")
        return user
