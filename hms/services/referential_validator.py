"""
Referential checks for appointment references.

Patients, departments and users live in independent collections, so every
supplied reference is looked up concurrently and the results are joined
before a verdict is produced. Only supplied references are checked.
"""
from dataclasses import dataclass, field
from typing import List, Optional
import asyncio

from ..core.exceptions import ReferenceFailure
from ..core.security import UserRole
from ..repositories.base import DepartmentRepository, PatientRepository, UserRepository


@dataclass
class ValidationResult:
    failures: List[ReferenceFailure] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.failures


class ReferentialValidator:
    def __init__(
        self,
        patients: PatientRepository,
        departments: DepartmentRepository,
        users: UserRepository,
    ):
        self.patients = patients
        self.departments = departments
        self.users = users

    async def _patient_exists(self, patient_id: int) -> bool:
        return await self.patients.get(patient_id) is not None

    async def _department_exists(self, department_id: int) -> bool:
        return await self.departments.get(department_id) is not None

    async def _is_doctor(self, doctor_id: int) -> bool:
        user = await self.users.get(doctor_id)
        return user is not None and user.role == UserRole.DOCTOR

    async def validate_appointment_refs(
        self,
        patient_id: Optional[int] = None,
        department_id: Optional[int] = None,
        doctor_id: Optional[int] = None,
    ) -> ValidationResult:
        checks = []
        if patient_id is not None:
            checks.append((ReferenceFailure.INVALID_PATIENT, self._patient_exists(patient_id)))
        if department_id is not None:
            checks.append((ReferenceFailure.INVALID_DEPARTMENT, self._department_exists(department_id)))
        if doctor_id is not None:
            checks.append((ReferenceFailure.INVALID_DOCTOR, self._is_doctor(doctor_id)))

        if not checks:
            return ValidationResult()

        tasks = [asyncio.ensure_future(check) for _, check in checks]
        try:
            outcomes = await asyncio.gather(*tasks)
        except BaseException:
            # A failed or cancelled lookup fails the whole validation; stop the rest
            for task in tasks:
                task.cancel()
            raise

        return ValidationResult(
            failures=[failure for (failure, _), ok in zip(checks, outcomes) if not ok]
        )
