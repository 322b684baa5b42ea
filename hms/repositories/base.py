"""
Repository interfaces the services depend on.

Services receive these at construction; the SQLAlchemy implementations live
in ``hms.repositories.sql`` and tests substitute in-memory fakes.
"""
from typing import Any, Dict, List, Optional, Protocol

from ..core.security import UserRole
from ..models import Appointment, Department, Patient, User


class UserRepository(Protocol):
    async def get(self, user_id: int) -> Optional[User]: ...

    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def find_by_email_and_role(self, email: str, role: UserRole) -> Optional[User]: ...

    async def list_by_role(self, role: UserRole) -> List[User]: ...

    async def add(self, fields: Dict[str, Any]) -> User: ...

    async def update(self, user_id: int, fields: Dict[str, Any]) -> Optional[User]: ...


class PatientRepository(Protocol):
    async def get(self, patient_id: int) -> Optional[Patient]: ...

    async def list(self) -> List[Patient]: ...

    async def add(self, fields: Dict[str, Any]) -> Patient: ...

    async def update(self, patient_id: int, fields: Dict[str, Any]) -> Optional[Patient]: ...


class DepartmentRepository(Protocol):
    async def get(self, department_id: int) -> Optional[Department]: ...

    async def find_by_name(self, name: str) -> Optional[Department]: ...

    async def list(self) -> List[Department]: ...

    async def add(self, fields: Dict[str, Any]) -> Department: ...

    async def update(self, department_id: int, fields: Dict[str, Any]) -> Optional[Department]: ...

    async def delete(self, department_id: int) -> bool: ...


class AppointmentRepository(Protocol):
    async def get(self, appointment_id: int) -> Optional[Appointment]: ...

    async def list(self, doctor_id: Optional[int] = None) -> List[Appointment]: ...

    async def add(self, fields: Dict[str, Any]) -> Appointment: ...

    async def update(self, appointment_id: int, fields: Dict[str, Any]) -> Optional[Appointment]: ...
