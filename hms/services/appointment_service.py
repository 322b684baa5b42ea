from typing import Any, Dict, List
import logging

from ..core.exceptions import AppointmentNotFound, InvalidReferences
from ..core.security import UserRole
from ..models import Appointment
from ..repositories.base import AppointmentRepository
from ..schemas.appointment import AppointmentCreate
from ..schemas.auth import Principal
from .referential_validator import ReferentialValidator

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = ("patient_id", "department_id", "doctor_id")


class AppointmentService:
    """Create and update appointments behind referential checks.

    Validation and the write are separate steps with no cross-collection
    lock; the foreign keys on the appointments table reject a write whose
    reference vanished in between.
    """

    def __init__(self, appointments: AppointmentRepository, validator: ReferentialValidator):
        self.appointments = appointments
        self.validator = validator

    async def create(self, draft: AppointmentCreate) -> Appointment:
        result = await self.validator.validate_appointment_refs(
            patient_id=draft.patient_id,
            department_id=draft.department_id,
            doctor_id=draft.doctor_id,
        )
        if not result.is_valid:
            logger.info(f"Appointment rejected: {[f.value for f in result.failures]}")
            raise InvalidReferences(result.failures)

        appointment = await self.appointments.add(draft.model_dump())
        logger.info(f"Appointment {appointment.id} created for doctor {appointment.doctor_id}")
        return appointment

    async def update(self, appointment_id: int, fields: Dict[str, Any]) -> Appointment:
        """Apply a partial update; only the references present are re-validated."""
        if await self.appointments.get(appointment_id) is None:
            raise AppointmentNotFound()

        refs = {name: fields[name] for name in REFERENCE_FIELDS if fields.get(name) is not None}
        if refs:
            result = await self.validator.validate_appointment_refs(**refs)
            if not result.is_valid:
                logger.info(
                    f"Update of appointment {appointment_id} rejected: "
                    f"{[f.value for f in result.failures]}"
                )
                raise InvalidReferences(result.failures)

        appointment = await self.appointments.update(appointment_id, fields)
        if appointment is None:
            raise AppointmentNotFound()
        return appointment

    async def get(self, appointment_id: int) -> Appointment:
        appointment = await self.appointments.get(appointment_id)
        if appointment is None:
            raise AppointmentNotFound()
        return appointment

    async def list_for(self, principal: Principal) -> List[Appointment]:
        """Doctors only see their own appointments."""
        if principal.role == UserRole.DOCTOR:
            return await self.appointments.list(doctor_id=principal.id)
        return await self.appointments.list()
