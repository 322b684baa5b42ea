from typing import List

from ..core.exceptions import PatientNotFound
from ..models import Patient
from ..repositories.base import PatientRepository
from ..schemas.patient import PatientCreate, PatientUpdate


class PatientService:
    def __init__(self, patients: PatientRepository):
        self.patients = patients

    async def list(self) -> List[Patient]:
        return await self.patients.list()

    async def create(self, data: PatientCreate) -> Patient:
        return await self.patients.add(data.model_dump())

    async def update(self, patient_id: int, data: PatientUpdate) -> Patient:
        patient = await self.patients.update(
            patient_id, data.model_dump(exclude_unset=True, exclude_none=True)
        )
        if patient is None:
            raise PatientNotFound()
        return patient
