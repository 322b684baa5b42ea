from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_clinical_user, get_patient_service
from ...schemas.patient import PatientCreate, PatientResponse, PatientUpdate
from ...services.patient_service import PatientService

router = APIRouter(
    prefix="/patients",
    tags=["Patients"],
    dependencies=[Depends(get_clinical_user)],
)


@router.get("", response_model=List[PatientResponse])
async def list_patients(service: PatientService = Depends(get_patient_service)):
    return await service.list()


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(
    data: PatientCreate,
    service: PatientService = Depends(get_patient_service),
):
    return await service.create(data)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    data: PatientUpdate,
    service: PatientService = Depends(get_patient_service),
):
    return await service.update(patient_id, data)
