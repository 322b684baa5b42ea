from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_appointment_service, get_clinical_user
from ...schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from ...schemas.auth import Principal
from ...services.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def create_appointment(
    draft: AppointmentCreate,
    _: Principal = Depends(get_clinical_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Create an appointment once all references check out."""
    return await service.create(draft)


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(
    principal: Principal = Depends(get_clinical_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments; doctors only see their own."""
    return await service.list_for(principal)


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: int,
    _: Principal = Depends(get_clinical_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    return await service.get(appointment_id)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    changes: AppointmentUpdate,
    _: Principal = Depends(get_clinical_user),
    service: AppointmentService = Depends(get_appointment_service),
):
    """Partially update an appointment, re-checking only the references sent."""
    return await service.update(
        appointment_id, changes.model_dump(exclude_unset=True, exclude_none=True)
    )
