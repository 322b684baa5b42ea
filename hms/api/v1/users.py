from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_admin_user, get_clinical_user, get_user_service
from ...schemas.user import DoctorUpdate, StaffCreate, StatusUpdate, UserResponse
from ...services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/doctors",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_admin_user)],
)
async def create_doctor(
    data: StaffCreate,
    service: UserService = Depends(get_user_service),
):
    """Create a doctor account (admin only)."""
    return await service.create_doctor(data)


@router.get("/doctors", response_model=List[UserResponse], dependencies=[Depends(get_clinical_user)])
async def list_doctors(service: UserService = Depends(get_user_service)):
    return await service.list_doctors()


@router.put("/doctors/{doctor_id}", response_model=UserResponse, dependencies=[Depends(get_admin_user)])
async def update_doctor(
    doctor_id: int,
    data: DoctorUpdate,
    service: UserService = Depends(get_user_service),
):
    """Update a doctor profile (admin only)."""
    return await service.update_doctor(doctor_id, data)


@router.post(
    "/nurses",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_admin_user)],
)
async def create_nurse(
    data: StaffCreate,
    service: UserService = Depends(get_user_service),
):
    """Create a nurse account (admin only)."""
    return await service.create_nurse(data)


@router.patch("/{user_id}/status", response_model=UserResponse, dependencies=[Depends(get_admin_user)])
async def update_user_status(
    user_id: int,
    data: StatusUpdate,
    service: UserService = Depends(get_user_service),
):
    """Activate or deactivate an account (admin only)."""
    return await service.set_status(user_id, data.status)
