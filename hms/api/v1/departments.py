from fastapi import APIRouter, Depends, status
from typing import List

from ...api.deps import get_admin_user, get_clinical_user, get_department_service
from ...schemas.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from ...services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=List[DepartmentResponse], dependencies=[Depends(get_clinical_user)])
async def list_departments(service: DepartmentService = Depends(get_department_service)):
    """List departments ordered by name."""
    return await service.list()


@router.post(
    "",
    response_model=DepartmentResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(get_admin_user)],
)
async def create_department(
    data: DepartmentCreate,
    service: DepartmentService = Depends(get_department_service),
):
    return await service.create(data)


@router.put("/{department_id}", response_model=DepartmentResponse, dependencies=[Depends(get_admin_user)])
async def update_department(
    department_id: int,
    data: DepartmentUpdate,
    service: DepartmentService = Depends(get_department_service),
):
    return await service.update(department_id, data)


@router.delete("/{department_id}", dependencies=[Depends(get_admin_user)])
async def delete_department(
    department_id: int,
    service: DepartmentService = Depends(get_department_service),
):
    await service.delete(department_id)
    return {"message": "Department deleted successfully"}
