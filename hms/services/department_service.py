from typing import List
import logging

from ..core.exceptions import (
    DepartmentAlreadyExists, DepartmentInUse, DepartmentNotFound, ReferenceConflict
)
from ..models import Department
from ..repositories.base import DepartmentRepository
from ..schemas.department import DepartmentCreate, DepartmentUpdate

logger = logging.getLogger(__name__)


class DepartmentService:
    def __init__(self, departments: DepartmentRepository):
        self.departments = departments

    async def list(self) -> List[Department]:
        return await self.departments.list()

    async def create(self, data: DepartmentCreate) -> Department:
        name = data.name.strip()
        if await self.departments.find_by_name(name) is not None:
            raise DepartmentAlreadyExists()
        return await self.departments.add({"name": name, "description": data.description.strip()})

    async def update(self, department_id: int, data: DepartmentUpdate) -> Department:
        fields = {k: v.strip() for k, v in data.model_dump(exclude_unset=True, exclude_none=True).items()}
        if "name" in fields:
            existing = await self.departments.find_by_name(fields["name"])
            if existing is not None and existing.id != department_id:
                raise DepartmentAlreadyExists()

        department = await self.departments.update(department_id, fields)
        if department is None:
            raise DepartmentNotFound()
        return department

    async def delete(self, department_id: int) -> None:
        try:
            deleted = await self.departments.delete(department_id)
        except ReferenceConflict:
            raise DepartmentInUse()
        if not deleted:
            raise DepartmentNotFound()
        logger.info(f"Department {department_id} deleted")
