from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from datetime import datetime

from ..core.security import UserRole, UserStatus


class StaffCreate(BaseModel):
    """Payload for admin-created staff accounts.

    There is no ``role`` field: the endpoint decides the role,
    and any role sent by the client is dropped with the other unknown keys.
    """
    email: EmailStr
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = None
    phone: Optional[str] = Field(None, pattern=r"^[0-9]{10}$")
    specialty: Optional[str] = None
    department_id: Optional[int] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    status: UserStatus = UserStatus.ACTIVE


class DoctorUpdate(BaseModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6)
    name: Optional[str] = None
    phone: Optional[str] = Field(None, pattern=r"^[0-9]{10}$")
    specialty: Optional[str] = None
    department_id: Optional[int] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    status: Optional[UserStatus] = None


class StatusUpdate(BaseModel):
    status: UserStatus


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: UserRole
    status: UserStatus
    name: Optional[str] = None
    phone: Optional[str] = None
    specialty: Optional[str] = None
    department_id: Optional[int] = None
    experience: Optional[str] = None
    qualification: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
