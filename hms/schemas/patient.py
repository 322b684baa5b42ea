from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class PatientCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    age: int
    gender: str = Field(..., min_length=1)
    status: str = "active"
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_history: Optional[str] = None


class PatientUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    status: Optional[str] = None
    blood_group: Optional[str] = None
    address: Optional[str] = None
    emergency_phone: Optional[str] = None
    medical_history: Optional[str] = None


class PatientResponse(PatientCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
