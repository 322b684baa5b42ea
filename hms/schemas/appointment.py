from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import datetime

from ..models.appointment import AppointmentStatus


class AppointmentCreate(BaseModel):
    patient_id: int
    department_id: int
    doctor_id: int
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    date: datetime.date
    time: str = Field(..., min_length=1)
    reservation_id: str = Field(..., min_length=1)
    notes: Optional[str] = None


class AppointmentUpdate(BaseModel):
    patient_id: Optional[int] = None
    department_id: Optional[int] = None
    doctor_id: Optional[int] = None
    status: Optional[AppointmentStatus] = None
    date: Optional[datetime.date] = None
    time: Optional[str] = Field(None, min_length=1)
    reservation_id: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None


class AppointmentResponse(AppointmentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
