from .user import User
from .patient import Patient
from .department import Department
from .appointment import Appointment

__all__ = ["User", "Patient", "Department", "Appointment"]
