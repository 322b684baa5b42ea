from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from ..core.security import UserRole, UserStatus


class UserLogin(BaseModel):
    role: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserSummary(BaseModel):
    """Redacted view of an account returned after login."""
    model_config = ConfigDict(from_attributes=True)

    email: str
    role: UserRole
    status: UserStatus


class LoginResponse(BaseModel):
    success: bool = True
    message: str = "Login successful"
    role: UserRole
    token: str
    token_type: str = "bearer"
    user: UserSummary


class Principal(BaseModel):
    """The authenticated identity attached to a request."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: UserRole
    status: UserStatus
    name: Optional[str] = None


class ChangePassword(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)
