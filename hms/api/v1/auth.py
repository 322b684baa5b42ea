from fastapi import APIRouter, Depends

from ...api.deps import get_auth_service, get_current_principal, rate_limit_check
from ...schemas.auth import ChangePassword, LoginResponse, Principal, UserLogin
from ...services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
    _: None = Depends(rate_limit_check),
):
    """Authenticate a user for a role and return an access token."""
    return await auth_service.login(login_data.role, login_data.email, login_data.password)


@router.get("/me", response_model=Principal)
async def get_current_user_info(
    principal: Principal = Depends(get_current_principal),
):
    """Get current user information."""
    return principal


@router.post("/change-password")
async def change_password(
    password_data: ChangePassword,
    principal: Principal = Depends(get_current_principal),
    auth_service: AuthService = Depends(get_auth_service),
):
    """Change the caller's password."""
    await auth_service.change_password(
        principal, password_data.current_password, password_data.new_password
    )
    return {"message": "Password changed successfully"}
