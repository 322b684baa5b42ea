import logging

from fastapi.concurrency import run_in_threadpool

from ..core.exceptions import AccountInactive, IncorrectPassword, InvalidCredentials
from ..core.security import (
    DUMMY_PASSWORD_HASH, TokenCodec, UserRole, UserStatus,
    get_password_hash, normalize, verify_password
)
from ..repositories.base import UserRepository
from ..schemas.auth import LoginResponse, Principal, UserSummary

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository, tokens: TokenCodec):
        self.users = users
        self.tokens = tokens

    async def login(self, role: str, email: str, password: str) -> LoginResponse:
        """Authenticate a user for a role and issue an access token.

        Role and email are matched case-insensitively on their normalized
        form. Unknown role, unknown email and wrong password all raise the
        same InvalidCredentials so callers cannot tell which was wrong.
        Doctors must additionally be Active.
        """
        normalized_email = normalize(email)
        try:
            requested_role = UserRole(normalize(role))
        except ValueError:
            requested_role = None

        user = None
        if requested_role is not None and normalized_email:
            user = await self.users.find_by_email_and_role(normalized_email, requested_role)

        if user is None:
            # Keep timing comparable to the found-user path
            await run_in_threadpool(verify_password, password, DUMMY_PASSWORD_HASH)
            logger.info("Login rejected: no matching account")
            raise InvalidCredentials()

        if not await run_in_threadpool(verify_password, password, user.password_hash):
            logger.info(f"Login rejected: bad password for user {user.id}")
            raise InvalidCredentials()

        if user.role == UserRole.DOCTOR and user.status != UserStatus.ACTIVE:
            logger.info(f"Login rejected: doctor {user.id} is inactive")
            raise AccountInactive()

        token = self.tokens.encode(user.id, user.email, user.role.value)
        logger.info(f"User {user.id} logged in as {user.role.value}")

        return LoginResponse(
            role=user.role,
            token=token,
            user=UserSummary.model_validate(user),
        )

    async def change_password(self, principal: Principal, current_password: str, new_password: str) -> None:
        """Change the caller's password after re-checking the current one."""
        user = await self.users.get(principal.id)
        if user is None or not await run_in_threadpool(verify_password, current_password, user.password_hash):
            raise IncorrectPassword()

        password_hash = await run_in_threadpool(get_password_hash, new_password)
        await self.users.update(user.id, {"password_hash": password_hash})
        logger.info(f"User {user.id} changed password")
