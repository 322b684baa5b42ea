"""
Request authorization.

Unauthenticated -> (valid token, resolvable subject) -> Authenticated
-> (role in the route's allowed set) -> Authorized. Every failure is final;
nothing here retries.
"""
from typing import Iterable, Optional
import logging

from ..core.exceptions import AccessDenied, InvalidToken, MissingToken, PrincipalNotFound
from ..core.security import TokenCodec, UserRole
from ..repositories.base import UserRepository
from ..schemas.auth import Principal

logger = logging.getLogger(__name__)


class Authorizer:
    def __init__(self, users: UserRepository, tokens: TokenCodec):
        self.users = users
        self.tokens = tokens

    async def authenticate(self, authorization: Optional[str]) -> Principal:
        """Resolve the acting principal from a raw Authorization header."""
        scheme, _, token = (authorization or "").partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            raise MissingToken()

        payload = self.tokens.decode(token)

        try:
            user_id = int(payload.sub)
        except ValueError:
            raise InvalidToken()

        # Deleted accounts lose access before their token expires
        user = await self.users.get(user_id)
        if user is None:
            logger.warning(f"Token subject {user_id} no longer exists")
            raise PrincipalNotFound()

        return Principal.model_validate(user)


def require_role(principal: Principal, allowed_roles: Iterable[UserRole]) -> Principal:
    """Pass the principal through if its role is allowed, else AccessDenied."""
    if principal.role not in set(allowed_roles):
        logger.info(f"Access denied for user {principal.id} with role {principal.role.value}")
        raise AccessDenied()
    return principal
