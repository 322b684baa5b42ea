from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from fastapi.security import HTTPBearer
from pydantic import BaseModel, ValidationError
from enum import Enum

from .config import settings
from .exceptions import InvalidToken, TokenExpired

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer scheme for the OpenAPI docs; the header itself is parsed by the Authorizer
security = HTTPBearer(auto_error=False)


class UserRole(str, Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    NURSE = "nurse"


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class TokenPayload(BaseModel):
    sub: str
    email: str
    role: str
    iat: int
    exp: int


def normalize(value: str) -> str:
    """Canonical form used for identity matching: trimmed, lower-cased."""
    return value.strip().lower()


# Password utilities
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Generate password hash."""
    return pwd_context.hash(password)


# Verified against when no account matches so lookups take the same time
DUMMY_PASSWORD_HASH = get_password_hash("dummy-password-for-timing")


class TokenCodec:
    """Signs and verifies the short-lived access tokens handed out at login."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(hours=1),
    ):
        if not secret_key:
            raise ValueError("A signing secret is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def encode(
        self,
        user_id,
        email: str,
        role: str,
        issued_at: Optional[datetime] = None,
    ) -> str:
        """Create a signed token for the given subject."""
        issued_at = issued_at or datetime.now(timezone.utc)
        expire = issued_at + self.expires_delta

        to_encode = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int(expire.timestamp()),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode(self, token: str) -> TokenPayload:
        """Verify and decode a token.

        Expiry is reported as TokenExpired; every other failure (bad
        signature, malformed token, missing claims) collapses to
        InvalidToken.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpired()
        except JWTError:
            raise InvalidToken()

        try:
            return TokenPayload(**payload)
        except ValidationError:
            raise InvalidToken()


# Access tokens always live for one hour
token_codec = TokenCodec(settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def get_token_codec() -> TokenCodec:
    """Get the process-wide token codec."""
    return token_codec
