from datetime import datetime, timedelta, timezone

import pytest

from hms.core.exceptions import AccessDenied, InvalidToken, MissingToken, PrincipalNotFound, TokenExpired
from hms.core.config import Settings
from hms.core.security import TokenCodec, UserRole, token_codec
from hms.schemas.auth import Principal
from hms.services.authorization import Authorizer, require_role

from .fakes import FakeUserRepository, doctor, nurse

codec = TokenCodec("unit-test-secret")


@pytest.fixture
def users():
    return FakeUserRepository(doctor(1, email="dr@x.com"), nurse(2))


@pytest.fixture
def authorizer(users):
    return Authorizer(users, codec)


def bearer(token):
    return f"Bearer {token}"


@pytest.mark.asyncio
class TestAuthenticate:

    async def test_valid_token_resolves_principal(self, authorizer):
        principal = await authorizer.authenticate(bearer(codec.encode(1, "dr@x.com", "doctor")))

        assert principal.id == 1
        assert principal.role == UserRole.DOCTOR
        assert not hasattr(principal, "password_hash")

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Basic abc123", "Token abc"])
    async def test_missing_or_non_bearer_header(self, authorizer, header):
        with pytest.raises(MissingToken):
            await authorizer.authenticate(header)

    async def test_malformed_token(self, authorizer):
        with pytest.raises(InvalidToken):
            await authorizer.authenticate("Bearer not-a-jwt")

    async def test_foreign_signature(self, authorizer):
        forged = TokenCodec("someone-else").encode(1, "dr@x.com", "doctor")
        with pytest.raises(InvalidToken):
            await authorizer.authenticate(bearer(forged))

    async def test_token_issued_two_hours_ago_is_expired(self, authorizer):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = codec.encode(1, "dr@x.com", "doctor", issued_at=issued)

        with pytest.raises(TokenExpired) as exc_info:
            await authorizer.authenticate(bearer(token))
        assert exc_info.value.status_code == 401

    async def test_expired_token_with_foreign_signature_is_invalid(self, authorizer):
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = TokenCodec("someone-else").encode(1, "dr@x.com", "doctor", issued_at=issued)
        with pytest.raises(InvalidToken):
            await authorizer.authenticate(bearer(token))

    async def test_deleted_subject_loses_access(self, authorizer, users):
        token = codec.encode(1, "dr@x.com", "doctor")
        del users.records[1]
        with pytest.raises(PrincipalNotFound):
            await authorizer.authenticate(bearer(token))

    async def test_role_is_read_from_storage_not_token(self, authorizer):
        # A nurse token claiming admin still resolves to the stored nurse
        principal = await authorizer.authenticate(bearer(codec.encode(2, "nurse@x.com", "admin")))
        assert principal.role == UserRole.NURSE


class TestRequireRole:

    def principal(self, role):
        return Principal(id=1, email="x@x.com", role=role, status="Active")

    def test_allowed_role_passes_through(self):
        principal = self.principal(UserRole.DOCTOR)
        assert require_role(principal, {UserRole.ADMIN, UserRole.DOCTOR}) is principal

    def test_other_role_is_denied(self):
        with pytest.raises(AccessDenied) as exc_info:
            require_role(self.principal(UserRole.NURSE), {UserRole.ADMIN, UserRole.DOCTOR})
        assert exc_info.value.status_code == 403


def test_codec_requires_secret():
    with pytest.raises(ValueError):
        TokenCodec("")


def test_process_codec_issues_one_hour_tokens():
    payload = token_codec.decode(token_codec.encode(1, "dr@x.com", "doctor"))
    assert payload.exp - payload.iat == 3600


def test_token_lifetime_is_not_a_setting():
    assert "ACCESS_TOKEN_EXPIRE_MINUTES" not in Settings.model_fields
