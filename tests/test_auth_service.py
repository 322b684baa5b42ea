import pytest

from hms.core.exceptions import AccountInactive, IncorrectPassword, InvalidCredentials
from hms.core.security import TokenCodec, UserRole, UserStatus, verify_password
from hms.schemas.auth import Principal
from hms.services import auth_service
from hms.services.auth_service import AuthService

from .fakes import FakeUserRepository, doctor, make_user, nurse

pytestmark = pytest.mark.asyncio

codec = TokenCodec("unit-test-secret")


@pytest.fixture
def users():
    return FakeUserRepository(
        doctor(1, email="dr@x.com", password="p"),
        doctor(2, email="sleepy@x.com", password="p", status=UserStatus.INACTIVE),
        nurse(3, email="nurse@x.com", password="p", status=UserStatus.INACTIVE),
        make_user(4, "admin@x.com", UserRole.ADMIN, password="p"),
    )


@pytest.fixture
def service(users):
    return AuthService(users, codec)


class TestLogin:

    async def test_mixed_case_role_and_email_resolve_to_stored_account(self, service):
        result = await service.login("Doctor", "DR@X.com", "p")

        assert result.success is True
        assert result.role == UserRole.DOCTOR
        payload = codec.decode(result.token)
        assert payload.sub == "1"
        assert payload.role == "doctor"
        assert payload.email == "dr@x.com"

    @pytest.mark.parametrize("role,email", [
        ("doctor", "dr@x.com"),
        ("DOCTOR", "Dr@X.Com"),
        ("  doctor ", "  DR@x.COM  "),
        ("dOcToR", "dr@X.com"),
    ])
    async def test_case_variants_hit_the_same_account(self, service, role, email):
        result = await service.login(role, email, "p")
        assert codec.decode(result.token).sub == "1"

    async def test_lookup_uses_normalized_values(self, service, users):
        await service.login(" Doctor ", " DR@X.COM ", "p")
        assert ("find_by_email_and_role", "dr@x.com", UserRole.DOCTOR) in users.calls

    async def test_wrong_password(self, service):
        with pytest.raises(InvalidCredentials):
            await service.login("doctor", "dr@x.com", "wrong")

    async def test_unknown_email(self, service):
        with pytest.raises(InvalidCredentials):
            await service.login("doctor", "nobody@x.com", "p")

    async def test_unknown_role_is_not_distinguished(self, service, users):
        with pytest.raises(InvalidCredentials) as exc_info:
            await service.login("surgeon", "dr@x.com", "p")
        assert not any(call[0] == "find_by_email_and_role" for call in users.calls)

        with pytest.raises(InvalidCredentials) as other:
            await service.login("doctor", "dr@x.com", "wrong")
        assert exc_info.value.detail == other.value.detail

    async def test_role_mismatch_fails(self, service):
        with pytest.raises(InvalidCredentials):
            await service.login("nurse", "dr@x.com", "p")

    async def test_regex_metacharacters_do_not_match(self, service):
        with pytest.raises(InvalidCredentials):
            await service.login("doc.*", ".*@x.com", "p")

    async def test_inactive_doctor_is_rejected(self, service):
        with pytest.raises(AccountInactive) as exc_info:
            await service.login("doctor", "sleepy@x.com", "p")
        assert exc_info.value.status_code == 403
        assert "admin" in exc_info.value.detail

    async def test_inactive_nurse_is_not_status_gated(self, service):
        result = await service.login("nurse", "nurse@x.com", "p")
        assert result.user.status == UserStatus.INACTIVE

    async def test_summary_never_exposes_password_hash(self, service):
        result = await service.login("admin", "admin@x.com", "p")
        body = result.model_dump()
        assert body["user"] == {"email": "admin@x.com", "role": UserRole.ADMIN, "status": UserStatus.ACTIVE}
        assert "password_hash" not in str(body)

    async def test_repeated_logins_each_issue_valid_tokens(self, service):
        first = await service.login("doctor", "dr@x.com", "p")
        second = await service.login("doctor", "dr@x.com", "p")
        assert codec.decode(first.token).sub == codec.decode(second.token).sub == "1"

    async def test_token_lives_one_hour(self, service):
        payload = codec.decode((await service.login("doctor", "dr@x.com", "p")).token)
        assert payload.exp - payload.iat == 3600

    @pytest.fixture
    def offloaded(self, monkeypatch):
        calls = []

        async def recording_threadpool(func, *args):
            calls.append(func)
            return func(*args)

        monkeypatch.setattr(auth_service, "run_in_threadpool", recording_threadpool)
        return calls

    async def test_password_check_runs_in_threadpool(self, service, offloaded):
        await service.login("doctor", "dr@x.com", "p")
        assert offloaded == [verify_password]

    async def test_timing_check_runs_in_threadpool(self, service, offloaded):
        with pytest.raises(InvalidCredentials):
            await service.login("doctor", "nobody@x.com", "p")
        assert offloaded == [verify_password]


class TestChangePassword:

    async def test_changes_hash(self, service, users):
        principal = Principal.model_validate(users.records[1])
        await service.change_password(principal, "p", "new-secret")
        assert verify_password("new-secret", users.records[1].password_hash)

    async def test_rejects_wrong_current_password(self, service, users):
        principal = Principal.model_validate(users.records[1])
        with pytest.raises(IncorrectPassword):
            await service.change_password(principal, "nope", "new-secret")
