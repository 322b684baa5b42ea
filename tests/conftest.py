import os
import tempfile

# Settings are read at import time, so configure before importing hms
_test_dir = tempfile.mkdtemp(prefix="hms-tests-")
os.environ["TESTING"] = "1"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_test_dir}/hms.db")
os.environ["TEST_DATABASE_URL"] = f"sqlite:///{_test_dir}/test.db"

import pytest
from fastapi.testclient import TestClient

from hms.core.database import Base, SessionLocal, engine, get_redis, init_db
from hms.core.security import UserRole, UserStatus, get_password_hash
from hms.main import app
from hms.models import User

from .helpers import auth_headers


class FakeRedis:
    """Just the counter commands the login rate limiter uses."""

    def __init__(self):
        self.data = {}
        self.ttls = {}

    def incr(self, key):
        self.data[key] = self.data.get(key, 0) + 1
        return self.data[key]

    def expire(self, key, seconds):
        self.ttls[key] = seconds
        return True


@pytest.fixture
def fake_redis():
    redis_stub = FakeRedis()
    app.dependency_overrides[get_redis] = lambda: redis_stub
    yield redis_stub
    app.dependency_overrides.pop(get_redis, None)


@pytest.fixture(scope="function")
def test_db():
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(test_db, fake_redis):
    with TestClient(app, base_url="http://testserver") as test_client:
        yield test_client


@pytest.fixture
def create_user(test_db):
    """Insert a user straight into the test database and return its id."""
    def _create_user(email, password, role, status=UserStatus.ACTIVE, **fields):
        with SessionLocal() as db:
            user = User(
                email=email,
                password_hash=get_password_hash(password),
                role=role,
                status=status,
                **fields,
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            return user.id

    return _create_user


@pytest.fixture
def admin_headers(client, create_user):
    create_user("admin@hospital.org", "Admin@123", UserRole.ADMIN, name="Super Admin")
    return auth_headers(client, "admin", "admin@hospital.org", "Admin@123")
