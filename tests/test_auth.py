from datetime import datetime, timedelta, timezone

from hms.core.security import UserRole, UserStatus, token_codec

from .helpers import auth_headers, login


class TestAuthentication:

    def test_login_success(self, client, create_user):
        """Mixed-case role and email log into the stored account."""
        create_user("dr@x.com", "DocPass123", UserRole.DOCTOR)

        response = login(client, "Doctor", "DR@X.com", "DocPass123")
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["role"] == "doctor"
        assert data["token"]
        assert data["user"] == {"email": "dr@x.com", "role": "doctor", "status": "Active"}
        assert "password_hash" not in response.text

    def test_login_invalid_credentials(self, client, create_user):
        create_user("dr@x.com", "DocPass123", UserRole.DOCTOR)

        unknown = login(client, "doctor", "nobody@x.com", "DocPass123")
        wrong_role = login(client, "nurse", "dr@x.com", "DocPass123")
        wrong_password = login(client, "doctor", "dr@x.com", "wrong")

        for response in (unknown, wrong_role, wrong_password):
            assert response.status_code == 401
        assert unknown.json() == wrong_role.json() == wrong_password.json()

    def test_login_inactive_doctor(self, client, create_user):
        create_user("dr@x.com", "DocPass123", UserRole.DOCTOR, status=UserStatus.INACTIVE)

        response = login(client, "doctor", "dr@x.com", "DocPass123")
        assert response.status_code == 403
        assert "admin" in response.json()["detail"]

    def test_login_requires_fields(self, client):
        response = client.post("/api/v1/auth/login", json={"role": "", "email": "a@b.c", "password": "x"})
        assert response.status_code == 422

    def test_login_rate_limited(self, client, fake_redis):
        for _ in range(10):
            assert login(client, "doctor", "dr@x.com", "nope").status_code == 401

        response = login(client, "doctor", "dr@x.com", "nope")
        assert response.status_code == 429

    def test_get_current_user(self, client, create_user):
        create_user("nurse@x.com", "NursePass1", UserRole.NURSE, name="Ann")
        headers = auth_headers(client, "nurse", "nurse@x.com", "NursePass1")

        response = client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 200

        data = response.json()
        assert data["email"] == "nurse@x.com"
        assert data["role"] == "nurse"
        assert data["name"] == "Ann"
        assert "password_hash" not in data

    def test_get_current_user_without_token(self, client):
        response = client.get("/api/v1/auth/me")
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, no token"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_get_current_user_invalid_token(self, client):
        headers = {"Authorization": "Bearer invalid_token"}

        response = client.get("/api/v1/auth/me", headers=headers)
        assert response.status_code == 401
        assert response.json()["detail"] == "Not authorized, token failed"

    def test_get_current_user_expired_token(self, client, create_user):
        user_id = create_user("dr@x.com", "DocPass123", UserRole.DOCTOR)
        issued = datetime.now(timezone.utc) - timedelta(hours=2)
        token = token_codec.encode(user_id, "dr@x.com", "doctor", issued_at=issued)

        response = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_change_password(self, client, create_user):
        create_user("dr@x.com", "DocPass123", UserRole.DOCTOR)
        headers = auth_headers(client, "doctor", "dr@x.com", "DocPass123")

        response = client.post(
            "/api/v1/auth/change-password",
            json={"current_password": "DocPass123", "new_password": "NewPass456"},
            headers=headers,
        )
        assert response.status_code == 200
        assert login(client, "doctor", "dr@x.com", "NewPass456").status_code == 200
        assert login(client, "doctor", "dr@x.com", "DocPass123").status_code == 401

    def test_change_password_wrong_current(self, client, create_user):
        create_user("dr@x.com", "DocPass123", UserRole.DOCTOR)
        headers = auth_headers(client, "doctor", "dr@x.com", "DocPass123")

        response = client.post(
            "/api/v1/auth/change-password",
            json={"current_password": "WrongPassword", "new_password": "NewPass456"},
            headers=headers,
        )
        assert response.status_code == 400
