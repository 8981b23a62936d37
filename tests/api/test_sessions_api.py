"""API tests for sessions, email verification and the system endpoints.

Tests cover:
- POST /sessions: success, wrong password, unknown email, disabled account
- Lockout after repeated failures (423 with Retry-After)
- POST /email-verifications: valid, unknown and expired tokens
- GET / and GET /health
"""

import pytest

from erp_identity.domain.enums import AccountStatus

PASSWORD = "Correct#Pass1"


def login(client, email: str = "jane.doe@acme.com", password: str = PASSWORD):
    return client.post("/api/v1/sessions", json={"email": email, "password": password})


@pytest.mark.api
class TestCreateSession:
    """POST /api/v1/sessions."""

    def test_login_returns_201(self, client, seed):
        """Test a correct password yields the account and its capabilities."""
        # Arrange
        account = seed("jane.doe@acme.com", role="manager")

        # Act
        response = login(client, email="Jane.Doe@acme.com")

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["account_id"] == str(account.id)
        assert body["role"] == "manager"
        assert body["permissions"] == ["account:create", "account:edit", "account:read"]
        assert body["must_change_credential"] is False

    def test_wrong_password_is_401(self, client, seed):
        seed("jane.doe@acme.com")

        response = login(client, password="Wrong#Pass1")

        assert response.status_code == 401
        assert response.json()["type"].endswith("/errors/invalid_credentials")

    def test_unknown_email_matches_wrong_password(self, client, seed):
        seed("jane.doe@acme.com")

        unknown = login(client, email="nobody@acme.com")
        wrong = login(client, password="Wrong#Pass1")

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json()["detail"] == wrong.json()["detail"]

    def test_suspended_account_is_403(self, client, seed):
        seed("jane.doe@acme.com", status=AccountStatus.SUSPENDED)

        response = login(client)

        assert response.status_code == 403

    def test_missing_password_is_422(self, client):
        response = client.post("/api/v1/sessions", json={"email": "jane.doe@acme.com"})

        assert response.status_code == 422


@pytest.mark.api
class TestLockout:
    """Five failures lock the account for two hours."""

    def test_locked_account_is_423_with_retry_after(self, client, seed):
        """Test the sixth attempt is refused even with the right password."""
        # Arrange
        seed("jane.doe@acme.com")
        for _ in range(5):
            assert login(client, password="Wrong#Pass1").status_code == 401

        # Act
        response = login(client)

        # Assert
        assert response.status_code == 423
        retry_after = int(response.headers["Retry-After"])
        assert 7000 < retry_after <= 7200
        assert "locked_until" in response.json()["context"]

    def test_unlock_allows_login_again(self, client, seed, admin_headers):
        account = seed("jane.doe@acme.com")
        for _ in range(5):
            login(client, password="Wrong#Pass1")

        unlocked = client.delete(f"/api/v1/accounts/{account.id}/lock", headers=admin_headers)
        response = login(client)

        assert unlocked.status_code == 204
        assert response.status_code == 201

    def test_lock_expires(self, client, seed, clock):
        seed("jane.doe@acme.com")
        for _ in range(5):
            login(client, password="Wrong#Pass1")

        clock.advance(hours=2)
        response = login(client)

        assert response.status_code == 201


@pytest.mark.api
class TestEmailVerification:
    """POST /api/v1/email-verifications."""

    def test_valid_token_verifies(self, client, seed, clock):
        seed(
            "jane.doe@acme.com",
            verification_token="tok-123",
            verification_expires_at=clock.now.replace(year=clock.now.year + 1),
        )

        response = client.post("/api/v1/email-verifications", json={"token": "tok-123"})

        assert response.status_code == 201
        assert response.json()["is_verified"] is True

    def test_unknown_token_is_400(self, client):
        response = client.post("/api/v1/email-verifications", json={"token": "nope"})

        assert response.status_code == 400
        assert response.json()["title"] == "Invalid Token"

    def test_expired_token_is_400(self, client, seed, clock):
        seed(
            "jane.doe@acme.com",
            verification_token="tok-123",
            verification_expires_at=clock.now,
        )
        clock.advance(minutes=1)

        response = client.post("/api/v1/email-verifications", json={"token": "tok-123"})

        assert response.status_code == 400
        assert response.json()["title"] == "Token Expired"

    def test_token_is_single_use(self, client, seed, clock):
        seed(
            "jane.doe@acme.com",
            verification_token="tok-123",
            verification_expires_at=clock.now.replace(year=clock.now.year + 1),
        )
        client.post("/api/v1/email-verifications", json={"token": "tok-123"})

        response = client.post("/api/v1/email-verifications", json={"token": "tok-123"})

        assert response.status_code == 400


@pytest.mark.api
class TestSystemEndpoints:
    """GET / and GET /health."""

    def test_root(self, client, settings):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json() == {
            "message": settings.app_name,
            "status": "operational",
            "version": settings.app_version,
        }

    def test_health_without_database(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}
        assert "X-Trace-Id" in response.headers
