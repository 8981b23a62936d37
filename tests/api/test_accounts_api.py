"""API tests for the accounts resource.

Tests cover:
- Actor resolution (missing, malformed, unknown and unauthorized callers)
- POST /accounts (201, request validation, duplicate email)
- GET /accounts and GET /accounts/{id}
- PATCH /accounts/{id} (allowed and protected fields)
- DELETE /accounts/{id} (soft delete, repeat delete, self-deletion)
- Credential reset (204, undelivered password 502)
- DELETE /accounts/{id}/lock
- PUT /accounts/me/credential
- RFC 9457 error bodies and X-Trace-Id
"""

from datetime import timedelta

import pytest
from uuid_extensions import uuid7

from erp_identity.domain.enums import AccountStatus
from tests.utils.fakes import FailingNotifier

NEW_ACCOUNT = {
    "first_name": "Jane",
    "last_name": "Doe",
    "email": "Jane.Doe@Acme.com",
    "role": "staff",
    "department": "Finance",
}


@pytest.mark.api
class TestActorResolution:
    """X-Actor-Id handling shared by every accounts endpoint."""

    def test_missing_header_is_401(self, client):
        response = client.get("/api/v1/accounts")

        assert response.status_code == 401
        body = response.json()
        assert body["title"] == "Authentication Required"
        assert body["detail"] == "X-Actor-Id header is required"
        assert body["type"].endswith("/errors/unauthorized")

    def test_malformed_header_is_401(self, client):
        response = client.get("/api/v1/accounts", headers={"X-Actor-Id": "not-a-uuid"})

        assert response.status_code == 401

    def test_unknown_actor_is_401(self, client):
        response = client.get("/api/v1/accounts", headers={"X-Actor-Id": str(uuid7())})

        assert response.status_code == 401

    def test_suspended_actor_is_403(self, client, seed):
        suspended = seed("gone@acme.com", role="admin", status=AccountStatus.SUSPENDED)

        response = client.get(
            "/api/v1/accounts", headers={"X-Actor-Id": str(suspended.id)}
        )

        assert response.status_code == 403

    def test_trace_id_echoed(self, client):
        response = client.get("/api/v1/accounts", headers={"X-Trace-Id": "trace-42"})

        assert response.headers["X-Trace-Id"] == "trace-42"
        assert response.json()["trace_id"] == "trace-42"


@pytest.mark.api
class TestCreateAccount:
    """POST /api/v1/accounts."""

    def test_create_returns_201(self, client, admin_headers, notifier):
        """Test creation returns the account and delivers the welcome message."""
        # Act
        response = client.post("/api/v1/accounts", json=NEW_ACCOUNT, headers=admin_headers)

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["notification_delivered"] is True
        assert body["notification_error_code"] is None
        account = body["account"]
        assert account["email"] == "jane.doe@acme.com"
        assert account["status"] == "active"
        assert account["is_verified"] is False
        assert account["must_change_credential"] is True
        assert "credential_hash" not in account
        assert [m.recipient for m in notifier.sent] == ["jane.doe@acme.com"]

    def test_malformed_email_is_422(self, client, admin_headers):
        response = client.post(
            "/api/v1/accounts",
            json={**NEW_ACCOUNT, "email": "not-an-email"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        body = response.json()
        assert body["code"] == "validation_failed"
        assert [e["field"] for e in body["errors"]] == ["email"]

    def test_domain_validation_is_400(self, client, admin_headers):
        response = client.post(
            "/api/v1/accounts",
            json={**NEW_ACCOUNT, "phone_number": "call me"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "phone_number"

    def test_duplicate_email_is_409(self, client, admin_headers, seed):
        seed("jane.doe@acme.com")

        response = client.post("/api/v1/accounts", json=NEW_ACCOUNT, headers=admin_headers)

        assert response.status_code == 409
        assert response.json()["errors"][0]["field"] == "email"

    def test_staff_cannot_create(self, client, staff_headers):
        response = client.post("/api/v1/accounts", json=NEW_ACCOUNT, headers=staff_headers)

        assert response.status_code == 403


@pytest.mark.api
class TestReadAccounts:
    """GET /api/v1/accounts and /api/v1/accounts/{id}."""

    def test_get_account(self, client, staff_headers, seed):
        account = seed("jane.doe@acme.com")

        response = client.get(f"/api/v1/accounts/{account.id}", headers=staff_headers)

        assert response.status_code == 200
        assert response.json()["full_name"] == "Jane Doe"

    def test_get_unknown_account_is_404(self, client, staff_headers):
        response = client.get(f"/api/v1/accounts/{uuid7()}", headers=staff_headers)

        assert response.status_code == 404
        assert response.json()["type"].endswith("/errors/account_not_found")

    def test_list_paginates(self, client, staff_headers, seed):
        for i in range(3):
            seed(f"user{i}@acme.com")

        response = client.get(
            "/api/v1/accounts",
            params={"limit": 2, "sort_by": "email", "sort_order": "asc"},
            headers=staff_headers,
        )

        assert response.status_code == 200
        body = response.json()
        # staff@acme.com is seeded as the caller
        assert body["pagination"]["total"] == 4
        assert body["pagination"]["has_next_page"] is True
        assert [item["email"] for item in body["items"]] == [
            "staff@acme.com",
            "user0@acme.com",
        ]

    def test_list_rejects_unknown_sort(self, client, staff_headers):
        response = client.get(
            "/api/v1/accounts", params={"sort_by": "password"}, headers=staff_headers
        )

        assert response.status_code == 400


@pytest.mark.api
class TestUpdateAccount:
    """PATCH /api/v1/accounts/{id}."""

    def test_update_allowed_fields(self, client, admin_headers, seed):
        account = seed("jane.doe@acme.com")

        response = client.patch(
            f"/api/v1/accounts/{account.id}",
            json={"department": "Operations", "status": "inactive"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["department"] == "Operations"
        assert body["status"] == "inactive"

    def test_protected_field_is_400(self, client, admin_headers, seed):
        account = seed("jane.doe@acme.com")

        response = client.patch(
            f"/api/v1/accounts/{account.id}",
            json={"email": "other@acme.com"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["field"] == "email"
        assert error["message"] == "Field 'email' cannot be changed by an update"


@pytest.mark.api
class TestDeleteAccount:
    """DELETE /api/v1/accounts/{id}."""

    def test_delete_twice(self, client, admin_headers, seed):
        """Test the first delete succeeds and the second sees no account."""
        # Arrange
        account = seed("jane.doe@acme.com")

        # Act
        first = client.delete(f"/api/v1/accounts/{account.id}", headers=admin_headers)
        second = client.delete(f"/api/v1/accounts/{account.id}", headers=admin_headers)

        # Assert
        assert first.status_code == 204
        assert second.status_code == 404

    def test_deleted_account_not_readable(self, client, admin_headers, seed):
        account = seed("jane.doe@acme.com")
        client.delete(f"/api/v1/accounts/{account.id}", headers=admin_headers)

        response = client.get(f"/api/v1/accounts/{account.id}", headers=admin_headers)

        assert response.status_code == 404

    def test_self_deletion_is_403(self, client, admin_headers, admin_account):
        response = client.delete(
            f"/api/v1/accounts/{admin_account.id}", headers=admin_headers
        )

        assert response.status_code == 403


@pytest.mark.api
class TestCredentialEndpoints:
    """Credential reset, unlock and self-service change."""

    def test_reset_returns_204(self, client, admin_headers, seed, notifier):
        account = seed("jane.doe@acme.com")

        response = client.post(
            f"/api/v1/accounts/{account.id}/credential-resets", headers=admin_headers
        )

        assert response.status_code == 204
        assert notifier.sent[-1].recipient == "jane.doe@acme.com"

    def test_undelivered_reset_is_502(self, make_client, build_manager, seed, admin_headers):
        client = make_client(build_manager(notifier=FailingNotifier()))
        account = seed("jane.doe@acme.com")

        response = client.post(
            f"/api/v1/accounts/{account.id}/credential-resets", headers=admin_headers
        )

        assert response.status_code == 502
        assert response.json()["context"] == {"account_id": str(account.id)}

    def test_unlock_returns_204(self, client, admin_headers, seed, clock, account_repo):
        account = seed("jane.doe@acme.com", failed_login_count=5)
        account_repo.rows[account.id].locked_until = clock.now + timedelta(hours=1)

        response = client.delete(f"/api/v1/accounts/{account.id}/lock", headers=admin_headers)

        assert response.status_code == 204
        assert account_repo.rows[account.id].locked_until is None
        assert account_repo.rows[account.id].failed_login_count == 0

    def test_change_own_credential(self, client, seed, account_repo):
        account = seed("jane.doe@acme.com", must_change_credential=True)

        response = client.put(
            "/api/v1/accounts/me/credential",
            json={"current_password": "Correct#Pass1", "new_password": "Brand#New9pass"},
            headers={"X-Actor-Id": str(account.id)},
        )

        assert response.status_code == 204
        stored = account_repo.rows[account.id]
        assert stored.credential_hash == "hashed::Brand#New9pass"
        assert stored.must_change_credential is False

    def test_change_with_wrong_current_password_is_401(self, client, seed):
        account = seed("jane.doe@acme.com")

        response = client.put(
            "/api/v1/accounts/me/credential",
            json={"current_password": "Wrong#Pass1", "new_password": "Brand#New9pass"},
            headers={"X-Actor-Id": str(account.id)},
        )

        assert response.status_code == 401
