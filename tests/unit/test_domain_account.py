"""Unit tests for the Account entity.

Tests cover:
- Lockout window reads (open, expired, exact boundary)
- Status transitions and soft delete
- Credential rotation (reset vs self-service change)
- Email verification expiry
- Credential hash kept out of repr
"""

from datetime import UTC, datetime, timedelta

import pytest
from freezegun import freeze_time
from uuid_extensions import uuid7

from erp_identity.domain.entities import Account, LoginAttemptState
from erp_identity.domain.enums import AccountStatus

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def make_account(**overrides) -> Account:
    values = {
        "id": uuid7(),
        "email": "jane.doe@acme.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "role": "staff",
        "credential_hash": "$2b$12$secret-hash-value",
        "created_at": NOW,
        "updated_at": NOW,
    }
    values.update(overrides)
    return Account(**values)


@pytest.mark.unit
class TestAccountLockout:
    """Lockout window as seen from a loaded account."""

    def test_no_lock_is_neither_open_nor_expired(self):
        account = make_account(failed_login_count=4)

        assert account.is_locked(NOW) is False
        assert account.lock_expired(NOW) is False
        assert account.login_attempt_state == LoginAttemptState(4, None)

    def test_lock_is_open_until_exactly_its_expiry(self):
        account = make_account(locked_until=NOW)

        assert account.is_locked(NOW - timedelta(microseconds=1)) is True
        assert account.is_locked(NOW) is False
        assert account.lock_expired(NOW) is True

    def test_is_locked_defaults_to_current_time(self):
        account = make_account(locked_until=NOW + timedelta(hours=2))

        with freeze_time(NOW + timedelta(hours=1)):
            assert account.is_locked() is True
        with freeze_time(NOW + timedelta(hours=3)):
            assert account.is_locked() is False

    def test_login_attempt_state_snapshots_counters(self):
        locked_until = NOW + timedelta(hours=2)
        account = make_account(failed_login_count=5, locked_until=locked_until)

        assert account.login_attempt_state == LoginAttemptState(
            failed_login_count=5, locked_until=locked_until
        )


@pytest.mark.unit
class TestAccountLifecycle:
    """Status transitions, soft delete, credentials and verification."""

    @pytest.mark.parametrize(
        "target",
        [AccountStatus.ACTIVE, AccountStatus.INACTIVE, AccountStatus.SUSPENDED],
    )
    def test_live_account_can_move_between_live_statuses(self, target):
        account = make_account(status=AccountStatus.SUSPENDED)

        assert account.can_transition_to(target) is True

    def test_deleted_is_not_reachable_by_transition(self):
        account = make_account()

        assert account.can_transition_to(AccountStatus.DELETED) is False

    def test_deleted_account_never_transitions(self):
        account = make_account(status=AccountStatus.DELETED)

        assert account.can_transition_to(AccountStatus.ACTIVE) is False

    def test_soft_delete_marks_account_and_keeps_identity(self):
        # Arrange
        account = make_account()
        actor_id = uuid7()

        # Act
        account.soft_delete(actor_id, NOW)

        # Assert
        assert account.is_deleted is True
        assert account.status is AccountStatus.DELETED
        assert account.deleted_at == NOW
        assert account.deleted_by == actor_id
        assert account.email == "jane.doe@acme.com"

    def test_reset_rotation_requires_change_on_next_login(self):
        # Arrange
        account = make_account()
        admin_id = uuid7()

        # Act
        account.rotate_credential("new-hash", reset_by=admin_id, now=NOW)

        # Assert
        assert account.credential_hash == "new-hash"
        assert account.must_change_credential is True
        assert account.credential_reset_by == admin_id
        assert account.credential_reset_at == NOW
        assert account.updated_by == admin_id

    def test_self_service_rotation_clears_change_flag(self):
        account = make_account(must_change_credential=True)

        account.rotate_credential("own-hash", reset_by=None, now=NOW)

        assert account.must_change_credential is False
        assert account.credential_changed_at == NOW
        assert account.updated_by == account.id

    def test_verification_expires_at_deadline(self):
        account = make_account(
            verification_token="abc",
            verification_expires_at=NOW + timedelta(hours=24),
        )

        assert account.verification_expired(NOW) is False
        assert account.verification_expired(NOW + timedelta(hours=24)) is True

    def test_mark_verified_consumes_token(self):
        account = make_account(verification_token="abc", verification_expires_at=NOW)

        account.mark_verified(NOW)

        assert account.is_verified is True
        assert account.verification_token is None
        assert account.verification_expires_at is None

    def test_repr_hides_credential_hash_and_token(self):
        account = make_account(verification_token="token-value")

        text = repr(account)

        assert "secret-hash-value" not in text
        assert "token-value" not in text
        assert "jane.doe@acme.com" in text

    def test_full_name(self):
        assert make_account().full_name == "Jane Doe"
