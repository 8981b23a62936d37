"""Account lifecycle manager.

Owns every state transition of an Account: creation with a temporary
password, administrative updates, soft delete, credential reset, unlock,
self-service credential change, email verification and authentication with
lockout.

Write pipeline (explicit stages, no persistence hooks):
    1. Authorize: the actor must hold the operation's capability
    2. Validate: pure functions from domain.validators
    3. Hash: new secrets go through PasswordHashingProtocol
    4. Persist: AccountRepository, writing only the columns the operation owns
       and only while the row is live
    5. Record: activity log entry (best-effort)
    6. Notify: NotifierProtocol (outcome-affecting only for credential reset)

Validation and authorization failures return before anything is written.

Architecture:
- Application layer ONLY imports from domain and core
- Collaborators are injected as protocols
- Every operation returns Result[T, DomainError]; nothing is raised
"""

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from erp_identity.application.commands import (
    AuthenticateAccount,
    ChangeCredential,
    CreateAccount,
    ResetCredential,
    SoftDeleteAccount,
    UnlockAccount,
    UpdateAccount,
    VerifyEmail,
)
from erp_identity.application.dtos import (
    AccountView,
    Actor,
    AuthResult,
    CreateAccountResult,
)
from erp_identity.core.constants import (
    LOCKOUT_DURATION_MINUTES_DEFAULT,
    MAX_FAILED_LOGINS_DEFAULT,
)
from erp_identity.core.enums import ErrorCode
from erp_identity.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.entities import Account
from erp_identity.domain.enums import AccountStatus, ActivityAction, Capability
from erp_identity.domain.errors import (
    AccountError,
    AccountLockedError,
    NotificationError,
    StoreError,
)
from erp_identity.domain.protocols import (
    AUDIT_FIELDS,
    CREDENTIAL_FIELDS,
    CREDENTIAL_RESET_TEMPLATE,
    DELETION_FIELDS,
    VERIFICATION_FIELDS,
    WELCOME_TEMPLATE,
    AccountRepository,
    ActivityLoggerProtocol,
    CredentialGeneratorProtocol,
    LoggerProtocol,
    NotifierProtocol,
    PasswordHashingProtocol,
    RoleDirectoryProtocol,
)
from erp_identity.domain.validators import (
    validate_account_patch,
    validate_new_account,
    validate_strong_password,
)
from erp_identity.domain.value_objects import Email

_TIMING_PLACEHOLDER = "no-such-account"


def utc_now() -> datetime:
    """Default clock."""
    return datetime.now(UTC)


def _not_found(account_id: UUID) -> Failure[NotFoundError]:
    return Failure(
        error=NotFoundError(
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            message=AccountError.ACCOUNT_NOT_FOUND,
            resource_type="Account",
            resource_id=str(account_id),
        )
    )


def _invalid_credentials() -> Failure[AuthenticationError]:
    return Failure(
        error=AuthenticationError(
            code=ErrorCode.INVALID_CREDENTIALS,
            message=AccountError.INVALID_CREDENTIALS,
        )
    )


def _store_failure(error: StoreError) -> Failure[DomainError]:
    """Surface uniqueness violations as conflicts, anything else unchanged."""
    if error.code is ErrorCode.EMAIL_ALREADY_EXISTS:
        return Failure(
            error=ConflictError(
                code=ErrorCode.EMAIL_ALREADY_EXISTS,
                message=AccountError.EMAIL_ALREADY_EXISTS,
                resource_type="Account",
                conflicting_field="email",
            )
        )
    if error.code is ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS:
        return Failure(
            error=ConflictError(
                code=ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS,
                message=AccountError.EMPLOYEE_ID_ALREADY_EXISTS,
                resource_type="Account",
                conflicting_field="employee_id",
            )
        )
    return Failure(error=error)


class AccountLifecycleManager:
    """Account state machine and permission-gated mutations.

    Dependencies (injected via constructor):
        - AccountRepository: persistence (source of truth)
        - PasswordHashingProtocol: one-way credential hashing
        - CredentialGeneratorProtocol: temporary passwords, verification tokens
        - NotifierProtocol: out-of-band delivery of temporary passwords
        - ActivityLoggerProtocol: activity trail (best-effort)
        - RoleDirectoryProtocol: capabilities granted by roles
        - LoggerProtocol: structured logging

    Policy knobs (lockout threshold and window, token lifetime, collaborator
    timeouts) come from Settings through the container. The clock is
    injectable so lockout windows can be exercised without sleeping.
    """

    def __init__(
        self,
        *,
        account_repo: AccountRepository,
        password_service: PasswordHashingProtocol,
        credential_generator: CredentialGeneratorProtocol,
        notifier: NotifierProtocol,
        activity_logger: ActivityLoggerProtocol,
        role_directory: RoleDirectoryProtocol,
        logger: LoggerProtocol,
        max_failed_logins: int = MAX_FAILED_LOGINS_DEFAULT,
        lockout_duration: timedelta = timedelta(minutes=LOCKOUT_DURATION_MINUTES_DEFAULT),
        verification_token_lifetime: timedelta = timedelta(hours=24),
        notifier_timeout_seconds: float = 10.0,
        activity_timeout_seconds: float = 5.0,
        login_url: str = "http://localhost:3000/login",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._account_repo = account_repo
        self._password_service = password_service
        self._credential_generator = credential_generator
        self._notifier = notifier
        self._activity_logger = activity_logger
        self._role_directory = role_directory
        self._logger = logger
        self._max_failed_logins = max_failed_logins
        self._lockout_duration = lockout_duration
        self._verification_token_lifetime = verification_token_lifetime
        self._notifier_timeout = notifier_timeout_seconds
        self._activity_timeout = activity_timeout_seconds
        self._login_url = login_url
        self._clock = clock
        # Unknown-email logins verify against this, hashed before the first request
        self._dummy_hash = password_service.hash_password(_TIMING_PLACEHOLDER)

    # =========================================================================
    # Administrative operations
    # =========================================================================

    async def create(
        self, actor: Actor, cmd: CreateAccount
    ) -> Result[CreateAccountResult, DomainError]:
        """Create an account with a generated temporary password.

        The new account is ACTIVE, unverified and must change its credential
        on first login. A failed welcome notification does not fail creation;
        it is reported through CreateAccountResult.notification_delivered.

        Returns:
            Success(CreateAccountResult) or Failure with PERMISSION_DENIED,
            VALIDATION_FAILED, EMAIL_ALREADY_EXISTS,
            EMPLOYEE_ID_ALREADY_EXISTS or STORE_UNAVAILABLE.
        """
        if denied := self._require(actor, Capability.ACCOUNT_CREATE):
            return denied

        match validate_new_account(
            first_name=cmd.first_name,
            last_name=cmd.last_name,
            email=cmd.email,
            role=cmd.role,
            phone_number=cmd.phone_number,
            department=cmd.department,
            position=cmd.position,
            employee_id=cmd.employee_id,
            avatar_url=cmd.avatar_url,
            permissions=cmd.permissions,
            preferences=cmd.preferences,
        ):
            case Failure() as failure:
                return failure
            case Success(value=profile):
                pass

        match await self._account_repo.exists_by_email(profile.email):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=True):
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.EMAIL_ALREADY_EXISTS,
                        message=AccountError.EMAIL_ALREADY_EXISTS,
                        resource_type="Account",
                        conflicting_field="email",
                    )
                )

        if profile.employee_id is not None:
            if conflict := await self._employee_id_conflict(profile.employee_id):
                return conflict

        temporary_credential = self._credential_generator.generate_temporary_credential()
        verification_token = self._credential_generator.generate_verification_token()
        now = self._clock()
        account = Account(
            id=uuid7(),
            email=profile.email,
            first_name=profile.first_name,
            last_name=profile.last_name,
            role=profile.role,
            credential_hash=self._password_service.hash_password(temporary_credential),
            phone_number=profile.phone_number,
            department=profile.department,
            position=profile.position,
            employee_id=profile.employee_id,
            avatar_url=profile.avatar_url,
            preferences=profile.preferences,
            permissions=profile.permissions,
            status=AccountStatus.ACTIVE,
            is_verified=False,
            verification_token=verification_token,
            verification_expires_at=now + self._verification_token_lifetime,
            must_change_credential=True,
            created_by=actor.id,
            updated_by=actor.id,
            created_at=now,
            updated_at=now,
        )

        match await self._account_repo.save(account):
            case Failure(error=error):
                self._logger.warning(
                    "Account creation failed",
                    error_code=error.code.value,
                    actor_id=str(actor.id),
                )
                return _store_failure(error)

        self._logger.info(
            "Account created",
            account_id=str(account.id),
            actor_id=str(actor.id),
            role=account.role,
        )
        await self._record(
            ActivityAction.ACCOUNT_CREATED,
            account_id=account.id,
            actor_id=actor.id,
            source_address=cmd.source_address,
            context={"email": account.email, "role": account.role},
        )

        delivered = False
        error_code: str | None = None
        if cmd.send_welcome:
            match await self._notify(
                recipient=account.email,
                template_id=WELCOME_TEMPLATE,
                template_data={
                    "first_name": account.first_name,
                    "email": account.email,
                    "temporary_credential": temporary_credential,
                    "verification_token": verification_token,
                    "login_url": self._login_url,
                },
            ):
                case Success():
                    delivered = True
                case Failure(error=error):
                    # Creation stands; the caller sees the advisory flag
                    error_code = error.code.value
                    self._logger.warning(
                        "Welcome notification not delivered",
                        account_id=str(account.id),
                        error_code=error_code,
                        transient=error.is_transient,
                    )

        return Success(
            value=CreateAccountResult(
                account=AccountView.from_entity(account, now),
                notification_delivered=delivered,
                notification_error_code=error_code,
            )
        )

    async def update(
        self, actor: Actor, cmd: UpdateAccount
    ) -> Result[AccountView, DomainError]:
        """Apply an administrative patch to a live account.

        Email, credential, verification, login tracking and audit fields are
        rejected with VALIDATION_FAILED before anything is read or written.
        Status may move among active/inactive/suspended only.
        """
        if denied := self._require(actor, Capability.ACCOUNT_EDIT):
            return denied

        match validate_account_patch(cmd.changes):
            case Failure() as failure:
                return failure
            case Success(value=changes):
                pass

        match await self._find_live(cmd.account_id):
            case Failure() as failure:
                return failure
            case Success(value=account):
                pass

        status = changes.get("status")
        if status is not None and not account.can_transition_to(status):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_STATUS_TRANSITION,
                    message=AccountError.DELETED_IS_TERMINAL,
                    field="status",
                )
            )

        employee_id = changes.get("employee_id")
        if employee_id is not None and employee_id != account.employee_id:
            if conflict := await self._employee_id_conflict(
                employee_id, exclude_id=account.id
            ):
                return conflict

        now = self._clock()
        for name, value in changes.items():
            setattr(account, name, value)
        account.updated_by = actor.id
        account.updated_at = now

        match await self._account_repo.update(account, fields=changes.keys() | AUDIT_FIELDS):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return _not_found(cmd.account_id)

        self._logger.info(
            "Account updated",
            account_id=str(account.id),
            actor_id=str(actor.id),
            fields=sorted(changes),
        )
        await self._record(
            ActivityAction.ACCOUNT_UPDATED,
            account_id=account.id,
            actor_id=actor.id,
            source_address=cmd.source_address,
            context={"fields": sorted(changes)},
        )
        return Success(value=AccountView.from_entity(account, now))

    async def soft_delete(
        self, actor: Actor, cmd: SoftDeleteAccount
    ) -> Result[None, DomainError]:
        """Mark a live account deleted.

        Not idempotent: a second delete of the same id is ACCOUNT_NOT_FOUND.
        An actor can never delete itself, whatever its capabilities.
        """
        if denied := self._require(actor, Capability.ACCOUNT_DELETE):
            return denied

        if cmd.account_id == actor.id:
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.SELF_DELETION_FORBIDDEN,
                    message=AccountError.SELF_DELETION_FORBIDDEN,
                    required_permission=Capability.ACCOUNT_DELETE.value,
                )
            )

        match await self._find_live(cmd.account_id):
            case Failure() as failure:
                return failure
            case Success(value=account):
                pass

        account.soft_delete(actor.id, self._clock())

        match await self._account_repo.update(account, fields=DELETION_FIELDS | AUDIT_FIELDS):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                # Lost a race with a concurrent delete
                return _not_found(cmd.account_id)

        self._logger.info(
            "Account deleted",
            account_id=str(account.id),
            actor_id=str(actor.id),
        )
        await self._record(
            ActivityAction.ACCOUNT_DELETED,
            account_id=account.id,
            actor_id=actor.id,
            source_address=cmd.source_address,
            context={"email": account.email},
        )
        return Success(value=None)

    async def reset_credential(
        self, actor: Actor, cmd: ResetCredential
    ) -> Result[None, DomainError]:
        """Rotate an account's password to a new temporary one.

        The lock state is left as it is. If the notifier cannot deliver the
        new password the operation fails with NOTIFICATION_FAILED even though
        the rotation has already been persisted.
        """
        if denied := self._require(actor, Capability.ACCOUNT_RESET_CREDENTIAL):
            return denied

        match await self._find_live(cmd.account_id):
            case Failure() as failure:
                return failure
            case Success(value=account):
                pass

        temporary_credential = self._credential_generator.generate_temporary_credential()
        account.rotate_credential(
            self._password_service.hash_password(temporary_credential),
            reset_by=actor.id,
            now=self._clock(),
        )

        match await self._account_repo.update(account, fields=CREDENTIAL_FIELDS | AUDIT_FIELDS):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return _not_found(cmd.account_id)

        self._logger.info(
            "Credential reset",
            account_id=str(account.id),
            actor_id=str(actor.id),
        )
        await self._record(
            ActivityAction.CREDENTIAL_RESET,
            account_id=account.id,
            actor_id=actor.id,
            source_address=cmd.source_address,
        )

        match await self._notify(
            recipient=account.email,
            template_id=CREDENTIAL_RESET_TEMPLATE,
            template_data={
                "first_name": account.first_name,
                "email": account.email,
                "temporary_credential": temporary_credential,
                "login_url": self._login_url,
            },
        ):
            case Failure(error=error):
                self._logger.error(
                    "Reset credential not delivered",
                    account_id=str(account.id),
                    actor_id=str(actor.id),
                    error_code=error.code.value,
                    transient=error.is_transient,
                )
                await self._record(
                    ActivityAction.CREDENTIAL_RESET_NOTIFICATION_FAILED,
                    account_id=account.id,
                    actor_id=actor.id,
                    source_address=cmd.source_address,
                    context={"reason": error.message},
                )
                return Failure(
                    error=NotificationError(
                        code=ErrorCode.NOTIFICATION_FAILED,
                        message=AccountError.RESET_NOT_DELIVERED,
                        template_id=CREDENTIAL_RESET_TEMPLATE,
                        is_transient=error.is_transient,
                        details={"account_id": str(account.id)},
                    )
                )
        return Success(value=None)

    async def unlock(self, actor: Actor, cmd: UnlockAccount) -> Result[None, DomainError]:
        """Clear a login lockout and the failure counter."""
        if denied := self._require(actor, Capability.ACCOUNT_UNLOCK):
            return denied

        match await self._account_repo.clear_lockout(
            cmd.account_id, updated_by=actor.id, now=self._clock()
        ):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return _not_found(cmd.account_id)

        self._logger.info(
            "Account unlocked",
            account_id=str(cmd.account_id),
            actor_id=str(actor.id),
        )
        await self._record(
            ActivityAction.ACCOUNT_UNLOCKED,
            account_id=cmd.account_id,
            actor_id=actor.id,
            source_address=cmd.source_address,
        )
        return Success(value=None)

    # =========================================================================
    # Self-service operations
    # =========================================================================

    async def change_credential(
        self, actor: Actor, cmd: ChangeCredential
    ) -> Result[None, DomainError]:
        """Replace the actor's own password.

        Requires the current password. Clears must_change_credential.
        """
        match await self._find_live(actor.id):
            case Failure() as failure:
                return failure
            case Success(value=account):
                pass

        if not self._password_service.verify_password(
            cmd.current_credential, account.credential_hash
        ):
            return _invalid_credentials()

        try:
            validate_strong_password(cmd.new_credential)
        except ValueError as e:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.PASSWORD_TOO_WEAK,
                    message=str(e),
                    field="new_credential",
                )
            )

        account.rotate_credential(
            self._password_service.hash_password(cmd.new_credential),
            reset_by=None,
            now=self._clock(),
        )

        match await self._account_repo.update(account, fields=CREDENTIAL_FIELDS | AUDIT_FIELDS):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return _not_found(actor.id)

        self._logger.info("Credential changed", account_id=str(account.id))
        await self._record(
            ActivityAction.CREDENTIAL_CHANGED,
            account_id=account.id,
            actor_id=actor.id,
            source_address=cmd.source_address,
        )
        return Success(value=None)

    async def verify_email(self, cmd: VerifyEmail) -> Result[AccountView, DomainError]:
        """Consume a verification token and mark the email verified."""
        match await self._account_repo.find_by_verification_token(cmd.token):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=None):
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.TOKEN_INVALID,
                        message=AccountError.TOKEN_INVALID,
                    )
                )
            case Success(value=account):
                pass

        now = self._clock()
        if account.verification_expired(now):
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AccountError.TOKEN_EXPIRED,
                )
            )

        account.mark_verified(now)

        match await self._account_repo.update(account, fields=VERIFICATION_FIELDS | {"updated_at"}):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.TOKEN_INVALID,
                        message=AccountError.TOKEN_INVALID,
                    )
                )

        self._logger.info("Email verified", account_id=str(account.id))
        await self._record(
            ActivityAction.EMAIL_VERIFIED,
            account_id=account.id,
            actor_id=account.id,
            source_address=cmd.source_address,
        )
        return Success(value=AccountView.from_entity(account, now))

    # =========================================================================
    # Authentication
    # =========================================================================

    async def authenticate(
        self, cmd: AuthenticateAccount
    ) -> Result[AuthResult, DomainError]:
        """Check credentials against the lockout state machine.

        Flow:
        1. Normalize email and look the account up (any status)
        2. Unknown email: compare against a dummy hash, INVALID_CREDENTIALS
        3. Inactive, suspended or deleted: ACCOUNT_DISABLED
        4. Lock still open: ACCOUNT_LOCKED, no hash comparison
        5. Wrong password: atomic failure increment, INVALID_CREDENTIALS
        6. Correct password: counters reset, login recorded. The write is
           conditional, so an account deleted, disabled or locked since step 1
           gets the rejection of step 3 or 4 instead of a session.

        Unknown email and wrong password produce the same error shape.
        """
        try:
            email = Email(cmd.email).value
        except (ValueError, AttributeError):
            email = None

        account: Account | None = None
        if email is not None:
            match await self._account_repo.find_by_email(email):
                case Failure(error=error):
                    return _store_failure(error)
                case Success(value=found):
                    account = found

        if account is None:
            # Same work as a real comparison
            self._password_service.verify_password(cmd.credential, self._dummy_hash)
            self._logger.info("Login failed", reason="unknown_email")
            await self._record(
                ActivityAction.LOGIN_FAILED,
                account_id=None,
                source_address=cmd.source_address,
                context={"reason": "unknown_email"},
            )
            return _invalid_credentials()

        now = self._clock()
        if rejected := await self._reject_login(account, now, cmd.source_address):
            return rejected

        if not self._password_service.verify_password(
            cmd.credential, account.credential_hash
        ):
            return await self._handle_failed_login(account, now, cmd.source_address)

        match await self._account_repo.record_successful_login(
            account.id, now=now, source_address=cmd.source_address
        ):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=False):
                return await self._reject_changed_login(account.id, now, cmd.source_address)

        capabilities = await self._effective_capabilities(account)
        self._logger.info("Login succeeded", account_id=str(account.id))
        await self._record(
            ActivityAction.LOGIN_SUCCEEDED,
            account_id=account.id,
            actor_id=account.id,
            source_address=cmd.source_address,
        )
        return Success(
            value=AuthResult(
                account_id=account.id,
                email=account.email,
                role=account.role,
                permissions=capabilities,
                must_change_credential=account.must_change_credential,
            )
        )

    async def resolve_actor(self, account_id: UUID) -> Result[Actor, DomainError]:
        """Build the Actor for a caller identified by account id.

        The caller must be a live, active account.
        """
        match await self._account_repo.find_by_id(account_id):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=None):
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.AUTHENTICATION_REQUIRED,
                        message="Unknown actor",
                    )
                )
            case Success(value=account):
                pass

        if not account.status.can_authenticate:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.ACCOUNT_DISABLED,
                    message=AccountError.ACCOUNT_DISABLED,
                )
            )

        return Success(
            value=Actor(
                id=account.id,
                role=account.role,
                capabilities=await self._effective_capabilities(account),
            )
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require(self, actor: Actor, capability: Capability) -> Failure[AuthorizationError] | None:
        if actor.can(capability.value):
            return None
        self._logger.warning(
            "Permission denied",
            actor_id=str(actor.id),
            capability=capability.value,
        )
        return Failure(
            error=AuthorizationError(
                code=ErrorCode.PERMISSION_DENIED,
                message=AccountError.PERMISSION_DENIED,
                required_permission=capability.value,
            )
        )

    async def _find_live(self, account_id: UUID) -> Result[Account, DomainError]:
        match await self._account_repo.find_by_id(account_id):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=None):
                return _not_found(account_id)
            case Success(value=account):
                return Success(value=account)

    async def _employee_id_conflict(
        self, employee_id: str, exclude_id: UUID | None = None
    ) -> Failure[DomainError] | None:
        match await self._account_repo.exists_by_employee_id(
            employee_id, exclude_id=exclude_id
        ):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=True):
                return Failure(
                    error=ConflictError(
                        code=ErrorCode.EMPLOYEE_ID_ALREADY_EXISTS,
                        message=AccountError.EMPLOYEE_ID_ALREADY_EXISTS,
                        resource_type="Account",
                        conflicting_field="employee_id",
                    )
                )
        return None

    async def _reject_login(
        self, account: Account, now: datetime, source_address: str | None
    ) -> Failure[DomainError] | None:
        """ACCOUNT_DISABLED unless active, then ACCOUNT_LOCKED while the lock is open."""
        if not account.status.can_authenticate:
            self._logger.info(
                "Login rejected",
                account_id=str(account.id),
                reason="account_disabled",
                status=account.status.value,
            )
            await self._record(
                ActivityAction.LOGIN_FAILED,
                account_id=account.id,
                source_address=source_address,
                context={"reason": "account_disabled", "status": account.status.value},
            )
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.ACCOUNT_DISABLED,
                    message=AccountError.ACCOUNT_DISABLED,
                )
            )

        if account.locked_until is not None and account.is_locked(now):
            self._logger.info(
                "Login rejected",
                account_id=str(account.id),
                reason="account_locked",
            )
            return Failure(
                error=AccountLockedError(
                    code=ErrorCode.ACCOUNT_LOCKED,
                    message=AccountError.ACCOUNT_LOCKED,
                    locked_until=account.locked_until,
                    details={"locked_until": account.locked_until.isoformat()},
                )
            )
        return None

    async def _reject_changed_login(
        self, account_id: UUID, now: datetime, source_address: str | None
    ) -> Failure[DomainError]:
        """The success write matched no row: report what the row became."""
        match await self._account_repo.find_by_id(account_id, include_deleted=True):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=current):
                pass

        if current is not None:
            if rejected := await self._reject_login(current, now, source_address):
                return rejected
        self._logger.warning(
            "Login write matched no row",
            account_id=str(account_id),
        )
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.ACCOUNT_DISABLED,
                message=AccountError.ACCOUNT_DISABLED,
            )
        )

    async def _handle_failed_login(
        self, account: Account, now: datetime, source_address: str | None
    ) -> Result[AuthResult, DomainError]:
        match await self._account_repo.record_failed_login(
            account.id,
            now=now,
            threshold=self._max_failed_logins,
            lockout_duration=self._lockout_duration,
        ):
            case Failure(error=error):
                return _store_failure(error)
            case Success(value=state):
                pass

        failed_count = state.failed_login_count if state else None
        self._logger.info(
            "Login failed",
            account_id=str(account.id),
            reason="invalid_credentials",
            failed_login_count=failed_count,
        )
        await self._record(
            ActivityAction.LOGIN_FAILED,
            account_id=account.id,
            source_address=source_address,
            context={"reason": "invalid_credentials", "failed_login_count": failed_count},
        )

        if (
            state is not None
            and state.locked_until is not None
            and state.locked_until != account.locked_until
        ):
            self._logger.warning(
                "Account locked",
                account_id=str(account.id),
                locked_until=state.locked_until.isoformat(),
            )
            await self._record(
                ActivityAction.ACCOUNT_LOCKED,
                account_id=account.id,
                source_address=source_address,
                context={"locked_until": state.locked_until.isoformat()},
            )
        return _invalid_credentials()

    async def _effective_capabilities(self, account: Account) -> frozenset[str]:
        granted = await self._role_directory.capabilities_for(account.role)
        return frozenset(granted) | account.permissions

    async def _notify(
        self,
        *,
        recipient: str,
        template_id: str,
        template_data: dict[str, Any],
    ) -> Result[None, NotificationError]:
        try:
            return await asyncio.wait_for(
                self._notifier.send(
                    recipient=recipient,
                    template_id=template_id,
                    template_data=template_data,
                ),
                timeout=self._notifier_timeout,
            )
        except TimeoutError:
            return Failure(
                error=NotificationError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    message=f"Notifier timed out after {self._notifier_timeout}s",
                    template_id=template_id,
                    is_transient=True,
                )
            )

    async def _record(
        self,
        action: ActivityAction,
        *,
        account_id: UUID | None,
        actor_id: UUID | None = None,
        source_address: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Record an activity entry; failures are logged and dropped."""
        try:
            result = await asyncio.wait_for(
                self._activity_logger.record(
                    action=action,
                    account_id=account_id,
                    actor_id=actor_id,
                    source_address=source_address,
                    context=context,
                ),
                timeout=self._activity_timeout,
            )
        except TimeoutError:
            self._logger.warning(
                "Activity record timed out",
                action=action.value,
                account_id=str(account_id) if account_id else None,
            )
            return
        if isinstance(result, Failure):
            self._logger.warning(
                "Activity record failed",
                action=action.value,
                account_id=str(account_id) if account_id else None,
                error_code=result.error.code.value,
            )
