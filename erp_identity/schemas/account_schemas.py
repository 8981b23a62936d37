"""Account request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints (resource-based):
    POST   /api/v1/accounts                          - Create account
    GET    /api/v1/accounts                          - List accounts
    GET    /api/v1/accounts/{id}                     - Get account
    PATCH  /api/v1/accounts/{id}                     - Update account
    DELETE /api/v1/accounts/{id}                     - Soft delete account
    POST   /api/v1/accounts/{id}/credential-resets   - Reset credential
    DELETE /api/v1/accounts/{id}/lock                - Unlock account
    PUT    /api/v1/accounts/me/credential            - Change own credential
    POST   /api/v1/sessions                          - Authenticate
    POST   /api/v1/email-verifications               - Verify email
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from erp_identity.application.dtos import AccountPage, AccountView, AuthResult


# =============================================================================
# Account resource
# =============================================================================


class AccountResponse(BaseModel):
    """Account representation. Never carries the credential hash."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    status: str
    permissions: list[str]
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employee_id: str | None = None
    avatar_url: str | None = None
    preferences: dict[str, Any]
    is_verified: bool
    must_change_credential: bool
    is_locked: bool
    failed_login_count: int
    locked_until: datetime | None = None
    last_login_at: datetime | None = None
    credential_changed_at: datetime | None = None
    created_by: UUID | None = None
    updated_by: UUID | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: AccountView) -> "AccountResponse":
        """Build from an application-layer AccountView."""
        return cls(
            id=view.id,
            email=view.email,
            first_name=view.first_name,
            last_name=view.last_name,
            full_name=view.full_name,
            role=view.role,
            status=view.status,
            permissions=view.permissions,
            phone_number=view.phone_number,
            department=view.department,
            position=view.position,
            employee_id=view.employee_id,
            avatar_url=view.avatar_url,
            preferences=view.preferences,
            is_verified=view.is_verified,
            must_change_credential=view.must_change_credential,
            is_locked=view.is_locked,
            failed_login_count=view.failed_login_count,
            locked_until=view.locked_until,
            last_login_at=view.last_login_at,
            credential_changed_at=view.credential_changed_at,
            created_by=view.created_by,
            updated_by=view.updated_by,
            created_at=view.created_at,
            updated_at=view.updated_at,
        )


class AccountCreateRequest(BaseModel):
    """Request schema for account creation.

    POST /api/v1/accounts
    Returns: 201 Created

    No password is accepted: a temporary one is generated and delivered to
    the new account's email address.
    """

    first_name: str = Field(..., description="Given name", examples=["Jane"])
    last_name: str = Field(..., description="Family name", examples=["Doe"])
    email: EmailStr = Field(
        ...,
        description="Email address (unique)",
        examples=["jane.doe@acme.com"],
    )
    role: str = Field(..., description="Role reference", examples=["staff"])
    phone_number: str | None = Field(None, examples=["+14155550100"])
    department: str | None = Field(None, examples=["Finance"])
    position: str | None = Field(None, examples=["Accountant"])
    employee_id: str | None = Field(None, description="Unique employee identifier")
    avatar_url: str | None = None
    permissions: list[str] = Field(
        default_factory=list,
        description="Extra capabilities (resource:action)",
        examples=[["report:export"]],
    )
    preferences: dict[str, Any] | None = Field(
        None,
        description="UI preferences (theme, language, timezone, notifications)",
    )
    send_welcome: bool = Field(
        True,
        description="Send the temporary password to the new account",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Jane",
                "last_name": "Doe",
                "email": "jane.doe@acme.com",
                "role": "staff",
                "department": "Finance",
            }
        }
    )


class AccountCreateResponse(BaseModel):
    """Response schema for account creation (201 Created).

    notification_delivered is False when the welcome message could not be
    sent; the account exists regardless.
    """

    account: AccountResponse
    notification_delivered: bool
    notification_error_code: str | None = None


class AccountUpdateRequest(BaseModel):
    """Request schema for an administrative update.

    PATCH /api/v1/accounts/{id}
    Returns: 200 OK

    Unknown and protected fields are passed through so that the update
    pipeline can reject them by name.
    """

    first_name: str | None = None
    last_name: str | None = None
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employee_id: str | None = None
    avatar_url: str | None = None
    role: str | None = None
    permissions: list[str] | None = None
    status: str | None = Field(None, examples=["suspended"])
    preferences: dict[str, Any] | None = None

    model_config = ConfigDict(
        extra="allow",
        json_schema_extra={"example": {"department": "Operations", "status": "inactive"}},
    )

    def changes(self) -> dict[str, Any]:
        """Fields present in the request body, extras included."""
        return self.model_dump(exclude_unset=True)


class PaginationResponse(BaseModel):
    """Page position within a listing."""

    current_page: int
    total_pages: int
    total: int
    limit: int
    has_next_page: bool
    has_prev_page: bool


class AccountListResponse(BaseModel):
    """Response schema for account listing."""

    items: list[AccountResponse]
    pagination: PaginationResponse

    @classmethod
    def from_page(cls, page: AccountPage) -> "AccountListResponse":
        """Build from an application-layer AccountPage."""
        return cls(
            items=[AccountResponse.from_view(view) for view in page.items],
            pagination=PaginationResponse(
                current_page=page.pagination.current_page,
                total_pages=page.pagination.total_pages,
                total=page.pagination.total,
                limit=page.pagination.limit,
                has_next_page=page.pagination.has_next_page,
                has_prev_page=page.pagination.has_prev_page,
            ),
        )


# =============================================================================
# Credentials
# =============================================================================


class CredentialChangeRequest(BaseModel):
    """Request schema for changing one's own password.

    PUT /api/v1/accounts/me/credential
    Returns: 204 No Content
    """

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(
        ...,
        min_length=1,
        max_length=256,
        description="New password (8-128 chars, mixed case, number, special char)",
    )


# =============================================================================
# Sessions (authentication)
# =============================================================================


class SessionCreateRequest(BaseModel):
    """Request schema for authentication.

    POST /api/v1/sessions
    Returns: 201 Created

    The email is a plain string here: a malformed address is answered the
    same way as an unknown one.
    """

    email: str = Field(..., max_length=320, examples=["jane.doe@acme.com"])
    password: str = Field(..., min_length=1, max_length=256)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "jane.doe@acme.com",
                "password": "SecurePass123!",
            }
        }
    )


class SessionCreateResponse(BaseModel):
    """Response schema for successful authentication."""

    account_id: UUID
    email: str
    role: str
    permissions: list[str] = Field(..., description="Effective capabilities")
    must_change_credential: bool = Field(
        ..., description="True while the temporary password is in use"
    )

    @classmethod
    def from_result(cls, result: AuthResult) -> "SessionCreateResponse":
        """Build from an application-layer AuthResult."""
        return cls(
            account_id=result.account_id,
            email=result.email,
            role=result.role,
            permissions=sorted(result.permissions),
            must_change_credential=result.must_change_credential,
        )


# =============================================================================
# Email verification
# =============================================================================


class EmailVerificationCreateRequest(BaseModel):
    """Request schema for email verification.

    POST /api/v1/email-verifications
    Returns: 201 Created
    """

    token: str = Field(..., min_length=1, max_length=128)
