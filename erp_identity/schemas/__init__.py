"""Request/response schemas for API endpoints.

Usage:
    from erp_identity.schemas import AccountCreateRequest, SessionCreateResponse
"""

from erp_identity.schemas.account_schemas import (
    AccountCreateRequest,
    AccountCreateResponse,
    AccountListResponse,
    AccountResponse,
    AccountUpdateRequest,
    CredentialChangeRequest,
    EmailVerificationCreateRequest,
    PaginationResponse,
    SessionCreateRequest,
    SessionCreateResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountCreateResponse",
    "AccountListResponse",
    "AccountResponse",
    "AccountUpdateRequest",
    "CredentialChangeRequest",
    "EmailVerificationCreateRequest",
    "PaginationResponse",
    "SessionCreateRequest",
    "SessionCreateResponse",
]
