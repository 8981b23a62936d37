"""API v1 routers.

RESTful resource-based endpoints. All endpoints use resource nouns, not
action verbs.

Resources:
    /api/v1/accounts             - Account management
    /api/v1/sessions             - Authentication
    /api/v1/email-verifications  - Email verification
"""

from fastapi import APIRouter

from erp_identity.presentation.routers.api.v1 import accounts, sessions


def build_v1_router(prefix: str = "/api/v1") -> APIRouter:
    """Assemble the v1 router under the configured prefix."""
    v1_router = APIRouter(prefix=prefix)
    v1_router.include_router(accounts.router)
    v1_router.include_router(sessions.router)
    return v1_router


__all__ = [
    "build_v1_router",
]
