"""Data Transfer Objects (DTOs) for application layer.

Usage:
    from erp_identity.application.dtos import AccountView, Actor, AuthResult
"""

from erp_identity.application.dtos.account_dtos import (
    AccountPage,
    AccountView,
    Actor,
    AuthResult,
    CreateAccountResult,
    Pagination,
)

__all__ = [
    "AccountPage",
    "AccountView",
    "Actor",
    "AuthResult",
    "CreateAccountResult",
    "Pagination",
]
