"""Account lifecycle commands."""

from erp_identity.application.commands.account_commands import (
    AuthenticateAccount,
    ChangeCredential,
    CreateAccount,
    ResetCredential,
    SoftDeleteAccount,
    UnlockAccount,
    UpdateAccount,
    VerifyEmail,
)

__all__ = [
    "AuthenticateAccount",
    "ChangeCredential",
    "CreateAccount",
    "ResetCredential",
    "SoftDeleteAccount",
    "UnlockAccount",
    "UpdateAccount",
    "VerifyEmail",
]
