"""Credential generator protocol.

Generates the one-off secrets handed out by account lifecycle operations:
temporary passwords (create, reset) and email verification tokens.
"""

from typing import Protocol


class CredentialGeneratorProtocol(Protocol):
    """Random secret generation interface."""

    def generate_temporary_credential(self) -> str:
        """Generate a temporary password.

        Returns:
            Password containing at least one uppercase letter, lowercase
            letter, digit and special character.
        """
        ...

    def generate_verification_token(self) -> str:
        """Generate an opaque, URL-safe verification token."""
        ...
