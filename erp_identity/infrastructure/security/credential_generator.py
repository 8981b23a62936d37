"""Temporary credential and verification token generation.

Token Strategy:
    - Temporary passwords: `length` characters drawn with `secrets`, always
      containing an uppercase letter, a lowercase letter, a digit and a
      special character, so they pass the strong password rule
    - Verification tokens: 32 random bytes, hex encoded (64 characters)
"""

import secrets
import string

from erp_identity.core.constants import TEMPORARY_CREDENTIAL_SPECIALS, TOKEN_BYTES

_CHARACTER_CLASSES = (
    string.ascii_uppercase,
    string.ascii_lowercase,
    string.digits,
    TEMPORARY_CREDENTIAL_SPECIALS,
)
_ALPHABET = "".join(_CHARACTER_CLASSES)


class SecretsCredentialGenerator:
    """Cryptographically random secrets for account lifecycle operations.

    Usage:
        generator = SecretsCredentialGenerator(length=settings.temporary_credential_length)
        temporary_credential = generator.generate_temporary_credential()
    """

    def __init__(self, length: int = 12) -> None:
        """Initialize generator.

        Args:
            length: Temporary password length (at least 8).

        Raises:
            ValueError: If length is below 8.
        """
        if length < 8:
            msg = "Temporary credential length must be at least 8"
            raise ValueError(msg)
        self._length = length

    def generate_temporary_credential(self) -> str:
        """Generate a temporary password.

        Example:
            >>> password = SecretsCredentialGenerator().generate_temporary_credential()
            >>> len(password)
            12
        """
        chars = [secrets.choice(group) for group in _CHARACTER_CLASSES]
        chars.extend(
            secrets.choice(_ALPHABET) for _ in range(self._length - len(chars))
        )
        # Fisher-Yates shuffle driven by secrets
        for i in range(len(chars) - 1, 0, -1):
            j = secrets.randbelow(i + 1)
            chars[i], chars[j] = chars[j], chars[i]
        return "".join(chars)

    def generate_verification_token(self) -> str:
        """Generate an email verification token.

        Returns:
            64-character hex string (32 bytes of entropy).
        """
        return secrets.token_hex(TOKEN_BYTES)
