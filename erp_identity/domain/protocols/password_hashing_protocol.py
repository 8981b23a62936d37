"""Password hashing protocol for domain layer.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
    - No framework dependencies in domain
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Usage:
        credential_hash = password_service.hash_password("SecurePass123!")
        if password_service.verify_password(secret, account.credential_hash):
            ...
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...).
        """
        ...

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise (also for a
            malformed hash; never raises).
        """
        ...
