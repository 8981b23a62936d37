"""Security adapters."""

from erp_identity.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from erp_identity.infrastructure.security.credential_generator import (
    SecretsCredentialGenerator,
)

__all__ = ["BcryptPasswordService", "SecretsCredentialGenerator"]
