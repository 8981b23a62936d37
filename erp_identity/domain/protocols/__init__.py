"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

Usage:
    from erp_identity.domain.protocols import AccountRepository, NotifierProtocol
"""

# Service protocols
from erp_identity.domain.protocols.activity_logger_protocol import (
    ActivityLoggerProtocol,
)
from erp_identity.domain.protocols.credential_generator_protocol import (
    CredentialGeneratorProtocol,
)
from erp_identity.domain.protocols.logger_protocol import LoggerProtocol
from erp_identity.domain.protocols.notifier_protocol import (
    CREDENTIAL_RESET_TEMPLATE,
    WELCOME_TEMPLATE,
    NotifierProtocol,
)
from erp_identity.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from erp_identity.domain.protocols.role_directory_protocol import RoleDirectoryProtocol

# Repository protocols
from erp_identity.domain.protocols.account_repository import (
    AUDIT_FIELDS,
    CREDENTIAL_FIELDS,
    DELETION_FIELDS,
    VERIFICATION_FIELDS,
    AccountFilters,
    AccountRepository,
)

__all__ = [
    # Service protocols
    "ActivityLoggerProtocol",
    "CredentialGeneratorProtocol",
    "LoggerProtocol",
    "NotifierProtocol",
    "PasswordHashingProtocol",
    "RoleDirectoryProtocol",
    "CREDENTIAL_RESET_TEMPLATE",
    "WELCOME_TEMPLATE",
    # Repository protocols
    "AccountFilters",
    "AccountRepository",
    "AUDIT_FIELDS",
    "CREDENTIAL_FIELDS",
    "DELETION_FIELDS",
    "VERIFICATION_FIELDS",
]
