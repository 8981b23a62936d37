"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For environment-specific
settings, use `erp_identity/core/config.py` instead.

Categories:
- Token lengths: Fixed sizes for cryptographic tokens
- Credential policy defaults
- Authorization defaults
- Limits: Field lengths, pagination, truncation
"""

# =============================================================================
# Token Lengths
# =============================================================================

TOKEN_BYTES: int = 32
"""Number of bytes for secure token generation (32 bytes = 256 bits)."""

TOKEN_HEX_LENGTH: int = 64
"""Length of hex-encoded token string (TOKEN_BYTES * 2)."""


# =============================================================================
# Credential Policy
# =============================================================================

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""

MAX_FAILED_LOGINS_DEFAULT: int = 5
"""Consecutive failed logins that lock an account."""

LOCKOUT_DURATION_MINUTES_DEFAULT: int = 120
"""Lockout window after reaching the failed login threshold (2 hours)."""

TEMPORARY_CREDENTIAL_SPECIALS: str = "!@#$%^&*"
"""Special characters used in generated temporary passwords."""


# =============================================================================
# Authorization
# =============================================================================

DEFAULT_ROLE_CAPABILITIES: dict[str, tuple[str, ...]] = {
    "admin": (
        "account:create",
        "account:edit",
        "account:delete",
        "account:reset-credential",
        "account:unlock",
        "account:read",
    ),
    "manager": ("account:create", "account:edit", "account:read"),
    "staff": ("account:read",),
}
"""Capabilities per role when no role mapping is configured."""


# =============================================================================
# Field Limits
# =============================================================================

NAME_MAX_LENGTH: int = 50
EMAIL_MAX_LENGTH: int = 255
DEPARTMENT_MAX_LENGTH: int = 100
POSITION_MAX_LENGTH: int = 100
EMPLOYEE_ID_MAX_LENGTH: int = 50
PERMISSION_MAX_LENGTH: int = 100
PASSWORD_MIN_LENGTH: int = 8
PASSWORD_MAX_LENGTH: int = 128


# =============================================================================
# Pagination
# =============================================================================

DEFAULT_PAGE_SIZE: int = 10
MAX_PAGE_SIZE: int = 100


# =============================================================================
# Response Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum characters of a relay response body kept in error details."""
