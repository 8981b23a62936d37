"""Centralized validation functions (DRY principle).

Validators are pure functions that return the normalized value or raise
ValueError. The account validation pipeline (account_validation.py) turns
those ValueErrors into ValidationError results with the offending field.
"""

import re

from erp_identity.core.constants import (
    DEPARTMENT_MAX_LENGTH,
    EMPLOYEE_ID_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    PERMISSION_MAX_LENGTH,
    POSITION_MAX_LENGTH,
)
from erp_identity.domain.value_objects.email import Email

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{0,15}$")
PERMISSION_PATTERN = re.compile(r"^[a-z][a-z0-9_-]*:[a-z][a-z0-9_-]*$")
PASSWORD_SPECIALS = '!@#$%^&*(),.?":{}|<>'


def validate_email(v: str) -> str:
    """Validate email format.

    Returns:
        Normalized email (lowercase).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
    """
    return Email(v).value


def validate_name(v: str, *, label: str = "Name") -> str:
    """Validate a first or last name.

    Raises:
        ValueError: If empty after trimming or longer than 50 characters.
    """
    value = v.strip()
    if not value:
        raise ValueError(f"{label} is required")
    if len(value) > NAME_MAX_LENGTH:
        raise ValueError(f"{label} cannot exceed {NAME_MAX_LENGTH} characters")
    return value


def validate_phone_number(v: str | None) -> str | None:
    """Validate an optional phone number (optional +, up to 16 digits).

    Raises:
        ValueError: If the number does not match the expected pattern.

    Example:
        >>> validate_phone_number("+14155550100")
        '+14155550100'
    """
    if v is None:
        return None
    value = v.strip()
    if not value:
        return None
    if not PHONE_PATTERN.match(value):
        raise ValueError("Please provide a valid phone number")
    return value


def validate_optional_text(v: str | None, *, label: str, max_length: int) -> str | None:
    """Trim optional free text; empty strings become None.

    Raises:
        ValueError: If longer than max_length.
    """
    if v is None:
        return None
    value = v.strip()
    if not value:
        return None
    if len(value) > max_length:
        raise ValueError(f"{label} cannot exceed {max_length} characters")
    return value


def validate_department(v: str | None) -> str | None:
    """Validate optional department name."""
    return validate_optional_text(v, label="Department name", max_length=DEPARTMENT_MAX_LENGTH)


def validate_position(v: str | None) -> str | None:
    """Validate optional position title."""
    return validate_optional_text(v, label="Position", max_length=POSITION_MAX_LENGTH)


def validate_employee_id(v: str | None) -> str | None:
    """Validate optional employee identifier."""
    return validate_optional_text(v, label="Employee ID", max_length=EMPLOYEE_ID_MAX_LENGTH)


def validate_role(v: str) -> str:
    """Validate a role reference.

    Raises:
        ValueError: If empty.
    """
    value = v.strip()
    if not value:
        raise ValueError("User role is required")
    return value


def validate_permissions(v: list[str] | tuple[str, ...] | frozenset[str] | set[str]) -> frozenset[str]:
    """Validate fine-grained permission strings (resource:action).

    Raises:
        ValueError: If any entry is empty, too long or malformed.

    Example:
        >>> sorted(validate_permissions([" account:read ", "account:read"]))
        ['account:read']
    """
    if isinstance(v, str):
        raise ValueError("Permissions must be a list of strings")
    normalized: set[str] = set()
    for raw in v:
        if not isinstance(raw, str):
            raise ValueError("Permissions must be a list of strings")
        permission = raw.strip()
        if len(permission) > PERMISSION_MAX_LENGTH:
            raise ValueError(
                f"Permission cannot exceed {PERMISSION_MAX_LENGTH} characters"
            )
        if not PERMISSION_PATTERN.match(permission):
            raise ValueError(f"Invalid permission format: {raw!r}")
        normalized.add(permission)
    return frozenset(normalized)


def validate_strong_password(v: str) -> str:
    """Validate password strength.

    Returns:
        Password unchanged (validation only).

    Raises:
        ValueError: If password doesn't meet requirements.

    Example:
        >>> validate_strong_password("SecurePass123!")
        'SecurePass123!'
    """
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(v) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password cannot exceed {PASSWORD_MAX_LENGTH} characters")
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    if not any(c in PASSWORD_SPECIALS for c in v):
        raise ValueError("Password must contain special character")
    return v
