"""Validation functions and the account validation stage."""

from erp_identity.domain.validators.account_validation import (
    PROTECTED_FIELDS,
    UPDATABLE_FIELDS,
    AccountProfile,
    validate_account_patch,
    validate_new_account,
)
from erp_identity.domain.validators.functions import (
    validate_department,
    validate_email,
    validate_employee_id,
    validate_name,
    validate_permissions,
    validate_phone_number,
    validate_position,
    validate_role,
    validate_strong_password,
)

__all__ = [
    "AccountProfile",
    "PROTECTED_FIELDS",
    "UPDATABLE_FIELDS",
    "validate_account_patch",
    "validate_department",
    "validate_email",
    "validate_employee_id",
    "validate_name",
    "validate_new_account",
    "validate_permissions",
    "validate_phone_number",
    "validate_position",
    "validate_role",
    "validate_strong_password",
]
