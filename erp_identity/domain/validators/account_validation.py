"""Account validation stage.

First stage of the write pipeline (validate -> hash -> persist). Each
function is pure: it takes raw input and returns either the normalized values
or the first ValidationError found, before anything is written.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from erp_identity.core.enums import ErrorCode
from erp_identity.core.errors import ValidationError
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.enums import AccountStatus
from erp_identity.domain.errors import AccountError
from erp_identity.domain.validators.functions import (
    validate_department,
    validate_email,
    validate_employee_id,
    validate_name,
    validate_permissions,
    validate_phone_number,
    validate_position,
    validate_role,
)
from erp_identity.domain.value_objects.preferences import Preferences

UPDATABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "phone_number",
        "department",
        "position",
        "employee_id",
        "avatar_url",
        "role",
        "permissions",
        "status",
        "preferences",
    }
)
"""Fields an administrator may change through the update operation."""

PROTECTED_FIELDS = frozenset(
    {
        "id",
        "email",
        "password",
        "credential",
        "credential_hash",
        "must_change_credential",
        "credential_changed_at",
        "credential_reset_at",
        "credential_reset_by",
        "is_verified",
        "verification_token",
        "verification_expires_at",
        "last_login_at",
        "last_login_address",
        "failed_login_count",
        "locked_until",
        "created_by",
        "updated_by",
        "deleted_at",
        "deleted_by",
        "created_at",
        "updated_at",
    }
)
"""Fields owned by dedicated operations; an update touching them is rejected."""


@dataclass(frozen=True, kw_only=True)
class AccountProfile:
    """Normalized attributes of a new account."""

    first_name: str
    last_name: str
    email: str
    role: str
    phone_number: str | None = None
    department: str | None = None
    position: str | None = None
    employee_id: str | None = None
    avatar_url: str | None = None
    permissions: frozenset[str] = field(default_factory=frozenset)
    preferences: Preferences = field(default_factory=Preferences)


def _invalid(field_name: str, message: str) -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.VALIDATION_FAILED,
            message=message,
            field=field_name,
        )
    )


def _check(
    field_name: str,
    validator: Callable[[Any], Any],
    value: Any,
) -> Result[Any, ValidationError]:
    try:
        return Success(value=validator(value))
    except (ValueError, TypeError, AttributeError) as e:
        return _invalid(field_name, str(e) or f"Invalid {field_name}")


def _optional_string(validator: Callable[[str | None], str | None]) -> Callable[[Any], str | None]:
    def run(value: Any) -> str | None:
        if value is not None and not isinstance(value, str):
            raise ValueError("Must be a string")
        return validator(value)

    return run


def _required_string(validator: Callable[[str], str]) -> Callable[[Any], str]:
    def run(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Must be a string")
        return validator(value)

    return run


def _preferences(value: Any) -> Preferences:
    if isinstance(value, Preferences):
        return value
    if value is not None and not isinstance(value, Mapping):
        raise ValueError("Preferences must be an object")
    return Preferences.from_dict(dict(value) if value else None)


def _avatar(value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ValueError("Avatar must be a string")
    return (value or "").strip() or None


_FIELD_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "first_name": _required_string(lambda v: validate_name(v, label="First name")),
    "last_name": _required_string(lambda v: validate_name(v, label="Last name")),
    "email": _required_string(validate_email),
    "role": _required_string(validate_role),
    "phone_number": _optional_string(validate_phone_number),
    "department": _optional_string(validate_department),
    "position": _optional_string(validate_position),
    "employee_id": _optional_string(validate_employee_id),
    "avatar_url": _avatar,
    "permissions": validate_permissions,
    "preferences": _preferences,
}


def validate_new_account(
    *,
    first_name: Any,
    last_name: Any,
    email: Any,
    role: Any,
    phone_number: Any = None,
    department: Any = None,
    position: Any = None,
    employee_id: Any = None,
    avatar_url: Any = None,
    permissions: Any = (),
    preferences: Any = None,
) -> Result[AccountProfile, ValidationError]:
    """Validate and normalize the attributes of a new account.

    Returns:
        Success(AccountProfile) with trimmed/lower-cased values, or
        Failure(ValidationError) naming the first invalid field.
    """
    raw = {
        "first_name": first_name,
        "last_name": last_name,
        "email": email,
        "role": role,
        "phone_number": phone_number,
        "department": department,
        "position": position,
        "employee_id": employee_id,
        "avatar_url": avatar_url,
        "permissions": permissions or (),
        "preferences": preferences,
    }
    normalized: dict[str, Any] = {}
    for name, value in raw.items():
        match _check(name, _FIELD_VALIDATORS[name], value):
            case Success(value=clean):
                normalized[name] = clean
            case Failure() as failure:
                return failure
    return Success(value=AccountProfile(**normalized))


def validate_account_patch(
    patch: Mapping[str, Any],
) -> Result[dict[str, Any], ValidationError]:
    """Validate an administrative update.

    Rejects protected fields (email, credential, audit, login tracking) and
    unknown fields outright, and refuses a move to DELETED, which only the
    soft delete operation may perform.

    Returns:
        Success(dict) of normalized changes, or Failure(ValidationError).
    """
    if not patch:
        return _invalid("patch", "No fields to update")

    for name in patch:
        if name in PROTECTED_FIELDS:
            return _invalid(name, f"Field '{name}' cannot be changed by an update")
        if name not in UPDATABLE_FIELDS:
            return _invalid(name, f"Unknown field '{name}'")

    changes: dict[str, Any] = {}
    for name, value in patch.items():
        if name == "status":
            try:
                status = AccountStatus(value)
            except ValueError:
                return _invalid(
                    "status",
                    f"Status must be one of: {', '.join(AccountStatus.values())}",
                )
            if status is AccountStatus.DELETED:
                return Failure(
                    error=ValidationError(
                        code=ErrorCode.INVALID_STATUS_TRANSITION,
                        message=AccountError.DELETE_VIA_SOFT_DELETE,
                        field="status",
                    )
                )
            changes[name] = status
            continue

        match _check(name, _FIELD_VALIDATORS[name], value):
            case Success(value=clean):
                changes[name] = clean
            case Failure() as failure:
                return failure
    return Success(value=changes)
