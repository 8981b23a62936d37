"""Account store errors.

Repository adapters map driver exceptions (connection loss, timeouts,
constraint violations surfaced at commit) to StoreError. Callers may retry
at their discretion; the service itself never retries.

Codes:
    STORE_UNAVAILABLE: connectivity or timeout problem
    EMAIL_ALREADY_EXISTS / EMPLOYEE_ID_ALREADY_EXISTS: unique constraint hit
    RESOURCE_CONFLICT: any other integrity violation
"""

from dataclasses import dataclass

from erp_identity.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreError(DomainError):
    """Backing store failure.

    Attributes:
        conflicting_field: Column behind a uniqueness violation, if known.
    """

    conflicting_field: str | None = None
