"""Activity logging errors."""

from dataclasses import dataclass

from erp_identity.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ActivityLogError(DomainError):
    """Recording an activity entry failed.

    Activity logging is best-effort: lifecycle operations log this error and
    carry on.
    """

    pass
