"""Notification delivery errors.

Returned by NotifierProtocol implementations instead of raising, so delivery
problems never escape into lifecycle logic.
"""

from dataclasses import dataclass

from erp_identity.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class NotificationError(DomainError):
    """Notification could not be delivered.

    Attributes:
        template_id: Template that failed to send.
        is_transient: True when a retry may succeed (timeout, 5xx).
    """

    template_id: str
    is_transient: bool = False
