"""Stub notifier for development and tests.

Logs that a message would have been sent. The template data is never logged
because it may contain a temporary password.
"""

from typing import Any

from erp_identity.core.result import Result, Success
from erp_identity.domain.errors import NotificationError
from erp_identity.domain.protocols import LoggerProtocol


class StubNotifier:
    """Notifier that only logs.

    Usage:
        notifier = StubNotifier(logger=logger)
    """

    def __init__(self, *, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def send(
        self,
        *,
        recipient: str,
        template_id: str,
        template_data: dict[str, Any],
    ) -> Result[None, NotificationError]:
        """Log the message and report success."""
        self._logger.info(
            "[STUB] Notification",
            recipient=recipient,
            template_id=template_id,
            fields=sorted(template_data),
        )
        return Success(value=None)
