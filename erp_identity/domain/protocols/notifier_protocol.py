"""NotifierProtocol - Port for out-of-band message delivery.

The account lifecycle hands a template id and its data to the notifier;
rendering and transport belong to the adapter (stub logger, HTTP mail relay).

Templates used:
    welcome: first_name, email, temporary_credential, verification_token, login_url
    credential_reset: first_name, email, temporary_credential, login_url
"""

from typing import Any, Protocol

from erp_identity.core.result import Result
from erp_identity.domain.errors import NotificationError

WELCOME_TEMPLATE = "welcome"
CREDENTIAL_RESET_TEMPLATE = "credential_reset"


class NotifierProtocol(Protocol):
    """Notifier protocol (port).

    Error Handling:
        Implementations NEVER raise for delivery problems; they return
        Failure(NotificationError) so callers decide whether the failure
        matters.
    """

    async def send(
        self,
        *,
        recipient: str,
        template_id: str,
        template_data: dict[str, Any],
    ) -> Result[None, NotificationError]:
        """Deliver a templated message.

        Args:
            recipient: Destination email address.
            template_id: Message template identifier.
            template_data: Values substituted into the template. May contain
                secrets (temporary passwords), so adapters must not log it.

        Returns:
            Success(None) once the message was accepted for delivery.
        """
        ...
