"""HTTP mail relay notifier (adapter).

Posts templated messages to a mail relay endpoint:

    POST {relay_url}
    Authorization: Bearer {api_key}
    {"to": "...", "template_id": "...", "data": {...}}

Any 2xx response means the relay accepted the message. Timeouts, connection
errors and non-2xx responses come back as Failure(NotificationError); the
relay's response body is kept (truncated) in the error details.

Architecture:
    - Implements NotifierProtocol (no inheritance)
    - Uses httpx for async HTTP with a bounded timeout
"""

from typing import Any

import httpx

from erp_identity.core.constants import RESPONSE_BODY_MAX_LENGTH
from erp_identity.core.enums import ErrorCode
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.errors import NotificationError
from erp_identity.domain.protocols import LoggerProtocol


class HttpNotifier:
    """Notifier that hands messages to an HTTP mail relay.

    Attributes:
        _relay_url: Relay endpoint.
        _api_key: Optional bearer token.
        _timeout: Request timeout in seconds.

    Example:
        >>> notifier = HttpNotifier(
        ...     relay_url="https://relay.acme.com/v1/messages",
        ...     api_key=settings.notifier_api_key,
        ...     timeout=10.0,
        ...     logger=logger,
        ... )
        >>> result = await notifier.send(
        ...     recipient="jane.doe@acme.com",
        ...     template_id="credential_reset",
        ...     template_data={"temporary_credential": "..."},
        ... )
    """

    def __init__(
        self,
        *,
        relay_url: str,
        logger: LoggerProtocol,
        api_key: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize notifier.

        Args:
            relay_url: Relay endpoint receiving the POST.
            logger: Structured logger.
            api_key: Bearer token sent to the relay, if any.
            timeout: HTTP request timeout in seconds.
            client: Shared client; a short-lived one is opened per send when None.
        """
        self._relay_url = relay_url
        self._api_key = api_key
        self._timeout = timeout
        self._client = client
        self._logger = logger

    async def send(
        self,
        *,
        recipient: str,
        template_id: str,
        template_data: dict[str, Any],
    ) -> Result[None, NotificationError]:
        """Post a message to the relay.

        Returns:
            Success(None) on any 2xx, Failure(NotificationError) otherwise.
            5xx, timeouts and connection errors are marked transient.
        """
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        payload = {"to": recipient, "template_id": template_id, "data": template_data}

        try:
            if self._client is not None:
                response = await self._client.post(
                    self._relay_url, json=payload, headers=headers, timeout=self._timeout
                )
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.post(
                        self._relay_url, json=payload, headers=headers
                    )

        except httpx.TimeoutException as e:
            self._logger.warning(
                "notifier_relay_timeout",
                template_id=template_id,
                error=str(e),
            )
            return Failure(
                error=NotificationError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    message="Mail relay request timed out",
                    template_id=template_id,
                    is_transient=True,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                "notifier_relay_connection_error",
                template_id=template_id,
                error=str(e),
            )
            return Failure(
                error=NotificationError(
                    code=ErrorCode.NOTIFICATION_FAILED,
                    message=f"Failed to connect to mail relay: {e}",
                    template_id=template_id,
                    is_transient=True,
                )
            )

        if response.is_success:
            self._logger.info("notification_sent", template_id=template_id)
            return Success(value=None)

        status = response.status_code
        self._logger.warning(
            "notifier_relay_rejected",
            template_id=template_id,
            status_code=status,
        )
        return Failure(
            error=NotificationError(
                code=ErrorCode.NOTIFICATION_FAILED,
                message=f"Mail relay rejected message: {status}",
                template_id=template_id,
                is_transient=status >= 500 or status == 429,
                details={
                    "status_code": str(status),
                    "response_body": response.text[:RESPONSE_BODY_MAX_LENGTH],
                },
            )
        )
