"""structlog-backed LoggerProtocol implementation writing to stdout.

Rendering follows the environment: colored key/value lines in development,
one JSON object per line everywhere else. Values of secret-bearing keys
(passwords, temporary credentials, verification tokens, API keys) are
replaced before rendering, whoever logged them.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

REDACTED = "[REDACTED]"

SECRET_KEYS = frozenset(
    {
        "password",
        "new_password",
        "current_password",
        "credential",
        "temporary_credential",
        "verification_token",
        "api_key",
        "authorization",
    }
)


def redact_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """structlog processor masking SECRET_KEYS values."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context


class ConsoleAdapter:
    """Stdout logger satisfying LoggerProtocol structurally.

    Args:
        use_json: Render JSON lines instead of the colored console format.
        level: Minimum level name; unknown names fall back to INFO.

    Example:
        >>> logger = ConsoleAdapter(use_json=True, level="WARNING")
        >>> logger.warning("Login rejected", account_id="0192", reason="account_locked")
    """

    def __init__(self, *, use_json: bool = False, level: str = "INFO") -> None:
        renderer = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                redact_secrets,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelNamesMapping().get(level.upper(), logging.INFO)
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=False,
        )
        self._logger = structlog.get_logger()

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at ERROR; an exception is flattened into error_type/error_message."""
        self._logger.error(message, **_with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at CRITICAL; same exception handling as error()."""
        self._logger.critical(message, **_with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Adapter whose every entry carries `context`; self is unchanged."""
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound
