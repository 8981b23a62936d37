"""Per-account user interface preferences."""

from dataclasses import asdict, dataclass, field
from typing import Any

SUPPORTED_LANGUAGES = ("en", "es", "fr", "de")
SUPPORTED_THEMES = ("light", "dark", "auto")


@dataclass(frozen=True)
class NotificationPreferences:
    """Which channels the account wants notifications on."""

    email: bool = True
    push: bool = True
    sms: bool = False


@dataclass(frozen=True)
class Preferences:
    """Language, timezone, theme and notification channel choices.

    Raises:
        ValueError: If language or theme is not supported.
    """

    language: str = "en"
    timezone: str = "UTC"
    theme: str = "light"
    notifications: NotificationPreferences = field(default_factory=NotificationPreferences)

    def __post_init__(self) -> None:
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Language must be one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )
        if self.theme not in SUPPORTED_THEMES:
            raise ValueError(f"Theme must be one of: {', '.join(SUPPORTED_THEMES)}")
        if not self.timezone.strip():
            raise ValueError("Timezone cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON storage."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Preferences":
        """Build from stored JSON, filling missing keys with defaults.

        Raises:
            ValueError: If a value is invalid or a key is unknown.
        """
        if not data:
            return cls()
        values = dict(data)
        notifications = values.pop("notifications", None) or {}
        try:
            return cls(
                notifications=NotificationPreferences(**notifications),
                **values,
            )
        except TypeError as e:
            raise ValueError(f"Unknown preference: {e}") from e
