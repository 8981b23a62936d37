"""Email value object with validation.

Immutable value object that validates and normalizes an email address.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email


@dataclass(frozen=True)
class Email:
    """Email value object with format validation.

    Uses the email-validator library for RFC-compliant syntax checks. The
    whole address is lower-cased: accounts treat emails case-insensitively,
    so two addresses differing only in case are the same identity.

    Attributes:
        value: The email address string (validated, lowercase)

    Raises:
        ValueError: If email format is invalid

    Example:
        >>> str(Email("Jane.Doe@Example.COM"))
        'jane.doe@example.com'
    """

    value: str

    def __post_init__(self) -> None:
        """Validate and normalize email format.

        Raises:
            ValueError: If email format is invalid.
        """
        try:
            # No deliverability (DNS) check: validation must stay offline
            validated = validate_email(self.value.strip(), check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email: {e}") from e
        object.__setattr__(self, "value", validated.normalized.lower())

    def __str__(self) -> str:
        """Return email address as string."""
        return self.value

    def __repr__(self) -> str:
        """Return repr for debugging."""
        return f"Email('{self.value}')"
