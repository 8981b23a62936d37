"""Domain value objects."""

from erp_identity.domain.value_objects.email import Email
from erp_identity.domain.value_objects.preferences import Preferences

__all__ = ["Email", "Preferences"]
