"""Activity logger adapters."""

from erp_identity.infrastructure.activity.database_activity_logger import (
    DatabaseActivityLogger,
)

__all__ = ["DatabaseActivityLogger"]
