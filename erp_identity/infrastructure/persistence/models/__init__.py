"""Database models.

Importing this package registers every table on BaseModel.metadata
(Alembic and Database.create_all rely on it).
"""

from erp_identity.infrastructure.persistence.models.account import AccountModel
from erp_identity.infrastructure.persistence.models.activity_log import (
    ActivityLogModel,
)

__all__ = ["AccountModel", "ActivityLogModel"]
