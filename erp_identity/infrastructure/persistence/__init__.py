"""Persistence layer: SQLAlchemy models, database wrapper and repositories."""

from erp_identity.infrastructure.persistence.base import BaseModel, BaseMutableModel
from erp_identity.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
