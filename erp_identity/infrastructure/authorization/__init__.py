"""Role directory adapters."""

from erp_identity.infrastructure.authorization.static_role_directory import (
    StaticRoleDirectory,
)

__all__ = ["StaticRoleDirectory"]
