"""Role directory protocol.

Roles are owned outside this service; accounts only reference them by name.
The directory answers which capabilities a role grants.
"""

from typing import Protocol


class RoleDirectoryProtocol(Protocol):
    """Lookup of role capabilities."""

    async def capabilities_for(self, role: str) -> frozenset[str]:
        """Capabilities granted by a role.

        Returns:
            Capability strings; empty for an unknown role (fail-closed).
        """
        ...
