"""Static role directory (adapter).

Roles are managed outside this service. Their capability grants are
configured through Settings.role_capabilities, a JSON object mapping role
name to capability list:

    ROLE_CAPABILITIES='{"admin": ["account:create", ...], "staff": ["account:read"]}'
"""

from collections.abc import Iterable, Mapping


class StaticRoleDirectory:
    """In-memory role to capability mapping.

    Unknown roles grant nothing (fail-closed). Role names match
    case-insensitively.
    """

    def __init__(self, role_capabilities: Mapping[str, Iterable[str]]) -> None:
        self._grants = {
            role.strip().lower(): frozenset(capabilities)
            for role, capabilities in role_capabilities.items()
        }

    async def capabilities_for(self, role: str) -> frozenset[str]:
        """Capabilities granted by a role (empty when unknown)."""
        return self._grants.get(role.strip().lower(), frozenset())
