"""External-facing routers.

system_router carries the non-versioned endpoints (root, health); the
versioned API lives in routers.api.v1.
"""

from erp_identity.presentation.routers.system import system_router

__all__ = ["system_router"]
