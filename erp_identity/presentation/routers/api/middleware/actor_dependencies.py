"""Actor dependencies.

The calling account is identified by the X-Actor-Id header (set by the
upstream gateway after it has authenticated the caller). The id is resolved
to a live, active account and its effective capabilities.

Usage:
    @router.get("/accounts")
    async def list_accounts(
        actor: Annotated[Actor, Depends(get_current_actor)],
        services: Annotated[AppServices, Depends(get_services)],
    ):
        ...
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

from erp_identity.application.dtos import Actor
from erp_identity.core.container import AppServices
from erp_identity.core.result import Failure, Success
from erp_identity.presentation.routers.api.errors import ErrorResponseBuilder


def get_services(request: Request) -> AppServices:
    """Object graph built by the app factory."""
    return request.app.state.services


def get_client_address(request: Request) -> str | None:
    """Client address as seen by the server."""
    return request.client.host if request.client else None


async def get_current_actor(
    services: Annotated[AppServices, Depends(get_services)],
    x_actor_id: Annotated[str | None, Header(alias="X-Actor-Id")] = None,
) -> Actor:
    """Resolve the calling account.

    Raises:
        HTTPException 401: Header missing, malformed or unknown account.
        HTTPException 403: Caller's account is not active.
    """
    if not x_actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id header is required",
        )
    try:
        actor_id = UUID(x_actor_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-Actor-Id must be a UUID",
        ) from e

    match await services.accounts.resolve_actor(actor_id):
        case Success(value=actor):
            return actor
        case Failure(error=error):
            raise HTTPException(
                status_code=ErrorResponseBuilder.get_status_code(error.code),
                detail=error.message,
            )
