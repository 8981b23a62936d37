"""Sessions and email verification handlers.

Handlers:
    create_session             - POST /sessions (authenticate)
    create_email_verification  - POST /email-verifications
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from erp_identity.application.commands import AuthenticateAccount, VerifyEmail
from erp_identity.core.container import AppServices
from erp_identity.core.result import Failure, Success
from erp_identity.presentation.routers.api.errors import ErrorResponseBuilder
from erp_identity.presentation.routers.api.middleware.actor_dependencies import (
    get_client_address,
    get_services,
)
from erp_identity.presentation.routers.api.middleware.trace_middleware import get_trace_id
from erp_identity.schemas.account_schemas import (
    AccountResponse,
    EmailVerificationCreateRequest,
    SessionCreateRequest,
    SessionCreateResponse,
)

router = APIRouter(tags=["Sessions"])


@router.post(
    "/sessions",
    status_code=status.HTTP_201_CREATED,
    response_model=SessionCreateResponse,
)
async def create_session(
    request: Request,
    data: SessionCreateRequest,
    services: Annotated[AppServices, Depends(get_services)],
    client_address: Annotated[str | None, Depends(get_client_address)],
) -> SessionCreateResponse | JSONResponse:
    """Authenticate with email and password.

    POST /api/v1/sessions → 201 Created

    Returns:
        SessionCreateResponse on success.
        JSONResponse with error on failure: 401 for unknown email or wrong
        password (indistinguishable), 403 for a disabled account, 423 while
        locked.
    """
    command = AuthenticateAccount(
        email=data.email,
        credential=data.password,
        source_address=client_address,
    )

    match await services.accounts.authenticate(command):
        case Success(value=auth):
            return SessionCreateResponse.from_result(auth)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.post(
    "/email-verifications",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountResponse,
)
async def create_email_verification(
    request: Request,
    data: EmailVerificationCreateRequest,
    services: Annotated[AppServices, Depends(get_services)],
    client_address: Annotated[str | None, Depends(get_client_address)],
) -> AccountResponse | JSONResponse:
    """Verify an email address with the token from the welcome message.

    POST /api/v1/email-verifications → 201 Created
    """
    command = VerifyEmail(token=data.token, source_address=client_address)

    match await services.accounts.verify_email(command):
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
