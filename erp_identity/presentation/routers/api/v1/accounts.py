"""Accounts resource handlers.

Handlers:
    create_account        - POST   /accounts
    list_accounts         - GET    /accounts
    change_own_credential - PUT    /accounts/me/credential
    get_account           - GET    /accounts/{account_id}
    update_account        - PATCH  /accounts/{account_id}
    delete_account        - DELETE /accounts/{account_id}
    reset_credential      - POST   /accounts/{account_id}/credential-resets
    unlock_account        - DELETE /accounts/{account_id}/lock
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import JSONResponse

from erp_identity.application.commands import (
    ChangeCredential,
    CreateAccount,
    ResetCredential,
    SoftDeleteAccount,
    UnlockAccount,
    UpdateAccount,
)
from erp_identity.application.dtos import Actor
from erp_identity.application.queries import GetAccount, ListAccounts
from erp_identity.core.constants import DEFAULT_PAGE_SIZE
from erp_identity.core.container import AppServices
from erp_identity.core.result import Failure, Success
from erp_identity.presentation.routers.api.errors import ErrorResponseBuilder
from erp_identity.presentation.routers.api.middleware.actor_dependencies import (
    get_client_address,
    get_current_actor,
    get_services,
)
from erp_identity.presentation.routers.api.middleware.trace_middleware import get_trace_id
from erp_identity.schemas.account_schemas import (
    AccountCreateRequest,
    AccountCreateResponse,
    AccountListResponse,
    AccountResponse,
    AccountUpdateRequest,
    CredentialChangeRequest,
)

router = APIRouter(prefix="/accounts", tags=["Accounts"])

CurrentActor = Annotated[Actor, Depends(get_current_actor)]
Services = Annotated[AppServices, Depends(get_services)]
ClientAddress = Annotated[str | None, Depends(get_client_address)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=AccountCreateResponse,
)
async def create_account(
    request: Request,
    data: AccountCreateRequest,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> AccountCreateResponse | JSONResponse:
    """Create an account with a generated temporary password.

    POST /api/v1/accounts → 201 Created

    Returns:
        AccountCreateResponse on success.
        JSONResponse with error on failure (400/403/409/503).
    """
    command = CreateAccount(
        first_name=data.first_name,
        last_name=data.last_name,
        email=data.email,
        role=data.role,
        phone_number=data.phone_number,
        department=data.department,
        position=data.position,
        employee_id=data.employee_id,
        avatar_url=data.avatar_url,
        permissions=tuple(data.permissions),
        preferences=data.preferences,
        send_welcome=data.send_welcome,
        source_address=client_address,
    )

    match await services.accounts.create(actor, command):
        case Success(value=created):
            return AccountCreateResponse(
                account=AccountResponse.from_view(created.account),
                notification_delivered=created.notification_delivered,
                notification_error_code=created.notification_error_code,
            )
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.get("", response_model=AccountListResponse)
async def list_accounts(
    request: Request,
    actor: CurrentActor,
    services: Services,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_PAGE_SIZE,
    search: str | None = None,
    role: str | None = None,
    account_status: Annotated[str | None, Query(alias="status")] = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> AccountListResponse | JSONResponse:
    """List accounts with search, filters, sorting and pagination.

    GET /api/v1/accounts → 200 OK

    Deleted accounts are listed only with ?status=deleted.
    """
    query = ListAccounts(
        page=page,
        limit=limit,
        search=search,
        role=role,
        status=account_status,
        sort_by=sort_by,
        sort_order=sort_order,
    )

    match await services.queries.list(actor, query):
        case Success(value=account_page):
            return AccountListResponse.from_page(account_page)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.put("/me/credential", status_code=status.HTTP_204_NO_CONTENT)
async def change_own_credential(
    request: Request,
    data: CredentialChangeRequest,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> Response:
    """Replace the caller's own password.

    PUT /api/v1/accounts/me/credential → 204 No Content
    """
    command = ChangeCredential(
        current_credential=data.current_password,
        new_credential=data.new_password,
        source_address=client_address,
    )

    match await services.accounts.change_credential(actor, command):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    request: Request,
    account_id: UUID,
    actor: CurrentActor,
    services: Services,
) -> AccountResponse | JSONResponse:
    """Get a live account.

    GET /api/v1/accounts/{account_id} → 200 OK
    """
    match await services.queries.get(actor, GetAccount(account_id=account_id)):
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.patch("/{account_id}", response_model=AccountResponse)
async def update_account(
    request: Request,
    account_id: UUID,
    data: AccountUpdateRequest,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> AccountResponse | JSONResponse:
    """Apply an administrative patch.

    PATCH /api/v1/accounts/{account_id} → 200 OK

    Email, password, login tracking and audit fields are rejected with 400.
    """
    command = UpdateAccount(
        account_id=account_id,
        changes=data.changes(),
        source_address=client_address,
    )

    match await services.accounts.update(actor, command):
        case Success(value=view):
            return AccountResponse.from_view(view)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    request: Request,
    account_id: UUID,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> Response:
    """Soft-delete an account.

    DELETE /api/v1/accounts/{account_id} → 204 No Content

    A second delete of the same account returns 404.
    """
    command = SoftDeleteAccount(account_id=account_id, source_address=client_address)

    match await services.accounts.soft_delete(actor, command):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.post("/{account_id}/credential-resets", status_code=status.HTTP_204_NO_CONTENT)
async def reset_credential(
    request: Request,
    account_id: UUID,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> Response:
    """Replace the account's password with a new temporary one.

    POST /api/v1/accounts/{account_id}/credential-resets → 204 No Content

    502 when the new password could not be delivered; the reset itself has
    been applied in that case.
    """
    command = ResetCredential(account_id=account_id, source_address=client_address)

    match await services.accounts.reset_credential(actor, command):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )


@router.delete("/{account_id}/lock", status_code=status.HTTP_204_NO_CONTENT)
async def unlock_account(
    request: Request,
    account_id: UUID,
    actor: CurrentActor,
    services: Services,
    client_address: ClientAddress,
) -> Response:
    """Clear a login lockout.

    DELETE /api/v1/accounts/{account_id}/lock → 204 No Content
    """
    command = UnlockAccount(account_id=account_id, source_address=client_address)

    match await services.accounts.unlock(actor, command):
        case Success():
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        case Failure(error=error):
            return ErrorResponseBuilder.from_domain_error(
                error=error,
                request=request,
                trace_id=get_trace_id() or "",
            )
