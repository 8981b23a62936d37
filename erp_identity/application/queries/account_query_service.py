"""Account read side.

Side-effect free lookups gated by the account:read capability. Returns DTOs
(AccountView), never entities, so credential hashes cannot leak to the
presentation layer.
"""

from collections.abc import Callable
from datetime import datetime
from typing import get_args

from erp_identity.application.dtos import AccountPage, AccountView, Actor, Pagination
from erp_identity.application.queries.account_queries import GetAccount, ListAccounts
from erp_identity.application.services.account_lifecycle_manager import utc_now
from erp_identity.core.constants import MAX_PAGE_SIZE
from erp_identity.core.enums import ErrorCode
from erp_identity.core.errors import (
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from erp_identity.core.result import Failure, Result, Success
from erp_identity.domain.enums import AccountStatus, Capability
from erp_identity.domain.errors import AccountError
from erp_identity.domain.protocols import AccountFilters, AccountRepository
from erp_identity.domain.protocols.account_repository import SortField, SortOrder

SORT_FIELDS = get_args(SortField)
SORT_ORDERS = get_args(SortOrder)


def _invalid(field: str, message: str) -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.VALIDATION_FAILED, message=message, field=field
        )
    )


def build_filters(query: ListAccounts) -> Result[AccountFilters, ValidationError]:
    """Validate a listing query and turn it into repository filters.

    Example:
        >>> build_filters(ListAccounts(page=3, limit=20)).value.offset
        40
    """
    if query.page < 1:
        return _invalid("page", "Page must be at least 1")
    if not 1 <= query.limit <= MAX_PAGE_SIZE:
        return _invalid("limit", f"Limit must be between 1 and {MAX_PAGE_SIZE}")
    if query.sort_by not in SORT_FIELDS:
        return _invalid("sort_by", f"Sort field must be one of: {', '.join(SORT_FIELDS)}")
    if query.sort_order not in SORT_ORDERS:
        return _invalid("sort_order", "Sort order must be asc or desc")

    status: AccountStatus | None = None
    if query.status:
        try:
            status = AccountStatus(query.status)
        except ValueError:
            return _invalid(
                "status", f"Status must be one of: {', '.join(AccountStatus.values())}"
            )

    search = query.search.strip() if query.search else None
    role = query.role.strip() if query.role else None
    return Success(
        value=AccountFilters(
            search=search or None,
            role=role or None,
            status=status,
            sort_by=query.sort_by,  # type: ignore[arg-type]
            sort_order=query.sort_order,  # type: ignore[arg-type]
            offset=(query.page - 1) * query.limit,
            limit=query.limit,
        )
    )


class AccountQueryService:
    """Get and list accounts.

    Dependencies (injected via constructor):
        - AccountRepository: For account retrieval
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._account_repo = account_repo
        self._clock = clock

    async def get(self, actor: Actor, query: GetAccount) -> Result[AccountView, DomainError]:
        """Fetch one live account.

        Returns:
            Success(AccountView), or Failure with PERMISSION_DENIED,
            ACCOUNT_NOT_FOUND (missing or deleted) or STORE_UNAVAILABLE.
        """
        if not actor.can(Capability.ACCOUNT_READ.value):
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message=AccountError.PERMISSION_DENIED,
                    required_permission=Capability.ACCOUNT_READ.value,
                )
            )

        match await self._account_repo.find_by_id(query.account_id):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=None):
                return Failure(
                    error=NotFoundError(
                        code=ErrorCode.ACCOUNT_NOT_FOUND,
                        message=AccountError.ACCOUNT_NOT_FOUND,
                        resource_type="Account",
                        resource_id=str(query.account_id),
                    )
                )
            case Success(value=account):
                return Success(value=AccountView.from_entity(account, self._clock()))

    async def list(self, actor: Actor, query: ListAccounts) -> Result[AccountPage, DomainError]:
        """Page through accounts.

        Deleted accounts appear only when the query asks for status=deleted.
        """
        if not actor.can(Capability.ACCOUNT_READ.value):
            return Failure(
                error=AuthorizationError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message=AccountError.PERMISSION_DENIED,
                    required_permission=Capability.ACCOUNT_READ.value,
                )
            )

        match build_filters(query):
            case Failure() as failure:
                return failure
            case Success(value=filters):
                pass

        match await self._account_repo.search(filters):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=(accounts, total)):
                pass

        now = self._clock()
        return Success(
            value=AccountPage(
                items=[AccountView.from_entity(account, now) for account in accounts],
                pagination=Pagination.build(page=query.page, limit=query.limit, total=total),
            )
        )
