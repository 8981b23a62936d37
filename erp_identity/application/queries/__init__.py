"""Account read side."""

from erp_identity.application.queries.account_queries import GetAccount, ListAccounts
from erp_identity.application.queries.account_query_service import (
    AccountQueryService,
    build_filters,
)

__all__ = ["AccountQueryService", "GetAccount", "ListAccounts", "build_filters"]
