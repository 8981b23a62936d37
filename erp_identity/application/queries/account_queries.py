"""Account queries (read operations).

Queries are immutable dataclasses with question-like names. They NEVER change
state.
"""

from dataclasses import dataclass
from uuid import UUID

from erp_identity.core.constants import DEFAULT_PAGE_SIZE


@dataclass(frozen=True, kw_only=True)
class GetAccount:
    """Get a single live account by ID."""

    account_id: UUID


@dataclass(frozen=True, kw_only=True)
class ListAccounts:
    """Page through accounts.

    Attributes:
        page: 1-based page number.
        limit: Page size (1-100).
        search: Case-insensitive match on first name, last name or email.
        role: Only accounts with this role.
        status: Only accounts with this status. Deleted accounts are listed
            only when status is "deleted".
        sort_by: created_at, last_name, email or last_login_at.
        sort_order: asc or desc.

    Example:
        >>> query = ListAccounts(page=2, limit=20, search="doe", sort_by="last_name")
        >>> result = await queries.list(actor, query)
    """

    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE
    search: str | None = None
    role: str | None = None
    status: str | None = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
