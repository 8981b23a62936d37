"""Domain enums package.

Usage:
    from erp_identity.domain.enums import AccountStatus, Capability, ActivityAction
"""

from erp_identity.domain.enums.account_status import AccountStatus
from erp_identity.domain.enums.activity_action import ActivityAction
from erp_identity.domain.enums.capability import Capability

__all__ = ["AccountStatus", "ActivityAction", "Capability"]
