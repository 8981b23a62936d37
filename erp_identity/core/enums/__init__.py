"""Core enums package.

Usage:
    from erp_identity.core.enums import ErrorCode, Environment
"""

from erp_identity.core.enums.environment import Environment
from erp_identity.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
