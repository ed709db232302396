"""
Core permissions utilities for role-based access control.
"""
from typing import Iterable, Optional

from ..auth.models import UserRole

# Destructive operations (create/delete patients and appointments)
FRONT_DESK_ONLY = frozenset({UserRole.FRONT_DESK})

# Shared-update operations (patient updates, appointment status changes)
FRONT_DESK_OR_CLINICIAN = frozenset({UserRole.FRONT_DESK, UserRole.CLINICIAN})


def _role_value(role) -> str:
    return role.value if isinstance(role, UserRole) else str(role)


def authorize(role: Optional[str], required_roles: Iterable[str]) -> bool:
    """
    Decide whether a role may perform an operation.

    Allow iff the role is a member of ``required_roles``. Roles form no
    hierarchy, and an empty set allows nobody: callers always pass the
    explicit roles they require.

    Args:
        role: Role claim taken from a validated session token
        required_roles: Roles permitted to perform the operation

    Returns:
        bool: True to allow, False to deny
    """
    if role is None:
        return False
    allowed = {_role_value(r) for r in required_roles}
    return _role_value(role) in allowed
