"""Role → permission table.

This is the single authorization source of truth. It is not enforced by an
interceptor: every mutating admin action calls resolve_permission (usually
through AuthService.require) immediately before acting.
"""

from src.ld_auth.domain.models import Session
from src.ld_common.enums import Permission, Role

ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(
        {
            Permission.VIEW,
            Permission.EDIT,
            Permission.DELETE,
            Permission.MANAGE_USERS,
            Permission.MANAGE_CATEGORIES,
        }
    ),
    Role.EDITOR: frozenset({Permission.VIEW, Permission.EDIT, Permission.DELETE}),
    Role.VIEWER: frozenset({Permission.VIEW}),
}


def role_permissions(role: Role) -> frozenset[Permission]:
    return ROLE_PERMISSIONS.get(role, frozenset())


def resolve_permission(session: Session | None, permission: Permission | str) -> bool:
    """True when the session's role grants the permission. Anonymous callers get nothing."""
    if session is None:
        return False
    try:
        wanted = Permission(permission)
    except ValueError:
        return False
    return wanted in role_permissions(session.user.role)
