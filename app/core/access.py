"""Path-based access rules: which roles may call which URL prefixes."""

from app.models.user import UserRole

ANY_ROLE = frozenset({UserRole.USER.value, UserRole.MANAGER.value, UserRole.ADMIN.value})
MANAGER_ROLES = frozenset({UserRole.MANAGER.value, UserRole.ADMIN.value})
ADMIN_ROLES = frozenset({UserRole.ADMIN.value})

# Ordered (prefix, allowed roles); first match wins. Paths not covered are public.
ACCESS_RULES: tuple[tuple[str, frozenset[str]], ...] = (
    ("/auth/user", ANY_ROLE),
    ("/auth/manager", MANAGER_ROLES),
    ("/auth/admin", ADMIN_ROLES),
)


def _matches(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def required_roles(path: str, api_prefix: str = "") -> frozenset[str] | None:
    """
    Return the roles allowed to access `path`, or None when the path is public.

    `api_prefix` (e.g. "/api/v1") is stripped before matching; paths outside it are public.
    """
    if api_prefix:
        if not _matches(path, api_prefix):
            return None
        path = path[len(api_prefix):] or "/"
    for prefix, roles in ACCESS_RULES:
        if _matches(path, prefix):
            return roles
    return None
