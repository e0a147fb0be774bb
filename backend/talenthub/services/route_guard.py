"""
Navigation guard for the web client.

Decides, for a requested path and the current auth state, where the client
must be redirected. Pure function: the same input always yields the same
decision.
"""

from typing import Optional

from talenthub.schemas.profile import UserProfile

PUBLIC_ROUTES = ("/login", "/register", "/admin/login", "/admin/setup")
LOGIN_ROUTE = "/login"
ROLE_SELECTION_ROUTE = "/select-role"
GENERIC_DASHBOARD = "/dashboard"

ROLE_HOME = {
    "admin": "/admin/dashboard",
    "talent": "/dashboard/talent/discover",
    "employer": "/dashboard/employer/discover",
}


def _matches_prefix(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def normalize_path(path: str) -> str:
    path = (path or "/").split("?", 1)[0].split("#", 1)[0]
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def evaluate_route(
    path: str,
    is_authenticated: bool,
    profile: Optional[UserProfile],
) -> Optional[str]:
    """
    Return the path to redirect to, or None when the navigation may proceed.

    A provisional profile counts as "no profile": role selection is required
    before any role-specific area is reachable.
    """
    path = normalize_path(path)
    is_public = path in PUBLIC_ROUTES

    if not is_authenticated:
        return None if is_public else LOGIN_ROUTE

    if profile is None or profile.provisional:
        if is_public or path == ROLE_SELECTION_ROUTE:
            return None
        return ROLE_SELECTION_ROUTE

    if _matches_prefix(path, "/admin") and profile.role != "admin":
        return GENERIC_DASHBOARD

    if _matches_prefix(path, "/dashboard") and profile.role == "admin":
        return ROLE_HOME["admin"]

    if is_public or path in ("/", ROLE_SELECTION_ROUTE):
        return ROLE_HOME[profile.role]

    return None
