# ABOUTME: Path-based access rules for the web front end, as a pure decision function.
# ABOUTME: Redirects between public and protected paths based on the __session cookie.

from collections.abc import Callable, Mapping
from typing import Literal
from urllib.parse import urlencode

from pydantic import BaseModel

SESSION_COOKIE_NAME = "__session"

PUBLIC_PATHS: tuple[str, ...] = ("/login", "/register", "/forgot-password")

PROTECTED_PATHS: tuple[str, ...] = (
    "/profile",
    "/settings",
    "/network",
    "/jobs",
    "/availability",
    "/companies",
)

LOGIN_PATH = "/login"
HOME_PATH = "/network"


class RouteDecision(BaseModel):
    """Outcome of the route guard for one request."""

    action: Literal["next", "redirect"]
    location: str | None = None

    @classmethod
    def allow(cls) -> "RouteDecision":
        return cls(action="next")

    @classmethod
    def redirect(cls, location: str) -> "RouteDecision":
        return cls(action="redirect", location=location)


def is_public_path(path: str) -> bool:
    """Return True if the path is reachable without a session."""
    return any(path.startswith(prefix) for prefix in PUBLIC_PATHS)


def is_protected_path(path: str) -> bool:
    """Return True if the path requires a session."""
    return any(path.startswith(prefix) for prefix in PROTECTED_PATHS)


def resolve_route(
    path: str,
    cookies: Mapping[str, str],
    verify: Callable[[str], bool] | None = None,
) -> RouteDecision:
    """Decide whether a request passes or is redirected.

    Args:
        path: Request path, e.g. "/network".
        cookies: Request cookies by name.
        verify: Optional session check from the identity provider. When given,
            a cookie only counts as a session if verify accepts it.

    Returns:
        RouteDecision to pass through or redirect.
    """
    token = cookies.get(SESSION_COOKIE_NAME) or None
    has_session = token is not None and (verify is None or verify(token))

    if path == "/":
        return RouteDecision.redirect(HOME_PATH if has_session else LOGIN_PATH)

    if is_public_path(path) and has_session:
        return RouteDecision.redirect(HOME_PATH)

    if is_protected_path(path) and not has_session:
        return RouteDecision.redirect(f"{LOGIN_PATH}?{urlencode({'callbackUrl': path})}")

    return RouteDecision.allow()
