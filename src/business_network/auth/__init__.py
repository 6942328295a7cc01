# ABOUTME: Auth package for session storage and path-based access rules.
# ABOUTME: Provides SessionManager (OS keyring) and the resolve_route guard.

from business_network.auth.route_guard import RouteDecision, resolve_route
from business_network.auth.session_manager import SessionManager

__all__ = ["RouteDecision", "SessionManager", "resolve_route"]
