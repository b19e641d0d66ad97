"""
Role-based access control.

A role is resolved once per request, in this order:

1. ``x-role`` header (case-insensitive) equal to ADMIN or EDITOR
2. ``ADMIN_BYPASS`` setting → ADMIN
3. development environment → ADMIN
4. ``RBAC_FALLBACK_ROLE`` setting (ADMIN unless configured otherwise)

Capability checks are pure functions of the role. Routes gate mutations
through ``require_capability`` so that a 403 is raised before any write.
"""

import logging
from collections.abc import Callable, Mapping

from fastapi import Request

from lingopress.config import Settings, settings
from lingopress.constants.roles import ROLE_HEADER, ROLE_HIERARCHY, SIGNALLED_ROLES, Role, parse_role
from lingopress.exceptions import AuthorizationError

logger = logging.getLogger(__name__)


def resolve_role(headers: Mapping[str, str], config: Settings = settings) -> Role:
    header_role = parse_role(headers.get(ROLE_HEADER))
    if header_role in SIGNALLED_ROLES:
        return header_role

    if config.admin_bypass:
        return Role.ADMIN

    if config.environment == "development":
        return Role.ADMIN

    return parse_role(config.rbac_fallback_role) or Role.ANON


def can_create_or_update(role: Role) -> bool:
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[Role.EDITOR]


def can_delete(role: Role) -> bool:
    return role == Role.ADMIN


def can_publish(role: Role) -> bool:
    return role == Role.ADMIN


def get_request_role(request: Request) -> Role:
    """FastAPI dependency returning the role for the current request."""
    role = getattr(request.state, "role", None)
    if role is None:
        role = resolve_role(request.headers, request.app.state.settings)
        request.state.role = role
    return role


def require_capability(check: Callable[[Role], bool], action: str):
    """Create a dependency that raises 403 unless ``check(role)`` holds."""

    def checker(request: Request) -> Role:
        role = get_request_role(request)
        if not check(role):
            logger.warning(f"Role {role.value} denied '{action}' on {request.url.path}")
            raise AuthorizationError(required_permission=action)
        return role

    return checker
