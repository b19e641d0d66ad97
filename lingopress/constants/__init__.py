"""Constants package for LingoPress."""

from .roles import ROLE_HEADER, ROLE_HIERARCHY, SIGNALLED_ROLES, Role, parse_role

__all__ = [
    "Role",
    "ROLE_HEADER",
    "ROLE_HIERARCHY",
    "SIGNALLED_ROLES",
    "parse_role",
]
