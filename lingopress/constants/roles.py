"""
Role Constants for LingoPress

Roles are derived per request and never persisted.
"""

from enum import Enum


class Role(str, Enum):
    """Enumeration of request roles."""

    ADMIN = "ADMIN"
    EDITOR = "EDITOR"
    ANON = "ANON"


# Role hierarchy (higher number = more capabilities)
ROLE_HIERARCHY = {
    Role.ANON: 0,
    Role.EDITOR: 1,
    Role.ADMIN: 2,
}

# Roles accepted from the role header; ANON is never asserted explicitly
SIGNALLED_ROLES = frozenset({Role.ADMIN, Role.EDITOR})

ROLE_HEADER = "x-role"


def parse_role(value: str | None) -> Role | None:
    """Parse a role name case-insensitively, returning None when unknown."""
    if not value:
        return None
    try:
        return Role(value.strip().upper())
    except ValueError:
        return None

