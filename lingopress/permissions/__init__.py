from .rbac import (
    can_create_or_update,
    can_delete,
    can_publish,
    get_request_role,
    require_capability,
    resolve_role,
)

__all__ = [
    "can_create_or_update",
    "can_delete",
    "can_publish",
    "get_request_role",
    "require_capability",
    "resolve_role",
]
