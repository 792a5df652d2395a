"""
Role-scoped access to relationship resources.

Contains the domain models and the access resolver.
"""

from .models import (
    Coaching,
    Project,
    ResourceId,
    Role,
    UnrecognizedRole,
    User,
    UserRole,
    parse_role,
)
from .control import (
    COACHING_FIELDS,
    AccessControl,
    FieldSelector,
    ResourceAccessor,
    ResourceFields,
    same_identity,
)

__all__ = [
    "Coaching",
    "Project",
    "ResourceId",
    "Role",
    "UnrecognizedRole",
    "User",
    "UserRole",
    "parse_role",
    "COACHING_FIELDS",
    "AccessControl",
    "FieldSelector",
    "ResourceAccessor",
    "ResourceFields",
    "same_identity",
]
