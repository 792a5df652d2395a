"""
Domain models for role-scoped access.

These models describe users, projects and coachings as the access layer
sees them. Identities are opaque: the store decides their representation
(ObjectId for Mongo), the domain only compares them.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Union


ResourceId = Any


class Role(Enum):
    """The four access classes a user can hold."""
    OPS = "ops"          # Unrestricted read access
    PM = "pm"            # Scoped to managed projects
    CLIENT = "client"    # Scoped to records naming them as client
    COACH = "coach"      # Scoped to records naming them as coach

    @property
    def is_recognized(self) -> bool:
        return True


@dataclass(frozen=True)
class UnrecognizedRole:
    """
    Any stored role string outside the four known values.

    Storage accepts free strings, so a user can carry a role we grant
    nothing to. Keeping the raw value makes it visible in logs and
    lets the deny branch be matched explicitly.
    """
    raw: str

    @property
    def value(self) -> str:
        return self.raw

    @property
    def is_recognized(self) -> bool:
        return False


UserRole = Union[Role, UnrecognizedRole]


def parse_role(raw: Optional[str]) -> UserRole:
    """Map a stored role string onto the role sum type."""
    try:
        return Role(raw)
    except ValueError:
        return UnrecognizedRole(raw=raw if raw is not None else "")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """An authenticated caller."""
    id: ResourceId
    role: UserRole
    first_name: str = ""
    last_name: Optional[str] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class Project:
    """
    A project and the users who manage it.

    Any manager has full visibility into the project's coachings.
    """
    id: ResourceId
    manager_ids: list[ResourceId] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class Coaching:
    """A coaching relationship: one client, one coach, one project."""
    id: ResourceId
    client_id: ResourceId
    coach_id: ResourceId
    project_id: ResourceId
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
