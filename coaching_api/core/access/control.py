"""
Role and relationship based access control.

The resolver answers two questions for any resource shaped like a
coaching (one client, one coach, one project per record):

- which records may this user see?
- may this user see this one record?

Decision table, evaluated on the user's role:

- ops: everything
- pm: records whose project lists the user in managerIds
- client: records where the user is the client
- coach: records where the user is the coach
- anything else: nothing, and no query is issued

The resolver only reads. It does not catch store errors; they reach the
caller unchanged.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence, TypeVar

from .models import Project, ResourceId, Role, User

logger = logging.getLogger(__name__)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

MANAGER_IDS_FIELD = "managerIds"
PROJECT_ID_FIELD = "_id"


class ResourceAccessor(Protocol[T_co]):
    """
    Read capability over one resource kind.

    Equality filters on array-valued fields match when the array contains
    the value, as in MongoDB.
    """

    async def find_all(self) -> list[T_co]:
        ...

    async def find_where(self, field_name: str, value: Any) -> list[T_co]:
        ...

    async def find_where_in(self, field_name: str, values: Iterable[Any]) -> list[T_co]:
        ...

    async def find_by_id(self, resource_id: ResourceId) -> Optional[T_co]:
        ...


@dataclass(frozen=True)
class FieldSelector:
    """
    One relationship field of a resource kind.

    `name` is the stored field used in filters. `attribute` is what we read
    on a loaded record; mappings are read by `name`.
    """
    name: str
    attribute: Optional[str] = None

    def read(self, record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(self.name)
        return getattr(record, self.attribute or self.name, None)


@dataclass(frozen=True)
class ResourceFields:
    """Which fields play the client, coach and project parts for a resource kind."""
    client: FieldSelector = field(default_factory=lambda: FieldSelector("clientId", "client_id"))
    coach: FieldSelector = field(default_factory=lambda: FieldSelector("coachId", "coach_id"))
    project: FieldSelector = field(default_factory=lambda: FieldSelector("projectId", "project_id"))

    @classmethod
    def named(
        cls,
        client: str = "clientId",
        coach: str = "coachId",
        project: str = "projectId",
    ) -> "ResourceFields":
        """Fields whose record attribute has the same name as the stored field."""
        return cls(
            client=FieldSelector(client),
            coach=FieldSelector(coach),
            project=FieldSelector(project),
        )


COACHING_FIELDS = ResourceFields()


def same_identity(left: Any, right: Any) -> bool:
    """Compare identities by string form; ObjectId and its hex string are equal."""
    if left is None or right is None:
        return False
    return str(left) == str(right)


class AccessControl:
    """
    Access resolver for relationship-scoped resources.

    Built per request with the project and coaching accessors. Holds no
    state between calls.
    """

    def __init__(
        self,
        projects: ResourceAccessor[Project],
        coachings: ResourceAccessor[Any],
    ) -> None:
        self._projects = projects
        self._coachings = coachings

    async def managed_project_ids(self, user: User) -> list[ResourceId]:
        """Ids of projects listing the user as a manager."""
        projects = await self._projects.find_where(MANAGER_IDS_FIELD, user.id)
        return [project.id for project in projects]

    async def get_filtered_resources(
        self,
        user: User,
        resources: ResourceAccessor[T],
        fields: ResourceFields = COACHING_FIELDS,
    ) -> Sequence[T]:
        """Return the records of `resources` the user may see."""
        role = user.role

        if role is Role.OPS:
            return await resources.find_all()

        if role is Role.PM:
            project_ids = await self.managed_project_ids(user)
            logger.debug(
                "Filtering by managed projects",
                extra={"user_id": str(user.id), "project_count": len(project_ids)},
            )
            # An empty list still goes to the store: no projects means no records.
            return await resources.find_where_in(fields.project.name, project_ids)

        if role is Role.CLIENT:
            return await resources.find_where(fields.client.name, user.id)

        if role is Role.COACH:
            return await resources.find_where(fields.coach.name, user.id)

        logger.debug(
            "Unrecognized role, denying access",
            extra={"user_id": str(user.id), "role": role.value},
        )
        return []

    async def has_resource_access(
        self,
        user: User,
        resource_id: ResourceId,
        resources: ResourceAccessor[Any],
        fields: ResourceFields = COACHING_FIELDS,
    ) -> bool:
        """Decide whether the user may see one record."""
        if not user.role.is_recognized:
            return False

        record = await resources.find_by_id(resource_id)
        if record is None:
            return False

        role = user.role

        if role is Role.OPS:
            return True

        if role is Role.PM:
            project_ids = await self.managed_project_ids(user)
            record_project = fields.project.read(record)
            return any(same_identity(pid, record_project) for pid in project_ids)

        if role is Role.CLIENT:
            return same_identity(fields.client.read(record), user.id)

        if role is Role.COACH:
            return same_identity(fields.coach.read(record), user.id)

        return False

    async def get_accessible_projects(self, user: User) -> Sequence[Project]:
        """
        Return the projects the user may see.

        Clients and coaches reach projects through their coachings; each
        project appears once however many coachings point at it.
        """
        role = user.role

        if role is Role.OPS:
            return await self._projects.find_all()

        if role is Role.PM:
            return await self._projects.find_where(MANAGER_IDS_FIELD, user.id)

        if role in (Role.CLIENT, Role.COACH):
            selector = COACHING_FIELDS.client if role is Role.CLIENT else COACHING_FIELDS.coach
            coachings = await self._coachings.find_where(selector.name, user.id)

            project_ids: list[ResourceId] = []
            seen: set[str] = set()
            for coaching in coachings:
                project_id = COACHING_FIELDS.project.read(coaching)
                if project_id is None or str(project_id) in seen:
                    continue
                seen.add(str(project_id))
                project_ids.append(project_id)

            return await self._projects.find_where_in(PROJECT_ID_FIELD, project_ids)

        return []
