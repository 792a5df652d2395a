"""
Project endpoints.

- ops: all projects
- pm: projects listing them as a manager
- client/coach: projects reached through their coachings, unless
  `projects_client_access` is off, in which case 403
"""

import logging
from datetime import datetime

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from ...core.access.models import Project, Role
from ..dependencies import AccessControlDep, CurrentUser, SettingsDep
from ..errors import ERROR_RESPONSES, ForbiddenError

logger = logging.getLogger(__name__)

router = APIRouter()


class ProjectResponse(BaseModel):
    """A project as returned to API clients."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "507f1f77bcf86cd799439015",
                "managerIds": ["507f1f77bcf86cd799439011"],
                "createdAt": "2025-01-15T10:30:00Z",
                "updatedAt": "2025-01-15T10:30:00Z",
            }
        },
    )

    id: str = Field(alias="_id", description="Project identifier")
    manager_ids: list[str] = Field(alias="managerIds", description="Users managing the project")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        return cls(
            id=str(project.id),
            manager_ids=[str(manager_id) for manager_id in project.manager_ids],
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


@router.get(
    "",
    response_model=list[ProjectResponse],
    status_code=status.HTTP_200_OK,
    summary="Get projects based on user role",
    description="Returns the projects visible to the caller.",
    responses=ERROR_RESPONSES,
)
async def list_projects(
    user: CurrentUser,
    access: AccessControlDep,
    settings: SettingsDep,
) -> list[ProjectResponse]:
    role = user.role

    if not role.is_recognized:
        raise ForbiddenError()

    if role in (Role.CLIENT, Role.COACH) and not settings.projects_client_access:
        logger.info(
            "Project listing disabled for role",
            extra={"user_id": str(user.id), "role": role.value}
        )
        raise ForbiddenError()

    projects = await access.get_accessible_projects(user)

    logger.info(
        "Listed projects",
        extra={"user_id": str(user.id), "role": role.value, "count": len(projects)}
    )

    return [ProjectResponse.from_domain(project) for project in projects]
