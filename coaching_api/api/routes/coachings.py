"""
Coaching endpoints.

Visibility depends on the caller's role:
- ops: all coachings
- pm: coachings for projects they manage
- client: coachings where they are the client
- coach: coachings where they are the coach

Any other role gets 403. The resolver alone can't tell "no matches" from
"no access" (both are empty), so the role is checked here first.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, status
from pydantic import BaseModel, ConfigDict, Field

from ...core.access.control import COACHING_FIELDS
from ...core.access.models import Coaching
from ..dependencies import AccessControlDep, CoachingRepositoryDep, CurrentUser
from ..errors import ERROR_RESPONSES, ErrorResponse, ForbiddenError, ResourceNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


# ---------------------------------------------------------------------------
# Response Models
# ---------------------------------------------------------------------------

class CoachingResponse(BaseModel):
    """A coaching as returned to API clients."""
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "_id": "507f1f77bcf86cd799439020",
                "clientId": "507f1f77bcf86cd799439012",
                "coachId": "507f1f77bcf86cd799439013",
                "projectId": "507f1f77bcf86cd799439014",
                "createdAt": "2025-01-15T10:30:00Z",
                "updatedAt": "2025-01-15T10:30:00Z",
            }
        },
    )

    id: str = Field(alias="_id", description="Coaching identifier")
    client_id: str = Field(alias="clientId", description="User receiving the coaching")
    coach_id: str = Field(alias="coachId", description="User giving the coaching")
    project_id: str = Field(alias="projectId", description="Project the coaching belongs to")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    @classmethod
    def from_domain(cls, coaching: Coaching) -> "CoachingResponse":
        return cls(
            id=str(coaching.id),
            client_id=str(coaching.client_id),
            coach_id=str(coaching.coach_id),
            project_id=str(coaching.project_id),
            created_at=coaching.created_at,
            updated_at=coaching.updated_at,
        )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get(
    "",
    response_model=list[CoachingResponse],
    status_code=status.HTTP_200_OK,
    summary="Get coachings based on user role",
    description="Returns the coachings visible to the caller. Empty when nothing matches.",
    responses=ERROR_RESPONSES,
)
async def list_coachings(
    user: CurrentUser,
    access: AccessControlDep,
    coachings: CoachingRepositoryDep,
) -> list[CoachingResponse]:
    if not user.role.is_recognized:
        logger.warning(
            "Coachings requested with unrecognized role",
            extra={"user_id": str(user.id), "role": user.role.value}
        )
        raise ForbiddenError()

    records = await access.get_filtered_resources(user, coachings, COACHING_FIELDS)

    logger.info(
        "Listed coachings",
        extra={"user_id": str(user.id), "role": user.role.value, "count": len(records)}
    )

    return [CoachingResponse.from_domain(coaching) for coaching in records]


@router.get(
    "/{coaching_id}",
    response_model=CoachingResponse,
    status_code=status.HTTP_200_OK,
    summary="Get one coaching",
    description="Returns the coaching if the caller may see it. Hidden coachings answer 404.",
    responses={
        **ERROR_RESPONSES,
        404: {"description": "Coaching not found", "model": ErrorResponse},
    },
)
async def get_coaching(
    coaching_id: str,
    user: CurrentUser,
    access: AccessControlDep,
    coachings: CoachingRepositoryDep,
) -> CoachingResponse:
    """
    Retrieve one coaching.

    A coaching the caller can't see answers the same 404 as a missing
    one, so ids of other people's coachings can't be guessed.

    The record is read twice: once by the access check and once here to
    serialize it. The access check only answers yes or no.
    """
    if not user.role.is_recognized:
        raise ForbiddenError()

    if not await access.has_resource_access(user, coaching_id, coachings, COACHING_FIELDS):
        logger.info(
            "Coaching not visible",
            extra={"user_id": str(user.id), "coaching_id": coaching_id}
        )
        raise ResourceNotFoundError("Coaching")

    coaching = await coachings.find_by_id(coaching_id)
    if coaching is None:
        # Deleted between the access check and this read
        raise ResourceNotFoundError("Coaching")

    return CoachingResponse.from_domain(coaching)
