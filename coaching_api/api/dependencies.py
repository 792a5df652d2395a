"""
FastAPI dependency injection.

Dependencies provide the store, repositories, access resolver and the
current user to route handlers. Using dependency injection means:
- Routes don't instantiate their own dependencies (easier to test)
- The store can be swapped for an in-memory one in tests
- The store lifecycle is owned by the application, not by routes

Each dependency is a function that FastAPI calls when needed.
"""

import logging
from typing import Annotated, Optional

from fastapi import Depends, Request, Security
from fastapi.security import APIKeyHeader

from ..config.settings import Settings
from ..core.access.control import AccessControl
from ..core.access.models import User
from ..infrastructure.mongo.client import DocumentStore
from ..infrastructure.mongo.repositories import (
    CoachingRepository,
    ProjectRepository,
    UserRepository,
    to_object_id,
)
from .errors import AuthenticationError

logger = logging.getLogger(__name__)

# Caller identity header. Declared as a security scheme so the docs
# page offers an "Authorize" box for it.
user_id_header = APIKeyHeader(
    name="X-User-Id",
    auto_error=False,
    description="Id of the calling user",
)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    """Provide the settings the application was created with."""
    return request.app.state.settings


# ---------------------------------------------------------------------------
# Store and Repositories
# ---------------------------------------------------------------------------

def get_store(request: Request) -> DocumentStore:
    """
    Provide the store handle opened by the application lifespan.

    Tests override this dependency with an in-memory store.
    """
    return request.app.state.store


StoreDep = Annotated[DocumentStore, Depends(get_store)]


def get_user_repository(store: StoreDep) -> UserRepository:
    return UserRepository(store)


def get_project_repository(store: StoreDep) -> ProjectRepository:
    return ProjectRepository(store)


def get_coaching_repository(store: StoreDep) -> CoachingRepository:
    return CoachingRepository(store)


UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepositoryDep = Annotated[ProjectRepository, Depends(get_project_repository)]
CoachingRepositoryDep = Annotated[CoachingRepository, Depends(get_coaching_repository)]


def get_access_control(
    projects: ProjectRepositoryDep,
    coachings: CoachingRepositoryDep,
) -> AccessControl:
    """
    Provide the access resolver.

    The resolver is stateless, so we create a new instance per request.
    """
    return AccessControl(projects=projects, coachings=coachings)


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

async def get_current_user(
    users: UserRepositoryDep,
    user_id: Optional[str] = Security(user_id_header),
) -> User:
    """
    Resolve the X-User-Id header to a stored user.

    This is identification, not authentication: whoever knows an id can
    act as that user. Raises AuthenticationError (401) when the header is
    missing, malformed, unknown, or the lookup fails.
    """
    if not user_id:
        logger.warning("Request missing X-User-Id header")
        raise AuthenticationError("Missing X-User-Id header")

    object_id = to_object_id(user_id)
    if object_id is None:
        logger.warning(
            "Malformed user id",
            extra={"user_id": user_id[:32]}
        )
        raise AuthenticationError("Invalid user ID format")

    try:
        user = await users.find_by_id(object_id)
    except Exception as e:
        logger.error(
            "User lookup failed",
            extra={"user_id": user_id, "error": str(e)}
        )
        raise AuthenticationError("Authentication failed", details=str(e))

    if user is None:
        logger.warning(
            "Unknown user id",
            extra={"user_id": user_id}
        )
        raise AuthenticationError("Invalid user ID")

    return user


# ---------------------------------------------------------------------------
# Convenience Type Aliases
# ---------------------------------------------------------------------------

# These type aliases make route signatures cleaner
CurrentUser = Annotated[User, Depends(get_current_user)]
AccessControlDep = Annotated[AccessControl, Depends(get_access_control)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
