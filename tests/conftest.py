"""
Shared fixtures.

Tests run against the in-memory store, so no MongoDB server is needed.
Records are inserted as raw documents, which lets tests create users
with roles the domain doesn't recognize.
"""

from typing import Optional

import pytest
from bson import ObjectId

from coaching_api.core.access.control import AccessControl
from coaching_api.core.access.models import Coaching, Project, User
from coaching_api.infrastructure.mongo.client import InMemoryStore
from coaching_api.infrastructure.mongo.repositories import (
    CoachingRepository,
    ProjectRepository,
    UserRepository,
)


class Factory:
    """Creates stored users, projects and coachings with sensible defaults."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    async def user(self, role: str = "client", first_name: str = "Test", last_name: str = "User") -> User:
        user_id = await self._store.collection("users").insert_one(
            {"role": role, "firstName": first_name, "lastName": last_name}
        )
        return await UserRepository(self._store).find_by_id(user_id)

    async def project(self, manager_ids: Optional[list] = None) -> Project:
        if manager_ids is None:
            manager = await self.user(role="pm")
            manager_ids = [manager.id]
        project_id = await self._store.collection("projects").insert_one(
            {"managerIds": manager_ids}
        )
        return await ProjectRepository(self._store).find_by_id(project_id)

    async def coaching(
        self,
        client_id: Optional[ObjectId] = None,
        coach_id: Optional[ObjectId] = None,
        project_id: Optional[ObjectId] = None,
    ) -> Coaching:
        if client_id is None:
            client_id = (await self.user(role="client")).id
        if coach_id is None:
            coach_id = (await self.user(role="coach")).id
        if project_id is None:
            project_id = (await self.project()).id
        coaching_id = await self._store.collection("coachings").insert_one(
            {"clientId": client_id, "coachId": coach_id, "projectId": project_id}
        )
        return await CoachingRepository(self._store).find_by_id(coaching_id)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def factory(store: InMemoryStore) -> Factory:
    return Factory(store)


@pytest.fixture
def coachings(store: InMemoryStore) -> CoachingRepository:
    return CoachingRepository(store)


@pytest.fixture
def projects(store: InMemoryStore) -> ProjectRepository:
    return ProjectRepository(store)


@pytest.fixture
def access(projects: ProjectRepository, coachings: CoachingRepository) -> AccessControl:
    return AccessControl(projects=projects, coachings=coachings)
