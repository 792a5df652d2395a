"""
Unit tests for the Mongo repositories and the in-memory store.

The repositories run against InMemoryStore, which honours the same
filter shapes motor receives: empty, equality (with array containment)
and `$in`.
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from coaching_api.core.access.models import Role, UnrecognizedRole, User
from coaching_api.infrastructure.mongo.client import (
    InMemoryStore,
    MongoConfig,
    MongoStore,
    create_mongo_store,
)
from coaching_api.infrastructure.mongo.repositories import (
    CoachingRepository,
    ProjectRepository,
    UserRepository,
    to_object_id,
)
from coaching_api.infrastructure.mongo.seed import SEED_COACHINGS, SEED_USERS, seed_database


class TestToObjectId:

    def test_accepts_object_id(self):
        oid = ObjectId()
        assert to_object_id(oid) is oid

    def test_parses_hex_string(self):
        assert to_object_id("507f1f77bcf86cd799439011") == ObjectId("507f1f77bcf86cd799439011")

    @pytest.mark.parametrize("value", ["invalid-id", "", None, 42])
    def test_rejects_everything_else(self, value):
        assert to_object_id(value) is None


class TestInMemoryCollection:
    """Filter semantics of the in-memory store."""

    @pytest.mark.asyncio
    async def test_equality_matches_inside_arrays(self, store):
        manager = ObjectId()
        collection = store.collection("projects")
        await collection.insert_many([{"managerIds": [manager]}, {"managerIds": []}])

        found = await collection.find({"managerIds": manager}).to_list(length=None)

        assert len(found) == 1

    @pytest.mark.asyncio
    async def test_empty_in_matches_nothing(self, store):
        collection = store.collection("coachings")
        await collection.insert_one({"projectId": ObjectId()})

        assert await collection.find({"projectId": {"$in": []}}).to_list(length=None) == []

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self, store):
        collection = store.collection("users")
        user_id = await collection.insert_one({"role": "ops"})

        document = await collection.find_one({"_id": user_id})
        document["role"] = "pm"

        assert (await collection.find_one({"_id": user_id}))["role"] == "ops"

    @pytest.mark.asyncio
    async def test_delete_many_reports_count(self, store):
        collection = store.collection("users")
        await collection.insert_many([{"role": "ops"}, {"role": "pm"}])

        result = await collection.delete_many({})

        assert result.deleted_count == 2


class TestRepositories:
    """Document to domain translation and accessor queries."""

    @pytest.mark.asyncio
    async def test_user_roles_are_parsed(self, factory):
        ops = await factory.user(role="ops")
        unknown = await factory.user(role="unknown")

        assert ops.role is Role.OPS
        assert unknown.role == UnrecognizedRole("unknown")

    @pytest.mark.asyncio
    async def test_find_by_id_accepts_hex_string(self, factory, coachings):
        coaching = await factory.coaching()

        found = await coachings.find_by_id(str(coaching.id))

        assert found.id == coaching.id
        assert found.project_id == coaching.project_id

    @pytest.mark.asyncio
    async def test_find_by_id_treats_malformed_id_as_absent(self, coachings):
        assert await coachings.find_by_id("not-an-id") is None

    @pytest.mark.asyncio
    async def test_find_by_id_missing_record(self, coachings):
        assert await coachings.find_by_id(ObjectId()) is None

    @pytest.mark.asyncio
    async def test_find_where_on_manager_array(self, factory, projects):
        pm = await factory.user(role="pm")
        managed = await factory.project(manager_ids=[ObjectId(), pm.id])
        await factory.project()

        found = await projects.find_where("managerIds", pm.id)

        assert [p.id for p in found] == [managed.id]

    @pytest.mark.asyncio
    async def test_find_where_in(self, factory, coachings):
        first = await factory.coaching()
        second = await factory.coaching()
        await factory.coaching()

        found = await coachings.find_where_in("projectId", [first.project_id, second.project_id])

        assert {c.id for c in found} == {first.id, second.id}

    @pytest.mark.asyncio
    async def test_insert_many_assigns_ids(self, store):
        created = await UserRepository(store).insert_many(
            [User(id=None, role=Role.COACH, first_name="Jim", last_name="Gordon")]
        )

        assert isinstance(created[0].id, ObjectId)
        assert (await UserRepository(store).find_by_id(created[0].id)).full_name == "Jim Gordon"

    @pytest.mark.asyncio
    async def test_driver_errors_propagate(self):
        store = MagicMock()
        store.collection.return_value.find.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(ServerSelectionTimeoutError):
            await CoachingRepository(store).find_all()


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_creates_full_population(self, store):
        summary = await seed_database(store)

        assert len(summary.users) == len(SEED_USERS)
        assert summary.count_role(Role.CLIENT) == 6
        assert summary.count_role(Role.OPS) == 3
        assert len(summary.projects) == 5
        assert len(summary.coachings) == len(SEED_COACHINGS)

    @pytest.mark.asyncio
    async def test_seed_replaces_existing_data(self, store):
        await seed_database(store)
        await seed_database(store)

        assert len(await UserRepository(store).find_all()) == len(SEED_USERS)
        assert len(await ProjectRepository(store).find_all()) == 5


class TestStoreFactory:

    def test_mock_mode_returns_in_memory_store(self):
        assert isinstance(create_mongo_store(mock_mode=True), InMemoryStore)

    def test_real_mode_requires_config(self):
        with pytest.raises(ValueError, match="config is required"):
            create_mongo_store()

    @pytest.mark.asyncio
    async def test_real_mode_builds_motor_store(self):
        store = create_mongo_store(MongoConfig(uri="mongodb://localhost:27017", database="test"))
        try:
            assert isinstance(store, MongoStore)
        finally:
            store.close()
