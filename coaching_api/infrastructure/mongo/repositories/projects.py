"""
Repository for projects.

`managerIds` is an array; an equality filter on it matches projects whose
manager list contains the value.
"""

from coaching_api.core.access.models import Project

from .base import MongoRepository, timestamps


class ProjectRepository(MongoRepository[Project]):
    """Projects collection (`projects`)."""

    collection_name = "projects"

    def _to_domain(self, document: dict) -> Project:
        return Project(
            id=document["_id"],
            manager_ids=list(document.get("managerIds", [])),
            **timestamps(document),
        )

    def _to_document(self, record: Project) -> dict:
        document = {
            "managerIds": list(record.manager_ids),
            "createdAt": record.created_at,
            "updatedAt": record.updated_at,
        }
        if record.id is not None:
            document["_id"] = record.id
        return document
