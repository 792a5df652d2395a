"""
Repository for users.

Roles are stored as free strings; they are parsed into the role sum type
on load so unknown values survive as `UnrecognizedRole`.
"""

from coaching_api.core.access.models import User, parse_role

from .base import MongoRepository, timestamps


class UserRepository(MongoRepository[User]):
    """Users collection (`users`)."""

    collection_name = "users"

    def _to_domain(self, document: dict) -> User:
        return User(
            id=document["_id"],
            role=parse_role(document.get("role")),
            first_name=document.get("firstName", ""),
            last_name=document.get("lastName"),
            **timestamps(document),
        )

    def _to_document(self, record: User) -> dict:
        document = {
            "role": record.role.value,
            "firstName": record.first_name,
            "lastName": record.last_name,
            "createdAt": record.created_at,
            "updatedAt": record.updated_at,
        }
        if record.id is not None:
            document["_id"] = record.id
        return document
