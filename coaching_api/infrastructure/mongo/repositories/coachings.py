"""
Repository for coachings.
"""

from coaching_api.core.access.models import Coaching

from .base import MongoRepository, timestamps


class CoachingRepository(MongoRepository[Coaching]):
    """Coachings collection (`coachings`)."""

    collection_name = "coachings"

    def _to_domain(self, document: dict) -> Coaching:
        return Coaching(
            id=document["_id"],
            client_id=document.get("clientId"),
            coach_id=document.get("coachId"),
            project_id=document.get("projectId"),
            **timestamps(document),
        )

    def _to_document(self, record: Coaching) -> dict:
        document = {
            "clientId": record.client_id,
            "coachId": record.coach_id,
            "projectId": record.project_id,
            "createdAt": record.created_at,
            "updatedAt": record.updated_at,
        }
        if record.id is not None:
            document["_id"] = record.id
        return document
