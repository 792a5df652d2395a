"""
MongoDB repositories for users, projects and coachings.
"""

from .base import MongoRepository, to_object_id
from .coachings import CoachingRepository
from .projects import ProjectRepository
from .users import UserRepository

__all__ = [
    "MongoRepository",
    "to_object_id",
    "CoachingRepository",
    "ProjectRepository",
    "UserRepository",
]
