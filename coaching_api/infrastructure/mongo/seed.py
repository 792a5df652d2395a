"""
Demo data for local development.

Clears the users, projects and coachings collections and inserts a small
fixed population covering every role, projects with shared and
overlapping managers, and clients coached on several projects.
"""

import logging
from dataclasses import dataclass

from coaching_api.core.access.models import Coaching, Project, Role, User

from .client import DocumentStore
from .repositories import CoachingRepository, ProjectRepository, UserRepository

logger = logging.getLogger(__name__)


SEED_USERS: list[tuple[Role, str, str]] = [
    # Clients
    (Role.CLIENT, "Bambi", "Deer"),
    (Role.CLIENT, "Tiny", "Tim"),
    (Role.CLIENT, "Oliver", "Twist"),
    (Role.CLIENT, "Cindy", "Princess"),
    (Role.CLIENT, "Dorothy", "Gale"),
    (Role.CLIENT, "Alice", "Wonderland"),
    # Coaches
    (Role.COACH, "Sherlock", "Holmes"),
    (Role.COACH, "Hercule", "Poirot"),
    (Role.COACH, "Clarice", "Starling"),
    (Role.COACH, "Jim", "Gordon"),
    # Project managers
    (Role.PM, "Tony", "Stark"),
    (Role.PM, "Steve", "Rogers"),
    (Role.PM, "Natasha", "Romanoff"),
    # Operations
    (Role.OPS, "Gandalf", "the Grey"),
    (Role.OPS, "Merlin", "of Camelot"),
    (Role.OPS, "Albus", "Dumbledore"),
]

# Manager sets as (role, index within that role)
SEED_PROJECT_MANAGERS: list[list[tuple[Role, int]]] = [
    [(Role.PM, 0), (Role.OPS, 0)],
    [(Role.PM, 1)],
    [(Role.PM, 2), (Role.OPS, 1), (Role.OPS, 2)],
    [(Role.PM, 0), (Role.PM, 1)],
    [(Role.OPS, 0)],
]

# (client index, coach index, project index)
SEED_COACHINGS: list[tuple[int, int, int]] = [
    (0, 0, 0),
    (1, 0, 0),
    (2, 1, 1),
    (3, 2, 2),
    (4, 3, 3),
    (0, 1, 4),
    (2, 3, 2),
]


@dataclass
class SeedSummary:
    users: list[User]
    projects: list[Project]
    coachings: list[Coaching]

    def count_role(self, role: Role) -> int:
        return sum(1 for user in self.users if user.role is role)


async def clear_database(store: DocumentStore) -> None:
    await UserRepository(store).delete_all()
    await ProjectRepository(store).delete_all()
    await CoachingRepository(store).delete_all()
    logger.info("Database cleared")


async def seed_database(store: DocumentStore) -> SeedSummary:
    """Replace all data with the demo population."""
    await clear_database(store)

    users = await UserRepository(store).insert_many(
        User(id=None, role=role, first_name=first, last_name=last)
        for role, first, last in SEED_USERS
    )
    by_role = {
        role: [user for user in users if user.role is role]
        for role in Role
    }

    projects = await ProjectRepository(store).insert_many(
        Project(id=None, manager_ids=[by_role[role][index].id for role, index in managers])
        for managers in SEED_PROJECT_MANAGERS
    )

    clients, coaches = by_role[Role.CLIENT], by_role[Role.COACH]
    coachings = await CoachingRepository(store).insert_many(
        Coaching(
            id=None,
            client_id=clients[client].id,
            coach_id=coaches[coach].id,
            project_id=projects[project].id,
        )
        for client, coach, project in SEED_COACHINGS
    )

    logger.info(
        "Database seeded",
        extra={
            "users": len(users),
            "projects": len(projects),
            "coachings": len(coachings),
        }
    )
    return SeedSummary(users=users, projects=projects, coachings=coachings)
