"""
Infrastructure layer - external service integrations.

- mongo: MongoDB store handle and repositories

These wrappers translate between stored documents and our domain models.
"""
