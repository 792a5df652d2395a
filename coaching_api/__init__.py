"""
Coaching API - role-scoped access to projects and coachings.

This package contains the complete application:
- core: Framework-agnostic access rules and domain models
- infrastructure: MongoDB store and repositories
- api: FastAPI routes and dependencies
- config: Application configuration
"""

__version__ = "0.1.0"
