"""
Unit tests for the domain models.

These tests verify the models without touching external services
(no database, no HTTP).

Testing philosophy:
- Test behavior, not implementation
- Each test should have a clear "given/when/then" structure
- Use descriptive names that explain what we're testing
"""

import pytest

from coaching_api.core.access.models import (
    Coaching,
    Project,
    Role,
    UnrecognizedRole,
    User,
    parse_role,
)


# ---------------------------------------------------------------------------
# Role Tests
# ---------------------------------------------------------------------------

class TestParseRole:
    """Tests for mapping stored role strings onto the role type."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("ops", Role.OPS), ("pm", Role.PM), ("client", Role.CLIENT), ("coach", Role.COACH)],
    )
    def test_known_roles_parse_to_enum(self, raw, expected):
        assert parse_role(raw) is expected

    def test_unknown_role_keeps_raw_value(self):
        """Unknown strings are preserved, not discarded."""
        role = parse_role("unknown")
        assert role == UnrecognizedRole("unknown")
        assert role.value == "unknown"

    def test_role_matching_is_case_sensitive(self):
        """Stored roles are lowercase; anything else grants nothing."""
        assert isinstance(parse_role("OPS"), UnrecognizedRole)

    def test_missing_role_is_unrecognized(self):
        assert parse_role(None) == UnrecognizedRole("")

    def test_only_enum_roles_are_recognized(self):
        assert all(role.is_recognized for role in Role)
        assert not UnrecognizedRole("admin").is_recognized


# ---------------------------------------------------------------------------
# Entity Tests
# ---------------------------------------------------------------------------

class TestUser:

    def test_full_name_joins_present_parts(self):
        assert User(id=1, role=Role.OPS, first_name="Gandalf", last_name="the Grey").full_name == "Gandalf the Grey"

    def test_full_name_without_last_name(self):
        assert User(id=1, role=Role.PM, first_name="Tony").full_name == "Tony"


class TestProject:

    def test_new_project_has_no_managers(self):
        """A project may have zero managers."""
        assert Project(id=1).manager_ids == []

    def test_manager_lists_are_not_shared(self):
        first, second = Project(id=1), Project(id=2)
        first.manager_ids.append("u1")
        assert second.manager_ids == []


class TestCoaching:

    def test_timestamps_default_to_creation_time(self):
        coaching = Coaching(id=1, client_id=2, coach_id=3, project_id=4)
        assert coaching.created_at.tzinfo is not None
        assert coaching.updated_at >= coaching.created_at
