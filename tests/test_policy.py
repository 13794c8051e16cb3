"""Unit tests for the authorization policy (no database)."""

import unittest
from unittest.mock import MagicMock

from dashboard.core.exceptions import Forbidden
from dashboard.schemas.auth import Identity
from dashboard.schemas.users import UserPatch
from dashboard.services import policy

ADMIN = Identity(id=1, username="admin", role="admin")
ALICE = Identity(id=2, username="alice", role="user")


def _record(owner_user_id: int) -> MagicMock:
    record = MagicMock()
    record.owner_user_id = owner_user_id
    return record


class TestRequireAdmin(unittest.TestCase):
    def test_admin_passes(self) -> None:
        policy.require_admin(ADMIN, "create_record")

    def test_user_is_forbidden(self) -> None:
        with self.assertRaises(Forbidden):
            policy.require_admin(ALICE, "create_record")


class TestScopeRecords(unittest.TestCase):
    """scope_records leaves admin queries alone and filters everyone else by owner."""

    def test_admin_query_unchanged(self) -> None:
        query = MagicMock()
        self.assertIs(policy.scope_records(query, ADMIN), query)
        query.filter.assert_not_called()

    def test_user_query_filtered(self) -> None:
        query = MagicMock()
        scoped = policy.scope_records(query, ALICE)
        query.filter.assert_called_once()
        self.assertIs(scoped, query.filter.return_value)


class TestRecordVisibility(unittest.TestCase):
    def test_owner_can_view(self) -> None:
        policy.ensure_can_view_record(ALICE, _record(2))

    def test_other_user_cannot_view(self) -> None:
        with self.assertRaises(Forbidden):
            policy.ensure_can_view_record(ALICE, _record(3))

    def test_admin_can_view_any(self) -> None:
        policy.ensure_can_view_record(ADMIN, _record(3))


class TestUserAccess(unittest.TestCase):
    def test_self_allowed(self) -> None:
        policy.ensure_self_or_admin(ALICE, 2, "view_user")

    def test_other_forbidden(self) -> None:
        with self.assertRaises(Forbidden):
            policy.ensure_self_or_admin(ALICE, 1, "view_user")

    def test_admin_allowed_for_anyone(self) -> None:
        policy.ensure_self_or_admin(ADMIN, 99, "update_user")

    def test_admin_cannot_delete_self(self) -> None:
        with self.assertRaises(Forbidden) as ctx:
            policy.ensure_can_delete_user(ADMIN, 1)
        self.assertIn("own account", ctx.exception.message)

    def test_user_cannot_delete_anyone(self) -> None:
        with self.assertRaises(Forbidden):
            policy.ensure_can_delete_user(ALICE, 3)


class TestRestrictUserPatch(unittest.TestCase):
    def test_role_dropped_for_non_admin(self) -> None:
        patch = UserPatch(username="alice2", role="admin")
        restricted = policy.restrict_user_patch(ALICE, patch)
        self.assertIsNone(restricted.role)
        self.assertEqual(restricted.username, "alice2")
        self.assertEqual(patch.role, "admin")

    def test_role_kept_for_admin(self) -> None:
        patch = UserPatch(role="user")
        self.assertEqual(policy.restrict_user_patch(ADMIN, patch).role, "user")


class TestUserPatchPresentFields(unittest.TestCase):
    def test_empty_strings_are_absent(self) -> None:
        patch = UserPatch(username="", password="newpass1", role=None)
        self.assertEqual(patch.present_fields(), {"password": "newpass1"})


if __name__ == "__main__":
    unittest.main()
