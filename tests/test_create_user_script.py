"""Tests for the create_user CLI against a temporary SQLite file."""

import os
import tempfile
import unittest
from unittest.mock import patch

from dashboard.core.database import build_engine, build_session_factory
from dashboard.models import User
from dashboard.scripts import create_user
from helpers import make_settings


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        db_path = os.path.join(tmp.name, "cli.sqlite")
        self.settings = make_settings(DATABASE_URL=f"sqlite:///{db_path}")
        patcher = patch.object(create_user, "get_settings", return_value=self.settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _usernames(self) -> list[tuple[str, str]]:
        engine = build_engine(self.settings)
        db = build_session_factory(engine)()
        try:
            return [(u.username, u.role) for u in db.query(User).order_by(User.id)]
        finally:
            db.close()
            engine.dispose()

    def test_creates_admin(self) -> None:
        self.assertEqual(create_user.main(["alice", "password1", "admin"]), 0)
        self.assertEqual(self._usernames(), [("alice", "admin")])

    def test_default_role_is_user(self) -> None:
        self.assertEqual(create_user.main(["bob", "password1"]), 0)
        self.assertEqual(self._usernames(), [("bob", "user")])

    def test_duplicate_fails(self) -> None:
        create_user.main(["alice", "password1"])
        self.assertEqual(create_user.main(["alice", "password2"]), 1)

    def test_empty_password_fails(self) -> None:
        self.assertEqual(create_user.main(["carol", ""]), 1)

    def test_short_password_is_accepted(self) -> None:
        self.assertEqual(create_user.main(["dave", "abc"]), 0)


if __name__ == "__main__":
    unittest.main()
