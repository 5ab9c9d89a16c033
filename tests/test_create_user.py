"""Tests for the create_user CLI: validation, duplicates and the created account row."""

import contextlib
import io
import unittest
from unittest.mock import patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import security
from app.models import Account, Base
from app.scripts import create_user


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        rounds = patch.object(security, "BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)
        self.engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(self.engine)
        self.SessionLocal = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        factory = patch.object(create_user, "SessionLocal", self.SessionLocal)
        factory.start()
        self.addCleanup(factory.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def run_main(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin_with_status(self) -> None:
        code, out, _ = self.run_main(
            "admin@x.com", "adminpass", "ADMIN", "--name", "Root", "--status", "ACTIVE"
        )
        self.assertEqual(code, 0)
        self.assertIn("admin@x.com", out)
        db = self.SessionLocal()
        try:
            account = db.query(Account).filter(Account.email == "admin@x.com").one()
            self.assertEqual(account.role, "ADMIN")
            self.assertEqual(account.subscription_status, "ACTIVE")
            self.assertEqual(account.name, "Root")
            self.assertTrue(security.verify_password("adminpass", account.password_hash))
        finally:
            db.close()

    def test_defaults_to_inactive_user(self) -> None:
        code, _, _ = self.run_main("a@x.com", "secret1")
        self.assertEqual(code, 0)
        db = self.SessionLocal()
        try:
            account = db.query(Account).one()
            self.assertEqual(account.role, "USER")
            self.assertEqual(account.subscription_status, "INACTIVE")
        finally:
            db.close()

    def test_rejects_invalid_input(self) -> None:
        code, _, err = self.run_main("not-an-email", "secret1")
        self.assertEqual(code, 1)
        self.assertIn("Invalid email", err)
        code, _, err = self.run_main("a@x.com", "123")
        self.assertEqual(code, 1)
        self.assertIn("6-128", err)

    def test_rejects_duplicate(self) -> None:
        self.assertEqual(self.run_main("a@x.com", "secret1")[0], 0)
        code, _, err = self.run_main("a@x.com", "secret1")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)


if __name__ == "__main__":
    unittest.main()
