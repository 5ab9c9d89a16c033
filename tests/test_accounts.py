"""Tests for the account store: find_entitlement conversion and failures, and the users table value constraints."""

import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker

from app.models import Account, Base
from app.schemas.auth import Role, SubscriptionStatus
from app.services.accounts import find_entitlement
from app.services.session import EnrichmentError


def _db_returning(row: object) -> MagicMock:
    """Session mock whose query(...).filter(...).first() yields row."""
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = row
    return db


class TestFindEntitlement(unittest.TestCase):
    def test_row_is_converted(self) -> None:
        db = _db_returning(SimpleNamespace(role="ADMIN", subscription_status="PAST_DUE"))
        entitlement = find_entitlement(db, "acc-1")
        self.assertEqual(entitlement.role, Role.ADMIN)
        self.assertEqual(entitlement.subscription_status, SubscriptionStatus.PAST_DUE)

    def test_missing_row_is_none(self) -> None:
        self.assertIsNone(find_entitlement(_db_returning(None), "ghost"))

    def test_unknown_stored_role_is_a_store_error(self) -> None:
        db = _db_returning(SimpleNamespace(role="SUPERUSER", subscription_status="ACTIVE"))
        with self.assertRaises(EnrichmentError) as ctx:
            find_entitlement(db, "acc-1")
        self.assertIn("unknown role or subscription status", ctx.exception.message)

    def test_unknown_stored_status_is_a_store_error(self) -> None:
        db = _db_returning(SimpleNamespace(role="USER", subscription_status="TRIALING"))
        with self.assertRaises(EnrichmentError):
            find_entitlement(db, "acc-1")

    def test_query_failure_is_a_store_error(self) -> None:
        db = MagicMock()
        db.query.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))
        with self.assertRaises(EnrichmentError) as ctx:
            find_entitlement(db, "acc-1")
        self.assertEqual(ctx.exception.message, "Account store unavailable while loading session.")


class TestStoredValuesAreConstrained(unittest.TestCase):
    """The users table itself refuses roles and statuses outside the known sets."""

    def setUp(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.db = sessionmaker(bind=self.engine)()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def test_unknown_role_is_rejected(self) -> None:
        self.db.add(Account(email="a@x.com", role="SUPERUSER"))
        with self.assertRaises(IntegrityError):
            self.db.commit()

    def test_unknown_status_is_rejected(self) -> None:
        self.db.add(Account(email="a@x.com", subscription_status="TRIALING"))
        with self.assertRaises(IntegrityError):
            self.db.commit()

    def test_known_values_are_accepted(self) -> None:
        self.db.add(Account(email="a@x.com", role="ADMIN", subscription_status="CANCELED"))
        self.db.commit()
        self.assertEqual(find_entitlement(self.db, self.db.query(Account).one().id).role, Role.ADMIN)


if __name__ == "__main__":
    unittest.main()
