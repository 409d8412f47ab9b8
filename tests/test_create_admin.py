"""Tests for the create_admin CLI (seeding admins and super-admins)."""

import io
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

from admin_service.core.database import make_engine, make_session_factory
from admin_service.core.security import CredentialHasher
from admin_service.models import Admin, Base
from admin_service.scripts import create_admin


class TestCreateAdminCli(unittest.TestCase):
    def setUp(self) -> None:
        engine = make_engine("sqlite://")
        Base.metadata.create_all(engine)
        self.SessionLocal = make_session_factory(engine)
        patcher = patch.object(create_admin, "SessionLocal", self.SessionLocal)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = create_admin.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def _stored(self, email: str) -> Admin | None:
        db = self.SessionLocal()
        try:
            return db.query(Admin).filter(Admin.email == email).first()
        finally:
            db.close()

    def test_creates_super_admin(self) -> None:
        code, out, _ = self._run("Root@X.com", "pw-123", "Root", "Admin", "--role", "super-admin")
        self.assertEqual(code, 0)
        self.assertIn("super-admin", out)
        admin = self._stored("root@x.com")
        self.assertEqual(admin.role, "super-admin")
        self.assertIsNone(admin.refresh_token_hash)
        self.assertTrue(CredentialHasher().verify("pw-123", admin.password_hash))

    def test_default_role_is_admin(self) -> None:
        code, _, _ = self._run("a@x.com", "pw", "A", "B")
        self.assertEqual(code, 0)
        self.assertEqual(self._stored("a@x.com").role, "admin")

    def test_existing_email_fails(self) -> None:
        self._run("a@x.com", "pw", "A", "B")
        code, _, err = self._run("a@x.com", "pw2", "C", "D")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_unknown_role_is_rejected_by_parser(self) -> None:
        with self.assertRaises(SystemExit):
            with redirect_stderr(io.StringIO()):
                create_admin.main(["a@x.com", "pw", "A", "B", "--role", "root"])
