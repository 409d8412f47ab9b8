"""HTTP tests for the auth and admin routes via FastAPI TestClient and in-memory SQLite."""

import unittest

from fastapi.testclient import TestClient

from admin_service.api.deps import get_hasher
from admin_service.api.errors import status_for
from admin_service.core.database import get_db, make_engine, make_session_factory
from admin_service.core.errors import (
    AccessDeniedError,
    DuplicateAccountError,
    HashingError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from admin_service.core.security import CredentialHasher
from admin_service.main import app
from admin_service.models import Admin, Base

PREFIX = "/api"


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        engine = make_engine("sqlite://")
        Base.metadata.create_all(engine)
        self.SessionLocal = make_session_factory(engine)

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_hasher] = lambda: CredentialHasher(rounds=4)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def register(self, email: str = "a@x.com", password: str = "secret123") -> dict:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": email,
                "password": password,
            },
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def promote(self, email: str, role: str) -> None:
        db = self.SessionLocal()
        try:
            db.query(Admin).filter(Admin.email == email).update({Admin.role: role})
            db.commit()
        finally:
            db.close()

    def login(self, email: str = "a@x.com", password: str = "secret123"):
        return self.client.post(
            f"{PREFIX}/auth/login", json={"email": email, "password": password}
        )


class TestRegisterAndLogin(ApiTestCase):
    def test_register_returns_token_pair(self) -> None:
        body = self.register()
        self.assertEqual(set(body), {"accessToken", "refreshToken"})

    def test_register_duplicate_email_is_400(self) -> None:
        self.register()
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"firstName": "B", "lastName": "C", "email": "a@x.com", "password": "x"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"detail": "Admin already exists"})

    def test_register_requires_non_empty_fields(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"firstName": "", "lastName": "C", "email": "a@x.com", "password": "x"},
        )
        self.assertEqual(response.status_code, 422)

    def test_login_returns_identity_and_tokens(self) -> None:
        self.register()
        response = self.login()
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["email"], "a@x.com")
        self.assertEqual(body["firstName"], "Ada")
        self.assertEqual(body["lastName"], "Lovelace")
        self.assertIn("accessToken", body["tokens"])
        self.assertIn("refreshToken", body["tokens"])
        self.assertNotIn("passwordHash", body)

    def test_bad_credentials_are_indistinguishable(self) -> None:
        self.register()
        wrong_password = self.login(password="wrong")
        unknown_email = self.login(email="ghost@x.com")
        self.assertEqual(wrong_password.status_code, 400)
        self.assertEqual(unknown_email.status_code, 400)
        self.assertEqual(wrong_password.json(), unknown_email.json())


class TestAccessGuard(ApiTestCase):
    def test_missing_token_is_401(self) -> None:
        response = self.client.get(f"{PREFIX}/admin/1")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers["www-authenticate"], "Bearer")

    def test_garbage_token_is_401(self) -> None:
        response = self.client.get(f"{PREFIX}/admin/1", headers=_bearer("abc.def.ghi"))
        self.assertEqual(response.status_code, 401)

    def test_refresh_token_is_not_accepted_as_access_token(self) -> None:
        tokens = self.register()
        response = self.client.get(
            f"{PREFIX}/admin/1", headers=_bearer(tokens["refreshToken"])
        )
        self.assertEqual(response.status_code, 401)

    def test_valid_access_token_reads_admin(self) -> None:
        tokens = self.register()
        response = self.client.get(f"{PREFIX}/admin/1", headers=_bearer(tokens["accessToken"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "a@x.com")
        self.assertNotIn("refreshTokenHash", response.json())


class TestRoleGuardRoute(ApiTestCase):
    def test_admin_cannot_list_admins(self) -> None:
        tokens = self.register()
        response = self.client.get(
            f"{PREFIX}/admin/all-admins", headers=_bearer(tokens["accessToken"])
        )
        self.assertEqual(response.status_code, 403)

    def test_super_admin_can_list_admins(self) -> None:
        self.register()
        self.register(email="b@x.com")
        self.promote("a@x.com", "super-admin")
        access = self.login().json()["tokens"]["accessToken"]
        response = self.client.get(f"{PREFIX}/admin/all-admins", headers=_bearer(access))
        self.assertEqual(response.status_code, 200)
        self.assertEqual([a["email"] for a in response.json()], ["a@x.com", "b@x.com"])

    def test_unauthenticated_list_is_401(self) -> None:
        response = self.client.get(f"{PREFIX}/admin/all-admins")
        self.assertEqual(response.status_code, 401)


class TestAdminCrud(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.headers = _bearer(self.register()["accessToken"])

    def test_create_admin_gets_base_role(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/create-admin",
            headers=self.headers,
            json={"firstName": "B", "lastName": "C", "email": "b@x.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["role"], "admin")
        self.assertEqual(self.login(email="b@x.com", password="pw").status_code, 200)

    def test_create_admin_requires_access_token(self) -> None:
        response = self.client.post(
            f"{PREFIX}/admin/create-admin",
            json={"firstName": "B", "lastName": "C", "email": "b@x.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 401)

    def test_patch_updates_fields_and_password(self) -> None:
        response = self.client.patch(
            f"{PREFIX}/admin/1",
            headers=self.headers,
            json={"firstName": "Grace", "password": "new-password"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["firstName"], "Grace")
        self.assertEqual(response.json()["lastName"], "Lovelace")
        self.assertEqual(self.login(password="secret123").status_code, 400)
        self.assertEqual(self.login(password="new-password").status_code, 200)

    def test_patch_to_taken_email_is_400(self) -> None:
        self.register(email="b@x.com")
        response = self.client.patch(
            f"{PREFIX}/admin/1", headers=self.headers, json={"email": "b@x.com"}
        )
        self.assertEqual(response.status_code, 400)

    def test_missing_admin_is_404(self) -> None:
        self.assertEqual(
            self.client.get(f"{PREFIX}/admin/99", headers=self.headers).status_code, 404
        )
        self.assertEqual(
            self.client.patch(
                f"{PREFIX}/admin/99", headers=self.headers, json={"firstName": "X"}
            ).status_code,
            404,
        )
        self.assertEqual(
            self.client.delete(f"{PREFIX}/admin/99", headers=self.headers).status_code, 404
        )

    def test_delete_returns_removed_admin(self) -> None:
        self.register(email="b@x.com")
        response = self.client.delete(f"{PREFIX}/admin/2", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["email"], "b@x.com")
        self.assertEqual(
            self.client.get(f"{PREFIX}/admin/2", headers=self.headers).status_code, 404
        )


class TestRefreshAndLogout(ApiTestCase):
    def refresh(self, token: str):
        return self.client.get(f"{PREFIX}/auth/refresh", headers=_bearer(token))

    def test_refresh_rotates_and_reuse_is_403(self) -> None:
        t1 = self.register()
        response = self.refresh(t1["refreshToken"])
        self.assertEqual(response.status_code, 200)
        t2 = response.json()
        self.assertNotEqual(t2["accessToken"], t1["accessToken"])
        self.assertNotEqual(t2["refreshToken"], t1["refreshToken"])
        reuse = self.refresh(t1["refreshToken"])
        self.assertEqual(reuse.status_code, 403)
        self.assertEqual(reuse.json(), {"detail": "Access Denied"})

    def test_refresh_without_token_is_403(self) -> None:
        self.assertEqual(self.client.get(f"{PREFIX}/auth/refresh").status_code, 403)

    def test_access_token_cannot_refresh(self) -> None:
        t1 = self.register()
        self.assertEqual(self.refresh(t1["accessToken"]).status_code, 403)

    def test_logout_revokes_refresh_token(self) -> None:
        t1 = self.register()
        response = self.client.get(
            f"{PREFIX}/auth/logout", headers=_bearer(t1["accessToken"])
        )
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.refresh(t1["refreshToken"]).status_code, 403)
        # Access tokens are stateless and keep working until they expire.
        self.assertEqual(
            self.client.get(f"{PREFIX}/admin/1", headers=_bearer(t1["accessToken"])).status_code,
            200,
        )

    def test_logout_requires_access_token(self) -> None:
        self.assertEqual(self.client.get(f"{PREFIX}/auth/logout").status_code, 401)


class TestHealth(ApiTestCase):
    def test_health_reports_database(self) -> None:
        response = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "ok")
        self.assertEqual(response.json()["database"], "connected")


class FailingHasher(CredentialHasher):
    def hash(self, secret: str) -> str:
        raise HashingError()


class TestInternalErrors(ApiTestCase):
    def test_hashing_failure_is_generic_500(self) -> None:
        app.dependency_overrides[get_hasher] = lambda: FailingHasher(rounds=4)
        response = self.client.post(
            f"{PREFIX}/admin/register",
            json={"firstName": "A", "lastName": "B", "email": "a@x.com", "password": "pw"},
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"detail": "Internal server error"})


class TestErrorMapping(unittest.TestCase):
    def test_taxonomy_maps_to_status_codes(self) -> None:
        self.assertEqual(status_for(InvalidCredentialsError()), 400)
        self.assertEqual(status_for(DuplicateAccountError()), 400)
        self.assertEqual(status_for(InvalidTokenError()), 401)
        self.assertEqual(status_for(AccessDeniedError()), 403)
        self.assertEqual(status_for(NotFoundError()), 404)
        self.assertEqual(status_for(HashingError()), 500)


class TestErrorHandlerResponses(ApiTestCase):
    def test_service_error_raised_from_route_uses_global_handler(self) -> None:
        # Routes do not catch service errors; the app-wide handler shapes the body.
        headers = _bearer(self.register()["accessToken"])
        response = self.client.get(f"{PREFIX}/admin/99", headers=headers)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"detail": NotFoundError().message})

    def test_refresh_guard_denial_goes_through_handler(self) -> None:
        response = self.client.get(f"{PREFIX}/auth/refresh", headers=_bearer("garbage"))
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), {"detail": AccessDeniedError().message})
