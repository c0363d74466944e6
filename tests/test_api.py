"""HTTP tests: routes, guards and error mapping, with get_db pointed at in-memory SQLite."""

import unittest
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from fastapi.testclient import TestClient

from pos_backend.api.deps import get_token_signer
from pos_backend.core.config import settings
from pos_backend.core.database import get_db
from pos_backend.core.security import TokenSigner
from pos_backend.main import app
from support import TEST_SECRET, FakeClock, make_session_factory

PREFIX = settings.API_V1_PREFIX


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        session_factory = make_session_factory()

        def override_get_db():
            db = session_factory()
            try:
                yield db
            finally:
                db.close()

        self.clock = FakeClock(datetime.now(UTC))
        signer = TokenSigner(TEST_SECRET, timedelta(minutes=15), clock=self.clock)
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_token_signer] = lambda: signer
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def register(self, username: str, role: str = "STAFF", password: str = "pw123456") -> dict:
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": username, "email": f"{username}@x.com", "password": password, "role": role},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()

    @staticmethod
    def bearer(body: dict) -> dict[str, str]:
        return {"Authorization": f"Bearer {body['access_token']}"}


class TestAuthRoutes(ApiTestCase):
    def test_register_then_me(self) -> None:
        body = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice", "email": "alice@x.com", "password": "pw123456"},
        ).json()
        self.assertEqual(body["role"], "STAFF")
        self.assertEqual(body["token_type"], "bearer")
        self.assertTrue(body["refresh_token"])

        me = self.client.get(f"{PREFIX}/auth/me", headers=self.bearer(body))
        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.json(), {"id": 1, "username": "alice", "email": "alice@x.com", "role": "STAFF"})

    def test_duplicates_are_conflicts(self) -> None:
        self.register("alice")
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice", "email": "new@x.com", "password": "pw123456"},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "Username is already taken")
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice2", "email": "alice@x.com", "password": "pw123456"},
        )
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "Email is already in use")

    def test_register_validation(self) -> None:
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice", "email": "not-an-email", "password": "pw123456"},
        )
        self.assertEqual(resp.status_code, 422)
        resp = self.client.post(
            f"{PREFIX}/auth/register",
            json={"username": "alice", "email": "alice@x.com", "password": "pw123456", "role": "OWNER"},
        )
        self.assertEqual(resp.status_code, 422)

    def test_login(self) -> None:
        self.register("alice")
        ok = self.client.post(f"{PREFIX}/auth/login", json={"username": "alice", "password": "pw123456"})
        self.assertEqual(ok.status_code, 200)
        self.assertEqual(ok.json()["username"], "alice")

        bad = self.client.post(f"{PREFIX}/auth/login", json={"username": "alice", "password": "wrong-pw"})
        self.assertEqual(bad.status_code, 401)
        self.assertEqual(bad.json()["detail"], "Invalid username or password")
        self.assertEqual(bad.headers["www-authenticate"], "Bearer")

    def test_me_requires_valid_token(self) -> None:
        body = self.register("alice")
        self.assertEqual(self.client.get(f"{PREFIX}/auth/me").status_code, 401)

        garbage = self.client.get(f"{PREFIX}/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(garbage.status_code, 401)
        self.assertEqual(garbage.json()["detail"], "Malformed token")

        self.clock.advance(minutes=16)
        expired = self.client.get(f"{PREFIX}/auth/me", headers=self.bearer(body))
        self.assertEqual(expired.status_code, 401)
        self.assertEqual(expired.json()["detail"], "Token has expired")

    def test_refresh_and_logout(self) -> None:
        body = self.register("alice")
        self.clock.advance(seconds=5)
        refreshed = self.client.post(f"{PREFIX}/auth/refresh", json={"refresh_token": body["refresh_token"]})
        self.assertEqual(refreshed.status_code, 200)
        self.assertEqual(refreshed.json()["refresh_token"], body["refresh_token"])
        self.assertNotEqual(refreshed.json()["access_token"], body["access_token"])

        out = self.client.post(f"{PREFIX}/auth/logout", headers=self.bearer(refreshed.json()))
        self.assertEqual(out.status_code, 200)
        self.assertEqual(out.json(), {"message": "Logged out successfully"})

        again = self.client.post(f"{PREFIX}/auth/refresh", json={"refresh_token": body["refresh_token"]})
        self.assertEqual(again.status_code, 401)
        self.assertEqual(again.json()["detail"], "Refresh token not found")

        # Stateless access tokens keep working until they expire
        self.assertEqual(self.client.get(f"{PREFIX}/auth/me", headers=self.bearer(body)).status_code, 200)

    def test_logout_requires_token(self) -> None:
        self.assertEqual(self.client.post(f"{PREFIX}/auth/logout").status_code, 401)


class TestProductRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.admin = self.bearer(self.register("admin", "ADMIN"))
        self.manager = self.bearer(self.register("manager", "MANAGER"))
        self.staff = self.bearer(self.register("staff", "STAFF"))

    def _create(self, headers: dict, sku: str = "SKU-1"):
        return self.client.post(
            f"{PREFIX}/products",
            json={"sku": sku, "name": "Oat milk", "price": "3.25", "stock_quantity": 40},
            headers=headers,
        )

    def test_write_roles(self) -> None:
        self.assertEqual(self._create(self.staff).status_code, 403)
        created = self._create(self.manager)
        self.assertEqual(created.status_code, 201)
        self.assertEqual(Decimal(created.json()["price"]), Decimal("3.25"))
        self.assertEqual(self._create(self.admin, sku="SKU-2").status_code, 201)

    def test_reads_for_any_authenticated_user(self) -> None:
        product_id = self._create(self.admin).json()["id"]
        self.assertEqual(self.client.get(f"{PREFIX}/products").status_code, 401)
        listing = self.client.get(f"{PREFIX}/products", headers=self.staff)
        self.assertEqual([p["sku"] for p in listing.json()], ["SKU-1"])
        by_id = self.client.get(f"{PREFIX}/products/{product_id}", headers=self.staff)
        self.assertEqual(by_id.json()["name"], "Oat milk")
        by_sku = self.client.get(f"{PREFIX}/products/sku/SKU-1", headers=self.staff)
        self.assertEqual(by_sku.json()["id"], product_id)

    def test_update(self) -> None:
        product_id = self._create(self.admin).json()["id"]
        payload = {"sku": "SKU-1", "name": "Oat milk 1L", "price": "3.50", "stock_quantity": 12}
        denied = self.client.put(f"{PREFIX}/products/{product_id}", json=payload, headers=self.staff)
        self.assertEqual(denied.status_code, 403)
        resp = self.client.put(f"{PREFIX}/products/{product_id}", json=payload, headers=self.manager)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["stock_quantity"], 12)

    def test_delete_is_admin_only(self) -> None:
        product_id = self._create(self.admin).json()["id"]
        self.assertEqual(self.client.delete(f"{PREFIX}/products/{product_id}", headers=self.manager).status_code, 403)
        self.assertEqual(self.client.delete(f"{PREFIX}/products/{product_id}", headers=self.admin).status_code, 200)
        missing = self.client.get(f"{PREFIX}/products/{product_id}", headers=self.admin)
        self.assertEqual(missing.status_code, 404)

    def test_duplicate_sku_and_validation(self) -> None:
        self._create(self.admin)
        self.assertEqual(self._create(self.admin).status_code, 409)
        bad = self.client.post(
            f"{PREFIX}/products",
            json={"sku": "SKU-9", "name": "Free", "price": "0", "stock_quantity": 1},
            headers=self.admin,
        )
        self.assertEqual(bad.status_code, 422)


class TestPlumbing(ApiTestCase):
    def test_request_id_is_generated_or_echoed(self) -> None:
        generated = self.client.get("/")
        self.assertTrue(generated.headers.get("X-Request-ID"))
        echoed = self.client.get("/", headers={"X-Request-ID": "abc-123"})
        self.assertEqual(echoed.headers["X-Request-ID"], "abc-123")

    def test_health(self) -> None:
        resp = self.client.get(f"{PREFIX}/health/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "ok")
        self.assertEqual(resp.json()["database"], "connected")


if __name__ == "__main__":
    unittest.main()
