"""HTTP tests for the auth, items, profile and access-check endpoints via TestClient."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import SessionLocal, engine
from app.core.security import create_access_token
from app.main import app
from app.models import Base, User
from app.services import items as item_store

API = settings.API_PREFIX


def _register_body(username: str = "alice", email: str = "alice@x.com", **kwargs: str) -> dict:
    body = {
        "username": username,
        "email": email,
        "password": "password123",
        "first_name": "Alice",
        "last_name": "Liddell",
    }
    body.update(kwargs)
    return body


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        Base.metadata.create_all(bind=engine)
        self.client = TestClient(app)

    def tearDown(self) -> None:
        self.client.close()
        Base.metadata.drop_all(bind=engine)

    def register(self, username: str = "alice", email: str = "alice@x.com") -> str:
        resp = self.client.post(f"{API}/auth/register", json=_register_body(username, email))
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["access_token"]

    @staticmethod
    def auth(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}


class TestRegister(ApiTestCase):
    def test_register_returns_token_and_account(self) -> None:
        resp = self.client.post(f"{API}/auth/register", json=_register_body())
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["username"], "alice")
        self.assertEqual(data["email"], "alice@x.com")
        self.assertEqual(data["token_type"], "bearer")
        self.assertTrue(data["access_token"])

    def test_duplicate_username_is_400(self) -> None:
        self.register()
        resp = self.client.post(
            f"{API}/auth/register", json=_register_body(email="other@x.com")
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Username is already taken")

    def test_duplicate_email_is_400(self) -> None:
        self.register()
        resp = self.client.post(
            f"{API}/auth/register", json=_register_body(username="alice2")
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Email is already in use")

    def test_invalid_body_is_422(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register",
            json=_register_body(email="not-an-email", password="short"),
        )
        self.assertEqual(resp.status_code, 422)
        fields = {err["loc"][-1] for err in resp.json()["detail"]}
        self.assertIn("email", fields)
        self.assertIn("password", fields)

    def test_malformed_email_is_422(self) -> None:
        for email in (
            "alice@x..com",
            "a..b@x.com",
            "alice@-x.com",
            ".alice@x.com",
            "alice@x.c_m",
            "al<i>ce@x.com",
            "alice@",
            "@x.com",
            "alice x@x.com",
            "a" * 95 + "@x.com",
        ):
            with self.subTest(email=email):
                resp = self.client.post(
                    f"{API}/auth/register", json=_register_body(email=email)
                )
                self.assertEqual(resp.status_code, 422)
                fields = {err["loc"][-1] for err in resp.json()["detail"]}
                self.assertIn("email", fields)

    def test_email_surrounding_whitespace_is_stripped(self) -> None:
        resp = self.client.post(
            f"{API}/auth/register", json=_register_body(email="  alice@x.com  ")
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["email"], "alice@x.com")


class TestLoginAndValidate(ApiTestCase):
    def test_login_after_register(self) -> None:
        self.register()
        resp = self.client.post(
            f"{API}/auth/login", json={"username": "alice", "password": "password123"}
        )
        self.assertEqual(resp.status_code, 200)
        token = resp.json()["access_token"]
        check = self.client.get(f"{API}/auth/validate", headers=self.auth(token))
        self.assertEqual(check.status_code, 200)
        self.assertEqual(check.json()["message"], "Token is valid for user: alice")

    def test_wrong_password_is_401(self) -> None:
        self.register()
        resp = self.client.post(
            f"{API}/auth/login", json={"username": "alice", "password": "wrong-pass"}
        )
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Invalid username or password")

    def test_unknown_user_is_401(self) -> None:
        resp = self.client.post(
            f"{API}/auth/login", json={"username": "ghost", "password": "password123"}
        )
        self.assertEqual(resp.status_code, 401)

    def test_validate_without_token_is_401(self) -> None:
        resp = self.client.get(f"{API}/auth/validate")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.headers.get("www-authenticate"), "Bearer")

    def test_validate_with_garbage_token_is_401(self) -> None:
        resp = self.client.get(f"{API}/auth/validate", headers=self.auth("garbage"))
        self.assertEqual(resp.status_code, 401)

    def test_token_for_unknown_user_is_401(self) -> None:
        token = create_access_token("ghost")
        resp = self.client.get(f"{API}/items", headers=self.auth(token))
        self.assertEqual(resp.status_code, 401)

    def test_disabled_user_token_is_401(self) -> None:
        token = self.register()
        db = SessionLocal()
        try:
            db.query(User).filter(User.username == "alice").update({User.enabled: False})
            db.commit()
        finally:
            db.close()
        resp = self.client.get(f"{API}/auth/validate", headers=self.auth(token))
        self.assertEqual(resp.status_code, 401)


class TestItems(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.auth(self.register())
        self.bob = self.auth(self.register("bob", "bob@x.com"))

    def _create(self, headers: dict[str, str], name: str = "book") -> dict:
        resp = self.client.post(
            f"{API}/items", json={"name": name, "description": "d"}, headers=headers
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()

    def test_create_and_list(self) -> None:
        created = self._create(self.alice)
        self.assertEqual(created["name"], "book")
        resp = self.client.get(f"{API}/items", headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([i["id"] for i in resp.json()], [created["id"]])

    def test_blank_name_is_422(self) -> None:
        resp = self.client.post(f"{API}/items", json={"name": "   "}, headers=self.alice)
        self.assertEqual(resp.status_code, 422)

    def test_requires_auth(self) -> None:
        resp = self.client.get(f"{API}/items")
        self.assertEqual(resp.status_code, 401)

    def test_get_update_delete_own_item(self) -> None:
        item_id = self._create(self.alice)["id"]
        self.assertEqual(
            self.client.get(f"{API}/items/{item_id}", headers=self.alice).status_code, 200
        )
        resp = self.client.put(
            f"{API}/items/{item_id}",
            json={"name": "novel", "description": None},
            headers=self.alice,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "novel")
        self.assertIsNone(resp.json()["description"])
        resp = self.client.delete(f"{API}/items/{item_id}", headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Item deleted successfully")
        self.assertEqual(
            self.client.get(f"{API}/items/{item_id}", headers=self.alice).status_code, 404
        )

    def test_other_users_item_looks_missing(self) -> None:
        item_id = self._create(self.alice)["id"]
        for path_id in (item_id, 9999):
            url = f"{API}/items/{path_id}"
            get = self.client.get(url, headers=self.bob)
            put = self.client.put(url, json={"name": "x"}, headers=self.bob)
            delete = self.client.delete(url, headers=self.bob)
            self.assertEqual(get.status_code, 404)
            self.assertEqual(put.status_code, 404)
            self.assertEqual(delete.status_code, 404)
            self.assertEqual(get.json(), {"detail": "Item not found"})
        self.assertEqual(self.client.get(f"{API}/items", headers=self.bob).json(), [])
        self.assertEqual(
            self.client.get(f"{API}/items/{item_id}", headers=self.alice).json()["name"], "book"
        )


class TestProfile(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.auth(self.register())

    def test_get_missing_profile_is_404(self) -> None:
        resp = self.client.get(f"{API}/profile", headers=self.alice)
        self.assertEqual(resp.status_code, 404)

    def test_create_then_update(self) -> None:
        first = self.client.post(
            f"{API}/profile", json={"bio": "hi"}, headers=self.alice
        )
        self.assertEqual(first.status_code, 200)
        second = self.client.post(
            f"{API}/profile",
            json={"bio": "bye", "date_of_birth": "1990-05-04", "country": "NZ"},
            headers=self.alice,
        )
        self.assertEqual(second.status_code, 200)
        data = second.json()
        self.assertEqual(data["id"], first.json()["id"])
        self.assertEqual(data["bio"], "bye")
        self.assertEqual(data["date_of_birth"], "1990-05-04")
        self.assertEqual(data["items"], [])

    def test_field_too_long_is_422(self) -> None:
        resp = self.client.post(f"{API}/profile", json={"phone": "1" * 21}, headers=self.alice)
        self.assertEqual(resp.status_code, 422)

    def test_delete_keeps_items(self) -> None:
        self.client.post(f"{API}/items", json={"name": "book"}, headers=self.alice)
        self.client.post(f"{API}/profile", json={"bio": "hi"}, headers=self.alice)
        resp = self.client.delete(f"{API}/profile", headers=self.alice)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Profile deleted successfully")
        self.assertEqual(self.client.get(f"{API}/profile", headers=self.alice).status_code, 404)
        items = self.client.get(f"{API}/items", headers=self.alice).json()
        self.assertEqual([i["name"] for i in items], ["book"])

    def test_other_user_cannot_see_profile(self) -> None:
        self.client.post(f"{API}/profile", json={"bio": "hi"}, headers=self.alice)
        bob = self.auth(self.register("bob", "bob@x.com"))
        self.assertEqual(self.client.get(f"{API}/profile", headers=bob).status_code, 404)


class TestEndToEnd(ApiTestCase):
    def test_register_login_item_profile(self) -> None:
        self.client.post(
            f"{API}/auth/register",
            json=_register_body("alice", "alice@x.com"),
        )
        login = self.client.post(
            f"{API}/auth/login", json={"username": "alice", "password": "password123"}
        )
        headers = self.auth(login.json()["access_token"])

        created = self.client.post(f"{API}/items", json={"name": "book"}, headers=headers)
        self.assertEqual(created.status_code, 201)
        items = self.client.get(f"{API}/items", headers=headers).json()
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["name"], "book")

        self.assertEqual(
            self.client.post(f"{API}/profile", json={"bio": "hi"}, headers=headers).status_code,
            200,
        )
        profile = self.client.get(f"{API}/profile", headers=headers).json()
        self.assertEqual(profile["bio"], "hi")
        self.assertEqual(profile["user"]["username"], "alice")
        self.assertNotIn("password_hash", profile["user"])
        self.assertEqual([i["id"] for i in profile["items"]], [created.json()["id"]])
        self.assertEqual(profile["items"][0]["name"], "book")


class TestAccessEndpoints(ApiTestCase):
    def test_public(self) -> None:
        resp = self.client.get(f"{API}/test/public")
        self.assertEqual(resp.status_code, 200)

    def test_protected(self) -> None:
        self.assertEqual(self.client.get(f"{API}/test/protected").status_code, 401)
        token = self.register()
        resp = self.client.get(f"{API}/test/protected", headers=self.auth(token))
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["username"], "alice")
        self.assertEqual(data["roles"], ["ROLE_USER"])

    def test_health(self) -> None:
        resp = self.client.get(f"{API}/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "connected")

    def test_health_reports_disconnected_database(self) -> None:
        with patch.object(Session, "execute", side_effect=SQLAlchemyError("db down")):
            resp = self.client.get(f"{API}/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["database"], "disconnected")


class TestStoreFailures(ApiTestCase):
    def test_store_error_is_generic_500(self) -> None:
        headers = self.auth(self.register())
        failure = OperationalError("SELECT * FROM items", {}, Exception("connection lost"))
        with patch.object(item_store, "list_items", side_effect=failure):
            resp = self.client.get(f"{API}/items", headers=headers)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"detail": "Internal server error"})
        self.assertNotIn("connection lost", resp.text)


if __name__ == "__main__":
    unittest.main()
