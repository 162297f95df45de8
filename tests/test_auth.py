"""
Tests for registration, login and token validation.
"""

import unittest
from datetime import timedelta

from api_base import ApiTestCase
from server.core.security import create_access_token, verify_password
from server.database import SessionLocal
from server.models.user import User


class TestRegister(ApiTestCase):

    def test_register_returns_token_and_public_user(self):
        """Test a first registration."""
        res = self.register()
        self.assertEqual(res.status_code, 201)
        body = res.json()
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["email"], "a@x.com")
        self.assertEqual(body["user"]["username"], "a")
        self.assertEqual(set(body["user"]), {"id", "username", "email"})

    def test_register_same_email_twice(self):
        """Test the second registration with one email is refused."""
        self.assertEqual(self.register().status_code, 201)
        res = self.register(username="b")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json(), {"message": "User already exists"})

    def test_register_email_is_case_insensitive(self):
        self.register(email="A@X.com")
        res = self.register(username="b", email="a@x.com")
        self.assertEqual(res.status_code, 400)

    def test_register_same_username(self):
        self.register()
        res = self.register(email="other@x.com")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.json()["message"], "User already exists")

    def test_register_rejects_bad_input(self):
        """Test schema validation maps to 400."""
        res = self.register(email="not-an-email")
        self.assertEqual(res.status_code, 400)
        self.assertIn("email", res.json()["message"])

        res = self.client.post("/api/auth/register", json={"username": "a"})
        self.assertEqual(res.status_code, 400)

    def test_password_limit_counts_bytes(self):
        """Test multibyte passwords are measured in bytes, not characters."""
        res = self.register(password="\u00e9" * 40)
        self.assertEqual(res.status_code, 400)
        self.assertIn("72 bytes", res.json()["message"])

        res = self.register(password="\u00e9" * 36)
        self.assertEqual(res.status_code, 201)

    def test_password_is_stored_hashed(self):
        self.register(password="secret")
        db = SessionLocal()
        try:
            user = db.query(User).filter_by(email="a@x.com").one()
            self.assertNotEqual(user.hashed_password, "secret")
            self.assertNotIn("secret", user.hashed_password)
            self.assertTrue(verify_password("secret", user.hashed_password))
        finally:
            db.close()


class TestLogin(ApiTestCase):

    def setUp(self):
        super().setUp()
        self.register(password="right")

    def test_login(self):
        res = self.client.post("/api/auth/login", json={"email": "a@x.com", "password": "right"})
        self.assertEqual(res.status_code, 200)
        body = res.json()
        self.assertTrue(body["token"])
        self.assertEqual(body["user"]["username"], "a")

    def test_wrong_password_matches_unknown_email(self):
        """Test both failure branches look the same to the caller."""
        wrong_password = self.client.post(
            "/api/auth/login", json={"email": "a@x.com", "password": "wrong"}
        )
        unknown_email = self.client.post(
            "/api/auth/login", json={"email": "nobody@x.com", "password": "right"}
        )
        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(unknown_email.status_code, 401)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertEqual(wrong_password.json(), {"message": "Invalid credentials"})


class TestTokenValidation(ApiTestCase):

    def test_fresh_token_is_accepted(self):
        user_id, headers = self.signup()
        res = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(res.status_code, 200)
        user = res.json()["user"]
        self.assertEqual(user["id"], user_id)
        self.assertEqual(user["favorites"], [])
        self.assertEqual(user["ratings"], [])

    def test_expired_token_is_rejected(self):
        user_id, _ = self.signup()
        token = create_access_token(
            {"sub": str(user_id), "username": "a"}, expires_delta=timedelta(seconds=-10)
        )
        res = self.client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.json(), {"message": "Not authorized"})

    def test_missing_token(self):
        res = self.client.get("/api/auth/me")
        self.assertEqual(res.status_code, 401)

    def test_malformed_and_tampered_tokens(self):
        _, headers = self.signup()
        res = self.client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(res.status_code, 401)

        tampered = headers["Authorization"][:-2] + ("AA" if not headers["Authorization"].endswith("AA") else "BB")
        res = self.client.get("/api/auth/me", headers={"Authorization": tampered})
        self.assertEqual(res.status_code, 401)

        res = self.client.get("/api/auth/me", headers={"Authorization": "Basic abc"})
        self.assertEqual(res.status_code, 401)

    def test_token_for_deleted_user(self):
        user_id, headers = self.signup()
        self.assertEqual(self.client.delete(f"/api/users/{user_id}", headers=headers).status_code, 200)
        res = self.client.get("/api/auth/me", headers=headers)
        self.assertEqual(res.status_code, 401)


if __name__ == '__main__':
    unittest.main()
