"""
Unit tests for the client-side session container.
"""

import unittest
from unittest.mock import MagicMock

from app.services.session import SessionContext, TOKEN_KEY


class CookieJar(dict):
    """Stands in for the cookie manager: a mapping with an explicit save()."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.saves = 0

    def save(self):
        self.saves += 1


USER = {"id": 1, "username": "a", "email": "a@x.com"}


class TestSessionContext(unittest.TestCase):

    def setUp(self):
        self.storage = CookieJar()
        self.api = MagicMock()
        self.session = SessionContext(self.storage, api=self.api)

    def test_login_stores_token_and_user(self):
        self.api.login_user.return_value = {"token": "t1", "user": USER}

        self.session.login("a@x.com", "p")

        self.assertEqual(self.storage[TOKEN_KEY], "t1")
        self.assertEqual(self.session.user, USER)
        self.assertTrue(self.session.is_authenticated)
        self.assertGreaterEqual(self.storage.saves, 1)

    def test_failed_login_leaves_state_alone(self):
        self.api.login_user.return_value = {"error": "Invalid credentials", "status": 401}

        result = self.session.login("a@x.com", "wrong")

        self.assertEqual(result["error"], "Invalid credentials")
        self.assertNotIn(TOKEN_KEY, self.storage)
        self.assertIsNone(self.session.user)
        self.assertFalse(self.session.is_authenticated)

    def test_register_starts_session(self):
        self.api.register_user.return_value = {"token": "t2", "user": USER}
        self.session.register("a", "a@x.com", "p")
        self.assertEqual(self.session.token, "t2")
        self.assertEqual(self.session.user, USER)

    def test_logout_clears_everything(self):
        """Test logout from a signed-in, a half-initialized and an empty state."""
        self.api.login_user.return_value = {"token": "t1", "user": USER}
        self.session.login("a@x.com", "p")
        self.session.logout()
        self.assertNotIn(TOKEN_KEY, self.storage)
        self.assertIsNone(self.session.user)

        self.storage[TOKEN_KEY] = "orphan"
        self.session.logout()
        self.assertNotIn(TOKEN_KEY, self.storage)
        self.assertIsNone(self.session.user)

        self.session.logout()
        self.assertIsNone(self.session.token)
        self.assertFalse(self.session.is_authenticated)

    def test_initialize_with_valid_token(self):
        self.storage[TOKEN_KEY] = "good"
        self.api.get_current_user.return_value = {"user": USER}

        self.assertTrue(self.session.initialize())
        self.assertEqual(self.session.user, USER)
        self.assertFalse(self.session.loading)
        self.api.get_current_user.assert_called_once_with("good")

    def test_initialize_with_stale_token_logs_out(self):
        self.storage[TOKEN_KEY] = "expired"
        self.api.get_current_user.return_value = {"error": "Not authorized", "status": 401}

        self.assertFalse(self.session.initialize())
        self.assertNotIn(TOKEN_KEY, self.storage)
        self.assertIsNone(self.session.user)
        self.assertTrue(self.session.initialized)

    def test_initialize_runs_once(self):
        self.storage[TOKEN_KEY] = "good"
        self.api.get_current_user.return_value = {"user": USER}

        self.session.initialize()
        self.session.initialize()

        self.assertEqual(self.api.get_current_user.call_count, 1)

    def test_initialize_without_token_skips_backend(self):
        self.assertFalse(self.session.initialize())
        self.api.get_current_user.assert_not_called()

    def test_refresh_user_on_revoked_session(self):
        self.api.login_user.return_value = {"token": "t1", "user": USER}
        self.session.login("a@x.com", "p")
        self.api.get_current_user.return_value = {"error": "Not authorized", "status": 401}

        self.session.refresh_user()

        self.assertFalse(self.session.is_authenticated)
        self.assertNotIn(TOKEN_KEY, self.storage)


if __name__ == '__main__':
    unittest.main()
