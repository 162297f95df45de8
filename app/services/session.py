# app/services/session.py

from app.services import api as backend_api


TOKEN_KEY = "token"


def _failed(result):
    return not isinstance(result, dict) or bool(result.get("error"))


class SessionContext:
    """
    Holds the signed-in session for one UI tree.

    The token lives in `storage` (any mutable mapping; the Streamlit app passes
    its cookie manager so it survives reloads) and the user profile lives in
    memory. Pages receive this object explicitly instead of reaching for a
    global.
    """

    def __init__(self, storage, api=backend_api):
        self.storage = storage
        self.api = api
        self.user = None
        self.loading = False
        self.initialized = False

    @property
    def token(self):
        return self.storage.get(TOKEN_KEY) or None

    @property
    def is_authenticated(self):
        return bool(self.token and self.user)

    def initialize(self):
        """
        Validates a stored token once by fetching the current user.
        A stale or rejected token ends the session.
        """
        if self.initialized or self.loading:
            return self.is_authenticated

        self.loading = True
        try:
            token = self.token
            if token:
                result = self.api.get_current_user(token)
                if _failed(result):
                    self.logout()
                else:
                    self.user = result["user"]
        finally:
            self.loading = False
            self.initialized = True
        return self.is_authenticated

    def login(self, email, password):
        result = self.api.login_user(email, password)
        if not _failed(result):
            self._start(result)
        return result

    def register(self, username, email, password):
        result = self.api.register_user(username, email, password)
        if not _failed(result):
            self._start(result)
        return result

    def refresh_user(self):
        if not self.token:
            return None
        result = self.api.get_current_user(self.token)
        if _failed(result):
            if isinstance(result, dict) and result.get("status") == 401:
                self.logout()
            return result
        self.user = result["user"]
        return result

    def logout(self):
        self.storage.pop(TOKEN_KEY, None)
        self._persist()
        self.user = None
        self.loading = False
        self.initialized = False

    def _start(self, result):
        self.storage[TOKEN_KEY] = result["token"]
        self._persist()
        self.user = result["user"]
        self.initialized = True

    def _persist(self):
        save = getattr(self.storage, "save", None)
        if callable(save):
            save()
