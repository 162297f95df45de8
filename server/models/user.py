# server/models/user.py

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime, JSON
from server.core.security import get_password_hash, verify_password, create_access_token
from . import Base


def _utcnow():
    return datetime.now(timezone.utc)


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    A user document: credentials plus the movie references the user collects.

    Movies are never stored locally; favorites, watchlist and ratings only
    hold TMDb ids. Collections are JSON columns and are always reassigned
    (never mutated in place) so the ORM sees the change.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    favorites = Column(JSON, nullable=False, default=list)
    watchlist = Column(JSON, nullable=False, default=list)
    ratings = Column(JSON, nullable=False, default=list)
    following = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

    def __init__(self, password: str | None = None, **kwargs):
        kwargs.setdefault("favorites", [])
        kwargs.setdefault("watchlist", [])
        kwargs.setdefault("ratings", [])
        kwargs.setdefault("following", [])
        if "email" in kwargs:
            kwargs["email"] = kwargs["email"].lower()
        super().__init__(**kwargs)
        if password is not None:
            self.set_password(password)

    # -------------------------------
    # Credentials
    # -------------------------------

    def set_password(self, password: str):
        self.hashed_password = get_password_hash(password)

    def check_password(self, password: str) -> bool:
        return verify_password(password, self.hashed_password)

    def issue_token(self, expires_delta=None) -> str:
        return create_access_token(
            {"sub": str(self.id), "username": self.username},
            expires_delta=expires_delta,
        )

    # -------------------------------
    # Movie references
    # -------------------------------

    def add_favorite(self, movie_id: int):
        if movie_id not in self.favorites:
            self.favorites = [*self.favorites, movie_id]

    def remove_favorite(self, movie_id: int):
        self.favorites = [m for m in self.favorites if m != movie_id]

    def add_to_watchlist(self, movie_id: int):
        if movie_id not in self.watchlist:
            self.watchlist = [*self.watchlist, movie_id]

    def remove_from_watchlist(self, movie_id: int):
        self.watchlist = [m for m in self.watchlist if m != movie_id]

    def rate(self, movie_id: int, score: int):
        if not 1 <= score <= 5:
            raise ValueError("score must be between 1 and 5")
        others = [r for r in self.ratings if r["movie_id"] != movie_id]
        self.ratings = [*others, {"movie_id": movie_id, "score": score}]

    def unrate(self, movie_id: int):
        self.ratings = [r for r in self.ratings if r["movie_id"] != movie_id]

    def rating_for(self, movie_id: int) -> int | None:
        for r in self.ratings:
            if r["movie_id"] == movie_id:
                return r["score"]
        return None

    # -------------------------------
    # Follow graph
    # -------------------------------

    def follow(self, user_id: int):
        if user_id not in self.following:
            self.following = [*self.following, user_id]

    def unfollow(self, user_id: int):
        self.following = [u for u in self.following if u != user_id]

    # -------------------------------
    # Serialization
    # -------------------------------

    def public(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}

    def profile(self) -> dict:
        return {
            **self.public(),
            "favorites": list(self.favorites),
            "watchlist": list(self.watchlist),
            "ratings": list(self.ratings),
            "following": list(self.following),
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


# -------------------------------
# Queries
# -------------------------------

def followers_of(db, user_id: int) -> list:
    """
    Users whose following list contains user_id.
    JSON containment is not portable across backends, so this filters in Python.
    """
    return [u for u in db.query(User).order_by(User.id).all() if user_id in (u.following or [])]


def profile_of(db, user: User) -> dict:
    return {
        **user.profile(),
        "followers_count": len(followers_of(db, user.id)),
        "following_count": len(user.following),
    }
