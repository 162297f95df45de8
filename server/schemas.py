# server/schemas.py

from datetime import datetime
from typing import Annotated
from pydantic import AfterValidator, BaseModel, EmailStr, Field


# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def check_password_bytes(password):
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


Password = Annotated[str, Field(min_length=1), AfterValidator(check_password_bytes)]


# -------------------------------
# Auth
# -------------------------------

class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: Password


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)


class PublicUser(BaseModel):
    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    token: str
    user: PublicUser


# -------------------------------
# Users
# -------------------------------

class Rating(BaseModel):
    movie_id: int = Field(gt=0)
    score: int = Field(ge=1, le=5)


class Profile(PublicUser):
    favorites: list[int]
    watchlist: list[int]
    ratings: list[Rating]
    following: list[int]
    followers_count: int = 0
    following_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MeResponse(BaseModel):
    user: Profile


class UserUpdateRequest(BaseModel):
    username: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    password: Password | None = None


# -------------------------------
# Movie references
# -------------------------------

class MovieRef(BaseModel):
    movie_id: int = Field(gt=0)


class ScoreRequest(BaseModel):
    score: int = Field(ge=1, le=5)


class MovieIdList(BaseModel):
    movies: list[int]


class RatingList(BaseModel):
    ratings: list[Rating]
