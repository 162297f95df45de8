# server/core/config.py

import os
import logging
import secrets
from dotenv import load_dotenv


load_dotenv()

logger = logging.getLogger(__name__)


# -------------------------------
# Database
# -------------------------------

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/app.db")


# -------------------------------
# Tokens
# -------------------------------

SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not SECRET_KEY:
    SECRET_KEY = secrets.token_urlsafe(32)
    logger.warning("JWT_SECRET_KEY is not set; tokens will not survive a restart")

ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))


# -------------------------------
# External metadata API (TMDb)
# -------------------------------

TMDB_API_KEY = os.getenv("TMDB_API_KEY", "")
TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
TMDB_TIMEOUT = float(os.getenv("TMDB_TIMEOUT", 10))


# -------------------------------
# Server
# -------------------------------

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
PORT = int(os.getenv("PORT", 8000))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
