# app/services/config.py

import os
from dotenv import load_dotenv


load_dotenv()

# Base URL of the FastAPI backend
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000").rstrip("/")

TMDB_API_KEY = os.getenv("TMDB_API_KEY", "")
TMDB_BASE_URL = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3").rstrip("/")
TMDB_IMAGE_BASE_URL = os.getenv("TMDB_IMAGE_BASE_URL", "https://image.tmdb.org/t/p/")

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "")

REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", 10))
