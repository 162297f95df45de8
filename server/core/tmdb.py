# server/core/tmdb.py

"""
Thin read-only client for the TMDb v3 API.

Responses are returned as decoded JSON without reshaping; the backend only
proxies them. No caching, no retries.
"""

import logging
from typing import Any, Dict
import requests
from server.core.config import TMDB_API_KEY, TMDB_BASE_URL, TMDB_TIMEOUT


logger = logging.getLogger(__name__)


class TMDbError(Exception):
    """Base error for any failed TMDb call."""


class TMDbNotFound(TMDbError):
    pass


class TMDbAuthError(TMDbError):
    pass


class TMDbConnectionError(TMDbError):
    pass


class TMDbClient:

    def __init__(self, api_key: str = TMDB_API_KEY, base_url: str = TMDB_BASE_URL,
                 timeout: float = TMDB_TIMEOUT, session: requests.Session | None = None):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, endpoint: str, params: Dict | None = None) -> Dict[str, Any]:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        params = {k: v for k, v in (params or {}).items() if v is not None}
        params["api_key"] = self.api_key

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.warning("TMDb timeout on %s", endpoint)
            raise TMDbConnectionError("Request timeout")
        except requests.exceptions.ConnectionError:
            logger.warning("TMDb connection error on %s", endpoint)
            raise TMDbConnectionError("Connection error")
        except requests.exceptions.RequestException as e:
            logger.warning("TMDb request on %s failed: %s", endpoint, e)
            raise TMDbError(f"Request failed: {e}")

        if response.status_code == 404:
            raise TMDbNotFound("Resource not found")
        if response.status_code == 401:
            logger.warning("TMDb rejected the API key")
            raise TMDbAuthError("Invalid API credentials")
        if response.status_code != 200:
            logger.warning("TMDb returned %s on %s", response.status_code, endpoint)
            raise TMDbError(f"TMDb API error: {response.status_code}")

        try:
            return response.json()
        except ValueError:
            logger.warning("TMDb returned a non-JSON body on %s", endpoint)
            raise TMDbError("Invalid JSON from TMDb")

    # -------------------------------
    # Endpoints
    # -------------------------------

    def search_movies(self, query: str, page: int = 1):
        return self._get("search/movie", {"query": query, "page": page})

    def movie_details(self, movie_id: int):
        return self._get(f"movie/{movie_id}")

    def recommendations(self, movie_id: int, page: int = 1):
        return self._get(f"movie/{movie_id}/recommendations", {"page": page})

    def videos(self, movie_id: int):
        return self._get(f"movie/{movie_id}/videos")

    def trending(self, window: str = "week"):
        return self._get(f"trending/movie/{window}")

    def popular(self, page: int = 1):
        return self._get("movie/popular", {"page": page})

    def top_rated(self, page: int = 1):
        return self._get("movie/top_rated", {"page": page})

    def genres(self):
        return self._get("genre/movie/list")


def get_tmdb() -> TMDbClient:
    return TMDbClient()
