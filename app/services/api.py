# app/services/api.py

import requests
from app.services.config import API_BASE_URL, REQUEST_TIMEOUT


# Every call returns the decoded JSON on success and {"error": message}
# otherwise, so pages can check `result.get("error")` uniformly.


def _auth(token):
    return {"Authorization": f"Bearer {token}"} if token else {}


def _request(method, path, token=None, **kwargs):
    try:
        res = requests.request(
            method,
            f"{API_BASE_URL}{path}",
            headers=_auth(token),
            timeout=REQUEST_TIMEOUT,
            **kwargs,
        )
    except requests.RequestException as e:
        return {"error": f"Server unreachable: {e}"}

    try:
        data = res.json()
    except ValueError:
        data = {}

    if 200 <= res.status_code < 300:
        return data
    message = data.get("message") if isinstance(data, dict) else None
    return {"error": message or f"Error: status {res.status_code}", "status": res.status_code}


# -------------------------------
# Authentication
# -------------------------------

def register_user(username, email, password):
    """
    Creates an account and returns {"token", "user"}.
    """
    return _request("POST", "/api/auth/register",
                    json={"username": username, "email": email, "password": password})


def login_user(email, password):
    """
    Logs in a user and returns {"token", "user"}.
    """
    return _request("POST", "/api/auth/login", json={"email": email, "password": password})


def get_current_user(token):
    """
    Retrieves the signed-in user's profile; fails once the token has expired.
    """
    return _request("GET", "/api/auth/me", token=token)


# -------------------------
# Movie metadata (proxied by the backend)
# -------------------------

def search_movies(query, page=1):
    return _request("GET", "/api/movies/search", params={"query": query, "page": page})


def trending_movies(window="week"):
    return _request("GET", "/api/movies/trending", params={"window": window})


def popular_movies(page=1):
    return _request("GET", "/api/movies/popular", params={"page": page})


def get_movie(movie_id):
    return _request("GET", f"/api/movies/{movie_id}")


# -------------------------
# Favorites, watchlist & ratings
# -------------------------

def add_favorite(token, movie_id):
    return _request("POST", f"/api/movies/{movie_id}/favorite", token=token)


def remove_favorite(token, movie_id):
    return _request("DELETE", f"/api/movies/{movie_id}/favorite", token=token)


def add_to_watchlist(token, movie_id):
    return _request("POST", f"/api/movies/{movie_id}/watchlist", token=token)


def remove_from_watchlist(token, movie_id):
    return _request("DELETE", f"/api/movies/{movie_id}/watchlist", token=token)


def rate_movie(token, movie_id, score):
    return _request("POST", f"/api/movies/{movie_id}/rating", token=token, json={"score": score})


def remove_rating(token, movie_id):
    return _request("DELETE", f"/api/movies/{movie_id}/rating", token=token)


# -------------------------
# Users & follow graph
# -------------------------

def get_user(token, user_id):
    return _request("GET", f"/api/users/{user_id}", token=token)


def get_user_collection(token, user_id, collection):
    """
    collection is one of "favorites", "watchlist" or "ratings".
    """
    return _request("GET", f"/api/users/{user_id}/{collection}", token=token)


def follow_user(token, user_id):
    return _request("POST", f"/api/users/{user_id}/follow", token=token)


def unfollow_user(token, user_id):
    return _request("DELETE", f"/api/users/{user_id}/follow", token=token)


def get_followers(token, user_id):
    return _request("GET", f"/api/users/{user_id}/followers", token=token)


def get_following(token, user_id):
    return _request("GET", f"/api/users/{user_id}/following", token=token)


def delete_account(token, user_id):
    return _request("DELETE", f"/api/users/{user_id}", token=token)
