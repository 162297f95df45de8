# app/services/tmdb.py

import requests
from app.services.config import TMDB_API_KEY, TMDB_BASE_URL, TMDB_IMAGE_BASE_URL, REQUEST_TIMEOUT


# -------------------------------
# Direct TMDb calls made by the client
# -------------------------------

def _get(path, **params):
    params["api_key"] = TMDB_API_KEY
    try:
        res = requests.get(f"{TMDB_BASE_URL}{path}", params=params, timeout=REQUEST_TIMEOUT)
    except requests.RequestException as e:
        return {"error": str(e)}
    if res.status_code != 200:
        return {"error": f"TMDb error: {res.status_code}"}
    try:
        return res.json()
    except ValueError:
        return {"error": "Invalid JSON from TMDb"}


def recommendations(movie_id, page=1):
    return _get(f"/movie/{movie_id}/recommendations", page=page)


def videos(movie_id):
    return _get(f"/movie/{movie_id}/videos")


def pick_trailer(video_listing):
    """
    First YouTube trailer, else the first video of any kind, else None.
    """
    results = (video_listing or {}).get("results") or []
    for video in results:
        if video.get("site") == "YouTube" and video.get("type") == "Trailer":
            return video
    return results[0] if results else None


def youtube_url(video):
    if not video or video.get("site") != "YouTube":
        return None
    return f"https://www.youtube.com/watch?v={video['key']}"


def poster_url(path, size="w500"):
    if not path:
        return None
    return f"{TMDB_IMAGE_BASE_URL}{size}{path}"
