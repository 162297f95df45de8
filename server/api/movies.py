# server/api/movies.py

import logging
from typing import Annotated, Literal
from fastapi import APIRouter, HTTPException, Depends, Path, Query
from sqlalchemy.orm import Session
from server.api.auth import get_current_user
from server.core.tmdb import TMDbClient, TMDbError, TMDbNotFound, get_tmdb
from server.database import get_db, save
from server.models.user import User
from server.schemas import ScoreRequest, MovieIdList, RatingList


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])

MovieId = Annotated[int, Path(gt=0, description="TMDb movie id")]


def proxy(call, *args, **kwargs):
    """
    Runs a TMDb call and maps its failures onto HTTP errors.
    """
    try:
        return call(*args, **kwargs)
    except TMDbNotFound:
        raise HTTPException(status_code=404, detail="Movie not found")
    except TMDbError as e:
        logger.warning("TMDb call %s failed: %s", getattr(call, "__name__", call), e)
        raise HTTPException(status_code=500, detail="Movie service unavailable")


# -------------------------------
# Read-through metadata endpoints
# -------------------------------

@router.get("/search")
def search_movies(query: str = Query(..., min_length=1), page: int = Query(1, ge=1),
                  tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.search_movies, query, page=page)


@router.get("/trending")
def trending_movies(window: Literal["day", "week"] = "week", tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.trending, window)


@router.get("/popular")
def popular_movies(page: int = Query(1, ge=1), tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.popular, page=page)


@router.get("/top_rated")
def top_rated_movies(page: int = Query(1, ge=1), tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.top_rated, page=page)


@router.get("/genres")
def movie_genres(tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.genres)


@router.get("/{movie_id}")
def movie_details(movie_id: MovieId, tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.movie_details, movie_id)


@router.get("/{movie_id}/recommendations")
def movie_recommendations(movie_id: MovieId, page: int = Query(1, ge=1),
                          tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.recommendations, movie_id, page=page)


@router.get("/{movie_id}/videos")
def movie_videos(movie_id: MovieId, tmdb: TMDbClient = Depends(get_tmdb)):
    return proxy(tmdb.videos, movie_id)


# -------------------------------
# Per-movie actions on the caller's own document
# -------------------------------

@router.post("/{movie_id}/favorite", response_model=MovieIdList)
def add_favorite(movie_id: MovieId, user: User = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    user.add_favorite(movie_id)
    save(db, user)
    return {"movies": user.favorites}


@router.delete("/{movie_id}/favorite", response_model=MovieIdList)
def remove_favorite(movie_id: MovieId, user: User = Depends(get_current_user),
                    db: Session = Depends(get_db)):
    user.remove_favorite(movie_id)
    save(db, user)
    return {"movies": user.favorites}


@router.post("/{movie_id}/watchlist", response_model=MovieIdList)
def add_to_watchlist(movie_id: MovieId, user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    user.add_to_watchlist(movie_id)
    save(db, user)
    return {"movies": user.watchlist}


@router.delete("/{movie_id}/watchlist", response_model=MovieIdList)
def remove_from_watchlist(movie_id: MovieId, user: User = Depends(get_current_user),
                          db: Session = Depends(get_db)):
    user.remove_from_watchlist(movie_id)
    save(db, user)
    return {"movies": user.watchlist}


@router.post("/{movie_id}/rating", response_model=RatingList)
def rate_movie(req: ScoreRequest, movie_id: MovieId, user: User = Depends(get_current_user),
               db: Session = Depends(get_db)):
    user.rate(movie_id, req.score)
    save(db, user)
    return {"ratings": user.ratings}


@router.delete("/{movie_id}/rating", response_model=RatingList)
def remove_rating(movie_id: MovieId, user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    user.unrate(movie_id)
    save(db, user)
    return {"ratings": user.ratings}
