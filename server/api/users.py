# server/api/users.py

import logging
from typing import Annotated
from fastapi import APIRouter, HTTPException, Depends, Path
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from server.api.auth import get_current_user, USER_EXISTS
from server.database import get_db, save
from server.models.user import User, followers_of, profile_of
from server.schemas import (
    MovieRef,
    Rating,
    Profile,
    PublicUser,
    MovieIdList,
    RatingList,
    UserUpdateRequest,
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])

UserId = Annotated[int, Path(gt=0)]
MovieId = Annotated[int, Path(gt=0)]


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def require_self(user_id: int, current_user: User):
    """
    Writes are only allowed on the caller's own document.
    """
    if user_id != current_user.id:
        logger.info("User %s tried to modify user %s", current_user.id, user_id)
        raise HTTPException(status_code=403, detail="Forbidden")


# -------------------------------
# Profile
# -------------------------------

@router.get("/{user_id}", response_model=Profile)
def read_user(user_id: UserId, current_user: User = Depends(get_current_user),
              db: Session = Depends(get_db)):
    return profile_of(db, get_user_or_404(db, user_id))


@router.patch("/{user_id}", response_model=Profile)
def update_user(req: UserUpdateRequest, user_id: UserId,
                current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    require_self(user_id, current_user)

    email = req.email.lower() if req.email else None
    if req.username or email:
        clash = (
            db.query(User)
            .filter(User.id != current_user.id)
            .filter((User.email == email) | (User.username == req.username))
            .first()
        )
        if clash:
            raise HTTPException(status_code=400, detail=USER_EXISTS)

    if req.username:
        current_user.username = req.username
    if email:
        current_user.email = email
    if req.password:
        current_user.set_password(req.password)

    try:
        save(db, current_user)
    except IntegrityError:
        raise HTTPException(status_code=400, detail=USER_EXISTS)
    return profile_of(db, current_user)


@router.delete("/{user_id}")
def delete_user(user_id: UserId, current_user: User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    require_self(user_id, current_user)

    for follower in followers_of(db, user_id):
        follower.unfollow(user_id)
    db.delete(current_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Deleted user %s", user_id)
    return {"message": "Account deleted"}


# -------------------------------
# Favorites & watchlist
# -------------------------------

@router.get("/{user_id}/favorites", response_model=MovieIdList)
def list_favorites(user_id: UserId, current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return {"movies": get_user_or_404(db, user_id).favorites}


@router.post("/{user_id}/favorites", response_model=MovieIdList)
def add_favorite(req: MovieRef, user_id: UserId, current_user: User = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.add_favorite(req.movie_id)
    save(db, current_user)
    return {"movies": current_user.favorites}


@router.delete("/{user_id}/favorites/{movie_id}", response_model=MovieIdList)
def remove_favorite(user_id: UserId, movie_id: MovieId,
                    current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.remove_favorite(movie_id)
    save(db, current_user)
    return {"movies": current_user.favorites}


@router.get("/{user_id}/watchlist", response_model=MovieIdList)
def list_watchlist(user_id: UserId, current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    return {"movies": get_user_or_404(db, user_id).watchlist}


@router.post("/{user_id}/watchlist", response_model=MovieIdList)
def add_to_watchlist(req: MovieRef, user_id: UserId, current_user: User = Depends(get_current_user),
                     db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.add_to_watchlist(req.movie_id)
    save(db, current_user)
    return {"movies": current_user.watchlist}


@router.delete("/{user_id}/watchlist/{movie_id}", response_model=MovieIdList)
def remove_from_watchlist(user_id: UserId, movie_id: MovieId,
                          current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.remove_from_watchlist(movie_id)
    save(db, current_user)
    return {"movies": current_user.watchlist}


# -------------------------------
# Ratings
# -------------------------------

@router.get("/{user_id}/ratings", response_model=RatingList)
def list_ratings(user_id: UserId, current_user: User = Depends(get_current_user),
                 db: Session = Depends(get_db)):
    return {"ratings": get_user_or_404(db, user_id).ratings}


@router.post("/{user_id}/ratings", response_model=RatingList)
def rate_movie(req: Rating, user_id: UserId, current_user: User = Depends(get_current_user),
               db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.rate(req.movie_id, req.score)
    save(db, current_user)
    return {"ratings": current_user.ratings}


@router.delete("/{user_id}/ratings/{movie_id}", response_model=RatingList)
def remove_rating(user_id: UserId, movie_id: MovieId,
                  current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    require_self(user_id, current_user)
    current_user.unrate(movie_id)
    save(db, current_user)
    return {"ratings": current_user.ratings}


# -------------------------------
# Follow graph
# -------------------------------

@router.post("/{user_id}/follow", response_model=Profile)
def follow_user(user_id: UserId, current_user: User = Depends(get_current_user),
                db: Session = Depends(get_db)):
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot follow yourself")
    target = get_user_or_404(db, user_id)
    current_user.follow(target.id)
    save(db, current_user)
    return profile_of(db, target)


@router.delete("/{user_id}/follow", response_model=Profile)
def unfollow_user(user_id: UserId, current_user: User = Depends(get_current_user),
                  db: Session = Depends(get_db)):
    target = get_user_or_404(db, user_id)
    current_user.unfollow(target.id)
    save(db, current_user)
    return profile_of(db, target)


@router.get("/{user_id}/followers", response_model=list[PublicUser])
def list_followers(user_id: UserId, current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    get_user_or_404(db, user_id)
    return [u.public() for u in followers_of(db, user_id)]


@router.get("/{user_id}/following", response_model=list[PublicUser])
def list_following(user_id: UserId, current_user: User = Depends(get_current_user),
                   db: Session = Depends(get_db)):
    user = get_user_or_404(db, user_id)
    if not user.following:
        return []
    followed = db.query(User).filter(User.id.in_(user.following)).order_by(User.id).all()
    return [u.public() for u in followed]
