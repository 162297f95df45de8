# server/api/auth.py

import logging
from jose import JWTError
from fastapi import APIRouter, HTTPException, status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from server.core.security import decode_access_token
from server.database import get_db
from server.models.user import User, profile_of
from server.schemas import RegisterRequest, LoginRequest, AuthResponse, MeResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

bearer_scheme = HTTPBearer(auto_error=False)

# Same text for unknown email and wrong password so accounts can't be probed.
INVALID_CREDENTIALS = "Invalid credentials"
NOT_AUTHORIZED = "Not authorized"
USER_EXISTS = "User already exists"


def authenticate_user(db: Session, email: str, password: str):
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not user.check_password(password):
        return None
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=NOT_AUTHORIZED,
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception
    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError) as e:
        logger.debug("Rejected token: %s", e)
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        logger.debug("Token for missing user %s", user_id)
        raise credentials_exception
    return user


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(req: RegisterRequest, db: Session = Depends(get_db)):
    email = req.email.lower()
    user_exists = (
        db.query(User)
        .filter((User.email == email) | (User.username == req.username))
        .first()
    )
    if user_exists:
        logger.info("Registration refused for existing account")
        raise HTTPException(status_code=400, detail=USER_EXISTS)

    new_user = User(username=req.username, email=email, password=req.password)
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail=USER_EXISTS)
    db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return {"token": new_user.issue_token(), "user": new_user.public()}


@router.post("/login", response_model=AuthResponse)
def login(req: LoginRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, req.email, req.password)
    if not user:
        logger.info("Failed login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )
    logger.info("User %s logged in", user.id)
    return {"token": user.issue_token(), "user": user.public()}


@router.get("/me", response_model=MeResponse)
def read_users_me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"user": profile_of(db, current_user)}
