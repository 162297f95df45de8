# server/database.py

from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from server.core.config import DATABASE_URL
from server.models import Base


def _engine_options(url: str) -> dict:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    options = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        # a single shared connection, otherwise every checkout sees an empty db
        options["poolclass"] = StaticPool
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db():
    parsed = make_url(DATABASE_URL)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    # registers the users table on Base.metadata
    import server.models.user  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db_engine():
    return engine


def save(db, obj):
    """
    Commits the pending change to a single document, rolling back on failure.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(obj)
