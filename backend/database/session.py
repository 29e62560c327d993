# backend/database/session.py
import logging
import time
from datetime import datetime, timezone

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def build_engine(url: str):
    kwargs = {"pool_pre_ping": True, "future": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # in-memory sqlite must share one connection between sessions
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        eng = create_engine(url, **kwargs)

        @event.listens_for(eng, "connect")
        def _register_functions(dbapi_conn, _record):
            # Unicode-aware case folding for searches
            dbapi_conn.create_function("casefold", 1, _casefold, deterministic=True)

        return eng
    return create_engine(url, **kwargs)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def wait_for_database(bind=None, retries: int = None, backoff: float = None) -> None:
    """Block until ``SELECT 1`` succeeds, retrying with exponential backoff.

    Only used at startup; request handlers never retry.
    """
    bind = bind if bind is not None else engine
    retries = settings.DB_CONNECT_RETRIES if retries is None else retries
    delay = settings.DB_CONNECT_BACKOFF if backoff is None else backoff

    for attempt in range(1, retries + 1):
        try:
            with bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("Database connected (attempt %d)", attempt)
            return
        except OperationalError as e:
            if attempt == retries:
                logger.error("Database connection failed after %d attempts: %s", attempt, e)
                raise
            logger.warning("Database not ready (attempt %d/%d): %s; retrying in %.1fs",
                           attempt, retries, e, delay)
            time.sleep(delay)
            delay *= 2


def init_db(bind=None) -> None:
    # registers every model on Base.metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind if bind is not None else engine)
