from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
import redis

from .config import settings

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create an engine with pool settings suited to the backend in use."""
    if database_url.startswith("sqlite"):
        # Repository lookups run on worker threads
        engine = create_engine(
            database_url, connect_args={"check_same_thread": False}
        )

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,  # Recycle connections after 30 minutes
        pool_pre_ping=True,
    )


engine = build_engine(settings.get_database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

# Connects lazily on first command
redis_client = redis.from_url(settings.REDIS_URL, decode_responses=True)


def get_session_factory() -> sessionmaker:
    """Get the session factory repositories open their sessions from."""
    return SessionLocal


def get_redis():
    """Get Redis client."""
    return redis_client


def init_db(bind: Engine = engine):
    """Initialize database tables."""
    # Register every mapped table on Base.metadata
    from .. import models  # noqa: F401

    Base.metadata.create_all(bind=bind)
